"""
Sync Module - Reconciliation between the project plan and the issue tracker.
"""

from .engine import SyncAction, SyncEngine, SyncResult

__all__ = [
    "SyncAction",
    "SyncEngine",
    "SyncResult",
]
