"""
Exit Codes - Process exit statuses of the projectmd CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by main()."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    FILE_NOT_FOUND = 3
    PARSE_ERROR = 4
    SYNC_ERRORS = 5  # the run finished but at least one task failed
