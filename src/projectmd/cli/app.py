"""
CLI Application - Command line entry point for projectmd.

Usage:
    # Create project.md and tasks/example.md
    projectmd init --repo owner/name

    # Show what a sync would do, without a token
    projectmd sync --dry-run

    # Create/update GitHub issues from the task files
    GITHUB_TOKEN=... projectmd sync

    # List tasks, with task file details and live issue counts
    projectmd status --verbose

Environment Variables:
    GITHUB_TOKEN: GitHub personal access token (or --github-token)
    GITHUB_API_URL: API root for GitHub Enterprise
    PROJECTMD_FILE: Project document path (or --project-file)
    PROJECTMD_TIMEOUT: Seconds to wait for each GitHub request
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.factory import SUPPORTED_BACKENDS, create_tracker
from ..adapters.parsers import ProjectDocumentParser
from ..application.scaffold import init_project
from ..application.status import build_status
from ..application.sync import SyncEngine
from ..core.domain.events import DomainEvent, EventBus
from ..core.exceptions import (
    BackendError,
    ConfigError,
    FileAccessError,
    ParseError,
    ProjectMdError,
)
from .exit_codes import ExitCode
from .output import Console


logger = logging.getLogger("main")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projectmd",
        description="A plain text, LLM-friendly project management system",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--project-file", "-p",
        type=Path,
        help="Path to the project.md file (default: project.md or PROJECTMD_FILE)"
    )

    parser.add_argument(
        "--github-token",
        type=str,
        help="GitHub personal access token (or set GITHUB_TOKEN env var)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    sync = commands.add_parser("sync", help="Sync tasks with the backend (create/update issues)")
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without making changes"
    )

    status = commands.add_parser("status", help="Show the status of all tasks")
    status.add_argument(
        "--verbose", "-v",
        dest="details",
        action="store_true",
        help="Show task file details"
    )

    init = commands.add_parser("init", help="Initialize a new project.md file")
    init.add_argument(
        "--backend", "-b",
        default="github",
        help="Backend to use (default: github)"
    )
    init.add_argument(
        "--repo", "-r",
        required=True,
        help="Repository in owner/repo format"
    )
    init.add_argument(
        "--directory", "-d",
        type=Path,
        default=Path("."),
        help="Directory to initialize (default: current directory)"
    )

    return parser


# -------------------------------------------------------------------------
# Commands
# -------------------------------------------------------------------------

def run_sync(args: argparse.Namespace, provider: EnvironmentConfigProvider, console: Console) -> int:
    config = provider.load()
    dry_run = config.sync.dry_run

    errors = provider.validate(require_token=not dry_run)
    if errors:
        raise ConfigError("; ".join(errors))

    project_path = config.project_path
    document = ProjectDocumentParser().parse_file(project_path)
    tracker = create_tracker(document.config, config.tracker)

    if not document.tasks:
        console.warning(f"No tasks found in {project_path}")

    event_bus = EventBus()
    if config.sync.verbose:
        event_bus.subscribe(DomainEvent, lambda event: logger.debug(f"Event: {event.event_type}"))

    if dry_run:
        console.dry_run_banner()
    console.header(
        f"Syncing {len(document.tasks)} task(s) to "
        f"{document.config.backend}:{document.config.repo}"
    )

    engine = SyncEngine(tracker, dry_run=dry_run, event_bus=event_bus)
    result = engine.sync(project_path)

    # The full summary is always printed before reporting failure
    console.sync_result(result)

    if result.has_errors:
        return ExitCode.SYNC_ERRORS
    return ExitCode.SUCCESS


def run_status(args: argparse.Namespace, provider: EnvironmentConfigProvider, console: Console) -> int:
    config = provider.load()
    project_path = config.project_path

    tracker = None
    if config.tracker.token:
        document = ProjectDocumentParser().parse_file(project_path)
        backend = document.config.backend
        if backend in SUPPORTED_BACKENDS:
            tracker = create_tracker(document.config, config.tracker)
            logger.info(f"Fetching live status from {backend}")
        else:
            logger.info(f"No live status for unsupported backend: {backend}")

    report = build_status(project_path, tracker=tracker, verbose=args.details)
    console.status_report(report, verbose=args.details)
    return ExitCode.SUCCESS


def run_init(args: argparse.Namespace, provider: EnvironmentConfigProvider, console: Console) -> int:
    created = init_project(args.directory, args.backend, args.repo)
    console.init_result(created, args.backend, args.repo)
    return ExitCode.SUCCESS


COMMANDS = {
    "sync": run_sync,
    "status": run_status,
    "init": run_init,
}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    console = Console(color=not args.no_color, verbose=args.verbose)

    provider = EnvironmentConfigProvider(cli_overrides={
        "github_token": args.github_token,
        "project_file": args.project_file,
        "verbose": args.verbose or None,
        "dry_run": getattr(args, "dry_run", False) or None,
    })

    try:
        return int(COMMANDS[args.command](args, provider, console))
    except ConfigError as e:
        logger.error(str(e))
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    except FileAccessError as e:
        logger.error(str(e))
        console.error(str(e))
        return ExitCode.FILE_NOT_FOUND
    except ParseError as e:
        logger.error(str(e))
        console.error(f"Failed to parse: {e}")
        return ExitCode.PARSE_ERROR
    except (BackendError, ProjectMdError) as e:
        logger.error(str(e))
        console.error(str(e))
        return ExitCode.ERROR


def run() -> None:
    """Entry point that exits the process with main()'s status."""
    sys.exit(main())
