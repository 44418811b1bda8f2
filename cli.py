"""
Command Line Interface for Task Tracker
=======================================

Usage:
------
    # Run the HTTP API (port from TASKTRACKER_API_PORT, default 4001)
    python cli.py serve

    # Override bind address, port and log level
    python cli.py serve --host 127.0.0.1 --port 8080 --log-level debug

    # Check that the document store is reachable
    python cli.py check-db

Exit codes: 0 on success, 1 on errors, 130 when interrupted.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from config import Settings, get_settings
from core.storage import connect_storage, describe_url
from exceptions import TaskTrackerError


logger = logging.getLogger("tasktracker.cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tasktracker",
        description="Task Tracker API server",
        epilog="Example: tasktracker serve --port 4001",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output with debug info"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument(
        "--host",
        type=str,
        help="Interface to bind (overrides config)"
    )
    serve.add_argument(
        "--port", "-p",
        type=int,
        help="Port to listen on (overrides config)"
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server on code changes (development only)"
    )
    serve.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level for the app and uvicorn (overrides config)"
    )

    subparsers.add_parser("check-db", help="Ping the document store and exit")

    return parser


def resolve_log_level(settings: Settings, verbose: bool = False, log_level: Optional[str] = None) -> str:
    """Pick the level name: --verbose, then --log-level, then settings."""
    if verbose:
        return "DEBUG"
    level = (log_level or settings.log_level).upper()
    return level if level in LOG_LEVELS else "INFO"


def setup_logging(settings: Settings, level: str = "INFO") -> None:
    """Configure root logging from settings, once, before the server starts."""
    logging.basicConfig(
        level=getattr(logging, level),
        format=settings.log_format
    )


async def check_db(settings: Settings) -> None:
    """Connect, PING, and close. Raises DatabaseConnectionError on failure."""
    client = await connect_storage(settings)
    await client.aclose()


def serve(
    settings: Settings,
    host: Optional[str],
    port: Optional[int],
    reload: bool,
    log_level: str = "INFO"
) -> None:
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload or settings.api_debug,
        lifespan="on",
        log_level=log_level.lower(),
        log_config=None
    )


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    settings = get_settings()
    level = resolve_log_level(settings, parsed_args.verbose, getattr(parsed_args, "log_level", None))
    setup_logging(settings, level)

    try:
        if parsed_args.command == "check-db":
            asyncio.run(check_db(settings))
            print(f"Document store reachable at {describe_url(settings.redis_url)}")
            return 0

        serve(settings, parsed_args.host, parsed_args.port, parsed_args.reload, level)
        return 0

    except TaskTrackerError as e:
        logger.error(e.message)
        if parsed_args.verbose and e.details:
            logger.error(f"Details: {e.details}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
