"""CLI entry point."""

import argparse
import os
from typing import List, Optional

from common.logging_config import setup_logging
from cli.commands import set_location
from cli.location import Location, normalize_view
from cli.repl import repl_loop


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skybox", description="SkyBox file storage shell")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Log level when --debug is not given (default: $LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--start",
        default="/",
        metavar="LOCATION",
        help="View to open on start, e.g. '/images?query=beach'",
    )
    return parser


def parse_start_location(value: str) -> Location:
    """
    Parse a --start value into a location on a known view.

    Raises:
        ValueError: If the path is not a listing view
    """
    location = Location.parse(value)
    path = normalize_view(location.path)
    if path is None:
        raise ValueError(f"Unknown view: {location.path}")
    location.path = path
    return location


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for CLI."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logger = setup_logging('cli', log_level='DEBUG' if args.debug else args.log_level)

    try:
        start = parse_start_location(args.start)
    except ValueError as e:
        parser.error(str(e))
    set_location(start)

    logger.info(f"CLI starting at {start}")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
