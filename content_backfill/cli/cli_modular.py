"""Streamlined CLI interface with modular command structure."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from typing import cast

from content_backfill import config

from .commands.scrape import add_scrape_parser, handle_scrape_command  # noqa: F401
from .commands.status import add_status_parser, handle_status_command  # noqa: F401

CommandHandler = Callable[[argparse.Namespace], int]

COMMAND_HANDLER_ATTRS: dict[str, str] = {
    "scrape": "handle_scrape_command",
    "status": "handle_status_command",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="content-backfill",
        description="Backfill article body text from source URLs",
    )

    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        help="Logging level (e.g. INFO, DEBUG)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=config.LOG_FORMAT if config.LOG_FORMAT in ("text", "json") else "text",
        help="Plain text lines or structured JSON",
    )
    parser.add_argument(
        "--log-file",
        default=config.LOG_FILE,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=False,
    )

    add_scrape_parser(subparsers)
    add_status_parser(subparsers)

    return parser


def _resolve_handler(
    args: argparse.Namespace,
    overrides: dict[str, CommandHandler] | None = None,
) -> CommandHandler | None:
    command = getattr(args, "command", None)
    if overrides and command and command in overrides:
        return overrides[command]

    func = getattr(args, "func", None)
    if callable(func):
        return cast(CommandHandler, func)

    if command is None:
        return None

    attr_name = COMMAND_HANDLER_ATTRS.get(command)
    if not attr_name:
        return None

    handler = globals().get(attr_name)
    if callable(handler):
        return cast(CommandHandler, handler)

    return None


def main(
    argv: list[str] | None = None,
    *,
    setup_logging_func: Callable[..., None] | None = None,
    handler_overrides: dict[str, CommandHandler] | None = None,
) -> int:
    """Main CLI entry point."""

    parser = create_parser()
    args = parser.parse_args(argv)

    if setup_logging_func is None:
        from .context import setup_logging as default_setup_logging

        setup_logging_func = default_setup_logging

    setup_logging_func(
        getattr(args, "log_level", "INFO") or "INFO",
        log_file=getattr(args, "log_file", None),
        log_format=getattr(args, "log_format", "text"),
    )

    handler = _resolve_handler(args, overrides=handler_overrides)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
