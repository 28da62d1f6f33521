"""Shared utilities for CLI command modules."""

from __future__ import annotations

import logging
import sys

from content_backfill.utils import logging_config


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
    log_format: str = "text",
) -> None:
    """Configure root logging for CLI commands.

    Parameters
    ----------
    log_level:
        Logging level name (e.g., ``"INFO"``).
    log_file:
        Optional path to a file that receives a copy of the logs.
    log_format:
        ``"text"`` for plain lines on stderr, ``"json"`` for structlog JSON.
    """
    if log_format == "json":
        logging_config.setup_logging(level=log_level, force_json=True)
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
            force=True,
        )
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("selenium").setLevel(logging.WARNING)
        return

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.getLogger().handlers[0].formatter)
        logging.getLogger().addHandler(file_handler)
