"""Structured logging configuration for the content backfill scraper.

This module sets up structured logging with:
- JSON output for production log collectors
- Human-readable console output for local development

Records emitted through the standard ``logging`` module are rendered by the
same structlog processor chain, so modules keep using
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def is_cloud_environment() -> bool:
    """Check if running in a hosted environment (Kubernetes, Cloud Run)."""
    return bool(os.getenv("KUBERNETES_SERVICE_HOST") or os.getenv("K_SERVICE"))


def setup_logging(
    level: str = "INFO",
    force_json: bool = False,
    stream: Any = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force_json: Force JSON output even in non-cloud environments
        stream: Output stream, defaults to stderr
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    use_json = force_json or is_cloud_environment()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Reduce noise from verbose libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("selenium").setLevel(logging.WARNING)
