"""Scrape command: run one content backfill pass."""

from __future__ import annotations

import argparse
import logging

from content_backfill.crawler import default_strategies
from content_backfill.models.database import DatabaseManager, StatusStore
from content_backfill.pipeline import ScrapeCoordinator
from content_backfill.reporting.summary import log_summary

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {value}")
    return number


def add_scrape_parser(subparsers) -> argparse.ArgumentParser:
    """Add scrape command parser to CLI."""
    parser = subparsers.add_parser(
        "scrape",
        help="Fetch and store body text for articles that have none yet",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between articles (default: SCRAPE_DELAY or 1.0)",
    )
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        help="Process at most this many selected articles",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which strategy each article would get without fetching",
    )
    parser.set_defaults(func=handle_scrape_command)
    return parser


def handle_scrape_command(args) -> int:
    """Run one pass; 0 when it completes, 1 on any fatal error."""
    logger.info("=== Content backfill starting ===")

    strategies = default_strategies()
    try:
        with DatabaseManager() as db:
            store = StatusStore(db.session)
            coordinator = ScrapeCoordinator(
                store,
                strategies,
                delay=getattr(args, "delay", None),
            )
            stats = coordinator.run(
                limit=getattr(args, "limit", None),
                dry_run=getattr(args, "dry_run", False),
            )
    except Exception:
        logger.exception("Fatal error: scrape pass aborted")
        return 1
    finally:
        for strategy in strategies:
            strategy.close()

    log_summary(stats)
    logger.info("Process completed successfully")
    return 0
