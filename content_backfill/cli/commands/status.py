"""Status command: show how far the backfill has progressed."""

from __future__ import annotations

import argparse
import logging

from content_backfill.crawler import DEFAULT_CASCADE
from content_backfill.models.database import (
    DatabaseManager,
    PersistenceError,
    StatusStore,
)
from content_backfill.pipeline import ArticleSelector

logger = logging.getLogger(__name__)

STATE_LABELS = {
    "lightweight_pending": "Waiting for lightweight scrape",
    "robust_pending": "Waiting for robust scrape",
    "resolved": "Content stored",
    "exhausted": "All strategies failed",
    "no_url": "No URL",
}


def add_status_parser(subparsers) -> argparse.ArgumentParser:
    """Add status command parser to CLI."""
    parser = subparsers.add_parser(
        "status",
        help="Summarize backfill progress or inspect one article",
    )
    parser.add_argument(
        "--article-id",
        type=int,
        default=None,
        help="Show the stored extraction record for this article",
    )
    parser.set_defaults(func=handle_status_command)
    return parser


def _print_record(store: StatusStore, article_id: int) -> None:
    record = store.find_extraction_record_by_article_id(article_id)
    if record is None:
        print(f"Article {article_id}: no extraction record")
        return

    print(f"Article {article_id}:")
    for name, status in record.statuses.items():
        print(f"  {name}: {status.value}")
    print(f"  content length: {len(record.content)}")


def handle_status_command(args) -> int:
    article_id = getattr(args, "article_id", None)
    try:
        with DatabaseManager() as db:
            store = StatusStore(db.session)
            if article_id is not None:
                _print_record(store, article_id)
                return 0
            rows = store.list_articles_with_extraction_record()
            counts = ArticleSelector(DEFAULT_CASCADE).count_by_state(rows)
    except PersistenceError:
        logger.exception("Fatal error: could not read backfill status")
        return 1

    print("📊 Content backfill status")
    for state, count in counts.items():
        print(f"  {STATE_LABELS.get(state, state)}: {count}")
    print(f"  Total articles: {sum(counts.values())}")
    return 0
