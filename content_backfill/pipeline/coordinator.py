"""Drive one backfill pass: select, cascade through strategies, persist.

Every strategy outcome is written before the next strategy (or article) is
started, so a later run resumes from the database alone. Strategy failures
are ordinary results; anything raised here, persistence errors included,
aborts the pass.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence

from content_backfill import config
from content_backfill.crawler import ExtractionStrategy, ScrapeResult
from content_backfill.models import ExtractionRecord, ScrapeStatus
from content_backfill.reporting.summary import ScrapeStats

from .selector import ArticleSelector

logger = logging.getLogger(__name__)


class ScrapeCoordinator:
    """Walk the selected articles and apply the strategy cascade.

    ``strategies`` are tried in order for each article, starting at the
    first one that has not already failed, and stopping at the first
    success.
    """

    def __init__(
        self,
        store,
        strategies: Sequence[ExtractionStrategy],
        *,
        delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not strategies:
            raise ValueError("At least one extraction strategy is required")
        self.store = store
        self.strategies = list(strategies)
        self.strategy_names = [strategy.name for strategy in self.strategies]
        self.selector = ArticleSelector(self.strategy_names)
        self.delay = config.SCRAPE_DELAY if delay is None else delay
        self._sleep = sleep

    def run(self, *, limit: int | None = None, dry_run: bool = False) -> ScrapeStats:
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be zero or greater, got {limit}")
        stats = ScrapeStats(self.strategy_names, dry_run=dry_run)

        logger.info("Querying for articles that need scraping...")
        rows = self.store.list_articles_with_extraction_record()
        selected = self.selector.select(rows)
        if limit is not None:
            selected = selected[:limit]

        stats.total = len(selected)
        logger.info("Found %d articles that need scraping", stats.total)
        if not selected:
            logger.info("No articles to scrape.")
            return stats

        for position, (article, record) in enumerate(selected, start=1):
            progress = f"[{position}/{stats.total}]"
            fetched = self._process_article(
                article, record, stats, progress, dry_run=dry_run
            )
            if fetched and position < stats.total and self.delay > 0:
                self._sleep(self.delay)

        return stats

    def _process_article(
        self,
        article: Any,
        record: ExtractionRecord | None,
        stats: ScrapeStats,
        progress: str,
        *,
        dry_run: bool = False,
    ) -> bool:
        """Run the cascade for one article; return True if it hit the network."""
        logger.info("%s Processing article %s", progress, article.id)
        logger.info("  Title: %s", article.title or "N/A")
        logger.info("  URL: %s", article.url or "N/A")

        if not article.url:
            logger.warning("  Skipped: no URL available")
            stats.skipped += 1
            return False

        start = self.selector.next_strategy(record)
        if start is None:
            return False

        if dry_run:
            stats.plan(self.strategy_names[start])
            logger.info("  Would attempt: %s", " -> ".join(self.strategy_names[start:]))
            return False

        for strategy in self.strategies[start:]:
            logger.info("  Attempting %s scraping...", strategy.name)
            result = strategy.attempt(article.url)
            record = self._save_outcome(article.id, record, strategy.name, result)
            stats.record(strategy.name, result.success)

            if result.success:
                logger.info(
                    "  ✓ %s success: scraped %d characters",
                    strategy.name,
                    len(result.content or ""),
                )
                break
            logger.info(
                "  ✗ %s failed: %s", strategy.name, result.error or "Unknown error"
            )
        return True

    def _save_outcome(
        self,
        article_id: int,
        record: ExtractionRecord | None,
        strategy_name: str,
        result: ScrapeResult,
    ) -> ExtractionRecord:
        status = ScrapeStatus.SUCCEEDED if result.success else ScrapeStatus.FAILED

        if record is None or record.record_id is None:
            statuses = {name: ScrapeStatus.NOT_ATTEMPTED for name in self.strategy_names}
            statuses[strategy_name] = status
            content = result.content if result.success else ""
            return self.store.create_extraction_record(
                article_id, content or "", statuses
            )

        if result.success:
            return self.store.update_extraction_record(
                record,
                content=result.content or "",
                statuses={strategy_name: status},
            )
        return self.store.update_extraction_record(
            record, statuses={strategy_name: status}
        )
