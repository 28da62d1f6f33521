"""Decide which articles still need extraction work, and where to resume."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from content_backfill.models import ExtractionRecord, ScrapeStatus

ArticleRow = tuple[Any, Optional[ExtractionRecord]]


class ArticleSelector:
    """Filter the article population down to articles with work remaining.

    ``strategy_names`` is the cascade order. For each article the next
    strategy is the first one that has not failed; a success anywhere before
    that point means the article is resolved, and an article whose
    strategies all failed is exhausted.
    """

    def __init__(self, strategy_names: Sequence[str]):
        if not strategy_names:
            raise ValueError("At least one extraction strategy is required")
        self.strategy_names = list(strategy_names)

    def next_strategy(self, record: ExtractionRecord | None) -> int | None:
        """Index of the strategy to attempt next, or ``None`` if no work."""
        if record is None:
            return 0
        for index, name in enumerate(self.strategy_names):
            status = record.status_of(name)
            if status is ScrapeStatus.FAILED:
                continue
            if status is ScrapeStatus.SUCCEEDED:
                return None
            return index
        return None

    def select(self, rows: Iterable[ArticleRow]) -> list[ArticleRow]:
        """Keep rows that need work, in their original order.

        Articles without a URL are kept so the coordinator can count them
        as skipped.
        """
        return [
            (article, record)
            for article, record in rows
            if self.next_strategy(record) is not None
        ]

    def state_of(self, article: Any, record: ExtractionRecord | None) -> str:
        """Name the backfill state of one article.

        One of ``<strategy>_pending``, ``resolved``, ``exhausted`` or
        ``no_url``.
        """
        if not article.url:
            return "no_url"
        index = self.next_strategy(record)
        if index is not None:
            return f"{self.strategy_names[index]}_pending"
        if record is not None and any(
            record.status_of(name) is ScrapeStatus.SUCCEEDED
            for name in self.strategy_names
        ):
            return "resolved"
        return "exhausted"

    def count_by_state(self, rows: Iterable[ArticleRow]) -> dict[str, int]:
        """Count articles per state, keys in cascade order."""
        counts = {f"{name}_pending": 0 for name in self.strategy_names}
        counts.update(resolved=0, exhausted=0, no_url=0)
        for article, record in rows:
            counts[self.state_of(article, record)] += 1
        return counts
