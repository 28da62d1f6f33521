"""Domain types for per-article extraction state.

The database stores each strategy's outcome as a nullable boolean. Code
outside :mod:`content_backfill.models.database` only ever sees the
three-valued :class:`ScrapeStatus` below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class ScrapeStatus(Enum):
    """Outcome of one extraction strategy for one article."""

    NOT_ATTEMPTED = "not_attempted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ExtractionRecord:
    """Persisted extraction state of one article.

    ``statuses`` maps strategy name to its status, in cascade order.
    ``record_id`` is ``None`` only for records not yet written.
    """

    article_id: int
    content: str = ""
    statuses: Dict[str, ScrapeStatus] = field(default_factory=dict)
    record_id: Optional[int] = None

    def status_of(self, strategy_name: str) -> ScrapeStatus:
        return self.statuses.get(strategy_name, ScrapeStatus.NOT_ATTEMPTED)
