"""Run statistics and the end-of-run summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class ScrapeStats:
    """Counters for one pass over the selected articles."""

    strategy_names: Sequence[str] = ("lightweight", "robust")
    total: int = 0
    skipped: int = 0
    succeeded: Dict[str, int] = field(default_factory=dict)
    failed: Dict[str, int] = field(default_factory=dict)
    planned: Dict[str, int] = field(default_factory=dict)
    dry_run: bool = False

    def __post_init__(self):
        self.strategy_names = list(self.strategy_names)
        for name in self.strategy_names:
            self.succeeded.setdefault(name, 0)
            self.failed.setdefault(name, 0)

    def record(self, strategy_name: str, success: bool) -> None:
        counter = self.succeeded if success else self.failed
        counter[strategy_name] = counter.get(strategy_name, 0) + 1

    def plan(self, strategy_name: str) -> None:
        """Count a dry-run article that would start at ``strategy_name``."""
        self.planned[strategy_name] = self.planned.get(strategy_name, 0) + 1

    @property
    def lightweight_success(self) -> int:
        return self.succeeded.get("lightweight", 0)

    @property
    def lightweight_failed(self) -> int:
        return self.failed.get("lightweight", 0)

    @property
    def robust_success(self) -> int:
        return self.succeeded.get("robust", 0)

    @property
    def robust_failed(self) -> int:
        return self.failed.get("robust", 0)

    @property
    def total_success(self) -> int:
        return sum(self.succeeded.values())

    @property
    def success_rate(self) -> Optional[float]:
        """Percentage of selected articles that ended with content.

        ``None`` for a run that selected nothing.
        """
        if self.total == 0:
            return None
        return round(self.total_success / self.total * 100, 1)

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "skipped": self.skipped,
            "succeeded": dict(self.succeeded),
            "failed": dict(self.failed),
            "success_rate": self.success_rate,
        }


def format_summary(stats: ScrapeStats) -> List[str]:
    """Human-readable summary lines for the end of a run."""
    if stats.total == 0:
        return ["No articles needed scraping; nothing to do."]

    if stats.dry_run:
        lines = [f"Articles selected: {stats.total}"]
        for name in stats.strategy_names:
            lines.append(f"Would start with {name}: {stats.planned.get(name, 0)}")
        lines.append(f"Skipped (no URL): {stats.skipped}")
        lines.append("Nothing was fetched or written")
        return lines

    lines = [f"Total articles processed: {stats.total}"]
    for name in stats.strategy_names:
        lines.append(
            f"{name.capitalize()} - Success: {stats.succeeded.get(name, 0)}, "
            f"Failed: {stats.failed.get(name, 0)}"
        )
    lines.append(f"Skipped (no URL): {stats.skipped}")
    lines.append(f"Overall success rate: {stats.success_rate:.1f}%")
    return lines


def log_summary(stats: ScrapeStats) -> None:
    if stats.dry_run:
        logger.info("=== Dry Run Complete ===")
    else:
        logger.info("=== Scraping Complete ===")
    for line in format_summary(stats):
        logger.info(line)
