"""Article text extraction strategies, ordered from cheapest to most robust."""

from .base import MIN_CONTENT_LENGTH, ExtractionStrategy, ScrapeResult
from .lightweight import LightweightStrategy
from .robust import RobustStrategy


DEFAULT_CASCADE = (LightweightStrategy.name, RobustStrategy.name)


def default_strategies() -> list[ExtractionStrategy]:
    """Return the cascade used by the ``scrape`` command."""
    return [LightweightStrategy(), RobustStrategy()]


__all__ = [
    "DEFAULT_CASCADE",
    "MIN_CONTENT_LENGTH",
    "ExtractionStrategy",
    "LightweightStrategy",
    "RobustStrategy",
    "ScrapeResult",
    "default_strategies",
]
