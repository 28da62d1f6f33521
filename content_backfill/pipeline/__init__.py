"""Backfill pipeline: article selection and the extraction cascade."""

from .coordinator import ScrapeCoordinator
from .selector import ArticleSelector

__all__ = ["ArticleSelector", "ScrapeCoordinator"]
