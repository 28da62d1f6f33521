"""Backfill full-text content for discovered news articles."""

__version__ = "0.1.0"
