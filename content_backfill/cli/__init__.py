"""Command line interface for the content backfill scraper."""
