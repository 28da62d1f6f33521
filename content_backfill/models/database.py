"""Database access for the content backfill workflow.

:class:`DatabaseManager` owns the engine and the single session used for a
pass. :class:`StatusStore` is the only place that reads or writes
``article_contents`` rows and the only place where the nullable-boolean
status columns are translated to and from :class:`ScrapeStatus`.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy.exc import SQLAlchemyError

from . import (
    Article,
    ArticleContent,
    create_database_engine,
    create_tables,
    get_session,
)
from .extraction import ExtractionRecord, ScrapeStatus

logger = logging.getLogger(__name__)

# Strategy name -> ArticleContent attribute holding that strategy's status.
STATUS_COLUMNS: dict[str, str] = {
    "lightweight": "scrape_status_lightweight",
    "robust": "scrape_status_robust",
}


class PersistenceError(Exception):
    """Raised when the database cannot be reached, read or written."""


def status_from_column(value: bool | None) -> ScrapeStatus:
    """NULL -> NOT_ATTEMPTED, TRUE -> SUCCEEDED, FALSE -> FAILED."""
    if value is None:
        return ScrapeStatus.NOT_ATTEMPTED
    return ScrapeStatus.SUCCEEDED if value else ScrapeStatus.FAILED


def status_to_column(status: ScrapeStatus) -> bool | None:
    if status is ScrapeStatus.NOT_ATTEMPTED:
        return None
    return status is ScrapeStatus.SUCCEEDED


class DatabaseManager:
    """Manages the database connection for one scraper run.

    Use as a context manager so the session and engine are released on every
    exit path::

        with DatabaseManager() as db:
            store = StatusStore(db.session)
    """

    def __init__(self, database_url: str | None = None):
        # Resolution order: explicit argument, DATABASE_URL from the
        # environment (runtime overrides), then the configured value.
        if not database_url:
            database_url = os.getenv("DATABASE_URL")
        if not database_url:
            from content_backfill.config import DATABASE_URL as _cfg_db_url

            database_url = _cfg_db_url

        self.database_url = database_url
        self.engine = None
        self.session = None

        try:
            self.engine = create_database_engine(database_url)
            create_tables(self.engine)
            self.session = get_session(self.engine)
        except SQLAlchemyError as exc:
            self.close()
            raise PersistenceError(f"Could not open database: {exc}") from exc

        logger.info("Database connected: %s", self.engine.url.render_as_string())

    def close(self) -> None:
        """Close the session and dispose of the engine."""
        try:
            if self.session is not None:
                self.session.close()
            if self.engine is not None:
                self.engine.dispose()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not close database: {exc}") from exc
        finally:
            self.session = None
            self.engine = None
        logger.info("Database connection closed")

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the in-flight error as the reported failure.
        try:
            self.close()
        except PersistenceError as close_exc:
            logger.error("Error closing database after failure: %s", close_exc)


def _record_from_row(row: ArticleContent) -> ExtractionRecord:
    return ExtractionRecord(
        article_id=row.article_id,
        content=row.content or "",
        statuses={
            name: status_from_column(getattr(row, column))
            for name, column in STATUS_COLUMNS.items()
        },
        record_id=row.id,
    )


class StatusStore:
    """Reads and writes per-article extraction records.

    Every SQLAlchemy failure is rolled back and re-raised as
    :class:`PersistenceError`; nothing is retried.
    """

    def __init__(self, session):
        self.session = session

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            try:
                self.session.rollback()
            except SQLAlchemyError as rollback_exc:  # pragma: no cover
                logger.error(
                    "Rollback after failed %s also failed: %s",
                    operation,
                    rollback_exc,
                )
            raise PersistenceError(f"{operation} failed: {exc}") from exc

    def list_articles_with_extraction_record(
        self,
    ) -> list[tuple[Article, ExtractionRecord | None]]:
        """Return every article with its extraction record, if any.

        Left outer join ordered by article id. When a legacy database holds
        more than one record for an article, the earliest one is used.
        """
        with self._guard("listing articles"):
            rows = (
                self.session.query(Article, ArticleContent)
                .outerjoin(ArticleContent, ArticleContent.article_id == Article.id)
                .order_by(Article.id, ArticleContent.id)
                .all()
            )

        results: list[tuple[Article, ExtractionRecord | None]] = []
        seen: set[int] = set()
        for article, content_row in rows:
            if article.id in seen:
                logger.warning(
                    "Article %s has more than one content record; "
                    "using the earliest",
                    article.id,
                )
                continue
            seen.add(article.id)
            record = _record_from_row(content_row) if content_row else None
            results.append((article, record))
        return results

    def find_extraction_record_by_article_id(
        self, article_id: int
    ) -> ExtractionRecord | None:
        row = self._find_row(article_id)
        return _record_from_row(row) if row is not None else None

    def create_extraction_record(
        self,
        article_id: int,
        content: str,
        statuses: Mapping[str, ScrapeStatus],
    ) -> ExtractionRecord:
        """Insert the first extraction record for an article."""
        row = ArticleContent(article_id=article_id, content=content or "")
        for name, column in STATUS_COLUMNS.items():
            status = statuses.get(name, ScrapeStatus.NOT_ATTEMPTED)
            setattr(row, column, status_to_column(status))

        with self._guard(f"creating content record for article {article_id}"):
            self.session.add(row)
            self.session.commit()
            return _record_from_row(row)

    def update_extraction_record(
        self,
        record: ExtractionRecord,
        *,
        content: str | None = None,
        statuses: Mapping[str, ScrapeStatus] | None = None,
    ) -> ExtractionRecord:
        """Apply a partial update; fields left as ``None`` are untouched."""
        changes: dict[str, Any] = {}
        if content is not None:
            changes["content"] = content
        for name, status in (statuses or {}).items():
            if name not in STATUS_COLUMNS:
                raise KeyError(f"Unknown extraction strategy: {name}")
            changes[STATUS_COLUMNS[name]] = status_to_column(status)

        operation = f"updating content record for article {record.article_id}"
        with self._guard(operation):
            row = None
            if record.record_id is not None:
                row = self.session.get(ArticleContent, record.record_id)
            if row is None:
                row = self._find_row(record.article_id)
            if row is None:
                raise PersistenceError(
                    f"No content record exists for article {record.article_id}"
                )
            for column, value in changes.items():
                setattr(row, column, value)
            self.session.commit()
            return _record_from_row(row)

    def _find_row(self, article_id: int) -> ArticleContent | None:
        with self._guard(f"loading content record for article {article_id}"):
            return (
                self.session.query(ArticleContent)
                .filter_by(article_id=article_id)
                .order_by(ArticleContent.id)
                .first()
            )
