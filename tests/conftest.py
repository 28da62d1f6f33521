"""Pytest-wide fixtures for the content backfill tests."""

from __future__ import annotations

import os

import pytest

# Keep tests away from any real database configured in the environment or
# a local .env file.
for key in ["DATABASE_URL", "PATH_DATABASE", "NAME_DB", "DATABASE_HOST"]:
    os.environ.pop(key, None)

from content_backfill.crawler import ScrapeResult  # noqa: E402
from content_backfill.models import Article  # noqa: E402
from content_backfill.models.database import (  # noqa: E402
    DatabaseManager,
    StatusStore,
)

LONG_TEXT = "Body text of a local news story. " * 20


class FakeStrategy:
    """Extraction strategy that replays scripted results and records calls."""

    def __init__(self, name, results=None, default=None):
        self.name = name
        self.results = list(results or [])
        self.default = default or ScrapeResult.failure("no scripted result")
        self.calls = []
        self.closed = False

    def attempt(self, url):
        self.calls.append(url)
        if self.results:
            return self.results.pop(0)
        return self.default

    def close(self):
        self.closed = True


@pytest.fixture
def long_text():
    return LONG_TEXT


@pytest.fixture
def fake_strategy():
    """Factory for :class:`FakeStrategy` instances."""
    return FakeStrategy


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'backfill.db'}"


@pytest.fixture
def db(database_url):
    manager = DatabaseManager(database_url)
    yield manager
    if manager.session is not None:
        manager.close()


@pytest.fixture
def store(db):
    return StatusStore(db.session)


@pytest.fixture
def add_article(db):
    """Insert an article row and return it."""

    def _add(url="https://example.com/story", title="A story", **kwargs):
        article = Article(url=url, title=title, **kwargs)
        db.session.add(article)
        db.session.commit()
        return article

    return _add
