"""Single HTTP fetch + static HTML parse.

Cheap and fast, but blind to content rendered by JavaScript.
"""

from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

from content_backfill import config

from .base import ExtractionStrategy, extract_article_text

logger = logging.getLogger(__name__)

CONTENT_SELECTORS = [
    "article",
    '[role="article"]',
    ".article-content",
    ".article-body",
    ".entry-content",
    "main",
    ".post-content",
    ".story-body",
    ".content",
]

UNWANTED_SELECTORS = [
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "aside",
    ".advertisement",
    ".ad",
]


class LightweightStrategy(ExtractionStrategy):
    """Fetch the page with ``requests`` and parse it with BeautifulSoup."""

    name = "lightweight"
    max_redirects = 5

    def __init__(
        self,
        timeout: int | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout if timeout is not None else config.LIGHTWEIGHT_TIMEOUT
        self.user_agent = user_agent or config.SCRAPER_USER_AGENT
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.max_redirects = self.max_redirects
        session.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": (
                    "text/html,application/xhtml+xml,"
                    "application/xml;q=0.9,*/*;q=0.8"
                ),
                "Accept-Language": "en-US,en;q=0.9",
            }
        )
        return session

    def fetch_text(self, url: str) -> str:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        logger.debug("Fetched %d chars from %s", len(resp.text), url)

        soup = BeautifulSoup(resp.text, "html.parser")
        return extract_article_text(
            soup,
            CONTENT_SELECTORS,
            remove=UNWANTED_SELECTORS,
        )

    def close(self) -> None:
        self.session.close()
