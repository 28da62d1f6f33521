"""Common contract for article text extraction strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Shorter extractions are treated as failures by every strategy.
MIN_CONTENT_LENGTH = 200


@dataclass
class ScrapeResult:
    """Outcome of a single extraction attempt."""

    success: bool
    content: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, content: str) -> "ScrapeResult":
        return cls(success=True, content=content)

    @classmethod
    def failure(cls, error: str) -> "ScrapeResult":
        return cls(success=False, error=error)


class ExtractionStrategy(ABC):
    """Fetch a URL and return its readable body text.

    Subclasses implement :meth:`fetch_text`. :meth:`attempt` wraps it so
    that callers always receive a :class:`ScrapeResult`: fetch or parse
    errors and too-short text come back as failures, never as exceptions.
    """

    name: str = ""

    def attempt(self, url: str) -> ScrapeResult:
        logger.debug("Scraping with %s: %s", self.name, url)
        try:
            content = self.fetch_text(url) or ""
        except Exception as exc:  # noqa: BLE001
            message = str(exc).strip() or exc.__class__.__name__
            logger.warning("%s scraping failed for %s: %s", self.name, url, message)
            return ScrapeResult.failure(message)

        if len(content) < MIN_CONTENT_LENGTH:
            return ScrapeResult.failure(
                f"Content too short ({len(content)} chars, "
                f"minimum {MIN_CONTENT_LENGTH})"
            )
        return ScrapeResult.ok(content)

    @abstractmethod
    def fetch_text(self, url: str) -> str:
        """Return the extracted article text for ``url``."""

    def close(self) -> None:
        """Release resources held between attempts, if any."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def extract_article_text(
    soup: BeautifulSoup,
    selectors: Iterable[str],
    *,
    remove: Iterable[str] = (),
    first_match_only: bool = False,
    fallback_to_container_text: bool = False,
) -> str:
    """Join the paragraph text of the first matching article container.

    ``selectors`` are tried in order; the first one matching anything
    becomes the container (all of its matches, unless
    ``first_match_only``). Without a match the ``<body>`` is used.
    """
    for selector in remove:
        for node in soup.select(selector):
            node.decompose()

    containers = []
    for selector in selectors:
        if first_match_only:
            node = soup.select_one(selector)
            containers = [node] if node is not None else []
        else:
            containers = soup.select(selector)
        if containers:
            break

    if not containers:
        body = soup.body
        containers = [body if body is not None else soup]

    paragraphs: list[str] = []
    seen: set[int] = set()
    for container in containers:
        for paragraph in container.find_all("p"):
            if id(paragraph) in seen:
                continue
            seen.add(id(paragraph))
            text = paragraph.get_text().strip()
            if text:
                paragraphs.append(text)

    content = "\n\n".join(paragraphs)
    if not content and fallback_to_container_text:
        content = containers[0].get_text().strip()
    return content
