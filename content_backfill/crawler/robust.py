"""Headless Chrome rendering for pages that need JavaScript."""

from __future__ import annotations

import logging
import time
from typing import Callable

from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.support.ui import WebDriverWait

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
]


class RobustStrategy(ExtractionStrategy):
    """Render the page in headless Chrome and read the resulting DOM.

    A fresh driver is started for every attempt and always quit afterwards.
    """

    name = "robust"

    def __init__(
        self,
        timeout: int | None = None,
        user_agent: str | None = None,
        driver_factory: Callable[[], webdriver.Remote] | None = None,
        settle_seconds: float = 2.0,
    ):
        self.timeout = timeout if timeout is not None else config.ROBUST_TIMEOUT
        self.user_agent = user_agent or config.SCRAPER_USER_AGENT
        self.driver_factory = driver_factory or self._create_driver
        self.settle_seconds = settle_seconds

    def _create_driver(self) -> webdriver.Remote:
        chrome_options = ChromeOptions()
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-setuid-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_argument("--disable-gpu")
        chrome_options.add_argument(f"--user-agent={self.user_agent}")
        return webdriver.Chrome(options=chrome_options)

    def _render(self, driver, url: str) -> str:
        driver.set_page_load_timeout(self.timeout)
        driver.get(url)
        WebDriverWait(driver, self.timeout).until(
            lambda d: d.execute_script("return document.readyState") == "complete"
        )
        # Let late XHR/fetch calls populate the article body.
        if self.settle_seconds > 0:
            time.sleep(self.settle_seconds)
        return driver.page_source

    def fetch_text(self, url: str) -> str:
        driver = self.driver_factory()
        try:
            html = self._render(driver, url)
        finally:
            try:
                driver.quit()
            except WebDriverException as exc:
                logger.debug("Ignoring error while quitting driver: %s", exc)

        soup = BeautifulSoup(html, "html.parser")
        return extract_article_text(
            soup,
            CONTENT_SELECTORS,
            first_match_only=True,
            fallback_to_container_text=True,
        )
