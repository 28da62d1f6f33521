"""Tests for the lightweight and robust extraction strategies."""

from unittest.mock import Mock

import pytest
import requests
from bs4 import BeautifulSoup
from selenium.common.exceptions import TimeoutException, WebDriverException

from content_backfill.crawler import (
    MIN_CONTENT_LENGTH,
    ExtractionStrategy,
    LightweightStrategy,
    RobustStrategy,
    ScrapeResult,
)
from content_backfill.crawler.base import extract_article_text


def _page(body_html):
    return f"<html><head><title>t</title></head><body>{body_html}</body></html>"


def _lightweight(html=None, error=None):
    session = Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        response = Mock()
        response.text = html
        session.get.return_value = response
    return LightweightStrategy(timeout=5, session=session), session


def _robust(html="", get_error=None):
    driver = Mock()
    driver.page_source = html
    driver.execute_script.return_value = "complete"
    if get_error is not None:
        driver.get.side_effect = get_error
    strategy = RobustStrategy(timeout=5, driver_factory=lambda: driver, settle_seconds=0)
    return strategy, driver


class _FixedText(ExtractionStrategy):
    name = "fixed"

    def __init__(self, text):
        self.text = text

    def fetch_text(self, url):
        return self.text


def test_min_content_length_is_200():
    assert MIN_CONTENT_LENGTH == 200


@pytest.mark.parametrize("length, success", [(199, False), (200, True), (350, True)])
def test_length_threshold_in_base_contract(length, success):
    result = _FixedText("a" * length).attempt("https://example.com")

    assert result.success is success
    if success:
        assert result.content == "a" * length
        assert result.error is None
    else:
        assert result.content is None
        assert result.error == "Content too short (199 chars, minimum 200)"


def test_none_text_is_too_short():
    result = _FixedText(None).attempt("https://example.com")

    assert result == ScrapeResult(
        success=False, error="Content too short (0 chars, minimum 200)"
    )


def test_exceptions_are_returned_as_failures():
    class Exploding(ExtractionStrategy):
        name = "exploding"

        def fetch_text(self, url):
            raise ValueError("could not parse")

    result = Exploding().attempt("https://example.com")

    assert result.success is False
    assert result.error == "could not parse"


@pytest.mark.parametrize("length, success", [(199, False), (200, True)])
def test_lightweight_length_boundary(length, success):
    strategy, _ = _lightweight(_page(f"<article><p>{'b' * length}</p></article>"))

    result = strategy.attempt("https://example.com/story")

    assert result.success is success


@pytest.mark.parametrize("length, success", [(199, False), (200, True)])
def test_robust_length_boundary(length, success):
    strategy, _ = _robust(_page(f"<article><p>{'c' * length}</p></article>"))

    result = strategy.attempt("https://example.com/story")

    assert result.success is success


def test_lightweight_extracts_article_paragraphs(long_text):
    html = _page(
        "<nav><p>Home | Sports | Weather</p></nav>"
        f"<article><p>{long_text}</p><p> </p><p>Second paragraph.</p>"
        "<div class='ad'><p>Buy now</p></div></article>"
        "<footer><p>Copyright</p></footer>"
    )
    strategy, session = _lightweight(html)

    result = strategy.attempt("https://example.com/story")

    assert result.success is True
    assert result.content == f"{long_text.strip()}\n\nSecond paragraph."
    session.get.assert_called_once_with("https://example.com/story", timeout=5)


def test_lightweight_network_error_is_failure():
    strategy, _ = _lightweight(error=requests.ConnectionError("connection refused"))

    result = strategy.attempt("https://example.com/story")

    assert result.success is False
    assert result.error == "connection refused"


def test_lightweight_http_error_is_failure():
    response = Mock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session = Mock()
    session.get.return_value = response
    strategy = LightweightStrategy(timeout=5, session=session)

    result = strategy.attempt("https://example.com/missing")

    assert result.success is False
    assert "404" in result.error


def test_lightweight_default_session_limits_redirects():
    strategy = LightweightStrategy(user_agent="TestAgent/1.0")

    assert strategy.session.max_redirects == 5
    assert strategy.session.headers["User-Agent"] == "TestAgent/1.0"
    strategy.close()


def test_robust_reads_rendered_page_and_quits_driver(long_text):
    strategy, driver = _robust(_page(f"<main><p>{long_text}</p></main>"))

    result = strategy.attempt("https://example.com/js-story")

    assert result.success is True
    assert result.content == long_text.strip()
    driver.set_page_load_timeout.assert_called_once_with(5)
    driver.get.assert_called_once_with("https://example.com/js-story")
    driver.quit.assert_called_once()


def test_robust_falls_back_to_container_text(long_text):
    strategy, _ = _robust(_page(f"<article><div>{long_text}</div></article>"))

    result = strategy.attempt("https://example.com/no-paragraphs")

    assert result.success is True
    assert result.content == long_text.strip()


def test_robust_timeout_is_failure_and_driver_is_quit():
    strategy, driver = _robust(get_error=TimeoutException("page load timed out"))

    result = strategy.attempt("https://example.com/slow")

    assert result.success is False
    assert "page load timed out" in result.error
    driver.quit.assert_called_once()


def test_robust_driver_start_failure_is_failure():
    def broken_factory():
        raise WebDriverException("chrome not found")

    strategy = RobustStrategy(timeout=5, driver_factory=broken_factory)

    result = strategy.attempt("https://example.com/story")

    assert result.success is False
    assert "chrome not found" in result.error


def test_extract_article_text_uses_first_matching_selector():
    soup = BeautifulSoup(
        _page(
            "<main><p>main text</p></main>"
            "<div class='entry-content'><p>entry text</p></div>"
        ),
        "html.parser",
    )

    text = extract_article_text(soup, [".missing", ".entry-content", "main"])

    assert text == "entry text"


def test_extract_article_text_falls_back_to_body():
    soup = BeautifulSoup(_page("<p>one</p><div><p>two</p></div>"), "html.parser")

    assert extract_article_text(soup, ["article"]) == "one\n\ntwo"
