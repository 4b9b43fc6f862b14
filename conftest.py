"""
Pytest configuration and fixtures for the cinedex tests.
"""

import copy
from datetime import datetime, timezone

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from cinedex.config import Settings
from cinedex.schemas import BasicInfo, MovieRecord, TrendingItem


TITLE_URL = "https://www.imdb.com/title/tt0111161/"


class FakePage:
    """Stand-in for a Playwright page.

    ``results`` maps a strategy selector (or, for argument-less scripts,
    the script itself) to the value ``evaluate`` returns. Exceptions are
    raised instead of returned. Unknown keys evaluate to None.
    """

    def __init__(self, results=None, url=TITLE_URL, missing_markers=()):
        self.url = url
        self.results = dict(results or {})
        self.missing_markers = set(missing_markers)
        self.evaluated = []
        self.waited = []
        self.wait_timeouts = {}

    async def wait_for_selector(self, selector, timeout=None, state=None):
        self.waited.append(selector)
        self.wait_timeouts[selector] = timeout
        if selector in self.missing_markers:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def evaluate(self, script, arg=None):
        key = script if arg is None else arg
        self.evaluated.append(key)
        value = self.results.get(key)
        if isinstance(value, BaseException):
            raise value
        return copy.deepcopy(value)


@pytest.fixture
def fake_page_factory():
    """Build FakePage instances."""
    return FakePage


@pytest.fixture
def test_settings():
    """Settings with no waiting between retries."""
    return Settings(
        navigation_attempts=2,
        navigation_backoff_seconds=0,
        settle_delay_ms=0,
        section_timeout_ms=100,
        list_section_timeout_ms=200,
        redis_url="redis://localhost:6379/15",
    )


@pytest.fixture
def sample_movie_record():
    """A small MovieRecord."""
    return MovieRecord(
        url=TITLE_URL,
        scraped_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        basic_info=BasicInfo(id="tt0111161", title="The Shawshank Redemption"),
        poster="https://m.media-amazon.com/images/M/poster._V1_UX760_.jpg",
    )


@pytest.fixture
def sample_trending_items():
    """Two trending rows."""
    return [
        TrendingItem(ranking=1, title="Dune: Part Two", year="2024",
                     detail_url="https://www.imdb.com/title/tt15239678/"),
        TrendingItem(ranking=2, title="Oppenheimer", year="2023",
                     detail_url="https://www.imdb.com/title/tt15398776/"),
    ]
