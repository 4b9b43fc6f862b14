"""IMDb scraper using Playwright.

Every extractor in ``TITLE_SECTIONS`` runs concurrently against the same
loaded page, so extractors must only read the DOM: no clicks, scrolling,
navigation or DOM writes. Add new sections under the same rule.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from playwright.async_api import Page

from cinedex.config import Settings, settings as default_settings
from cinedex.schemas import MovieRecord, TrendingItem
from cinedex.scraper.errors import SessionNotReadyError
from cinedex.scraper.session import BrowserSession
from cinedex.scraper.sections.cast import extract_cast
from cinedex.scraper.sections.listing import extract_trending
from cinedex.scraper.sections.media import (
    extract_images,
    extract_poster,
    extract_video_sources,
    extract_videos,
)
from cinedex.scraper.sections.title import (
    extract_basic_info,
    extract_languages,
    extract_ratings,
    extract_storyline,
)

logger = logging.getLogger(__name__)

# MovieRecord field -> extractor
TITLE_SECTIONS = (
    ("basic_info", extract_basic_info),
    ("storyline", extract_storyline),
    ("ratings", extract_ratings),
    ("cast", extract_cast),
    ("videos", extract_videos),
    ("images", extract_images),
    ("video_sources", extract_video_sources),
    ("poster", extract_poster),
    ("languages", extract_languages),
)


class IMDbScraper:
    """IMDb title and list page scraper."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        session_factory: Callable[..., BrowserSession] = BrowserSession,
    ):
        """Initialize scraper.

        Args:
            config: Settings override
            session_factory: Builds the browser session for each call
        """
        self.config = config or default_settings
        self.session_factory = session_factory

    async def scrape_complete_movie_data(self, url: str) -> MovieRecord:
        """Scrape every section of one title page.

        Args:
            url: Title page URL, e.g. https://www.imdb.com/title/tt0111161/

        Returns:
            MovieRecord with every section present; failed sections hold
            their empty value

        Raises:
            NavigationError: if the page could not be loaded
        """
        async with self.session_factory(self.config) as session:
            await session.start(url)
            sections = await self.extract_sections(session.page)

        record = MovieRecord(url=url, scraped_at=datetime.now(timezone.utc), **sections)
        logger.info(f"Scraped {url}: {self._summary(record)}")
        return record

    async def scrape_trending(self, url: Optional[str] = None) -> List[TrendingItem]:
        """Scrape a chart or list page.

        Args:
            url: List page URL; defaults to ``settings.trending_url``

        Returns:
            Items in page order

        Raises:
            NavigationError: if the page could not be loaded
        """
        url = url or self.config.trending_url
        async with self.session_factory(self.config) as session:
            await session.start(url)
            items = await self._guarded("trending", extract_trending, session.page, self.config)

        logger.info(f"Scraped {len(items)} list items from {url}")
        return items

    async def extract_sections(self, page: Page) -> dict:
        """Run all title sections concurrently on a loaded page."""
        if page is None:
            raise SessionNotReadyError()

        results = await asyncio.gather(*(
            self._guarded(name, extractor, page, self.config) for name, extractor in TITLE_SECTIONS
        ))
        return {name: result for (name, _), result in zip(TITLE_SECTIONS, results)}

    @staticmethod
    async def _guarded(name: str, extractor: Callable, page: Page, config: Optional[Settings] = None) -> Any:
        """Run one extractor; anything it lets escape becomes its empty value."""
        try:
            return await extractor(page, config=config)
        except SessionNotReadyError:
            raise
        except Exception as e:
            logger.warning(f"Extractor {name} raised {type(e).__name__}: {e}")
            return extractor.empty()

    @staticmethod
    def _summary(record: MovieRecord) -> str:
        empty = [
            name for name, _ in TITLE_SECTIONS
            if getattr(record, name) in (None, [], "") or (name == "basic_info" and not record.basic_info.title)
        ]
        return f"{len(TITLE_SECTIONS) - len(empty)}/{len(TITLE_SECTIONS)} sections" + (
            f", empty: {', '.join(empty)}" if empty else ""
        )
