"""Trending list refresh task."""
import asyncio
import logging
from typing import List, Optional

from cinedex.cache import cache, trending_cache_key
from cinedex.celery_app import celery_app
from cinedex.config import settings
from cinedex.schemas import TrendingItem
from cinedex.scraper.errors import NavigationError
from cinedex.scraper.imdb import IMDbScraper

logger = logging.getLogger(__name__)


@celery_app.task(name="cinedex.tasks.trending_refresh.refresh_trending")
def refresh_trending(url: Optional[str] = None):
    """Scrape the trending chart and store it in the cache."""
    url = url or settings.trending_url

    try:
        items = asyncio.run(_fetch_trending(url))
    except NavigationError as e:
        logger.error(f"Trending refresh failed: {e}")
        return {"url": url, "count": 0, "cached": False, "error": str(e)}

    # Keep the previous list when the scrape came back empty
    cached = False
    if items:
        cached = cache.set(
            trending_cache_key(url),
            [item.model_dump(mode="json") for item in items],
            ttl=settings.trending_cache_ttl,
        )
    logger.info(f"Refreshed trending list from {url}: {len(items)} items")

    return {"url": url, "count": len(items), "cached": cached}


async def _fetch_trending(url: str) -> List[TrendingItem]:
    return await IMDbScraper().scrape_trending(url)
