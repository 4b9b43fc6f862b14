"""Scrape endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from cinedex.cache import CacheManager, cache, title_cache_key, trending_cache_key
from cinedex.config import settings
from cinedex.schemas import CacheDeleteResponse, MovieRecord, TrendingItem, TrendingResponse
from cinedex.scraper.errors import NavigationError
from cinedex.scraper.imdb import IMDbScraper

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scrape", tags=["scrape"])


def get_scraper() -> IMDbScraper:
    """Scraper dependency."""
    return IMDbScraper()


def get_cache() -> CacheManager:
    """Cache dependency."""
    return cache


def _require_absolute(url: str) -> str:
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="url must be an absolute http(s) URL")
    return url


@router.get("/title", response_model=MovieRecord)
async def scrape_title(
    url: str,
    refresh: bool = False,
    scraper: IMDbScraper = Depends(get_scraper),
    store: CacheManager = Depends(get_cache),
):
    """Scrape one IMDb title page.

    Args:
        url: Title page URL
        refresh: Skip the cache and scrape again

    Returns:
        Composite movie record
    """
    url = _require_absolute(url)
    cache_key = title_cache_key(url)

    if not refresh:
        cached_record = store.get(cache_key)
        if cached_record:
            logger.info(f"[Cache HIT] {cache_key}")
            return MovieRecord.model_validate(cached_record)

    logger.info(f"[Cache MISS] Scraping {url}")
    try:
        record = await scraper.scrape_complete_movie_data(url)
    except NavigationError as e:
        logger.error(f"Scrape failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    store.set(cache_key, record.model_dump(mode="json"), ttl=settings.title_cache_ttl)
    return record


@router.get("/trending", response_model=TrendingResponse)
async def scrape_trending(
    url: Optional[str] = None,
    refresh: bool = False,
    scraper: IMDbScraper = Depends(get_scraper),
    store: CacheManager = Depends(get_cache),
):
    """Scrape a chart or list page (defaults to the trending chart)."""
    url = _require_absolute(url) if url else settings.trending_url
    cache_key = trending_cache_key(url)

    if not refresh:
        cached_items = store.get(cache_key)
        if cached_items:
            logger.info(f"[Cache HIT] {cache_key}")
            items = [TrendingItem.model_validate(item) for item in cached_items]
            return TrendingResponse(url=url, items=items, count=len(items))

    try:
        items = await scraper.scrape_trending(url)
    except NavigationError as e:
        logger.error(f"Scrape failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    if items:
        store.set(
            cache_key,
            [item.model_dump(mode="json") for item in items],
            ttl=settings.trending_cache_ttl,
        )
    return TrendingResponse(url=url, items=items, count=len(items))


@router.get("/cache/stats")
async def cache_stats(store: CacheManager = Depends(get_cache)):
    """Cache statistics."""
    return store.get_stats()


@router.delete("/cache/{title_id}", response_model=CacheDeleteResponse)
async def clear_title_cache(title_id: str, store: CacheManager = Depends(get_cache)):
    """Drop one cached title record."""
    cache_key = title_cache_key(title_id)
    return CacheDeleteResponse(key=cache_key, deleted=store.delete(cache_key))
