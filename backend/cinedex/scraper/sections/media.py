"""Media sections: videos, photos, native video sources and the poster."""
import logging
from typing import Any, List, Optional

from playwright.async_api import Page

from cinedex.schemas import Image, Video, VideoSource
from cinedex.scraper import selectors
from cinedex.scraper.parsing import choose_poster, dedupe_sources
from cinedex.scraper.resolution import resolve_first
from cinedex.scraper.sections.base import none, section

logger = logging.getLogger(__name__)


@section("videos", selectors.MARKER_VIDEOS, empty=list, timeout_setting="list_section_timeout_ms")
async def extract_videos(page: Page) -> List[Video]:
    """Video cards from the first row of the videos section."""
    videos = await resolve_first(page, selectors.VIDEOS, empty=[])
    return [Video.model_validate(video) for video in videos]


@section("images", selectors.MARKER_IMAGES, empty=list, timeout_setting="list_section_timeout_ms")
async def extract_images(page: Page) -> List[Image]:
    images = await resolve_first(page, selectors.IMAGES_GALLERY, empty=[])
    return [Image.model_validate(image) for image in images]


@section("video_sources", selectors.MARKER_VIDEO_SOURCES, empty=list)
async def extract_video_sources(page: Page) -> List[VideoSource]:
    """Read ``<video>`` and ``<source>`` elements directly.

    The full scan collects playback metadata. If it fails, a bare scan
    collects only ``src`` attributes. Both passes are merged by ``src``.
    """
    elements: List[Any] = []
    try:
        elements = await page.evaluate(selectors.VIDEO_ELEMENTS)
        sources = await page.evaluate(selectors.SOURCE_ELEMENTS)
        found = dedupe_sources(elements, sources, base_url=page.url)
    except Exception as e:
        logger.info(f"Full video source scan failed, using bare scan: {e}")
        bare = await page.evaluate(selectors.BARE_SOURCES)
        found = dedupe_sources(elements, bare, base_url=page.url)

    return [VideoSource.model_validate(source) for source in found]


def _poster_from_candidates(candidates: Optional[dict]) -> Optional[str]:
    if not candidates:
        return None
    return choose_poster(candidates.get("srcset"), candidates.get("src"))


@section("poster", selectors.MARKER_POSTER, empty=none, marker_required=False)
async def extract_poster(page: Page) -> Optional[str]:
    """Highest resolution poster URL, or None."""
    return await resolve_first(
        page,
        selectors.POSTER,
        last_resort=selectors.POSTER_CDN_SCAN,
        transform=_poster_from_candidates,
    )
