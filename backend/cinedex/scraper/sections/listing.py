"""Chart and list pages (trending, top-N)."""
import re
from typing import Any, Dict, List

from playwright.async_api import Page

from cinedex.schemas import TrendingItem
from cinedex.scraper import selectors
from cinedex.scraper.parsing import choose_poster, clean_text, parse_ranking
from cinedex.scraper.resolution import resolve_first
from cinedex.scraper.sections.base import section

RANKED_TITLE_RE = re.compile(r"^(\d+)\.\s+(.*)$")


def to_trending_item(row: Dict[str, Any]) -> TrendingItem:
    """Normalize one raw list row.

    Chart titles carry their position as a prefix ("3. Dune"); it is
    split off into ``ranking`` when no explicit ranking element exists.
    """
    title = clean_text(row.get("title"))
    ranking = parse_ranking(row.get("ranking") or None)

    match = RANKED_TITLE_RE.match(title)
    if match:
        title = match.group(2)
        if ranking is None:
            ranking = int(match.group(1))
    if ranking is None:
        ranking = parse_ranking(row.get("index"))

    return TrendingItem(
        ranking=ranking,
        title=title,
        year=clean_text(row.get("year")).strip("()"),
        runtime=clean_text(row.get("runtime")),
        certificate=clean_text(row.get("certificate")),
        rating=clean_text(row.get("rating")),
        vote_count=clean_text(row.get("vote_count")).strip("()").strip(),
        metascore=clean_text(row.get("metascore")),
        plot=clean_text(row.get("plot")),
        director=clean_text(row.get("director")),
        stars=[clean_text(star) for star in row.get("stars") or [] if clean_text(star)],
        poster=choose_poster(row.get("poster_srcset"), row.get("poster_src")) or "",
        detail_url=clean_text(row.get("detail_url")),
    )


@section("trending", selectors.MARKER_LIST, empty=list, timeout_setting="list_section_timeout_ms")
async def extract_trending(page: Page) -> List[TrendingItem]:
    rows = await resolve_first(page, selectors.LIST_ROWS, empty=[])
    return [to_trending_item(row) for row in rows]
