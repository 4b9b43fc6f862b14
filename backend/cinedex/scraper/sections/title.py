"""Title-level sections: heading, storyline, ratings and languages."""
from typing import List, Optional

from playwright.async_api import Page

from cinedex.schemas import BasicInfo, Language, Ratings, RatingScore, SecondaryScore, Storyline
from cinedex.scraper import selectors
from cinedex.scraper.parsing import clean_text, filter_keywords, parse_title_id
from cinedex.scraper.resolution import resolve_first
from cinedex.scraper.sections.base import none, section


@section("basic_info", selectors.MARKER_TITLE, empty=BasicInfo)
async def extract_basic_info(page: Page) -> BasicInfo:
    """Title id and heading."""
    title = await resolve_first(page, selectors.TITLE, empty="")

    canonical = await resolve_first(page, selectors.CANONICAL_URL, empty="")
    title_id = parse_title_id(canonical) or parse_title_id(page.url)

    return BasicInfo(id=title_id, title=clean_text(title))


@section("storyline", selectors.MARKER_STORYLINE, empty=none)
async def extract_storyline(page: Page) -> Optional[Storyline]:
    tagline = await resolve_first(page, selectors.TAGLINE, empty="")
    story = await resolve_first(page, selectors.STORY, empty="")
    genres = await resolve_first(page, selectors.GENRES, empty=[])
    keywords = await resolve_first(page, selectors.KEYWORDS, empty=[], transform=filter_keywords)
    certificate = await resolve_first(page, selectors.CERTIFICATE, empty="")
    has_parent_guide = await page.evaluate(selectors.EXISTS, selectors.PARENT_GUIDE)

    return Storyline(
        tagline=clean_text(tagline),
        story=clean_text(story),
        genres=[clean_text(g) for g in genres],
        keywords=keywords,
        certificate=clean_text(certificate),
        has_parent_guide=bool(has_parent_guide),
    )


@section("ratings", selectors.MARKER_RATINGS, empty=none)
async def extract_ratings(page: Page) -> Optional[Ratings]:
    """IMDb aggregate rating plus the Metacritic badge.

    Returns None when neither could be read.
    """
    score = await resolve_first(page, selectors.AGGREGATE_SCORE)
    secondary = await resolve_first(page, selectors.METASCORE)
    if not score and not secondary:
        return None

    return Ratings(
        score=RatingScore.model_validate(score) if score else RatingScore(),
        secondary_score=SecondaryScore.model_validate(secondary) if secondary else SecondaryScore(),
    )


@section("languages", selectors.MARKER_LANGUAGES, empty=list)
async def extract_languages(page: Page) -> List[Language]:
    languages = await resolve_first(
        page,
        selectors.LANGUAGES,
        last_resort=selectors.LANGUAGE_LABEL_SCAN,
        empty=[],
    )
    return [Language.model_validate(language) for language in languages]
