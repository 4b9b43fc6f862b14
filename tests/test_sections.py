import pytest

from cinedex.scraper import selectors
from cinedex.scraper.errors import SessionNotReadyError
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


class TestBasicInfo:
    """Title id and heading."""

    @pytest.mark.asyncio
    async def test_reads_heading_and_canonical_id(self, fake_page_factory):
        page = fake_page_factory({
            selectors.TITLE[0].selector: "  The Shawshank Redemption ",
            selectors.CANONICAL_URL[0].selector: "https://www.imdb.com/title/tt0111161/",
        }, url="https://www.imdb.com/title/tt0111161/?ref_=chttp_t_1")

        info = await extract_basic_info(page)

        assert info.id == "tt0111161"
        assert info.title == "The Shawshank Redemption"

    @pytest.mark.asyncio
    async def test_heading_fallback_and_id_from_page_url(self, fake_page_factory):
        page = fake_page_factory({
            selectors.TITLE[0].selector: "",
            "h1": "The Godfather",
        }, url="https://www.imdb.com/title/tt0068646/")

        info = await extract_basic_info(page)

        assert info.title == "The Godfather"
        assert info.id == "tt0068646"

    @pytest.mark.asyncio
    async def test_missing_page_fails_fast(self):
        with pytest.raises(SessionNotReadyError):
            await extract_basic_info(None)


class TestStoryline:
    """Storyline section."""

    @pytest.mark.asyncio
    async def test_full_storyline(self, fake_page_factory):
        page = fake_page_factory({
            selectors.TAGLINE[0].selector: "Fear can hold you prisoner.",
            selectors.STORY[0].selector: "Two imprisoned men bond over a number of years.",
            selectors.GENRES[0].selector: ["Drama"],
            selectors.KEYWORDS[0].selector: ["prison", "friendship", "12 more"],
            selectors.CERTIFICATE[0].selector: "R",
            selectors.PARENT_GUIDE: True,
        })

        storyline = await extract_storyline(page)

        assert storyline.tagline == "Fear can hold you prisoner."
        assert storyline.genres == ["Drama"]
        assert storyline.keywords == ["prison", "friendship"]
        assert storyline.certificate == "R"
        assert storyline.has_parent_guide is True

    @pytest.mark.asyncio
    async def test_story_falls_back_to_hero_plot(self, fake_page_factory):
        page = fake_page_factory({'[data-testid="plot-xl"]': "Hero plot text"})

        storyline = await extract_storyline(page)

        assert storyline.story == "Hero plot text"
        assert storyline.keywords == []
        assert storyline.tagline == ""

    @pytest.mark.asyncio
    async def test_missing_section_returns_none(self, fake_page_factory):
        page = fake_page_factory(missing_markers=[selectors.MARKER_STORYLINE])

        assert await extract_storyline(page) is None
        assert page.evaluated == []

    @pytest.mark.asyncio
    async def test_internal_fault_is_contained(self, fake_page_factory):
        page = fake_page_factory({selectors.PARENT_GUIDE: RuntimeError("Execution context was destroyed")})

        assert await extract_storyline(page) is None


class TestRatings:
    """Ratings section."""

    @pytest.mark.asyncio
    async def test_both_scores(self, fake_page_factory):
        page = fake_page_factory({
            selectors.AGGREGATE_SCORE[0].selector: {"rating": "9.3", "total_votes": "3M", "full_rating": "9.3/10"},
            selectors.METASCORE[0].selector: {"score": "82", "background_color": "rgb(84, 169, 69)"},
        })

        ratings = await extract_ratings(page)

        assert ratings.score.rating == "9.3"
        assert ratings.score.total_votes == "3M"
        assert ratings.secondary_score.score == "82"
        assert ratings.secondary_score.background_color == "rgb(84, 169, 69)"

    @pytest.mark.asyncio
    async def test_legacy_markup_fallback(self, fake_page_factory):
        page = fake_page_factory({
            selectors.AGGREGATE_SCORE[0].selector: RuntimeError("detached"),
            '[itemprop="aggregateRating"]': {"rating": "8.1", "total_votes": "1,234", "full_rating": "8.1/10"},
        })

        ratings = await extract_ratings(page)

        assert ratings.score.rating == "8.1"
        assert ratings.secondary_score.score == ""

    @pytest.mark.asyncio
    async def test_nothing_found_is_none(self, fake_page_factory):
        assert await extract_ratings(fake_page_factory()) is None


@pytest.mark.asyncio
async def test_cast_marks_voice_roles(fake_page_factory):
    page = fake_page_factory({
        selectors.CAST[0].selector: [
            {
                "actor_name": "Tom Hanks",
                "actor_url": "/name/nm0000158/",
                "character_name": "Woody\n (voice)",
                "character_url": "/title/tt0114709/characters/nm0000158",
                "image_url": "https://m.media-amazon.com/images/M/hanks.jpg",
                "image_alt": "Tom Hanks",
            },
            {"actor_name": "Morgan Freeman", "character_name": "Ellis Boyd 'Red' Redding"},
        ],
    })

    cast = await extract_cast(page)

    assert [member.actor_name for member in cast] == ["Tom Hanks", "Morgan Freeman"]
    assert cast[0].is_voice_role is True
    assert cast[0].character_name == "Woody (voice)"
    assert cast[1].is_voice_role is False
    assert cast[1].image_url == ""


@pytest.mark.asyncio
async def test_cast_missing_section_is_empty_list(fake_page_factory):
    page = fake_page_factory(missing_markers=[selectors.MARKER_CAST])
    assert await extract_cast(page) == []


@pytest.mark.asyncio
async def test_videos_from_first_row(fake_page_factory):
    page = fake_page_factory({
        selectors.VIDEOS[0].selector: [
            {"title": "Official Trailer", "video_url": "/video/vi3877612057/", "image_url": "https://img/t.jpg", "image_alt": "Trailer"},
        ],
    })

    videos = await extract_videos(page)

    assert len(videos) == 1
    assert videos[0].video_url == "/video/vi3877612057/"


@pytest.mark.asyncio
async def test_images_fallback_selector(fake_page_factory):
    page = fake_page_factory({
        selectors.IMAGES_GALLERY[0].selector: [],
        selectors.IMAGES_GALLERY[1].selector: [{"src": "https://img/1.jpg", "alt": "Still"}],
    })

    images = await extract_images(page)

    assert [image.src for image in images] == ["https://img/1.jpg"]


class TestVideoSources:
    """Native media element scan."""

    @pytest.mark.asyncio
    async def test_deduplicates_video_and_source_elements(self, fake_page_factory):
        page = fake_page_factory({
            selectors.VIDEO_ELEMENTS: [
                {"src": "https://v/a.mp4", "type": "", "poster": "https://img/p.jpg", "width": 1280, "height": 720},
            ],
            selectors.SOURCE_ELEMENTS: [
                {"src": "https://v/a.mp4", "type": "video/mp4"},
                {"src": "https://v/b.m3u8", "type": "application/x-mpegURL"},
            ],
        })

        sources = await extract_video_sources(page)

        assert [s.src for s in sources] == ["https://v/a.mp4", "https://v/b.m3u8"]
        assert sources[0].width == 1280
        assert sources[0].poster == "https://img/p.jpg"

    @pytest.mark.asyncio
    async def test_bare_scan_after_full_scan_fails(self, fake_page_factory):
        page = fake_page_factory({
            selectors.VIDEO_ELEMENTS: [{"src": "https://v/a.mp4", "width": 640}],
            selectors.SOURCE_ELEMENTS: RuntimeError("Cannot read properties of null"),
            selectors.BARE_SOURCES: [{"src": "https://v/a.mp4"}, {"src": "https://v/c.webm"}],
        })

        sources = await extract_video_sources(page)

        assert [s.src for s in sources] == ["https://v/a.mp4", "https://v/c.webm"]
        assert sources[0].width == 640
        assert selectors.BARE_SOURCES in page.evaluated

    @pytest.mark.asyncio
    async def test_bare_scan_relative_src_matches_resolved_src(self, fake_page_factory):
        page = fake_page_factory({
            selectors.VIDEO_ELEMENTS: [{"src": "https://www.imdb.com/v/a.mp4", "width": 640}],
            selectors.SOURCE_ELEMENTS: RuntimeError("Cannot read properties of null"),
            selectors.BARE_SOURCES: [{"src": "/v/a.mp4"}],
        }, url="https://www.imdb.com/title/tt0111161/")

        sources = await extract_video_sources(page)

        assert [s.src for s in sources] == ["https://www.imdb.com/v/a.mp4"]
        assert sources[0].width == 640

    @pytest.mark.asyncio
    async def test_no_video_element(self, fake_page_factory):
        page = fake_page_factory(missing_markers=[selectors.MARKER_VIDEO_SOURCES])
        assert await extract_video_sources(page) == []


class TestPoster:
    """Poster URL selection."""

    @pytest.mark.asyncio
    async def test_largest_srcset_candidate(self, fake_page_factory):
        page = fake_page_factory({
            selectors.POSTER[0].selector: {
                "srcset": "https://img/p190.jpg 190w, https://img/p760.jpg 760w, https://img/p285.jpg 285w",
                "src": "https://img/src.jpg",
            },
        })

        assert await extract_poster(page) == "https://img/p760.jpg"

    @pytest.mark.asyncio
    async def test_plain_src_when_no_srcset(self, fake_page_factory):
        page = fake_page_factory({
            selectors.POSTER[0].selector: {"srcset": "", "src": "data:image/gif;base64,R0lGOD"},
            selectors.POSTER[1].selector: {"srcset": "", "src": "https://img/plain.jpg"},
        })

        assert await extract_poster(page) == "https://img/plain.jpg"

    @pytest.mark.asyncio
    async def test_cdn_scan_when_poster_block_missing(self, fake_page_factory):
        page = fake_page_factory(
            {selectors.POSTER_CDN_SCAN.selector: {"srcset": "", "src": "https://m.media-amazon.com/images/M/cdn.jpg"}},
            missing_markers=[selectors.MARKER_POSTER],
        )

        assert await extract_poster(page) == "https://m.media-amazon.com/images/M/cdn.jpg"

    @pytest.mark.asyncio
    async def test_no_poster(self, fake_page_factory):
        assert await extract_poster(fake_page_factory()) is None


@pytest.mark.asyncio
async def test_languages_label_scan_fallback(fake_page_factory):
    page = fake_page_factory({
        selectors.LANGUAGE_LABEL_SCAN.selector: [
            {"name": "English", "url": "/search/title?title_type=feature&primary_language=en"},
        ],
    })

    languages = await extract_languages(page)

    assert [language.name for language in languages] == ["English"]
    assert page.evaluated[-1] == "language"


@pytest.mark.asyncio
async def test_languages_primary_selector(fake_page_factory):
    page = fake_page_factory({
        selectors.LANGUAGES[0].selector: [{"name": "English", "url": "/a"}, {"name": "Italian", "url": "/b"}],
    })

    languages = await extract_languages(page)

    assert [language.name for language in languages] == ["English", "Italian"]
    assert "language" not in page.evaluated


class TestTrending:
    """Chart and list rows."""

    @pytest.mark.asyncio
    async def test_rows_normalized(self, fake_page_factory):
        page = fake_page_factory({
            selectors.LIST_ROWS[0].selector: [
                {
                    "index": 1,
                    "ranking": "",
                    "title": "1. Dune: Part Two",
                    "year": "2024",
                    "runtime": "2h 46m",
                    "certificate": "PG-13",
                    "rating": "8.5",
                    "vote_count": " (600K)",
                    "metascore": "79",
                    "plot": "Paul Atreides unites with the Fremen.",
                    "director": "Denis Villeneuve",
                    "stars": ["Timothée Chalamet", "Zendaya", ""],
                    "poster_srcset": "https://img/d140.jpg 140w, https://img/d280.jpg 280w",
                    "poster_src": "https://img/d.jpg",
                    "detail_url": "https://www.imdb.com/title/tt15239678/",
                },
                {"index": 2, "title": "", "stars": None},
            ],
        }, url="https://www.imdb.com/chart/moviemeter/")

        items = await extract_trending(page)

        assert len(items) == 2
        first, second = items
        assert first.ranking == 1
        assert first.title == "Dune: Part Two"
        assert first.vote_count == "600K"
        assert first.stars == ["Timothée Chalamet", "Zendaya"]
        assert first.poster == "https://img/d280.jpg"
        assert second.title == ""
        assert second.ranking == 2
        assert second.year == ""
        assert second.stars == []

    @pytest.mark.asyncio
    async def test_legacy_list_fallback(self, fake_page_factory):
        page = fake_page_factory({
            selectors.LIST_ROWS[2].selector: [
                {"index": 1, "ranking": "1.", "title": "Casablanca", "year": "(1942)"},
            ],
        })

        items = await extract_trending(page)

        assert items[0].title == "Casablanca"
        assert items[0].year == "1942"
        assert items[0].ranking == 1

    @pytest.mark.asyncio
    async def test_not_a_list_page(self, fake_page_factory):
        page = fake_page_factory(missing_markers=[selectors.MARKER_LIST])
        assert await extract_trending(page) == []


class TestMarkerWait:
    """Marker wait timeouts come from the settings in use."""

    @pytest.mark.asyncio
    async def test_default_settings(self, fake_page_factory):
        page = fake_page_factory(missing_markers=[selectors.MARKER_STORYLINE])

        assert await extract_storyline(page) is None
        assert page.wait_timeouts[selectors.MARKER_STORYLINE] == 5000

    @pytest.mark.asyncio
    async def test_injected_config(self, fake_page_factory, test_settings):
        page = fake_page_factory(missing_markers=[selectors.MARKER_STORYLINE, selectors.MARKER_CAST])

        assert await extract_storyline(page, config=test_settings) is None
        assert await extract_cast(page, config=test_settings) == []
        assert page.wait_timeouts[selectors.MARKER_STORYLINE] == test_settings.section_timeout_ms
        assert page.wait_timeouts[selectors.MARKER_CAST] == test_settings.list_section_timeout_ms
