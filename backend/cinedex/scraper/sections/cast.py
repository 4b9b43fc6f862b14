"""Top cast section."""
from typing import List

from playwright.async_api import Page

from cinedex.schemas import CastMember
from cinedex.scraper import selectors
from cinedex.scraper.parsing import clean_text, is_voice_role
from cinedex.scraper.resolution import resolve_first
from cinedex.scraper.sections.base import section


@section("cast", selectors.MARKER_CAST, empty=list, timeout_setting="list_section_timeout_ms")
async def extract_cast(page: Page) -> List[CastMember]:
    members = await resolve_first(page, selectors.CAST, empty=[])

    cast = []
    for member in members:
        character = clean_text(member.get("character_name"))
        cast.append(CastMember.model_validate({
            **member,
            "actor_name": clean_text(member.get("actor_name")),
            "character_name": character,
            "is_voice_role": is_voice_role(character),
        }))
    return cast
