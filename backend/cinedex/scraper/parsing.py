"""Pure helpers for turning raw page data into clean values."""
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urljoin

TITLE_ID_RE = re.compile(r"/title/(tt\d+)")
SRCSET_SPLIT_RE = re.compile(r",\s+|,(?=https?://)")
SRCSET_WIDTH_RE = re.compile(r"^(\d+)w$")
MORE_ARTIFACT_RE = re.compile(r"^(\d+\s+more|see\s+more|more|show\s+more|see\s+all)$", re.IGNORECASE)


def parse_title_id(url: Optional[str]) -> str:
    """Return the ``tt`` id from an IMDb title URL, or ``""``."""
    if not url:
        return ""
    match = TITLE_ID_RE.search(url)
    return match.group(1) if match else ""


def is_absolute_url(value: Optional[str]) -> bool:
    return bool(value) and value.startswith(("http://", "https://"))


def parse_srcset(srcset: Optional[str]) -> List[Tuple[str, int]]:
    """Split a responsive-image candidate string into ``(url, width)`` pairs.

    Candidates without a ``w`` descriptor get width 0. IMDb image URLs
    contain commas (``_UX380_CR0,0,380,562_``), so candidates are split
    only on a comma followed by whitespace or by a new ``http(s)://`` URL.
    """
    if not srcset:
        return []

    candidates = []
    for part in SRCSET_SPLIT_RE.split(srcset.strip()):
        pieces = part.strip().split()
        if not pieces:
            continue
        url = pieces[0].rstrip(",")
        width = 0
        if len(pieces) > 1:
            match = SRCSET_WIDTH_RE.match(pieces[1])
            if match:
                width = int(match.group(1))
        candidates.append((url, width))
    return candidates


def pick_largest_candidate(srcset: Optional[str]) -> Optional[str]:
    """Return the URL with the strictly largest declared width.

    On a tie the earlier candidate is kept.
    """
    best_url = None
    best_width = -1
    for url, width in parse_srcset(srcset):
        if width > best_width:
            best_url, best_width = url, width
    return best_url


def choose_poster(srcset: Optional[str], src: Optional[str]) -> Optional[str]:
    """Pick a poster URL from an ``<img>``'s ``srcset`` and ``src``."""
    best = pick_largest_candidate(srcset)
    if best:
        return best
    if is_absolute_url(src):
        return src
    return None


def filter_keywords(keywords: Optional[Iterable[str]]) -> List[str]:
    """Drop blank entries and "N more" style UI artifacts."""
    cleaned = []
    for keyword in keywords or []:
        text = (keyword or "").strip()
        if not text or MORE_ARTIFACT_RE.match(text):
            continue
        cleaned.append(text)
    return cleaned


def is_voice_role(character: Optional[str]) -> bool:
    return bool(character) and "(voice)" in character.lower()


def dedupe_sources(*passes: Iterable[Dict[str, Any]], base_url: Optional[str] = None) -> List[Dict[str, Any]]:
    """Merge video source lists, keeping the first entry seen per ``src``.

    With ``base_url`` relative ``src`` values are resolved first, so an
    attribute value and the browser's resolved URL count as one source.
    """
    seen = set()
    merged = []
    for sources in passes:
        for source in sources or []:
            src = (source or {}).get("src")
            if not src:
                continue
            if base_url:
                src = urljoin(base_url, src)
            if src in seen:
                continue
            seen.add(src)
            merged.append({**source, "src": src})
    return merged


def parse_ranking(value: Any) -> Optional[int]:
    """Extract the leading integer from ranking text like ``"12."``."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = re.search(r"\d+", str(value).replace(",", ""))
    return int(match.group(0)) if match else None


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()
