"""Ranked selector fallback.

IMDb markup changes without notice, so a field is described by an ordered
list of strategies instead of one selector. Each strategy is evaluated in
the page; the first one that produces non-empty data wins. A strategy that
raises is treated as "no match".
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from playwright.async_api import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorStrategy:
    """One candidate: a CSS selector and the in-page function applied to it.

    ``script`` is a JavaScript function ``(selector) => data`` that must
    return plain JSON data.
    """
    selector: str
    script: str


def is_empty(value: Any) -> bool:
    """True for ``None``, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


async def _try(page: Page, strategy: SelectorStrategy, transform: Optional[Callable[[Any], Any]]) -> Any:
    try:
        result = await page.evaluate(strategy.script, strategy.selector)
        return transform(result) if transform else result
    except Exception as e:
        logger.debug(f"Selector {strategy.selector!r} failed: {e}")
        return None


async def resolve_first(
    page: Page,
    strategies: Sequence[SelectorStrategy],
    last_resort: Optional[SelectorStrategy] = None,
    empty: Any = None,
    transform: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Return the first non-empty result of ``strategies``.

    Args:
        page: Loaded page
        strategies: Candidates in priority order
        last_resort: Heuristic scan used only when every candidate fails
        empty: Value returned when nothing matched
        transform: Applied to each raw result before the emptiness check

    Returns:
        Extracted data or ``empty``
    """
    for strategy in strategies:
        result = await _try(page, strategy, transform)
        if not is_empty(result):
            return result

    if last_resort is not None:
        result = await _try(page, last_resort, transform)
        if not is_empty(result):
            logger.info(f"Used last-resort scan {last_resort.selector!r}")
            return result

    return empty
