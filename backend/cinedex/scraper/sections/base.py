"""Shared contract for section extractors."""
import logging
from functools import wraps
from typing import Any, Callable, Optional

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from cinedex.config import Settings, settings
from cinedex.scraper.errors import SectionExtractionFailure, SessionNotReadyError

logger = logging.getLogger(__name__)


def section(
    name: str,
    marker: Optional[str],
    empty: Callable[[], Any],
    timeout_setting: str = "section_timeout_ms",
    marker_required: bool = True,
):
    """Turn an extraction coroutine into a contained section extractor.

    The wrapped coroutine receives the loaded page. The wrapper waits for
    ``marker`` first and turns every failure into ``empty()``, except a
    missing page, which raises ``SessionNotReadyError``. Callers may pass
    ``config=`` to override the module-level settings for the marker wait.

    Args:
        name: Section name used in logs
        marker: Selector that signals the section has rendered
        empty: Factory for the section's empty value
        timeout_setting: ``Settings`` field holding the marker wait in ms
        marker_required: When False a missing marker is logged and
            extraction still runs, so last-resort scans get a chance
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(page: Optional[Page], *args, config: Optional[Settings] = None, **kwargs):
            if page is None:
                raise SessionNotReadyError()

            timeout = getattr(config or settings, timeout_setting)
            try:
                if marker:
                    try:
                        await page.wait_for_selector(marker, timeout=timeout, state="attached")
                    except PlaywrightTimeoutError:
                        if marker_required:
                            raise
                        logger.info(f"{name}: marker not found, trying fallbacks")
                return await func(page, *args, **kwargs)
            except PlaywrightTimeoutError:
                logger.info(f"{name} section not found within {timeout}ms")
                return empty()
            except SessionNotReadyError:
                raise
            except Exception as e:
                logger.warning(f"Section extraction failed: {SectionExtractionFailure(name, e)}")
                return empty()

        wrapper.empty = empty
        return wrapper
    return decorator


def none() -> None:
    return None
