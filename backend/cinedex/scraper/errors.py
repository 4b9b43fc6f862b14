"""Scraper error taxonomy."""
from typing import Optional


class ScraperError(Exception):
    """Base class for scraper errors."""


class SessionNotReadyError(ScraperError):
    """An extractor ran before the browser session loaded a page."""

    def __init__(self, message: str = "Page not loaded. Call start() first."):
        super().__init__(message)


class NavigationError(ScraperError):
    """The target page never reached the network-idle state."""

    def __init__(self, url: str, attempts: int, cause: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to load {url} after {attempts} attempt(s){detail}")


class SectionExtractionFailure(ScraperError):
    """One section could not be extracted.

    Never leaves the scraper; it is logged and replaced by the section's
    empty value.
    """

    def __init__(self, section: str, cause: BaseException):
        self.section = section
        self.cause = cause
        super().__init__(f"{section}: {type(cause).__name__}: {cause}")
