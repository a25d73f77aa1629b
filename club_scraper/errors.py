"""Exceptions raised by the crawler pipeline."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for crawler errors."""


class ConfigurationError(ScraperError):
    """Run configuration failed validation."""


class ExtractionMiss(ScraperError):
    """A selector matched nothing or the matched element lacked the attribute."""

    def __init__(self, field: str, selector: str) -> None:
        super().__init__(f"{field}: nothing usable at {selector!r}")
        self.field = field
        self.selector = selector


class FetchError(ScraperError):
    """An asset download failed."""


class NavigationFailure(ScraperError):
    """A page could not be loaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load {url}: {reason}")
        self.url = url
        self.reason = reason


class FatalError(ScraperError):
    """Session-level failure that aborts the whole run."""
