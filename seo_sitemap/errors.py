"""Exceptions raised by the sitemap generator."""

from __future__ import annotations


class SitemapError(Exception):
    pass


class ValidationError(SitemapError, ValueError):
    """Malformed URL input or generator configuration."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [message])


class PreconditionError(SitemapError, RuntimeError):
    """An operation was called before the step it depends on."""


class LengthError(SitemapError):
    """A generated artifact exceeds a sitemaps.org protocol limit."""

    def __init__(self, message: str, actual: int, limit: int) -> None:
        super().__init__(message)
        self.actual = actual
        self.limit = limit

    @property
    def overage_percent(self) -> float:
        return overage_percent(self.limit, self.actual)


def overage_percent(limit: int, actual: int) -> float:
    return actual * 100 / limit - 100
