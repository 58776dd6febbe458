"""
Generator configuration.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from .chunker import MAX_URLS_PER_SITEMAP, check_max_urls
from .errors import ValidationError
from .ping import SEARCH_ENGINES, SearchEngine


@dataclass(frozen=True)
class GeneratorConfig:
    base_url: str
    base_path: str = ""
    sitemap_filename: str = "sitemap.xml"
    index_filename: str = "sitemap-index.xml"
    robots_filename: str = "robots.txt"
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP
    gzip: bool = False
    search_engines: Sequence[SearchEngine] = field(default_factory=lambda: list(SEARCH_ENGINES))
    ping_timeout: int = 20

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValidationError("base_url should not be empty")
        for name in ("sitemap_filename", "index_filename", "robots_filename"):
            if not getattr(self, name):
                raise ValidationError(f"{name} should not be empty")
        check_max_urls(self.max_urls_per_sitemap)
        if self.ping_timeout <= 0:
            raise ValidationError("ping_timeout should be a positive number of seconds")

    def with_options(self, **changes: Any) -> GeneratorConfig:
        return replace(self, **changes)

    def toggle_gzip(self) -> GeneratorConfig:
        return replace(self, gzip=not self.gzip)
