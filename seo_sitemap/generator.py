"""
High level sitemap generator: collect URLs, build, write, announce.

Usage:
    generator = SitemapGenerator(GeneratorConfig(base_url="https://example.com", base_path="public"))
    generator.add_url("/about", change_frequency="monthly", priority=0.5)
    generator.create_sitemap().write_sitemap().update_robots()

An instance is not safe for concurrent add/create calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .chunker import build_chunks
from .config import GeneratorConfig
from .errors import PreconditionError
from .index import build_index
from .output import SitemapBundle, assemble
from .ping import Notifier, PingResult, http_notify, submit_sitemap
from .records import URLRecord, URLRecordStore
from .robots import update_robots_content
from .storage import FileStorage, write_bundle

logger = logging.getLogger(__name__)


class SitemapGenerator:
    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config
        self.store = URLRecordStore()
        self._bundle: SitemapBundle | None = None
        self.written: list[Path] = []

    def add_url(
        self,
        location: str,
        last_modified: datetime | date | str | None = None,
        change_frequency: str | None = None,
        priority: float | None = None,
        alternates: Iterable[Mapping[str, str]] | None = None,
    ) -> SitemapGenerator:
        self.store.add(location, last_modified, change_frequency, priority, alternates)
        return self

    def add_urls(self, items: Iterable[Any]) -> SitemapGenerator:
        self.store.add_many(items)
        return self

    @property
    def url_count(self) -> int:
        return self.store.count()

    def records(self) -> list[URLRecord]:
        return self.store.to_list()

    def urls(self) -> list[dict[str, Any]]:
        return self.store.to_dicts()

    def create_sitemap(self, generated_on: datetime | None = None) -> SitemapGenerator:
        """Render every chunk (and the index when needed) in memory.

        Raises PreconditionError without URLs and LengthError when a chunk or
        the index breaks a protocol limit; the previous bundle is kept then.
        """
        cfg = self.config
        if self.store.count() == 0:
            raise PreconditionError("To create sitemap, call add_url or add_urls first.")
        chunks = build_chunks(
            self.store.to_list(),
            cfg.base_url,
            cfg.max_urls_per_sitemap,
            sitemap_filename=cfg.sitemap_filename,
            generated_on=generated_on,
        )
        chunks, index = build_index(
            chunks,
            cfg.base_url,
            cfg.index_filename,
            cfg.sitemap_filename,
            gzip_enabled=cfg.gzip,
            generated_on=generated_on,
        )
        self._bundle = assemble(chunks, index, cfg.base_url, cfg.sitemap_filename, gzip_enabled=cfg.gzip)
        logger.info(
            "Built %d sitemap file(s) for %d URLs%s",
            len(chunks),
            self.store.count(),
            " with index" if index is not None else "",
        )
        return self

    def _require_bundle(self, action: str) -> SitemapBundle:
        if self._bundle is None:
            raise PreconditionError(f"To {action}, call create_sitemap first.")
        return self._bundle

    @property
    def bundle(self) -> SitemapBundle:
        return self._require_bundle("read the sitemap")

    @property
    def full_url(self) -> str:
        return self._require_bundle("get the sitemap URL").full_url

    def to_list(self) -> list[tuple[str, str]]:
        return self._require_bundle("export sitemaps").to_list()

    def storage(self) -> FileStorage:
        return FileStorage(self.config.base_path)

    def write_sitemap(self, storage: FileStorage | None = None) -> SitemapGenerator:
        bundle = self._require_bundle("write sitemap")
        self.written = write_bundle(bundle, storage or self.storage())
        return self

    def robots_content(self, existing: str | None) -> str:
        return update_robots_content(existing, self._require_bundle("update robots.txt").full_url)

    def update_robots(self, storage: FileStorage | None = None) -> str:
        bundle = self._require_bundle("update robots.txt")
        store = storage or self.storage()
        content = update_robots_content(store.read_text(self.config.robots_filename), bundle.full_url)
        store.persist(self.config.robots_filename, content)
        logger.info("robots.txt now points to %s", bundle.full_url)
        return content

    def submit_sitemap(self, yahoo_app_id: str | None = None, notifier: Notifier | None = None) -> list[PingResult]:
        bundle = self._require_bundle("submit sitemap")
        return submit_sitemap(
            bundle.full_url,
            yahoo_app_id=yahoo_app_id,
            engines=self.config.search_engines,
            notifier=notifier or http_notify,
            timeout=self.config.ping_timeout,
        )
