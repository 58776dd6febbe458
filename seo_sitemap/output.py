"""
Final artifact names and URLs for a generated sitemap set.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .chunker import Chunk
from .index import SitemapIndex, gz_suffix


@dataclass(frozen=True)
class Artifact:
    name: str
    xml: str
    compressed: bool = False
    is_index: bool = False

    @property
    def final_name(self) -> str:
        return gz_suffix(self.name, self.compressed)


@dataclass(frozen=True)
class SitemapBundle:
    chunks: tuple[Chunk, ...]
    index: SitemapIndex | None
    base_url: str
    sitemap_filename: str
    gzip_enabled: bool = False

    @property
    def full_url(self) -> str:
        if self.index is not None:
            return f"{self.base_url}/{self.index.filename}"
        return f"{self.base_url}/{gz_suffix(self.sitemap_filename, self.gzip_enabled)}"

    @property
    def url_count(self) -> int:
        return sum(chunk.url_count for chunk in self.chunks)

    def artifacts(self) -> list[Artifact]:
        out: list[Artifact] = []
        if self.index is not None:
            out.append(Artifact(name=self.index.filename, xml=self.index.xml, is_index=True))
        out.extend(Artifact(name=chunk.filename, xml=chunk.xml, compressed=self.gzip_enabled) for chunk in self.chunks)
        return out

    def to_list(self) -> list[tuple[str, str]]:
        return [(artifact.name, artifact.xml) for artifact in self.artifacts()]


def assemble(
    chunks: Sequence[Chunk],
    index: SitemapIndex | None,
    base_url: str,
    sitemap_filename: str,
    gzip_enabled: bool = False,
) -> SitemapBundle:
    return SitemapBundle(
        chunks=tuple(chunks),
        index=index,
        base_url=base_url,
        sitemap_filename=sitemap_filename,
        gzip_enabled=gzip_enabled,
    )
