"""
Sitemap index generation for multi-file sitemaps.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from .chunker import SITEMAP_NS, Chunk, check_size, document_head, timestamp
from .errors import LengthError

logger = logging.getLogger(__name__)

MAX_SITEMAPS_PER_INDEX = 50000

SITEINDEX_SCHEMA = f"{SITEMAP_NS} {SITEMAP_NS}/siteindex.xsd"


@dataclass(frozen=True)
class SitemapIndex:
    filename: str
    xml: str
    entries: tuple[tuple[str, str], ...]
    byte_size: int


def chunk_filename(sitemap_filename: str, sequence_index: int) -> str:
    # Only the first ".xml" is numbered: "a.xml.bak.xml" -> "a1.xml.bak.xml".
    return sitemap_filename.replace(".xml", f"{sequence_index + 1}.xml", 1)


def gz_suffix(name: str, gzip_enabled: bool) -> str:
    return f"{name}.gz" if gzip_enabled else name


def render_index(entries: Sequence[tuple[str, str]], generated_on: str) -> str:
    lines = document_head("sitemapindex", SITEINDEX_SCHEMA, generated_on)
    for loc, lastmod in entries:
        lines.append("  <sitemap>")
        lines.append(f"    <loc>{loc}</loc>")
        lines.append(f"    <lastmod>{lastmod}</lastmod>")
        lines.append("  </sitemap>")
    lines.append("</sitemapindex>")
    return "\n".join(lines) + "\n"


def build_index(
    chunks: Sequence[Chunk],
    base_url: str,
    index_filename: str,
    sitemap_filename: str,
    gzip_enabled: bool = False,
    generated_on: datetime | None = None,
) -> tuple[list[Chunk], SitemapIndex | None]:
    """Number the chunk filenames and build an index when there is more than one chunk.

    Returns the (possibly renamed) chunks and the index, or ``None`` when a
    single sitemap is enough.
    """
    if len(chunks) <= 1:
        return [replace(chunk, filename=sitemap_filename) for chunk in chunks], None

    if len(chunks) > MAX_SITEMAPS_PER_INDEX:
        raise LengthError(
            f"Number of sitemaps per index has reached its limit ({MAX_SITEMAPS_PER_INDEX})",
            actual=len(chunks),
            limit=MAX_SITEMAPS_PER_INDEX,
        )

    renamed = [replace(chunk, filename=chunk_filename(sitemap_filename, idx)) for idx, chunk in enumerate(chunks)]
    lastmod = timestamp(generated_on)
    entries = tuple(
        (f"{base_url}/{gz_suffix(html.escape(chunk.filename), gzip_enabled)}", lastmod) for chunk in renamed
    )
    xml = render_index(entries, lastmod)
    size = check_size(xml, "Sitemap index")
    logger.debug("Rendered sitemap index %s referencing %d sitemaps", index_filename, len(entries))
    return renamed, SitemapIndex(filename=index_filename, xml=xml, entries=entries, byte_size=size)
