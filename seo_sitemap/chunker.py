"""
Split URL records into sitemap documents bounded by URL count and byte size.
"""

from __future__ import annotations

import html
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from xml.sax.saxutils import escape

from .errors import LengthError, PreconditionError, ValidationError, overage_percent
from .records import URLRecord

logger = logging.getLogger(__name__)

# https://www.sitemaps.org/protocol.html
MAX_FILE_SIZE = 52428800
MAX_URLS_PER_SITEMAP = 50000

GENERATOR_CLASS = "seo_sitemap.SitemapGenerator"
GENERATOR_VERSION = "1.0.0"

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XHTML_NS = "http://www.w3.org/1999/xhtml"
URLSET_SCHEMA = f"{SITEMAP_NS} {SITEMAP_NS}/sitemap.xsd"


@dataclass(frozen=True)
class Chunk:
    sequence_index: int
    filename: str
    xml: str
    byte_size: int
    url_count: int


def timestamp(moment: datetime | None = None) -> str:
    return (moment or datetime.now(UTC)).isoformat(timespec="seconds")


def document_head(root: str, schema_location: str, generated_on: str, extra_ns: str = "") -> list[str]:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<!-- generator-class="{GENERATOR_CLASS}" -->',
        f'<!-- generator-version="{GENERATOR_VERSION}" -->',
        f'<!-- generated-on="{generated_on}" -->',
        f"<{root}",
        f'  xmlns:xsi="{XSI_NS}"',
    ]
    if extra_ns:
        lines.append(f"  {extra_ns}")
    lines.append(f'  xsi:schemaLocation="{schema_location}"')
    lines.append(f'  xmlns="{SITEMAP_NS}">')
    return lines


def xml_attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def format_priority(value: float) -> str:
    return format(value, ".14g")


def render_url(record: URLRecord, base_url: str) -> str:
    parts = ["  <url>", f"    <loc>{html.escape(base_url + record.location, quote=True)}</loc>"]
    if record.last_modified is not None:
        parts.append(f"    <lastmod>{record.last_modified}</lastmod>")
    if record.change_frequency is not None:
        parts.append(f"    <changefreq>{html.escape(record.change_frequency, quote=False)}</changefreq>")
    if record.priority is not None:
        parts.append(f"    <priority>{format_priority(record.priority)}</priority>")
    for alternate in record.alternates or ():
        hreflang = alternate.get("hreflang")
        href = alternate.get("href")
        if not hreflang or not href:
            continue
        parts.append(f'    <xhtml:link rel="alternate" hreflang="{xml_attr(hreflang)}" href="{xml_attr(href)}"/>')
    parts.append("  </url>")
    return "\n".join(parts)


def render_urlset(records: Sequence[URLRecord], base_url: str, generated_on: str) -> str:
    has_alternates = any(record.alternates for record in records)
    extra_ns = f'xmlns:xhtml="{XHTML_NS}"' if has_alternates else ""
    lines = document_head("urlset", URLSET_SCHEMA, generated_on, extra_ns)
    lines.extend(render_url(record, base_url) for record in records)
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def check_size(xml: str, what: str) -> int:
    size = len(xml.encode("utf-8"))
    if size > MAX_FILE_SIZE:
        diff = overage_percent(MAX_FILE_SIZE, size)
        raise LengthError(
            f"{what} size limit reached (current limit = {MAX_FILE_SIZE} bytes, file size = {size} bytes, "
            f"diff = {diff:.2f}%), please decrease max urls per sitemap setting in generator instance",
            actual=size,
            limit=MAX_FILE_SIZE,
        )
    return size


def check_max_urls(max_urls_per_sitemap: int) -> None:
    if max_urls_per_sitemap <= 0:
        raise ValidationError("max urls per sitemap value should be a positive integer value")
    if max_urls_per_sitemap > MAX_URLS_PER_SITEMAP:
        raise ValidationError(f"More than {MAX_URLS_PER_SITEMAP} URLs per single sitemap is not allowed.")


def build_chunks(
    records: Sequence[URLRecord],
    base_url: str,
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP,
    sitemap_filename: str = "sitemap.xml",
    generated_on: datetime | None = None,
) -> list[Chunk]:
    check_max_urls(max_urls_per_sitemap)
    if not records:
        raise PreconditionError("To create sitemap, add at least one URL first.")

    stamp = timestamp(generated_on)
    chunk_count = math.ceil(len(records) / max_urls_per_sitemap)
    chunks: list[Chunk] = []
    for idx in range(chunk_count):
        members = records[idx * max_urls_per_sitemap : (idx + 1) * max_urls_per_sitemap]
        xml = render_urlset(members, base_url, stamp)
        size = check_size(xml, "Sitemap")
        logger.debug("Rendered sitemap chunk %d with %d URLs (%d bytes)", idx + 1, len(members), size)
        chunks.append(
            Chunk(
                sequence_index=idx,
                filename=sitemap_filename,
                xml=xml,
                byte_size=size,
                url_count=len(members),
            )
        )
    return chunks
