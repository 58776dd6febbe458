#!/usr/bin/env python3
"""
Command line sitemap generator.

Usage:
    seo-sitemap generate --base-url https://example.com --urls-file urls.txt
    seo-sitemap generate --base-url https://example.com --urls-file urls.json --gzip --update-robots --ping
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from .chunker import MAX_URLS_PER_SITEMAP
from .config import GeneratorConfig
from .errors import LengthError, ValidationError
from .generator import SitemapGenerator

LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    for noisy in ("urllib3", "charset_normalizer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def canonical_host(host: str | None) -> str:
    value = (host or "").strip().lower().rstrip(".")
    if value.startswith("www."):
        return value[4:]
    return value


def normalize_base_url(raw: str) -> str:
    value = raw.strip()
    parsed = urlparse(value)
    if not parsed.scheme:
        value = f"https://{value}"
        parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme}")
    if not parsed.netloc:
        raise ValueError(f"Base URL has no host: {raw}")
    return value.rstrip("/")


def location_for(base_url: str, raw: str) -> str | None:
    """Turn a listed URL into a location relative to base_url; None when off-site."""
    if raw == base_url or raw.startswith((f"{base_url}/", f"{base_url}?")):
        return raw[len(base_url) :] or "/"
    parsed = urlparse(raw)
    if not parsed.scheme:
        return raw if raw.startswith("/") else f"/{raw}"
    base = urlparse(base_url)
    if canonical_host(parsed.hostname) != canonical_host(base.hostname):
        return None
    path = parsed.path or "/"
    base_path = base.path.rstrip("/")
    if base_path:
        if path == base_path:
            path = "/"
        elif path.startswith(f"{base_path}/"):
            path = path[len(base_path) :]
        else:
            return None
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return path


def load_text_entries(path: Path) -> list[tuple[Any, ...]]:
    entries: list[tuple[Any, ...]] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        value = raw.strip()
        if not value or value.startswith("#"):
            continue
        fields: list[Any] = [item.strip() or None for item in value.split("\t")]
        entries.append(tuple(fields[:4]))
    return entries


def load_json_entries(path: Path) -> list[tuple[Any, ...]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("JSON urls file must contain a list of objects")
    entries: list[tuple[Any, ...]] = []
    for position, item in enumerate(data):
        if isinstance(item, str):
            entries.append((item,))
            continue
        if not isinstance(item, dict):
            raise ValueError(f"entry {position}: expected an object, got {type(item).__name__}")
        entries.append(
            (item.get("loc"), item.get("lastmod"), item.get("changefreq"), item.get("priority"), item.get("alternates"))
        )
    return entries


def load_entries(path_value: str) -> list[tuple[Any, ...]]:
    path = Path(path_value).resolve()
    if not path.exists():
        raise ValueError(f"urls file not found: {path}")
    if path.suffix.lower() == ".json":
        try:
            return load_json_entries(path)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return load_text_entries(path)


def run_generate(args: argparse.Namespace) -> int:
    try:
        base_url = normalize_base_url(args.base_url)
        raw_entries = load_entries(args.urls_file)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    if not raw_entries:
        print("Error: urls-file is empty")
        return 2

    warnings: list[str] = []
    entries: list[tuple[Any, ...]] = []
    skipped_out_of_scope = 0
    for entry in raw_entries:
        location = location_for(base_url, entry[0]) if isinstance(entry[0], str) else entry[0]
        if location is None:
            skipped_out_of_scope += 1
            continue
        entries.append((location, *entry[1:]))
    if skipped_out_of_scope > 0:
        warnings.append(f"Skipped {skipped_out_of_scope} out-of-scope URLs (host or path mismatch).")
    if not entries:
        print("Error: no valid in-scope URLs to include in sitemap")
        return 2

    out_dir = Path(args.output_dir).resolve()
    try:
        config = GeneratorConfig(
            base_url=base_url,
            base_path=str(out_dir),
            sitemap_filename=args.sitemap_filename,
            index_filename=args.index_filename,
            robots_filename=args.robots_filename,
            max_urls_per_sitemap=args.max_urls_per_sitemap,
            gzip=args.gzip,
            ping_timeout=args.timeout,
        )
        generator = SitemapGenerator(config).add_urls(entries)
    except ValidationError as exc:
        print(f"Error: {exc}")
        for detail in exc.errors[1:20]:
            print(f"  {detail}")
        return 2

    try:
        generator.create_sitemap()
    except LengthError as exc:
        print(f"Error: {exc}")
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    try:
        generator.write_sitemap()
        robots_path = ""
        if args.update_robots:
            generator.update_robots()
            robots_path = str(generator.storage().path_for(config.robots_filename))
    except OSError as exc:
        print(f"Error: failed to write output: {exc}")
        return 1

    pings: list[dict[str, Any]] = []
    if args.ping:
        pings = [result.to_dict() for result in generator.submit_sitemap(yahoo_app_id=args.yahoo_app_id or None)]
        failed = [item["site"] for item in pings if not 200 <= item["http_code"] < 300]
        if failed:
            warnings.append(f"Ping failed for: {', '.join(failed)}")

    bundle = generator.bundle
    summary = {
        "base_url": base_url,
        "total_urls": generator.url_count,
        "max_urls_per_sitemap": config.max_urls_per_sitemap,
        "sitemap_files": len(bundle.chunks),
        "index_file": bundle.index.filename if bundle.index is not None else None,
        "sitemap_url": bundle.full_url,
        "gzip": config.gzip,
        "robots_file": robots_path or None,
        "pings": pings,
        "warnings": warnings,
        "output_files": [str(path) for path in generator.written],
    }
    summary_path = out_dir / "SUMMARY.json"
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    print(f"Base URL: {base_url}")
    print(f"Total URLs included: {generator.url_count}")
    print(f"Sitemap files: {len(bundle.chunks)}")
    print(f"Sitemap URL: {bundle.full_url}")
    if robots_path:
        print(f"robots.txt: {robots_path}")
    for item in pings:
        print(f"Ping {item['site']}: HTTP {item['http_code']}")
    for warning in warnings:
        print(f"Warning: {warning}")
    print(f"Summary: {summary_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate XML sitemaps, a sitemap index and robots.txt.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_generate = sub.add_parser("generate", help="Generate sitemap XML from a URL list")
    p_generate.add_argument("--base-url", required=True, help="Canonical base URL, e.g. https://example.com")
    p_generate.add_argument(
        "--urls-file",
        required=True,
        help="Newline-delimited URLs (optional tab-separated lastmod, changefreq, priority) or a .json list",
    )
    p_generate.add_argument("--output-dir", default="seo-sitemap-output")
    p_generate.add_argument(
        "--max-urls-per-sitemap",
        type=int,
        default=MAX_URLS_PER_SITEMAP,
        help=f"URLs per sitemap file (max {MAX_URLS_PER_SITEMAP})",
    )
    p_generate.add_argument("--sitemap-filename", default="sitemap.xml")
    p_generate.add_argument("--index-filename", default="sitemap-index.xml")
    p_generate.add_argument("--robots-filename", default="robots.txt")
    p_generate.add_argument("--gzip", action="store_true", help="Gzip sitemap files (the index stays plain)")
    p_generate.add_argument("--update-robots", action="store_true", help="Add the Sitemap directive to robots.txt")
    p_generate.add_argument("--ping", action="store_true", help="Notify search engines of the sitemap URL")
    p_generate.add_argument("--yahoo-app-id", default="", help="Optional Yahoo app id for the ping")
    p_generate.add_argument("--timeout", type=int, default=20, help="Ping timeout in seconds")
    p_generate.set_defaults(func=run_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
