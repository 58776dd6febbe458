"""
Search engine sitemap pings.

Each endpoint is pinged independently; a failing engine is reported in its
result entry and never stops the others.
"""

from __future__ import annotations

import concurrent.futures
import html
import logging
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SeoSitemap/1.0; +https://www.sitemaps.org/protocol.html)",
    "Accept": "text/html,application/xml;q=0.9,*/*;q=0.8",
}

APP_ID_PLACEHOLDER = "USERID"

# The first entry takes an optional app id: (app-id template, plain ping template).
SearchEngine = str | tuple[str, str]
SEARCH_ENGINES: list[SearchEngine] = [
    (
        "http://search.yahooapis.com/SiteExplorerService/V1/updateNotification?appid=USERID&url=",
        "http://search.yahooapis.com/SiteExplorerService/V1/ping?sitemap=",
    ),
    "http://www.google.com/webmasters/tools/ping?sitemap=",
    "http://submissions.ask.com/ping?sitemap=",
    "http://www.bing.com/webmaster/ping.aspx?siteMap=",
]

Notifier = Callable[[str, str, int], tuple[int, str]]


@dataclass(frozen=True)
class PingResult:
    site: str
    fullsite: str
    http_code: int
    message: str

    @property
    def ok(self) -> bool:
        return 200 <= self.http_code < 300

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def soup_of(text: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(text, "lxml")
    except Exception:
        return BeautifulSoup(text, "html.parser")


def strip_tags(text: str) -> str:
    if not text:
        return ""
    return soup_of(text).get_text().replace("\n", " ")


def short_host(endpoint: str) -> str:
    host = urlparse(endpoint).hostname or ""
    labels = host.split(".")
    return ".".join(labels[-2:])


def ping_url(endpoint: str, sitemap_full_url: str) -> str:
    return endpoint + html.escape(sitemap_full_url, quote=True)


def resolve_endpoints(engines: Sequence[SearchEngine], yahoo_app_id: str | None = None) -> list[str]:
    endpoints: list[str] = []
    for engine in engines:
        if isinstance(engine, str):
            endpoints.append(engine)
            continue
        app_id_template, ping_template = engine
        if yahoo_app_id:
            endpoints.append(app_id_template.replace(APP_ID_PLACEHOLDER, yahoo_app_id))
        else:
            endpoints.append(ping_template)
    return endpoints


def http_notify(endpoint: str, sitemap_full_url: str, timeout: int) -> tuple[int, str]:
    response = requests.get(ping_url(endpoint, sitemap_full_url), headers=HEADERS, timeout=timeout)
    return response.status_code, response.text


def ping_engine(endpoint: str, sitemap_full_url: str, notifier: Notifier, timeout: int) -> PingResult:
    fullsite = ping_url(endpoint, sitemap_full_url)
    try:
        status, body = notifier(endpoint, sitemap_full_url, timeout)
    except Exception as exc:
        logger.warning("Ping to %s failed: %s", endpoint, exc)
        return PingResult(site=short_host(endpoint), fullsite=fullsite, http_code=0, message=str(exc))
    if not 200 <= status < 300:
        logger.warning("Ping to %s returned HTTP %d", endpoint, status)
    else:
        logger.info("Pinged %s (HTTP %d)", short_host(endpoint), status)
    return PingResult(site=short_host(endpoint), fullsite=fullsite, http_code=status, message=strip_tags(body))


def submit_sitemap(
    sitemap_full_url: str,
    yahoo_app_id: str | None = None,
    engines: Sequence[SearchEngine] = SEARCH_ENGINES,
    notifier: Notifier = http_notify,
    timeout: int = 20,
    max_workers: int = 4,
) -> list[PingResult]:
    endpoints = resolve_endpoints(engines, yahoo_app_id)
    if not endpoints:
        return []
    results: list[tuple[int, PingResult]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=min(max_workers, len(endpoints))) as pool:
        futures = {
            pool.submit(ping_engine, endpoint, sitemap_full_url, notifier, timeout): idx
            for idx, endpoint in enumerate(endpoints)
        }
        for fut in concurrent.futures.as_completed(futures):
            results.append((futures[fut], fut.result()))
    results.sort(key=lambda item: item[0])
    return [result for _, result in results]
