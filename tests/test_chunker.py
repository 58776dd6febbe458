import html
import math
import re
import xml.etree.ElementTree as ET
from datetime import UTC, datetime

import pytest

NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9", "xhtml": "http://www.w3.org/1999/xhtml"}
FIXED = datetime(2024, 6, 1, 8, 0, tzinfo=UTC)


def make_records(count):
    from seo_sitemap.records import URLRecordStore

    store = URLRecordStore()
    for idx in range(count):
        store.add(f"/page-{idx}")
    return store.to_list()


def locs(xml):
    root = ET.fromstring(xml.encode("utf-8"))
    return [node.text for node in root.findall("sm:url/sm:loc", NS)]


class TestBuildChunks:
    @pytest.mark.parametrize("count,per_file", [(1, 1), (7, 3), (9, 3), (10, 50000), (25, 4)])
    def test_chunk_count_and_order(self, count, per_file):
        from seo_sitemap.chunker import build_chunks

        chunks = build_chunks(make_records(count), "https://example.com", per_file)

        assert len(chunks) == math.ceil(count / per_file)
        for idx, chunk in enumerate(chunks):
            assert chunk.sequence_index == idx
            assert chunk.url_count <= per_file
            expected = [f"https://example.com/page-{k}" for k in range(idx * per_file, min((idx + 1) * per_file, count))]
            assert locs(chunk.xml) == expected

    def test_no_records(self):
        from seo_sitemap.chunker import build_chunks
        from seo_sitemap.errors import PreconditionError

        with pytest.raises(PreconditionError):
            build_chunks([], "https://example.com", 10)

    @pytest.mark.parametrize("per_file", [0, -1, 50001])
    def test_max_urls_out_of_range(self, per_file):
        from seo_sitemap.chunker import build_chunks
        from seo_sitemap.errors import ValidationError

        with pytest.raises(ValidationError):
            build_chunks(make_records(1), "https://example.com", per_file)

    def test_filenames_are_provisional(self):
        from seo_sitemap.chunker import build_chunks

        chunks = build_chunks(make_records(5), "https://example.com", 2, sitemap_filename="map.xml")

        assert {chunk.filename for chunk in chunks} == {"map.xml"}

    def test_byte_size_matches_encoded_xml(self):
        from seo_sitemap.chunker import build_chunks
        from seo_sitemap.records import URLRecordStore

        store = URLRecordStore()
        store.add("/café")
        chunk = build_chunks(store.to_list(), "https://example.com", 10)[0]

        assert chunk.byte_size == len(chunk.xml.encode("utf-8"))

    def test_size_limit(self, monkeypatch):
        from seo_sitemap import chunker
        from seo_sitemap.errors import LengthError

        small = chunker.build_chunks(make_records(3), "https://example.com", 3)[0]
        monkeypatch.setattr(chunker, "MAX_FILE_SIZE", small.byte_size - 1)

        with pytest.raises(LengthError) as excinfo:
            chunker.build_chunks(make_records(3), "https://example.com", 3)

        err = excinfo.value
        assert err.actual == small.byte_size
        assert err.limit == small.byte_size - 1
        assert err.overage_percent > 0
        assert "please decrease max urls per sitemap" in str(err)

    def test_size_limit_hit_on_later_chunk_returns_nothing(self, monkeypatch):
        from seo_sitemap import chunker
        from seo_sitemap.errors import LengthError
        from seo_sitemap.records import URLRecordStore

        store = URLRecordStore()
        store.add("/a")
        store.add("/" + "b" * 2000)
        short = chunker.build_chunks(store.to_list()[:1], "https://example.com", 1)[0]
        monkeypatch.setattr(chunker, "MAX_FILE_SIZE", short.byte_size + 10)

        with pytest.raises(LengthError):
            chunker.build_chunks(store.to_list(), "https://example.com", 1)


class TestDocumentFormat:
    def test_header(self):
        from seo_sitemap.chunker import GENERATOR_VERSION, build_chunks

        xml = build_chunks(make_records(1), "https://example.com", 10, generated_on=FIXED)[0].xml
        lines = xml.splitlines()

        assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
        assert lines[1] == '<!-- generator-class="seo_sitemap.SitemapGenerator" -->'
        assert lines[2] == f'<!-- generator-version="{GENERATOR_VERSION}" -->'
        assert lines[3] == '<!-- generated-on="2024-06-01T08:00:00+00:00" -->'
        assert "sitemap.xsd" in xml
        assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml
        assert "xmlns:xhtml" not in xml

    def test_location_only_record(self):
        from seo_sitemap.chunker import build_chunks

        xml = build_chunks(make_records(1), "https://example.com", 10)[0].xml
        url = ET.fromstring(xml.encode("utf-8")).find("sm:url", NS)

        assert [child.tag.split("}")[1] for child in url] == ["loc"]

    def test_full_record_child_order(self):
        from seo_sitemap.chunker import build_chunks
        from seo_sitemap.records import URLRecordStore

        store = URLRecordStore()
        store.add(
            "/en/page",
            last_modified="2024-01-02T03:04:05+00:00",
            change_frequency="daily",
            priority=0.8,
            alternates=[
                {"hreflang": "de", "href": "https://example.com/de/page"},
                {"hreflang": "fr"},
                {"hreflang": "es", "href": "https://example.com/es/page?a=1&b=2"},
            ],
        )
        xml = build_chunks(store.to_list(), "https://example.com", 10)[0].xml
        url = ET.fromstring(xml.encode("utf-8")).find("sm:url", NS)

        assert [child.tag.split("}")[1] for child in url] == ["loc", "lastmod", "changefreq", "priority", "link", "link"]
        assert url.find("sm:lastmod", NS).text == "2024-01-02T03:04:05+00:00"
        assert url.find("sm:priority", NS).text == "0.8"
        links = url.findall("xhtml:link", NS)
        assert [(link.get("rel"), link.get("hreflang"), link.get("href")) for link in links] == [
            ("alternate", "de", "https://example.com/de/page"),
            ("alternate", "es", "https://example.com/es/page?a=1&b=2"),
        ]

    def test_priority_format(self):
        from seo_sitemap.chunker import format_priority

        assert format_priority(1.0) == "1"
        assert format_priority(0.5) == "0.5"
        assert format_priority(0.1234567) == "0.1234567"
        assert format_priority(0.123456789012341) == "0.12345678901234"

    def test_loc_escaping_round_trip(self):
        from seo_sitemap.chunker import build_chunks
        from seo_sitemap.records import URLRecordStore

        locations = ["/search?q=a&b=<c>", "/it's", '/say"hi"', "/plain"]
        store = URLRecordStore()
        for location in locations:
            store.add(location)
        xml = build_chunks(store.to_list(), "https://example.com", 10)[0].xml

        raw_locs = re.findall(r"<loc>(.*?)</loc>", xml)
        assert [html.unescape(value) for value in raw_locs] == [f"https://example.com{loc}" for loc in locations]
        assert "&quot;" in xml
        assert locs(xml) == [f"https://example.com{loc}" for loc in locations]

    def test_href_not_html_escaped(self):
        from seo_sitemap.chunker import render_url
        from seo_sitemap.records import make_record

        record = make_record("/a'b", alternates=[{"hreflang": "de", "href": "https://example.com/de/a'b"}])
        rendered = render_url(record, "https://example.com")

        assert "<loc>https://example.com/a&#x27;b</loc>" in rendered
        assert 'href="https://example.com/de/a\'b"' in rendered
