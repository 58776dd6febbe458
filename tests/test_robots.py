class TestUpdateRobotsContent:
    def test_replaces_old_sitemap_line(self):
        from seo_sitemap.robots import update_robots_content

        content = update_robots_content(
            "User-agent: *\nSitemap: http://old/sitemap.xml\n", "http://example.com/sitemap.xml"
        )

        assert "http://old/sitemap.xml" not in content
        assert content == "User-agent: *\nSitemap: http://example.com/sitemap.xml"
        assert content.count("Sitemap:") == 1

    def test_sample_when_missing(self):
        from seo_sitemap.robots import update_robots_content

        content = update_robots_content(None, "https://example.com/sitemap-index.xml")

        assert content == "User-agent: *\nAllow: /\nSitemap: https://example.com/sitemap-index.xml"

    def test_keeps_blank_lines_and_other_rules(self):
        from seo_sitemap.robots import update_robots_content

        existing = "User-agent: *\nDisallow: /admin\n\nSitemap: a\nUser-agent: Bot\nDisallow: /\nSitemap: b"
        content = update_robots_content(existing, "https://example.com/sitemap.xml")

        assert content == (
            "User-agent: *\nDisallow: /admin\n\nUser-agent: Bot\nDisallow: /\nSitemap: https://example.com/sitemap.xml"
        )

    def test_preserves_crlf(self):
        from seo_sitemap.robots import update_robots_content

        content = update_robots_content("User-agent: *\r\nAllow: /", "https://example.com/sitemap.xml")

        assert content == "User-agent: *\r\nAllow: /\r\nSitemap: https://example.com/sitemap.xml"

    def test_prefix_is_case_sensitive(self):
        from seo_sitemap.robots import update_robots_content

        content = update_robots_content("sitemap: lower\n", "https://example.com/sitemap.xml")

        assert content == "sitemap: lower\nSitemap: https://example.com/sitemap.xml"

    def test_idempotent(self):
        from seo_sitemap.robots import update_robots_content

        once = update_robots_content(None, "https://example.com/sitemap.xml")
        twice = update_robots_content(once, "https://example.com/sitemap.xml")

        assert once == twice

    def test_empty_existing(self):
        from seo_sitemap.robots import update_robots_content

        assert update_robots_content("", "https://example.com/s.xml") == "Sitemap: https://example.com/s.xml"

    def test_splits_on_newline_only(self):
        from seo_sitemap.robots import update_robots_content

        existing = "User-agent: *\x0bSitemap: inline\nDisallow: /tmp\x85Sitemap: also-inline\nSitemap: old\n"
        content = update_robots_content(existing, "https://example.com/sitemap.xml")

        assert content == (
            "User-agent: *\x0bSitemap: inline\n"
            "Disallow: /tmp\x85Sitemap: also-inline\n"
            "Sitemap: https://example.com/sitemap.xml"
        )

    def test_crlf_with_old_sitemap_line(self):
        from seo_sitemap.robots import update_robots_content

        content = update_robots_content("User-agent: *\r\nSitemap: old\r\nAllow: /\r\n", "https://example.com/s.xml")

        assert content == "User-agent: *\r\nAllow: /\r\nSitemap: https://example.com/s.xml"
