"""Tests for roost.sitemap.render — urlset entries and the kida template."""

from datetime import UTC, datetime, timedelta, timezone

from roost.config import AppConfig
from roost.registry.types import PageRecord
from roost.sitemap.render import (
    SITEMAP_NAMESPACE,
    SitemapEntry,
    build_entries,
    format_lastmod,
    render_sitemap,
    render_urlset,
)

T = datetime(2024, 3, 1, 12, 30, 5, tzinfo=UTC)


class TestFormatLastmod:
    def test_utc(self) -> None:
        assert format_lastmod(T) == "2024-03-01T12:30:05+00:00"

    def test_offset(self) -> None:
        tz = timezone(timedelta(hours=5, minutes=30))
        assert format_lastmod(datetime(2024, 1, 2, 3, 4, 5, 999, tzinfo=tz)) == "2024-01-02T03:04:05+05:30"

    def test_naive_gets_local_offset(self) -> None:
        value = format_lastmod(datetime(2024, 1, 2, 3, 4, 5))
        assert value.startswith("2024-01-02T03:04:05")
        assert len(value) == len("2024-01-02T03:04:05+00:00")

    def test_none_is_now(self) -> None:
        value = format_lastmod(None)
        assert value[:4] == str(datetime.now().year)


class TestBuildEntries:
    def test_fixed_policy(self) -> None:
        entries = build_entries([PageRecord(page_name="/About", last_modified=T)], "https://example.com")
        assert entries == [
            SitemapEntry(
                loc="https://example.com/About",
                lastmod="2024-03-01T12:30:05+00:00",
                changefreq="always",
                priority="0.5",
            )
        ]

    def test_config_policy(self) -> None:
        config = AppConfig(changefreq="weekly", priority=0.8)
        (entry,) = build_entries([PageRecord(page_name="/About", last_modified=T)], "https://x.test", config)
        assert entry.changefreq == "weekly"
        assert entry.priority == "0.8"

    def test_unlinkable_pages_skipped(self) -> None:
        pages = [PageRecord(), PageRecord(page_name="/About", last_modified=T)]
        entries = build_entries(pages, "https://example.com")
        assert [e.loc for e in entries] == ["https://example.com/About"]

    def test_blank_base_yields_nothing(self) -> None:
        assert build_entries([PageRecord(page_name="/About")], "") == []


class TestRenderUrlset:
    def test_document_shape(self) -> None:
        xml = render_urlset(
            [SitemapEntry("https://example.com/About", "2024-03-01T12:30:05+00:00", "always", "0.5")]
        )
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f'<urlset xmlns="{SITEMAP_NAMESPACE}">' in xml
        assert "<loc>https://example.com/About</loc>" in xml
        assert "<lastmod>2024-03-01T12:30:05+00:00</lastmod>" in xml
        assert "<changefreq>always</changefreq>" in xml
        assert "<priority>0.5</priority>" in xml
        assert xml.rstrip().endswith("</urlset>")

    def test_empty_urlset(self) -> None:
        xml = render_urlset([])
        assert "<url>" not in xml
        assert "</urlset>" in xml

    def test_escapes_locations(self) -> None:
        xml = render_urlset([SitemapEntry("https://example.com/a?x=1&y=<2>", "", "always", "0.5")])
        assert "&amp;" in xml
        assert "&lt;2&gt;" in xml
        assert "x=1&y" not in xml

    def test_render_sitemap_in_one_step(self) -> None:
        pages = [
            PageRecord(page_name="/About", last_modified=T),
            PageRecord(area_name="blog", page_name="/Index", last_modified=T),
        ]
        xml = render_sitemap(pages, "https://example.com")
        assert xml.count("<url>") == 2
        assert "<loc>https://example.com/blog</loc>" in xml

    def test_root_index_is_the_home_page(self) -> None:
        pages = [PageRecord(page_name="/Index", last_modified=T), PageRecord(page_name="/About", last_modified=T)]
        xml = render_sitemap(pages, "https://example.com/")
        assert xml.count("<url>") == 2
        assert "<loc>https://example.com</loc>" in xml
        assert "<loc>https://example.com/About</loc>" in xml
