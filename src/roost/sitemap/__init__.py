"""Sitemap URLs and the ``<urlset>`` document."""

from roost.sitemap.render import (
    SITEMAP_CONTENT_TYPE,
    SitemapEntry,
    build_entries,
    format_lastmod,
    render_sitemap,
    render_urlset,
)
from roost.sitemap.urls import base_url, page_link_url

__all__ = [
    "SITEMAP_CONTENT_TYPE",
    "SitemapEntry",
    "base_url",
    "build_entries",
    "format_lastmod",
    "page_link_url",
    "render_sitemap",
    "render_urlset",
]
