"""Sitemap document rendering.

Turns merged page records into ``<url>`` entries and renders the
sitemaps.org ``<urlset>`` document with kida.  Autoescaping is on, so
``&`` in query-bearing locations comes out as ``&amp;`` as the protocol
requires.
"""

import functools
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from kida import Environment

from roost.config import AppConfig
from roost.registry.types import PageRecord
from roost.sitemap.urls import page_link_url

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_CONTENT_TYPE = "application/xml; charset=utf-8"

_URLSET_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{{ namespace }}">
{% for entry in entries %}
  <url>
    <loc>{{ entry.loc }}</loc>
    <lastmod>{{ entry.lastmod }}</lastmod>
    <changefreq>{{ entry.changefreq }}</changefreq>
    <priority>{{ entry.priority }}</priority>
  </url>
{% end %}
</urlset>
"""


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    """One ``<url>`` element, already formatted for output."""

    loc: str
    lastmod: str
    changefreq: str
    priority: str


def format_lastmod(value: datetime | None) -> str:
    """W3C datetime with seconds and UTC offset; ``None`` means now."""
    if value is None:
        value = datetime.now()
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat(timespec="seconds")


def build_entries(
    pages: Iterable[PageRecord],
    base: str,
    config: AppConfig | None = None,
) -> list[SitemapEntry]:
    """One entry per linkable page, in input order.

    Pages whose URL cannot be formed (blank base, or neither area nor
    page segment) are skipped.
    """
    config = config or AppConfig()
    priority = f"{config.priority:.1f}"
    entries: list[SitemapEntry] = []
    for page in pages:
        loc = page_link_url(base, page)
        if not loc:
            continue
        entries.append(
            SitemapEntry(
                loc=loc,
                lastmod=format_lastmod(page.last_modified),
                changefreq=config.changefreq,
                priority=priority,
            )
        )
    return entries


@functools.cache
def _urlset_template() -> Any:
    env = Environment(autoescape=True)
    return env.from_string(_URLSET_TEMPLATE)


def render_urlset(entries: Sequence[SitemapEntry]) -> str:
    """Render the ``<urlset>`` document for *entries*."""
    return _urlset_template().render({"namespace": SITEMAP_NAMESPACE, "entries": list(entries)})


def render_sitemap(
    pages: Iterable[PageRecord],
    base: str,
    config: AppConfig | None = None,
) -> str:
    """Build entries for *pages* and render them in one step."""
    return render_urlset(build_entries(pages, base, config))
