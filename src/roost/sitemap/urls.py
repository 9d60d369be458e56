"""Absolute page URLs for sitemap entries.

A page URL is ``{base}{/area}{/page}``.  The area segment is omitted for
pages without an area, and a page named ``Index`` (any case) collapses
to an empty segment so it links to its area (or the site root).
"""

from roost.registry.identity import clean_name, names_equal
from roost.registry.types import PageRecord

_INDEX_PAGE = "Index"


def base_url(scheme: str | None, host: str | None) -> str:
    """``scheme://host``, or ``""`` when either part is missing."""
    scheme = clean_name(scheme)
    host = clean_name(host)
    if not scheme or not host:
        return ""
    return f"{scheme}://{host}"


def area_segment(area_name: str | None) -> str:
    area = clean_name(area_name)
    return f"/{area}" if area else ""


def page_segment(page_name: str | None) -> str:
    page = clean_name(page_name)
    if names_equal(page.lstrip("/"), _INDEX_PAGE):
        return ""
    return page


def page_link_url(base: str | None, page: PageRecord) -> str:
    """Absolute URL of *page*, or ``""`` when it cannot be linked.

    A root ``Index`` page links to *base* itself.  A record with neither
    an area nor a page name has nothing to link to.
    """
    base = clean_name(base).rstrip("/")
    area = area_segment(page.area_name)
    if not base or (not area and not clean_name(page.page_name)):
        return ""
    return f"{base}{area}{page_segment(page.page_name)}"
