"""Filesystem-based page discovery.

The ``pages/`` directory structure defines page routes and areas.
Discovery is the router side of the registry: every route file is
reported to the route collector, and module-level ``sitemap`` values
become declarations for the metadata scanner.

Usage::

    app = App(AppConfig(pages_dir="pages"))
    app.mount_pages()

Route file::

    # pages/about.py
    from roost import PageModel, SitemapDeclaration

    class AboutModel(PageModel):
        def get(self): ...

    sitemap = SitemapDeclaration()
"""

from roost.pages.discovery import discover_pages
from roost.pages.types import DiscoveredPage
from roost.registry.types import PageModel

__all__ = [
    "DiscoveredPage",
    "PageModel",
    "discover_pages",
]
