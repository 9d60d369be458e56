"""Page registry — reconcile routed pages with declared sitemap metadata.

Two independent sources describe the site's pages:

- the router, which reports every page route it registers
  (:class:`RouteCollector`), and
- explicit per-type declarations, scanned once at startup
  (:func:`scan_declarations`).

:class:`PageRegistry` holds both and joins them on every read
(:func:`merge_pages`).  One registry is created per running app by its
composition root and handed to whoever needs it; there is no module-level
instance.

Usage::

    collector = RouteCollector()
    metadata = scan_declarations(page_types, table)
    registry = PageRegistry(metadata, collector)

    registry.add_route("", {"page": "/About"}, "/pages/about.py")
    for page in registry.pages():
        ...
"""

from collections.abc import Iterable, Mapping

from roost.registry.collector import RouteCollector
from roost.registry.declarations import DeclarationTable
from roost.registry.identity import names_equal, normalize_name, page_identity
from roost.registry.merger import merge_pages
from roost.registry.scanner import derive_area_name, derive_page_name, scan_declarations
from roost.registry.types import PageModel, PageRecord, RouteEvent, SitemapDeclaration


class PageRegistry:
    """The merged view over a route collector and a scanned metadata list.

    The metadata tuple is fixed at construction.  The collector stays
    live, so routes reported after construction show up on the next
    :meth:`pages` call.
    """

    __slots__ = ("_collector", "_metadata")

    def __init__(
        self,
        metadata: Iterable[PageRecord] = (),
        collector: RouteCollector | None = None,
    ) -> None:
        self._metadata: tuple[PageRecord, ...] = tuple(metadata)
        self._collector = collector if collector is not None else RouteCollector()

    @property
    def metadata(self) -> tuple[PageRecord, ...]:
        return self._metadata

    @property
    def collector(self) -> RouteCollector:
        return self._collector

    def add(self, event: RouteEvent) -> PageRecord | None:
        """Forward a router event to the collector."""
        return self._collector.add(event)

    def add_route(
        self,
        area_name: str | None,
        route_values: Mapping[str, str | None] | None,
        relative_path: str | None,
    ) -> PageRecord | None:
        """Router callback: ``(area_name, route_values, relative_path)``."""
        return self._collector.add_route(area_name, route_values, relative_path)

    def pages(self) -> tuple[PageRecord, ...]:
        """Merge the collector's current snapshot with the metadata."""
        return merge_pages(self._collector.snapshot(), self._metadata)


__all__ = [
    "DeclarationTable",
    "PageModel",
    "PageRecord",
    "PageRegistry",
    "RouteCollector",
    "RouteEvent",
    "SitemapDeclaration",
    "derive_area_name",
    "derive_page_name",
    "merge_pages",
    "names_equal",
    "normalize_name",
    "page_identity",
    "scan_declarations",
]
