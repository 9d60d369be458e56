"""Data models for the page registry.

Immutable frozen dataclasses shared by the collector, the metadata
scanner, and the merger.  Names are trimmed on construction so every
record carries its display form; comparison always goes through
:mod:`roost.registry.identity`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from roost.registry.identity import PageIdentity, clean_name, page_identity


@dataclass(frozen=True, slots=True)
class PageRecord:
    """One navigable page.

    Attributes:
        area_name: Logical grouping; ``""`` when the page has no area.
        page_name: Page identifier beginning with ``/``.
        relative_path: URL-relative path of the page file (forward slashes).
        file_path: Absolute path to the page's template; ``""`` when unknown.
        last_modified: Modification time of that file; ``None`` when unknown.
    """

    area_name: str = ""
    page_name: str = ""
    relative_path: str = ""
    file_path: str = ""
    last_modified: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "area_name", clean_name(self.area_name))
        object.__setattr__(self, "page_name", clean_name(self.page_name))
        object.__setattr__(self, "relative_path", clean_name(self.relative_path))
        object.__setattr__(self, "file_path", clean_name(self.file_path))

    @property
    def identity(self) -> PageIdentity:
        """Normalized ``(area_name, page_name)`` key."""
        return page_identity(self.area_name, self.page_name)


@dataclass(frozen=True, slots=True)
class RouteEvent:
    """A page route reported by the host router.

    ``route_values`` carries the router's named values; the page name is
    read from the ``"page"`` entry.  An empty or missing mapping means the
    route is not a page.
    """

    area_name: str | None = ""
    route_values: Mapping[str, str | None] | None = field(default_factory=dict)
    relative_path: str | None = ""

    @property
    def is_page(self) -> bool:
        return bool(self.route_values)

    @property
    def page_name(self) -> str:
        if not self.route_values:
            return ""
        return clean_name(self.route_values.get("page"))


@dataclass(frozen=True, slots=True)
class SitemapDeclaration:
    """An explicit opt-in of one page type into the sitemap.

    Blank ``page_name`` / ``area_name`` are derived from the page type
    during the metadata scan.  ``source_file`` is the page's code file;
    the scanner resolves it to the companion template.
    """

    page_name: str = ""
    area_name: str = ""
    source_file: str = ""
    last_modified: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "page_name", clean_name(self.page_name))
        object.__setattr__(self, "area_name", clean_name(self.area_name))
        object.__setattr__(self, "source_file", clean_name(self.source_file))


class PageModel:
    """Marker base class for routable page types.

    Subclass it to make a class visible to the metadata scanner::

        class AboutModel(PageModel):
            def get(self):
                ...
    """

    __slots__ = ()
