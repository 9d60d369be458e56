"""Data models for filesystem page discovery.

Immutable frozen dataclasses describing what the walk found.  Built
once at app startup and turned into router events and declarations.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from roost.registry.types import RouteEvent, SitemapDeclaration


@dataclass(frozen=True, slots=True)
class DiscoveredPage:
    """A page route file and everything the registry needs from it.

    Attributes:
        area_name: Area the file lives in (``""`` outside ``areas/``).
        page_name: Route value for the page, e.g. ``/docs/intro``.
        relative_path: Path of the route file relative to the content
            root, in URL form (``/pages/docs/intro.py``).
        source_file: Absolute path of the route file.
        handlers: HTTP method name to handler callable.
        page_type: The module's ``PageModel`` subclass, if it defines one.
        declarations: Sitemap declarations exported by the module.
    """

    area_name: str
    page_name: str
    relative_path: str
    source_file: str
    handlers: dict[str, Callable[..., Any]] = field(default_factory=dict)
    page_type: type | None = None
    declarations: tuple[SitemapDeclaration, ...] = ()

    @property
    def methods(self) -> frozenset[str]:
        return frozenset(self.handlers)

    def route_events(self) -> tuple[RouteEvent, ...]:
        """One router event per HTTP method, as a real router reports them."""
        return tuple(
            RouteEvent(
                area_name=self.area_name,
                route_values={"page": self.page_name},
                relative_path=self.relative_path,
            )
            for _ in sorted(self.handlers)
        )
