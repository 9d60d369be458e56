"""Roost application class.

The composition root for one site: owns the declaration table, the
route collector, and, once frozen, the page registry.  Mutable during
setup (declarations, page types, mounting pages).  Frozen when it is
first read or first called as an ASGI app; the metadata scan runs
exactly once, at freeze time.
"""

import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path

from roost._internal.asgi import Receive, Scope, Send
from roost.config import AppConfig
from roost.registry import (
    DeclarationTable,
    PageRecord,
    PageRegistry,
    RouteCollector,
    RouteEvent,
    SitemapDeclaration,
    scan_declarations,
)
from roost.registry.declarations import check_page_type
from roost.server.handler import handle_request
from roost.sitemap.render import render_sitemap


class App:
    """The roost application.

    Mutable during setup (declarations, page types, ``mount_pages``).
    Route events are accepted at any time, since a long-running host may
    keep registering routes after the first sitemap request.

    Thread safety:
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread scans the declarations, even when several ASGI workers
        call ``__call__()`` concurrently on first request.  The collector
        and declaration table synchronize themselves.
    """

    __slots__ = (
        "_collector",
        "_declarations",
        "_freeze_lock",
        "_frozen",
        "_page_types",
        "_page_types_lock",
        # Compiled state (populated by _freeze)
        "_registry",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._declarations: DeclarationTable = DeclarationTable()
        self._collector: RouteCollector = RouteCollector(self.config.content_root)
        self._page_types: list[type] = []
        self._page_types_lock: threading.Lock = threading.Lock()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._registry: PageRegistry | None = None

    # -- Page types and declarations --

    def page_model(self, page_type: type) -> type:
        """Register a page type without opting it into the sitemap.

        Usable as a plain call or a class decorator.
        """
        self._check_not_frozen()
        check_page_type(page_type)
        with self._page_types_lock:
            if page_type not in self._page_types:
                self._page_types.append(page_type)
        return page_type

    def declare(
        self,
        page_type: type,
        declaration: SitemapDeclaration | None = None,
        *,
        page_name: str = "",
        area_name: str = "",
        last_modified: datetime | None = None,
    ) -> SitemapDeclaration:
        """Opt *page_type* into the sitemap and register it as a page type."""
        self._check_not_frozen()
        recorded = self._declarations.declare(
            page_type,
            declaration,
            page_name=page_name,
            area_name=area_name,
            last_modified=last_modified,
        )
        self.page_model(page_type)
        return recorded

    def sitemap(
        self,
        page_name: str = "",
        area_name: str = "",
        *,
        last_modified: datetime | None = None,
    ) -> Callable[[type], type]:
        """Declare a page type via decorator.

        Blank names are derived from the class: ``AboutModel`` in
        ``myapp.areas.blog.pages`` becomes area ``blog``, page ``/About``.

        Usage::

            @app.sitemap()
            class AboutModel(PageModel): ...

            @app.sitemap(page_name="/Contact", last_modified=released)
            class ContactPage(PageModel): ...
        """

        def decorator(page_type: type) -> type:
            self.declare(
                page_type,
                page_name=page_name,
                area_name=area_name,
                last_modified=last_modified,
            )
            return page_type

        return decorator

    # -- Router hook --

    def add_route(
        self,
        area_name: str | None,
        route_values: Mapping[str, str | None] | None,
        relative_path: str | None,
    ) -> PageRecord | None:
        """Report one page route.

        Call it for every page route the host registers, any number of
        times and in any order; repeated reports of a page are ignored.
        """
        return self._collector.add(RouteEvent(area_name, route_values, relative_path))

    # -- Filesystem page routing --

    def mount_pages(self, pages_dir: str | Path | None = None) -> int:
        """Mount a filesystem-based pages directory.

        Reports every discovered page route to the collector and records
        module-level ``sitemap`` declarations.

        Args:
            pages_dir: Path to the pages directory.  Defaults to
                ``config.pages_dir``.

        Returns:
            Number of page files discovered.

        Example::

            app = App(AppConfig(pages_dir="site/pages"))
            app.mount_pages()
        """
        from roost.pages.discovery import discover_pages

        self._check_not_frozen()

        pages = discover_pages(
            pages_dir or self.config.pages_dir,
            content_root=self.config.content_root,
        )
        for page in pages:
            if page.page_type is not None:
                for declaration in page.declarations:
                    self._declarations.declare(page.page_type, declaration)
                self.page_model(page.page_type)
            for event in page.route_events():
                self._collector.add(event)
        return len(pages)

    # -- Reads --

    @property
    def registry(self) -> PageRegistry:
        """The page registry. Freezes the app on first access."""
        return self._ensure_frozen()

    def pages(self) -> tuple[PageRecord, ...]:
        """Current merged page list."""
        return self.registry.pages()

    def render_sitemap(self, base_url: str | None = None) -> str:
        """Render the sitemap document for *base_url* (default ``config.base_url``)."""
        base = base_url if base_url is not None else self.config.base_url
        return render_sitemap(self.pages(), base, self.config)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes to
        the sitemap handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        registry = self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            registry=registry,
            config=self.config,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors (duplicate
        declarations) fail the server before it accepts connections.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> PageRegistry:
        """Thread-safe freeze with double-check locking. Returns the registry."""
        registry = self._registry
        if registry is not None:
            return registry
        with self._freeze_lock:
            if self._registry is None:
                self._registry = self._freeze()
            return self._registry

    def _freeze(self) -> PageRegistry:
        """Scan declarations and build the registry.

        MUST only be called while holding _freeze_lock.
        """
        with self._page_types_lock:
            page_types = (*self._page_types, *self._declarations.types())
        metadata = scan_declarations(
            page_types,
            self._declarations,
            template_suffix=self.config.template_suffix,
        )
        self._frozen = True
        return PageRegistry(metadata, self._collector)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot change page declarations after the sitemap has been read. "
                "Declare pages and call mount_pages() before serving requests."
            )
            raise RuntimeError(msg)
