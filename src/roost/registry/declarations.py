"""Explicit sitemap declarations keyed by page type.

Page types opt into the sitemap by registration, not by carrying an
attribute.  The table is filled during app setup and read once by the
metadata scanner; it never merges multiple declarations for one type,
so the scanner can reject them.

Usage::

    table = DeclarationTable()

    @table.sitemap(page_name="/About")
    class AboutModel(PageModel): ...

    table.declare(ContactModel)  # derive names from the type
"""

import inspect
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from roost.errors import ConfigurationError
from roost.registry.types import PageModel, SitemapDeclaration


def _source_file_of(page_type: type) -> str:
    try:
        return inspect.getsourcefile(page_type) or ""
    except (TypeError, OSError):
        return ""


def check_page_type(page_type: object) -> None:
    """Raise ``ConfigurationError`` unless *page_type* is a PageModel subclass."""
    if not (isinstance(page_type, type) and issubclass(page_type, PageModel)):
        msg = (
            f"{page_type!r} is not a page model. "
            "Sitemap declarations apply to PageModel subclasses only."
        )
        raise ConfigurationError(msg)


class DeclarationTable:
    """Declarations recorded per page type, in registration order.

    Thread safety:
        Registration normally happens at import time, but ``mount_pages``
        may run on another thread, so writes take a lock.  Readers get
        tuples.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[type, list[SitemapDeclaration]] = {}
        self._lock = threading.Lock()

    def declare(
        self,
        page_type: type,
        declaration: SitemapDeclaration | None = None,
        *,
        page_name: str = "",
        area_name: str = "",
        last_modified: datetime | None = None,
    ) -> SitemapDeclaration:
        """Record one declaration for *page_type*.

        Pass a ready-made :class:`SitemapDeclaration` or the individual
        fields.  A blank ``source_file`` is filled with the file that
        defines *page_type*, when Python can locate it.

        Raises:
            ConfigurationError: *page_type* is not a ``PageModel`` subclass.
        """
        check_page_type(page_type)
        if declaration is None:
            declaration = SitemapDeclaration(
                page_name=page_name,
                area_name=area_name,
                last_modified=last_modified,
            )
        if not declaration.source_file:
            declaration = replace(declaration, source_file=_source_file_of(page_type))

        with self._lock:
            self._entries.setdefault(page_type, []).append(declaration)
        return declaration

    def sitemap(
        self,
        page_name: str = "",
        area_name: str = "",
        *,
        last_modified: datetime | None = None,
    ) -> Callable[[type], type]:
        """Decorator form of :meth:`declare`."""

        def decorator(page_type: type) -> type:
            self.declare(
                page_type,
                page_name=page_name,
                area_name=area_name,
                last_modified=last_modified,
            )
            return page_type

        return decorator

    def get(self, page_type: type) -> tuple[SitemapDeclaration, ...]:
        """All declarations for *page_type* (empty when it never opted in)."""
        with self._lock:
            return tuple(self._entries.get(page_type, ()))

    def types(self) -> tuple[type, ...]:
        """Declared page types, in first-declaration order."""
        with self._lock:
            return tuple(self._entries)
