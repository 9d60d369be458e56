"""Route collector — pages the router has actually discovered.

Receives one :class:`RouteEvent` per page route as the host builds its
route table.  The first event for a logical page wins; later events for
the same ``(area, page)`` identity (other HTTP verbs, re-registration)
are dropped.

Free-threading safety:
    - All appends and snapshots happen under one ``threading.Lock``
    - Readers receive an immutable tuple, never the live list
    - Records are frozen dataclasses
"""

import logging
import threading
from collections.abc import Mapping
from pathlib import Path

from roost.registry.identity import PageIdentity, clean_name
from roost.registry.paths import combine_path, file_last_modified, to_url_relative_path
from roost.registry.types import PageRecord, RouteEvent

logger = logging.getLogger("roost.registry")


class RouteCollector:
    """Append-only, deduplicated list of route-discovered pages.

    Args:
        content_root: When set, each new record gets its file path
            resolved under this directory and that file's modification
            time.  Left unset, ``file_path`` and ``last_modified`` stay
            unknown.
    """

    __slots__ = ("_content_root", "_identities", "_lock", "_records")

    def __init__(self, content_root: str | Path | None = None) -> None:
        self._content_root = content_root
        self._records: list[PageRecord] = []
        self._identities: set[PageIdentity] = set()
        self._lock = threading.Lock()

    def add(self, event: RouteEvent | None) -> PageRecord | None:
        """Record a discovered page route.

        Returns the new record, or ``None`` when the event was ignored
        (no route values, or the page is already known).
        """
        if event is None or not event.is_page:
            return None

        record = PageRecord(
            area_name=clean_name(event.area_name),
            page_name=event.page_name,
            relative_path=to_url_relative_path(event.relative_path),
        )
        identity = record.identity

        with self._lock:
            if identity in self._identities:
                return None
            if self._content_root is not None:
                record = _with_file_info(record, self._content_root)
            self._identities.add(identity)
            self._records.append(record)

        logger.debug("Discovered page %r %r at %s", record.area_name, record.page_name, record.relative_path)
        return record

    def add_route(
        self,
        area_name: str | None,
        route_values: Mapping[str, str | None] | None,
        relative_path: str | None,
    ) -> PageRecord | None:
        """Convenience form of :meth:`add` taking the raw callback arguments."""
        return self.add(RouteEvent(area_name, route_values, relative_path))

    def snapshot(self) -> tuple[PageRecord, ...]:
        """Current records in discovery order."""
        with self._lock:
            return tuple(self._records)


def _with_file_info(record: PageRecord, content_root: str | Path) -> PageRecord:
    if not record.relative_path:
        return record
    file_path = combine_path(content_root, record.relative_path)
    return PageRecord(
        area_name=record.area_name,
        page_name=record.page_name,
        relative_path=record.relative_path,
        file_path=file_path,
        last_modified=file_last_modified(file_path),
    )
