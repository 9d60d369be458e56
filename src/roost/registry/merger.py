"""Registry merger — join discovered routes with declared metadata.

A pure function over two snapshots.  No state, no I/O, no errors:
pages missing from either side are left out of the result.
"""

from collections.abc import Sequence

from roost.registry.identity import PageIdentity
from roost.registry.types import PageRecord


def merge_pages(
    routes: Sequence[PageRecord],
    metadata: Sequence[PageRecord],
) -> tuple[PageRecord, ...]:
    """Produce the final page list.

    With no metadata at all, the discovered routes are returned as-is.
    Otherwise metadata acts as an allow-list: only pages present on
    both sides survive.  Names and ``relative_path`` come from the
    route; ``file_path`` and ``last_modified`` come from the metadata.

    Output order follows *routes*; each logical page appears once.
    """
    if not metadata:
        return tuple(routes)

    declared: dict[PageIdentity, PageRecord] = {}
    for record in metadata:
        declared.setdefault(record.identity, record)

    merged: list[PageRecord] = []
    emitted: set[PageIdentity] = set()
    for route in routes:
        identity = route.identity
        meta = declared.get(identity)
        if meta is None or identity in emitted:
            continue
        emitted.add(identity)
        merged.append(
            PageRecord(
                area_name=route.area_name,
                page_name=route.page_name,
                relative_path=route.relative_path,
                file_path=meta.file_path,
                last_modified=meta.last_modified,
            )
        )
    return tuple(merged)
