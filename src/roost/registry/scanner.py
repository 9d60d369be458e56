"""Metadata scanner — declared pages as page records.

Runs once at startup.  For every known page type it looks up the
type's sitemap declaration and, when there is exactly one, produces a
:class:`PageRecord` with names filled in and the companion template's
path and timestamp resolved.  ``relative_path`` stays empty; only the
router knows it, and the merger copies it over.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from roost.errors import ConfigurationError
from roost.registry.declarations import DeclarationTable
from roost.registry.identity import clean_name
from roost.registry.paths import (
    artifact_last_modified,
    companion_template_path,
    file_last_modified,
)
from roost.registry.types import PageModel, PageRecord

logger = logging.getLogger("roost.registry")

_AREAS_SEGMENT = "areas"
_MODEL_SUFFIX = "Model"


def derive_area_name(page_type: type) -> str:
    """Area name from the module path of *page_type*.

    The top-level package name is dropped, then the segment after the
    first ``areas`` segment is the area.  ``myapp.areas.admin.users``
    gives ``"admin"``; a module outside any ``areas`` package gives ``""``.
    """
    segments = [s for s in (page_type.__module__ or "").split(".") if s]
    for i, segment in enumerate(segments[1:], start=1):
        if segment.casefold() == _AREAS_SEGMENT and i + 1 < len(segments):
            return segments[i + 1]
    return ""


def derive_page_name(page_type: type) -> str:
    """Page name from the class name: ``AboutModel`` gives ``"/About"``."""
    name = page_type.__name__.strip().removesuffix(_MODEL_SUFFIX).strip()
    return f"/{name}" if name else ""


def scan_declarations(
    page_types: Iterable[type],
    declarations: DeclarationTable,
    *,
    template_suffix: str = ".html",
) -> tuple[PageRecord, ...]:
    """Build the immutable list of declared pages.

    Args:
        page_types: Every page type the application knows about.
            Duplicates are scanned once; non-``PageModel`` types are
            skipped.
        declarations: The app's declaration table.
        template_suffix: Extension of the template beside each page module.

    Returns:
        One record per declared page type, in *page_types* order.

    Raises:
        ConfigurationError: A page type has more than one declaration.
    """
    records: list[PageRecord] = []
    seen: set[type] = set()

    for page_type in page_types:
        if page_type in seen:
            continue
        seen.add(page_type)
        if not (isinstance(page_type, type) and issubclass(page_type, PageModel)):
            continue

        found = declarations.get(page_type)
        if not found:
            continue
        if len(found) > 1:
            msg = (
                f"{page_type.__module__}.{page_type.__qualname__} has "
                f"{len(found)} sitemap declarations; declare each page type once."
            )
            raise ConfigurationError(msg)

        declaration = found[0]
        area_name = clean_name(declaration.area_name) or derive_area_name(page_type)
        page_name = clean_name(declaration.page_name) or derive_page_name(page_type)
        file_path = companion_template_path(declaration.source_file, template_suffix)
        last_modified = _resolve_last_modified(declaration.last_modified, file_path, page_type)

        logger.debug("Declared page %r %r -> %s", area_name, page_name, file_path or "<unknown>")
        records.append(
            PageRecord(
                area_name=area_name,
                page_name=page_name,
                relative_path="",
                file_path=file_path,
                last_modified=last_modified,
            )
        )

    logger.debug("Metadata scan found %d declared page(s)", len(records))
    return tuple(records)


def _resolve_last_modified(
    declared: datetime | None,
    file_path: str,
    page_type: type,
) -> datetime:
    if declared is not None:
        return declared
    return (
        file_last_modified(file_path)
        or artifact_last_modified(page_type.__module__)
        or datetime.now().astimezone()
    )
