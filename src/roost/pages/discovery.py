"""Filesystem route discovery for the pages/ directory.

Walks the pages directory tree and discovers ``.py`` route files.
Each file becomes one :class:`DiscoveredPage`; the app turns those into
router events for the route collector and sitemap declarations for the
metadata scanner.

Conventions:

    pages/
      page.py              # /index
      about.py             # /about
      docs/
        page.py            # /docs
        intro.py           # /docs/intro
        {slug}/page.py     # /docs/{slug}
      areas/
        admin/
          users.py         # area "admin", /users

Files and directories starting with ``_`` are skipped.  A route file
exposes handlers as functions named after HTTP methods (``get``,
``post``, ...), as the same methods on a ``PageModel`` subclass, or as
a bare ``handler`` (served as GET).  A module-level ``sitemap`` value
opts the module's page model into the sitemap under the page's route
name and area.
"""

import importlib.util
import logging
import re
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from types import ModuleType
from typing import Any

from roost.errors import ConfigurationError
from roost.pages.types import DiscoveredPage
from roost.registry.paths import to_url_relative_path
from roost.registry.types import PageModel, SitemapDeclaration

logger = logging.getLogger("roost.pages")

# HTTP method names recognised as handler functions
_HTTP_METHODS = frozenset({"get", "post", "put", "delete", "patch", "head", "options"})

# Regex matching {param} directory names
_PARAM_DIR_RE = re.compile(r"^\{(\w+)\}$")

# Characters not allowed in a dotted module name segment
_MODULE_UNSAFE_RE = re.compile(r"\W")

_AREAS_DIR = "areas"
_INDEX_PAGE = "/index"


def discover_pages(
    pages_dir: str | Path,
    *,
    content_root: str | Path | None = None,
) -> list[DiscoveredPage]:
    """Walk a pages directory and discover all page route files.

    Args:
        pages_dir: Path to the ``pages/`` directory.
        content_root: Directory that relative paths are computed from.
            Defaults to the parent of *pages_dir*.

    Returns:
        Discovered pages in walk order (files before subdirectories,
        each sorted by name; areas last).

    Raises:
        FileNotFoundError: *pages_dir* is not a directory.
        ConfigurationError: A module's ``sitemap`` value is malformed.
    """
    root = Path(pages_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {root}")
    base = Path(content_root).resolve() if content_root is not None else root.parent

    pages: list[DiscoveredPage] = []
    _walk_directory(root, root, base, area_name="", url_parts=[], pages=pages, top=True)
    logger.debug("Discovered %d page file(s) under %s", len(pages), root)
    return pages


def _walk_directory(
    directory: Path,
    root: Path,
    base: Path,
    *,
    area_name: str,
    url_parts: list[str],
    pages: list[DiscoveredPage],
    top: bool = False,
) -> None:
    """Recursively walk a directory, discovering route files.

    Args:
        directory: Current directory being walked.
        root: Root pages directory (for module names).
        base: Content root (for relative paths).
        area_name: Area of the pages at this level.
        url_parts: Page path segments accumulated within the area.
        pages: Accumulator for discovered pages.
        top: True only for the pages root, where ``areas/`` is recognised.
    """
    for item in sorted(directory.iterdir()):
        if not item.is_file():
            continue
        if item.suffix != ".py":
            continue
        if item.name.startswith("_"):
            continue

        page = _process_route_file(
            item,
            root,
            base,
            area_name=area_name,
            url_parts=url_parts,
        )
        if page is not None:
            pages.append(page)

    areas_dir: Path | None = None
    for item in sorted(directory.iterdir()):
        if not item.is_dir():
            continue
        if item.name.startswith("_") or item.name.startswith("."):
            continue
        if top and item.name.casefold() == _AREAS_DIR:
            areas_dir = item
            continue

        # Check if directory name is a path parameter {param}
        param_match = _PARAM_DIR_RE.match(item.name)
        if param_match:
            segment = "{" + param_match.group(1) + "}"
        else:
            segment = item.name

        _walk_directory(
            item,
            root,
            base,
            area_name=area_name,
            url_parts=[*url_parts, segment],
            pages=pages,
        )

    if areas_dir is None:
        return
    for item in sorted(areas_dir.iterdir()):
        if not item.is_dir() or item.name.startswith(("_", ".")):
            continue
        _walk_directory(item, root, base, area_name=item.name, url_parts=[], pages=pages)


def _page_name(file: Path, url_parts: list[str]) -> str:
    """``page.py`` maps to the directory; other files append their stem."""
    if file.stem == "page":
        return "/" + "/".join(url_parts) if url_parts else _INDEX_PAGE
    return "/" + "/".join([*url_parts, file.stem])


def _module_name(file: Path, root: Path) -> str:
    """Dotted module name mirroring the file's place under the pages root.

    ``pages/areas/admin/users.py`` loads as ``pages.areas.admin.users`` so
    that area derivation from the module path sees the ``areas`` segment.
    """
    parts = [root.name, *file.relative_to(root).with_suffix("").parts]
    return ".".join(_MODULE_UNSAFE_RE.sub("_", part) or "_" for part in parts)


def _relative_path(file: Path, base: Path) -> str:
    try:
        relative = file.relative_to(base)
    except ValueError:
        relative = Path(file.name)
    return "/" + to_url_relative_path(relative.as_posix())


def _load_module(file: Path, module_name: str) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        return None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _find_page_type(module: ModuleType) -> type | None:
    """First ``PageModel`` subclass defined (not imported) in *module*."""
    for value in vars(module).values():
        if (
            isinstance(value, type)
            and issubclass(value, PageModel)
            and value is not PageModel
            and value.__module__ == module.__name__
        ):
            return value
    return None


def _find_handlers(module: ModuleType, page_type: type | None) -> dict[str, Callable[..., Any]]:
    found: dict[str, Callable[..., Any]] = {}
    for method_name in sorted(_HTTP_METHODS):
        func = getattr(module, method_name, None)
        if func is not None and callable(func):
            found[method_name.upper()] = func

    if not found and page_type is not None:
        for method_name in sorted(_HTTP_METHODS):
            func = getattr(page_type, method_name, None)
            if func is not None and callable(func):
                found[method_name.upper()] = func

    # If no HTTP-method-named functions, look for a default handler
    handler = getattr(module, "handler", None)
    if handler is not None and callable(handler) and not found:
        found["GET"] = handler
    return found


def _read_declarations(
    module: ModuleType,
    file: Path,
    page_type: type | None,
    *,
    area_name: str,
    page_name: str,
) -> tuple[SitemapDeclaration, ...]:
    """Read the module-level ``sitemap`` value.

    Accepts ``True``, a :class:`SitemapDeclaration`, or a list/tuple of
    them.  Blank names are filled from the route the file is served at,
    and the route file becomes each declaration's ``source_file``.
    """
    value = getattr(module, "sitemap", None)
    if value is None or value is False:
        return ()

    if value is True:
        items: list[Any] = [SitemapDeclaration()]
    elif isinstance(value, SitemapDeclaration):
        items = [value]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        msg = f"{file}: 'sitemap' must be True or a SitemapDeclaration, got {type(value).__name__}"
        raise ConfigurationError(msg)

    for item in items:
        if not isinstance(item, SitemapDeclaration):
            msg = f"{file}: 'sitemap' entries must be SitemapDeclaration, got {type(item).__name__}"
            raise ConfigurationError(msg)

    if page_type is None:
        msg = f"{file}: 'sitemap' is declared but the module defines no PageModel subclass"
        raise ConfigurationError(msg)

    return tuple(
        replace(
            item,
            page_name=item.page_name or page_name,
            area_name=item.area_name or area_name,
            source_file=item.source_file or str(file),
        )
        for item in items
    )


def _process_route_file(
    file: Path,
    root: Path,
    base: Path,
    *,
    area_name: str,
    url_parts: list[str],
) -> DiscoveredPage | None:
    """Load a route .py file and describe it.

    Returns ``None`` for modules that expose no handlers and declare
    nothing.
    """
    module = _load_module(file, _module_name(file, root))
    if module is None:
        return None

    page_type = _find_page_type(module)
    handlers = _find_handlers(module, page_type)
    page_name = _page_name(file, url_parts)
    declarations = _read_declarations(
        module,
        file,
        page_type,
        area_name=area_name,
        page_name=page_name,
    )
    if not handlers and not declarations:
        logger.debug("Skipping %s: no handlers", file)
        return None

    return DiscoveredPage(
        area_name=area_name,
        page_name=page_name,
        relative_path=_relative_path(file, base),
        source_file=str(file),
        handlers=handlers,
        page_type=page_type,
        declarations=declarations,
    )
