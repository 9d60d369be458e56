"""Filesystem helpers for page records.

Every function here is total: unreadable or missing files produce an
empty path or ``None`` rather than an exception, so the registry can
treat them as soft misses.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

CODE_SUFFIXES = frozenset({".py", ".pyc"})


def to_url_relative_path(file_relative_path: str | None) -> str:
    """Convert an on-disk relative path to URL form (forward slashes only)."""
    if not file_relative_path or not file_relative_path.strip():
        return ""
    return file_relative_path.strip().replace("\\", "/")


def combine_path(parent: str | Path, child: str) -> str:
    """Join *child* under *parent* even when *child* starts with a separator."""
    child = child.lstrip("/\\")
    return str(Path(parent, child).resolve())


def companion_template_path(source_file: str | None, template_suffix: str = ".html") -> str:
    """Resolve a page's code file to the template that sits beside it.

    ``pages/about.py`` becomes ``pages/about.html`` (same directory, same
    stem).  Non-code files lose their last extension only, so
    ``about.html.tmpl`` becomes ``about.html``.
    """
    if not source_file or not source_file.strip():
        return ""
    path = Path(source_file.strip())
    if path.suffix in CODE_SUFFIXES:
        return str(path.with_suffix(template_suffix))
    return str(path.with_suffix(""))


def file_last_modified(path: str | Path | None) -> datetime | None:
    """Modification time of *path*, or ``None`` if it cannot be read."""
    if not path:
        return None
    try:
        if not os.path.isfile(path):
            return None
        return datetime.fromtimestamp(os.path.getmtime(path)).astimezone()
    except OSError:
        return None


def artifact_last_modified(module_name: str | None) -> datetime | None:
    """Modification time of the package that defines *module_name*.

    Looks up the top-level package in ``sys.modules`` and stats its
    ``__file__``.  Used as a last-resort timestamp for declared pages
    whose template cannot be found.
    """
    if not module_name:
        return None
    top_level = module_name.split(".", 1)[0]
    module = sys.modules.get(top_level)
    return file_last_modified(getattr(module, "__file__", None))
