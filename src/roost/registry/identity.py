"""Identity and equality policy for page names.

One comparison rule for every place two area or page names meet: the
collector's duplicate check and the merger's join key. Both operands are
trimmed, ``None`` becomes ``""``, and the comparison ignores case using
Unicode case folding (locale independent).

Usage::

    names_equal(" /About ", "/ABOUT")        # True
    page_identity("", "/About") == page_identity(None, " /about")  # True
"""

from typing import TypeAlias

PageIdentity: TypeAlias = tuple[str, str]


def clean_name(value: str | None) -> str:
    """Trim a name, treating ``None`` as empty."""
    if value is None:
        return ""
    return value.strip()


def normalize_name(value: str | None) -> str:
    """Return the comparison form of a name: trimmed and case-folded."""
    return clean_name(value).casefold()


def names_equal(left: str | None, right: str | None) -> bool:
    """Compare two names under the identity policy."""
    return normalize_name(left) == normalize_name(right)


def page_identity(area_name: str | None, page_name: str | None) -> PageIdentity:
    """Build the hashable join/dedup key for a logical page."""
    return (normalize_name(area_name), normalize_name(page_name))
