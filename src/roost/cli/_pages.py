"""``roost pages`` — list merged pages.

Prints a table of AREA, PAGE, PATH, and LASTMOD for every page that
would appear in the sitemap.
"""

import argparse

from roost.cli._load import load_app
from roost.sitemap.render import format_lastmod


def run_pages(args: argparse.Namespace) -> None:
    """List the merged pages for ``args.pages_dir``."""
    app = load_app(args)
    pages = app.pages()
    if not pages:
        print("No pages found.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            page.area_name or "-",
            page.page_name,
            page.relative_path,
            format_lastmod(page.last_modified) if page.last_modified else "-",
        )
        for page in pages
    ]

    # Column widths
    headers = ("AREA", "PAGE", "PATH", "LASTMOD")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + 25, 80))
    for row in rows:
        print(fmt.format(*row))
