"""Roost CLI — render a sitemap or list pages from a pages directory.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import logging
import sys


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pages_dir", help="Path to the pages directory")
    parser.add_argument(
        "--content-root",
        default=None,
        help="Directory relative paths are computed from (default: parent of pages_dir)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — page registry and sitemap for filesystem-routed web apps.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost sitemap ----------------------------------------------------
    sitemap_parser = subparsers.add_parser("sitemap", help="Render sitemap.xml")
    _add_common(sitemap_parser)
    sitemap_parser.add_argument(
        "--base-url",
        required=True,
        help="Site origin, e.g. https://example.com",
    )
    sitemap_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write to this file instead of stdout",
    )

    # -- roost pages ------------------------------------------------------
    pages_parser = subparsers.add_parser("pages", help="List merged sitemap pages")
    _add_common(pages_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "sitemap":
        from roost.cli._sitemap import run_sitemap

        run_sitemap(args)
    elif args.command == "pages":
        from roost.cli._pages import run_pages

        run_pages(args)
