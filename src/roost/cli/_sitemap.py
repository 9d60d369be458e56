"""``roost sitemap`` — render sitemap.xml for a pages directory."""

import argparse
import sys
from pathlib import Path

from roost.cli._load import load_app


def run_sitemap(args: argparse.Namespace) -> None:
    """Render the sitemap and print it or write it to ``args.output``."""
    app = load_app(args, base_url=args.base_url)
    document = app.render_sitemap()

    if args.output is None:
        sys.stdout.write(document)
        return

    output = Path(args.output)
    output.write_text(document, encoding="utf-8")
    print(f"Wrote {len(app.pages())} page(s) to {output}", file=sys.stderr)
