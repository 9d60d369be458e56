"""Build an App from command-line arguments."""

import argparse
import sys

from roost.app import App
from roost.config import AppConfig
from roost.errors import ConfigurationError


def load_app(args: argparse.Namespace, *, base_url: str = "") -> App:
    """Create an app for ``args.pages_dir`` and freeze it.

    Exits with status 1 when the directory is missing or the pages are
    misconfigured.
    """
    config = AppConfig(
        pages_dir=args.pages_dir,
        content_root=args.content_root,
        base_url=base_url,
    )
    app = App(config)
    try:
        app.mount_pages()
        app.registry  # noqa: B018 — freeze now so scan errors surface here
    except (FileNotFoundError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return app
