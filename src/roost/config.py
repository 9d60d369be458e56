"""Application configuration.

One frozen AppConfig is shared by page discovery, the metadata scan, and the
sitemap endpoint.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(base_url="https://example.com", priority=0.8)
    """

    debug: bool = False

    # Page discovery
    pages_dir: str | Path = "pages"
    content_root: str | Path | None = None  # Resolve route file paths + mtimes when set
    template_suffix: str = ".html"  # Companion template next to each page module

    # Sitemap endpoint
    sitemap_path: str = "/sitemap.xml"
    base_url: str = ""  # Empty = derive from the request scheme and Host header

    # Fixed per-URL policy
    changefreq: str = "always"
    priority: float = 0.5
