"""Roost — page registry and sitemap for filesystem-routed web apps.

Discovers the pages a site routes, reconciles them with the pages its
authors explicitly opted into the sitemap, and serves the result as a
sitemaps.org document.

Basic usage::

    from roost import App, AppConfig, PageModel

    app = App(AppConfig(base_url="https://example.com"))

    @app.sitemap()
    class AboutModel(PageModel): ...

    app.add_route("", {"page": "/About"}, "/pages/About.py")
    print(app.render_sitemap())

Filesystem pages::

    app = App(AppConfig(pages_dir="pages"))
    app.mount_pages()
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PageModel",
    "PageRecord",
    "PageRegistry",
    "Response",
    "RoostError",
    "RouteCollector",
    "RouteEvent",
    "SitemapDeclaration",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from roost.app import App

        return App

    if name == "AppConfig":
        from roost.config import AppConfig

        return AppConfig

    if name == "Response":
        from roost.http.response import Response

        return Response

    if name in (
        "PageModel",
        "PageRecord",
        "PageRegistry",
        "RouteCollector",
        "RouteEvent",
        "SitemapDeclaration",
    ):
        from roost import registry as _registry

        return getattr(_registry, name)

    if name in ("ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound", "RoostError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
