"""ASGI handler — serves the sitemap document.

The only component that touches raw ASGI HTTP scopes directly. Parses
the scope, dispatches to the sitemap, and sends the Response back
through ASGI send().  The registry is read fresh on every request.
"""

import logging

from roost._internal.asgi import HTTPScope, Receive, Scope, Send
from roost.config import AppConfig
from roost.errors import HTTPError, MethodNotAllowed, NotFound
from roost.http.response import Response
from roost.registry import PageRegistry
from roost.server.sender import send_response
from roost.sitemap.render import SITEMAP_CONTENT_TYPE, render_sitemap
from roost.sitemap.urls import base_url

logger = logging.getLogger("roost.server")

_SITEMAP_METHODS = frozenset({"GET", "HEAD"})


def request_base_url(http_scope: HTTPScope, config: AppConfig) -> str:
    """Origin used for page links: configured, else rebuilt from the request."""
    if config.base_url:
        return config.base_url.rstrip("/")
    return base_url(http_scope.scheme, http_scope.host) + http_scope.root_path.rstrip("/")


def dispatch(http_scope: HTTPScope, registry: PageRegistry, config: AppConfig) -> Response:
    """Build the response for one request.

    Raises:
        NotFound: The path is not the sitemap path.
        MethodNotAllowed: The sitemap was requested with a method other
            than GET or HEAD.
    """
    path = http_scope.path.rstrip("/") or "/"
    if path != config.sitemap_path.rstrip("/"):
        raise NotFound()
    if http_scope.method not in _SITEMAP_METHODS:
        raise MethodNotAllowed(_SITEMAP_METHODS)

    body = render_sitemap(registry.pages(), request_base_url(http_scope, config), config)
    return Response(body=body, content_type=SITEMAP_CONTENT_TYPE)


def handle_http_error(exc: HTTPError, http_scope: HTTPScope, debug: bool) -> Response:
    """Map an HTTPError to a plain-text Response."""
    logger.debug("%d %s %s — %s", exc.status, http_scope.method, http_scope.path, exc.detail)
    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    registry: PageRegistry,
    config: AppConfig,
) -> None:
    """Process a single HTTP request."""
    if scope["type"] != "http":
        return

    http_scope = HTTPScope.from_scope(scope)
    try:
        response = dispatch(http_scope, registry, config)
    except HTTPError as exc:
        response = handle_http_error(exc, http_scope, config.debug)
    except Exception:
        logger.exception("500 %s %s", http_scope.method, http_scope.path)
        response = Response(body="Internal Server Error", status=500)

    await send_response(response, send, head=http_scope.method == "HEAD")
