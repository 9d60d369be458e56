"""Tests for roost.server.handler — dispatch and base URL resolution."""

import pytest

from roost._internal.asgi import HTTPScope
from roost.config import AppConfig
from roost.errors import MethodNotAllowed, NotFound
from roost.registry import PageRegistry, RouteCollector
from roost.server.handler import dispatch, handle_http_error, request_base_url


def _scope(method: str = "GET", path: str = "/sitemap.xml", **kw: object) -> HTTPScope:
    defaults: dict[str, object] = {
        "scheme": "http",
        "root_path": "",
        "headers": ((b"host", b"example.com"),),
        "server": ("example.com", 80),
    }
    defaults.update(kw)
    return HTTPScope(method=method, path=path, **defaults)  # type: ignore[arg-type]


def _registry() -> PageRegistry:
    collector = RouteCollector()
    collector.add_route("", {"page": "/About"}, "/About")
    return PageRegistry((), collector)


class TestRequestBaseUrl:
    def test_configured_base_wins(self) -> None:
        config = AppConfig(base_url="https://www.example.com/")
        assert request_base_url(_scope(), config) == "https://www.example.com"

    def test_rebuilt_from_request(self) -> None:
        assert request_base_url(_scope(scheme="https"), AppConfig()) == "https://example.com"

    def test_root_path_appended(self) -> None:
        scope = _scope(root_path="/site/")
        assert request_base_url(scope, AppConfig()) == "http://example.com/site"


class TestDispatch:
    def test_sitemap(self) -> None:
        response = dispatch(_scope(), _registry(), AppConfig())
        assert response.status == 200
        assert response.content_type == "application/xml; charset=utf-8"
        assert "<loc>http://example.com/About</loc>" in response.text

    def test_trailing_slash_tolerated(self) -> None:
        assert dispatch(_scope(path="/sitemap.xml/"), _registry(), AppConfig()).status == 200

    def test_other_path(self) -> None:
        with pytest.raises(NotFound):
            dispatch(_scope(path="/about"), _registry(), AppConfig())

    def test_other_method(self) -> None:
        with pytest.raises(MethodNotAllowed):
            dispatch(_scope(method="DELETE"), _registry(), AppConfig())

    def test_pages_read_per_request(self) -> None:
        registry = _registry()
        dispatch(_scope(), registry, AppConfig())
        registry.add_route("", {"page": "/Contact"}, "/Contact")
        assert "/Contact</loc>" in dispatch(_scope(), registry, AppConfig()).text

    def test_every_entry_has_lastmod(self) -> None:
        text = dispatch(_scope(), _registry(), AppConfig()).text
        assert text.count("<lastmod>") == text.count("<url>") == 1


class TestHandleHttpError:
    def test_plain_text_with_headers(self) -> None:
        response = handle_http_error(MethodNotAllowed(frozenset({"GET", "HEAD"})), _scope(), False)
        assert response.status == 405
        assert response.headers == (("Allow", "GET, HEAD"),)

    def test_debug_prefixes_status(self) -> None:
        response = handle_http_error(NotFound(), _scope(), True)
        assert response.text == "404: Not Found"
