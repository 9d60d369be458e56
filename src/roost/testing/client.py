"""In-process client for exercising the sitemap endpoint.

Requests go straight through the app's ASGI callable and come back as
the same :class:`Response` type the app builds, so assertions read the
same in tests as in handler code.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from roost.app import App
from roost.http.response import Response

_DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class TestClient:
    """Drive a roost app over ASGI without a server.

    Entering the client freezes the app, so duplicate declarations fail
    here the way they would fail server startup.

    Usage::

        async with TestClient(app, host="example.com") as client:
            response = await client.get("/sitemap.xml")
            assert response.status == 200
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app", "host", "scheme")

    def __init__(self, app: App, *, host: str = "testserver", scheme: str = "http") -> None:
        self.app = app
        self.host = host
        self.scheme = scheme

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send one request and collect the response the app emits."""
        scope = self._scope(method, path, headers or {})
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]
        start: dict[str, Any] = {}
        chunks: list[bytes] = []

        async def receive() -> dict[str, Any]:
            return pending.pop() if pending else {"type": "http.disconnect"}

        async def send(message: MutableMapping[str, Any]) -> None:
            if message["type"] == "http.response.start":
                start.update(message)
            elif message["type"] == "http.response.body":
                chunks.append(message.get("body", b""))

        await self.app(scope, receive, send)
        return _to_response(start, b"".join(chunks))

    def _scope(self, method: str, path: str, headers: dict[str, str]) -> dict[str, Any]:
        path, _, query = path.partition("?")
        merged = {"host": self.host, **headers}
        return {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": self.scheme,
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "root_path": "",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in merged.items()
            ],
            "server": (self.host, 443 if self.scheme == "https" else 80),
            "client": ("127.0.0.1", 0),
        }


def _to_response(start: dict[str, Any], body: bytes) -> Response:
    content_type = _DEFAULT_CONTENT_TYPE
    headers: list[tuple[str, str]] = []
    for raw_name, raw_value in start.get("headers", ()):
        name = raw_name.decode("latin-1")
        value = raw_value.decode("latin-1")
        if name == "content-type":
            content_type = value
        else:
            headers.append((name, value))
    return Response(
        body=body,
        status=start.get("status", 200),
        content_type=content_type,
        headers=tuple(headers),
    )
