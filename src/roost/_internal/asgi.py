"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with typed
dataclasses for internal use. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict.

    Carries only what the sitemap endpoint reads: method, path, the URL
    scheme, and enough of the headers and server address to rebuild the
    request's origin.
    """

    method: str
    path: str
    scheme: str
    root_path: str
    headers: tuple[tuple[bytes, bytes], ...]
    server: tuple[str, int] | None

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        server = scope.get("server")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            scheme=scope.get("scheme", "http"),
            root_path=scope.get("root_path", ""),
            headers=tuple(scope.get("headers", ())),
            server=tuple(server) if server else None,
        )

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), decoded as latin-1."""
        key = name.lower().encode("latin-1")
        for raw_name, raw_value in self.headers:
            if raw_name.lower() == key:
                return raw_value.decode("latin-1")
        return None

    @property
    def host(self) -> str:
        """The ``Host`` header, or ``host[:port]`` from the server address."""
        host = self.header("host")
        if host:
            return host.strip()
        if self.server is None:
            return ""
        name, port = self.server
        default_port = 443 if self.scheme == "https" else 80
        return name if port in (None, default_port) else f"{name}:{port}"
