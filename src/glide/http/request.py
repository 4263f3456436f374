"""The incoming request as glide sees it.

Metadata is frozen at construction; the body is read lazily. The
protocol headers surface as properties (``is_inertia``,
``inertia_version``, ``partial_component``, ``partial_data``) so no
other module spells out raw header names.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from glide._internal.asgi import Receive
from glide.http.headers import (
    X_INERTIA,
    X_INERTIA_PARTIAL_COMPONENT,
    X_INERTIA_PARTIAL_DATA,
    X_INERTIA_VERSION,
    Headers,
)


# RFC 3986 pchar plus "/" and "%"; everything else is percent-encoded
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """One HTTP request. Build it with ``from_asgi`` or directly in tests."""

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    # Path bytes as sent, still percent-encoded (ASGI ``raw_path``)
    raw_path: bytes = b""

    # ASGI receive, drained by body()
    _receive: Receive = field(default=_no_body, repr=False, compare=False)

    # Filled once by body(); the dict itself stays mutable
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Protocol properties --

    @property
    def is_inertia(self) -> bool:
        """True if the client speaks the JSON page protocol (``X-Inertia``)."""
        return bool(self.headers.get(X_INERTIA))

    @property
    def inertia_version(self) -> str | None:
        """Asset version the client was built against (``X-Inertia-Version``)."""
        return self.headers.get(X_INERTIA_VERSION)

    @property
    def partial_component(self) -> str | None:
        """Component a partial reload is scoped to."""
        return self.headers.get(X_INERTIA_PARTIAL_COMPONENT)

    @property
    def partial_data(self) -> tuple[str, ...]:
        """Prop keys requested by a partial reload, in header order."""
        value = self.headers.get(X_INERTIA_PARTIAL_DATA) or ""
        return tuple(key.strip() for key in value.split(",") if key.strip())

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request URI as received (encoded path + query string).

        Without ``raw_path`` the decoded path is re-encoded, so the result
        is always ASCII and safe to put in a header.
        """
        if self.raw_path:
            target = self.raw_path.decode("latin-1")
        else:
            target = quote(self.path, safe=_PATH_SAFE)
        if self.query_string:
            return f"{target}?{self.query_string.decode('latin-1')}"
        return target

    # -- Body --

    async def body(self) -> bytes:
        """The whole body, read from ASGI on first call and cached after."""
        if "body" not in self._cache:
            chunks: list[bytes] = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._cache["body"] = b"".join(chunks)
        return self._cache["body"]

    async def json(self) -> Any:
        return json_module.loads(await self.body())

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            raw_path=scope.get("raw_path") or b"",
            http_version=scope.get("http_version", "1.1"),
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )
