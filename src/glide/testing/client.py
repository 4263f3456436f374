"""In-process ASGI client for glide apps.

Requests go straight into ``App.__call__``; what comes back is the same
``Response`` type handlers produce, so assertions read like production code.
"""

from __future__ import annotations

import json as json_module
from typing import Any
from urllib.parse import quote, unquote

from glide.app import App
from glide.http.headers import (
    X_INERTIA,
    X_INERTIA_PARTIAL_COMPONENT,
    X_INERTIA_PARTIAL_DATA,
    X_INERTIA_VERSION,
)
from glide.http.response import Response


def _scope(method: str, target: str, headers: dict[str, str]) -> dict[str, Any]:
    """ASGI scope for *target*, which may be percent-encoded or not.

    Like a real server, ``raw_path`` carries the encoded bytes and
    ``path`` the decoded text.
    """
    raw, _, query = target.partition("?")
    raw = quote(raw, safe="/%:@!$&'()*+,;=-._~")
    path = unquote(raw)
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": raw.encode("ascii"),
        "query_string": quote(query, safe="=&%+:/?@!$'()*,;-._~").encode("ascii"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in headers.items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _Capture:
    """ASGI ``send`` target that rebuilds a ``Response``."""

    __slots__ = ("body", "headers", "status")

    def __init__(self) -> None:
        self.status = 500
        self.headers: list[tuple[bytes, bytes]] = []
        self.body = bytearray()

    async def __call__(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.body += message.get("body", b"")

    def response(self) -> Response:
        content_type = "text/html; charset=utf-8"
        extra: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))
        return Response(
            body=bytes(self.body),
            status=self.status,
            content_type=content_type,
            headers=tuple(extra),
        )


class TestClient:
    """Drive a glide app without a network.

    Usage::

        async with TestClient(app) as client:
            first = await client.get("/events")
            page = await client.inertia("/events", version="1")

    Entering the context freezes the app and runs its startup hooks;
    leaving it runs the shutdown hooks.
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        await self.app.startup()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """POST *body*, or *json* encoded with a JSON content type."""
        sent = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            sent.setdefault("content-type", "application/json")
        return await self.request("POST", path, headers=sent, body=body)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def inertia(
        self,
        path: str,
        *,
        method: str = "GET",
        version: str | None = None,
        partial_component: str | None = None,
        partial_data: list[str] | None = None,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a protocol visit (``X-Inertia: true``).

        Args:
            version: Sent as ``X-Inertia-Version``; omitted when None.
            partial_component: Sent as ``X-Inertia-Partial-Component``.
            partial_data: Comma-joined into ``X-Inertia-Partial-Data``.
            headers: Extra headers, applied last.
        """
        sent = {X_INERTIA: "true"}
        if version is not None:
            sent[X_INERTIA_VERSION] = version
        if partial_component is not None:
            sent[X_INERTIA_PARTIAL_COMPONENT] = partial_component
        if partial_data is not None:
            sent[X_INERTIA_PARTIAL_DATA] = ",".join(partial_data)
        sent.update(headers or {})
        return await self.request(method, path, headers=sent, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send *method* *path* (query string allowed) through the app."""
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]

        async def receive() -> dict[str, Any]:
            return pending.pop() if pending else {"type": "http.disconnect"}

        capture = _Capture()
        await self.app(_scope(method, path, headers or {}), receive, capture)
        return capture.response()
