"""Tests for glide.http: Headers, Request, and the protocol header properties."""

import pytest

from glide.http.headers import Headers
from glide.http.request import Request


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = [
        {"type": "http.request", "body": body, "more_body": i < len(bodies) - 1}
        for i, body in enumerate(bodies)
    ] or [{"type": "http.request", "body": b"", "more_body": False}]
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/html"))
        assert h["content-type"] == "text/html"
        assert h["CONTENT-TYPE"] == "text/html"
        assert "content-TYPE" in h

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            _h(("Accept", "*/*"))["X-Missing"]

    def test_get_default(self) -> None:
        assert _h().get("X-Inertia") is None
        assert _h().get("X-Inertia", "no") == "no"

    def test_repeated_headers(self) -> None:
        h = _h(("Vary", "Accept"), ("vary", "Cookie"))
        assert h["Vary"] == "Accept"
        assert h.get_list("VARY") == ["Accept", "Cookie"]
        assert len(h) == 1

    def test_from_dict(self) -> None:
        h = Headers.from_dict({"X-Inertia": "true"})
        assert h.raw == ((b"x-inertia", b"true"),)


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="POST", path="/users", query_string=b"page=2")
        req = Request.from_asgi(scope, _make_receive())
        assert req.method == "POST"
        assert req.path == "/users"
        assert req.client == ("127.0.0.1", 54321)
        assert req.url == "/users?page=2"

    def test_url_without_query(self) -> None:
        req = Request.from_asgi(_make_scope(path="/events"), _make_receive())
        assert req.url == "/events"

    def test_url_keeps_percent_encoding(self) -> None:
        scope = _make_scope(path="/a b", raw_path=b"/a%20b", query_string=b"x=1")
        req = Request.from_asgi(scope, _make_receive())
        assert req.path == "/a b"
        assert req.url == "/a%20b?x=1"

    def test_url_reencodes_without_raw_path(self) -> None:
        req = Request(method="GET", path="/\u20ac", headers=Headers())
        assert req.url == "/%E2%82%AC"

    async def test_body_is_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b'{"a": ', b"1}"))
        assert await req.body() == b'{"a": 1}'
        assert await req.json() == {"a": 1}
        assert await req.text() == '{"a": 1}'


class TestProtocolProperties:
    def _req(self, **headers: str) -> Request:
        return Request(method="GET", path="/", headers=Headers.from_dict(headers))

    def test_plain_request(self) -> None:
        req = self._req()
        assert not req.is_inertia
        assert req.inertia_version is None
        assert req.partial_component is None
        assert req.partial_data == ()

    def test_protocol_request(self) -> None:
        req = self._req(**{"X-Inertia": "true", "X-Inertia-Version": "abc"})
        assert req.is_inertia
        assert req.inertia_version == "abc"

    def test_empty_marker_is_not_protocol(self) -> None:
        assert not self._req(**{"X-Inertia": ""}).is_inertia

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("users", ("users",)),
            ("users,stats", ("users", "stats")),
            (" users , stats ", ("users", "stats")),
            ("users,,stats", ("users", "stats")),
            ("", ()),
        ],
    )
    def test_partial_data(self, header: str, expected: tuple[str, ...]) -> None:
        req = self._req(**{"X-Inertia-Partial-Data": header})
        assert req.partial_data == expected
