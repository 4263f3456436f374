"""Tests for glide.resolve: composition, partial reloads, lazy evaluation."""

import pytest

from glide.http.headers import Headers
from glide.http.request import Request
from glide.props import Lazy
from glide.resolve import (
    ResponseContext,
    compose_props,
    filter_partial,
    resolve_lazy,
    resolve_props,
)


def _request(headers: dict[str, str] | None = None) -> Request:
    return Request(method="GET", path="/test", headers=Headers.from_dict(headers or {}))


class Counter:
    """Callable that counts how often it ran."""

    def __init__(self, value: object = "eval") -> None:
        self.calls = 0
        self.value = value

    def __call__(self) -> object:
        self.calls += 1
        return self.value


class TestComposeProps:
    def test_shared_plus_request(self) -> None:
        assert compose_props({"bar": "buzz"}, {"foo": "bar"}) == {"foo": "bar", "bar": "buzz"}

    def test_request_wins(self) -> None:
        assert compose_props({"title": "shared"}, {"title": "page"}) == {"title": "page"}

    def test_no_request_props(self) -> None:
        assert compose_props({"bar": "buzz"}, None) == {"bar": "buzz"}

    def test_request_functions_become_lazy(self) -> None:
        composed = compose_props({}, {"lazy": lambda: "eval"})
        assert isinstance(composed["lazy"], Lazy)


class TestFilterPartial:
    PROPS = {"foo": "bar", "partial": "data"}

    def test_matching_component_keeps_requested_keys(self) -> None:
        assert filter_partial(dict(self.PROPS), "events", "events", ["partial"]) == {
            "partial": "data"
        }

    def test_other_component_keeps_everything(self) -> None:
        assert filter_partial(dict(self.PROPS), "notEvents", "events", ["partial"]) == self.PROPS

    def test_no_partial_header_keeps_everything(self) -> None:
        assert filter_partial(dict(self.PROPS), "events", None, ["partial"]) == self.PROPS

    def test_unknown_keys_are_skipped(self) -> None:
        assert filter_partial(dict(self.PROPS), "events", "events", ["partial", "missing"]) == {
            "partial": "data"
        }

    def test_empty_key_list_yields_no_props(self) -> None:
        assert filter_partial(dict(self.PROPS), "events", "events", []) == {}


class TestResolveLazy:
    async def test_zero_arg_resolver(self) -> None:
        counter = Counter()
        resolved = await resolve_lazy(
            {"foo": "bar", "lazy": Lazy(counter)}, _request(), ResponseContext()
        )
        assert resolved == {"foo": "bar", "lazy": "eval"}
        assert counter.calls == 1

    async def test_request_resolver(self) -> None:
        request = _request({"X-Test-Value": "test-value"})
        resolved = await resolve_lazy(
            {"bar": Lazy(lambda r: r.headers.get("x-test-value"))},
            request,
            ResponseContext(),
        )
        assert resolved == {"bar": "test-value"}

    async def test_request_and_response_resolver(self) -> None:
        response = ResponseContext()

        def tracked(request, response):
            response.set_header("X-Tracked", request.path)
            return True

        resolved = await resolve_lazy({"tracked": Lazy(tracked)}, _request(), response)
        assert resolved == {"tracked": True}
        assert response.headers == (("X-Tracked", "/test"),)

    async def test_async_resolver(self) -> None:
        async def load():
            return [1, 2, 3]

        resolved = await resolve_lazy({"items": Lazy(load)}, _request(), ResponseContext())
        assert resolved == {"items": [1, 2, 3]}

    async def test_resolver_errors_propagate(self) -> None:
        def broken():
            raise RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            await resolve_lazy({"x": Lazy(broken)}, _request(), ResponseContext())

    async def test_nested_values_are_left_as_is(self) -> None:
        resolved = await resolve_lazy({"user": {"id": 1}}, _request(), ResponseContext())
        assert resolved == {"user": {"id": 1}}


class TestResolveProps:
    async def test_filtered_lazy_prop_is_never_invoked(self) -> None:
        expensive = Counter()
        request = _request(
            {"X-Inertia-Partial-Component": "events", "X-Inertia-Partial-Data": "foo"}
        )
        resolved = await resolve_props({}, {"foo": "bar", "stats": expensive}, "events", request)
        assert resolved == {"foo": "bar"}
        assert expensive.calls == 0

    async def test_requested_lazy_prop_is_invoked_once(self) -> None:
        expensive = Counter("computed")
        request = _request(
            {"X-Inertia-Partial-Component": "events", "X-Inertia-Partial-Data": "stats"}
        )
        resolved = await resolve_props({}, {"foo": "bar", "stats": expensive}, "events", request)
        assert resolved == {"stats": "computed"}
        assert expensive.calls == 1

    async def test_shared_lazy_prop_sees_request(self) -> None:
        request = _request({"X-Test-Value": "test-value"})
        shared = {"bar": Lazy(lambda r: r.headers.get("X-Test-Value"))}
        resolved = await resolve_props(shared, {"foo": "bar"}, "test", request)
        assert resolved == {"foo": "bar", "bar": "test-value"}
