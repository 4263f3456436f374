"""Prop resolution: compose, filter, then evaluate lazy props.

The partial-reload filter runs before any ``Lazy`` is evaluated, so a
prop the client did not ask for is never computed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from glide._internal.invoke import invoke
from glide.http.request import Request
from glide.props import Lazy, PropMap, merge_props

logger = logging.getLogger("glide.inertia")


class ResponseContext:
    """Write access to the outgoing response for two-argument resolvers.

    Headers set here are attached to the page response, whether it is
    the JSON envelope or the HTML shell.
    """

    __slots__ = ("_headers",)

    def __init__(self) -> None:
        self._headers: list[tuple[str, str]] = []

    def set_header(self, name: str, value: str) -> None:
        self._headers.append((name, value))

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)


def compose_props(shared: PropMap, props: PropMap | None) -> dict[str, Any]:
    """Shared props overlaid with per-request props (request wins)."""
    incoming = {key: Lazy.coerce(value) for key, value in (props or {}).items()}
    return merge_props(shared, incoming)


def filter_partial(
    props: dict[str, Any],
    component: str,
    partial_component: str | None,
    only: Sequence[str],
) -> dict[str, Any]:
    """Keep only the requested keys when a partial reload targets *component*.

    A partial reload aimed at another component is ignored and the full
    set is returned unchanged. Requested keys that do not exist are skipped.
    """
    if partial_component is None or partial_component != component:
        return props
    logger.debug("partial reload of %s: %s", component, ", ".join(only) or "(none)")
    return {key: props[key] for key in only if key in props}


async def resolve_lazy(
    props: Mapping[str, Any],
    request: Request,
    response: ResponseContext,
) -> dict[str, Any]:
    """Evaluate each top-level ``Lazy`` exactly once.

    Exceptions raised by a resolver propagate to the caller untouched.
    """
    resolved: dict[str, Any] = {}
    for key, value in props.items():
        if not isinstance(value, Lazy):
            resolved[key] = value
        elif value.arity == 0:
            resolved[key] = await invoke(value.resolver)
        elif value.arity == 1:
            resolved[key] = await invoke(value.resolver, request)
        else:
            resolved[key] = await invoke(value.resolver, request, response)
    return resolved


async def resolve_props(
    shared: PropMap,
    props: PropMap | None,
    component: str,
    request: Request,
    response: ResponseContext | None = None,
) -> dict[str, Any]:
    """Run the full pipeline: compose → partial filter → lazy resolution."""
    composed = compose_props(shared, props)
    selected = filter_partial(
        composed,
        component,
        request.partial_component,
        request.partial_data,
    )
    return await resolve_lazy(selected, request, response or ResponseContext())
