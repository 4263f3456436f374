"""Props: page data maps, lazy values, and the shared registry.

A prop map is any ``Mapping[str, Any]``. Values are concrete data,
nested maps, or ``Lazy`` resolvers evaluated at render time.

Merging is right-biased at every level and never mutates its inputs::

    merge_props({"user": {"id": 1}}, {"user": {"name": "ada"}, "page": 2})
    # {"user": {"id": 1, "name": "ada"}, "page": 2}
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

type PropMap = Mapping[str, Any]


def merge_props(base: PropMap, incoming: PropMap) -> dict[str, Any]:
    """Merge *incoming* over *base* and return a new dict.

    When both sides hold a mapping under the same key the two are merged
    recursively; any other collision is won by *incoming*, including a
    map replacing a scalar and the reverse.
    """
    merged = dict(base)
    for key, value in incoming.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_props(existing, value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True, slots=True)
class Lazy:
    """A prop computed at render time.

    The resolver may take no arguments, the request, or the request plus
    a ``ResponseContext``; the arity is read once from its signature.
    Sync and async resolvers are both accepted.

    Usage::

        props = {
            "stats": Lazy(lambda: expensive_stats()),
            "user": Lazy(lambda request: request.headers.get("x-user")),
        }
    """

    resolver: Callable[..., Any]
    arity: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        params = [
            p
            for p in inspect.signature(self.resolver).parameters.values()
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
            and p.default is p.empty
        ]
        object.__setattr__(self, "arity", min(len(params), 2))

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Wrap a bare function in ``Lazy``; leave everything else alone.

        Classes are callable but are data, not resolvers.
        """
        if isinstance(value, Lazy) or isinstance(value, type) or not callable(value):
            return value
        return cls(value)


def lazy(func: Callable[..., Any]) -> Lazy:
    """Decorator form of ``Lazy``::

        @lazy
        def permissions(request):
            return load_permissions(request)
    """
    return Lazy(func)


class SharedProps:
    """Props merged into every rendered page.

    Writers build a new immutable snapshot under a lock and swap it in;
    readers take the current snapshot reference without locking. Sharing
    is therefore safe after the server has started taking traffic, and a
    request always sees one consistent snapshot.
    """

    __slots__ = ("_lock", "_snapshot")

    def __init__(self, initial: PropMap | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, Any] = MappingProxyType(
            {key: Lazy.coerce(value) for key, value in (initial or {}).items()}
        )

    def share(self, key: str, value: Any) -> None:
        """Set a single shared prop, replacing any previous value."""
        with self._lock:
            updated = dict(self._snapshot)
            updated[key] = Lazy.coerce(value)
            self._snapshot = MappingProxyType(updated)

    def share_many(self, props: PropMap) -> None:
        """Merge *props* into the shared set (same rules as ``merge_props``)."""
        incoming = {key: Lazy.coerce(value) for key, value in props.items()}
        with self._lock:
            self._snapshot = MappingProxyType(merge_props(self._snapshot, incoming))

    def clear(self) -> None:
        """Drop every shared prop."""
        with self._lock:
            self._snapshot = MappingProxyType({})

    def snapshot(self) -> Mapping[str, Any]:
        """The current read-only view. Later writes never alter it."""
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def __repr__(self) -> str:
        return f"SharedProps({dict(self._snapshot)!r})"
