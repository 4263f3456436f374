"""Route table: the minimal dispatch the ASGI binding needs.

Paths are literal segments or ``{name}`` placeholders matching one
segment. Routes are registered during setup and frozen with the app.
"""

import re
from dataclasses import dataclass

from glide._internal.types import Handler
from glide.errors import MethodNotAllowed, NotFound

_PARAM = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _compile(path: str) -> re.Pattern[str]:
    """Turn ``/users/{id}`` into an anchored regex with named groups."""
    parts: list[str] = []
    pos = 0
    for m in _PARAM.finditer(path):
        parts.append(re.escape(path[pos : m.start()]))
        parts.append(f"(?P<{m.group(1)}>[^/]+)")
        pos = m.end()
    parts.append(re.escape(path[pos:]))
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Handler
    methods: frozenset[str]
    pattern: re.Pattern[str]

    @classmethod
    def create(cls, path: str, handler: Handler, methods: frozenset[str]) -> "Route":
        return cls(path=path, handler=handler, methods=methods, pattern=_compile(path))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]


class RouteTable:
    """Ordered route list; first matching path wins.

    Usage::

        table = RouteTable((Route.create("/users/{id}", show, frozenset({"GET"})),))
        match = table.match("GET", "/users/42")
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: tuple[Route, ...] = ()) -> None:
        self._routes = routes

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def match(self, method: str, path: str) -> RouteMatch:
        """Match *method* and *path*.

        Raises ``NotFound`` if no path matches, ``MethodNotAllowed`` if
        the path matches but not for *method*.
        """
        allowed: set[str] = set()
        for route in self._routes:
            found = route.pattern.match(path)
            if found is None:
                continue
            if method in route.methods:
                return RouteMatch(route=route, path_params=found.groupdict())
            allowed |= route.methods
        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")
