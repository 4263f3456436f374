"""Render return type.

A frozen dataclass handlers return instead of awaiting the engine
themselves, which suits sync handlers::

    @app.route("/users/{id}")
    def show(id: int):
        return Render("Users/Show", user=load_user(id))

The handler pipeline renders it through the engine bound by
``InertiaMiddleware``.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Render:
    """Render a client component with props."""

    component: str
    props: dict[str, Any] = field(default_factory=dict)

    def __init__(self, component: str, props: dict[str, Any] | None = None, /, **kwprops: Any) -> None:
        object.__setattr__(self, "component", component)
        object.__setattr__(self, "props", {**(props or {}), **kwprops})
