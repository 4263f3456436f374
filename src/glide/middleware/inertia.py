"""All-in-one protocol middleware.

Binds the engine to the request (so ``glide.render()`` can find it),
applies the version guard, and normalizes redirect statuses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from glide.context import inertia_var
from glide.http.request import Request
from glide.http.response import Response
from glide.middleware.protocol import Next
from glide.middleware.redirects import RedirectStatusAdapter
from glide.middleware.version import VersionGuard

if TYPE_CHECKING:
    from glide.inertia import Inertia


class InertiaMiddleware:
    """Protocol middleware for one ``Inertia`` engine.

    Usage::

        inertia = Inertia(InertiaConfig(version="1"))
        app.add_middleware(InertiaMiddleware(inertia))
    """

    __slots__ = ("_guard", "_redirects", "inertia")

    def __init__(self, inertia: Inertia) -> None:
        self.inertia = inertia
        self._guard = VersionGuard(inertia)
        self._redirects = RedirectStatusAdapter()

    async def __call__(self, request: Request, next: Next) -> Response:
        token = inertia_var.set(self.inertia)
        try:

            async def guarded(req: Request) -> Response:
                return await self._guard(req, next)

            return await self._redirects(request, guarded)
        finally:
            inertia_var.reset(token)
