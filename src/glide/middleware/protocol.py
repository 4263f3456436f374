"""The shape every glide middleware has.

A middleware takes the request and the rest of the chain and returns a
``Response``. It may answer on its own (``VersionGuard`` returns a 409
without calling ``next``) or rewrite what comes back
(``RedirectStatusAdapter`` swaps 302 for 303).
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from glide.http.request import Request
from glide.http.response import Response

# Everything after this middleware, down to the route handler
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Structural type for middleware; plain functions qualify too::

        async def no_store_for_pages(request: Request, next: Next) -> Response:
            response = await next(request)
            if request.is_inertia:
                return response.with_header("Cache-Control", "no-store")
            return response
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
