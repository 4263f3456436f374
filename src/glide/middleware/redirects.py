"""Redirect status normalization for non-idempotent methods.

Clients re-issue a 302-redirected request with the original method, so a
redirect after PUT, PATCH or DELETE would repeat that method against the
target. 303 See Other forces a GET instead.
"""

from glide.http.request import Request
from glide.http.response import Response
from glide.middleware.protocol import Next

_SEE_OTHER_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


def adapt_redirect_status(method: str, status: int) -> int:
    """Status to actually send for *status* on a *method* request."""
    if status == 302 and method.upper() in _SEE_OTHER_METHODS:
        return 303
    return status


class RedirectStatusAdapter:
    """Rewrite 302 to 303 on PUT/PATCH/DELETE; pass everything else through.

    Usage::

        app.add_middleware(RedirectStatusAdapter())
    """

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        response = await next(request)
        status = adapt_redirect_status(request.method, response.status)
        if status != response.status:
            return response.with_status(status)
        return response
