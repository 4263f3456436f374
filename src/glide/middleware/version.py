"""Asset version guard.

When a protocol-aware client was built against an older asset bundle,
answering its GET with JSON would mix stale code with fresh data. The
guard answers 409 with ``X-Inertia-Location`` instead, which the client
treats as "do a full page load of this URL".

Only GET requests that carry the ``X-Inertia`` marker are checked.
Ordinary browser navigations and non-GET requests pass straight through.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from glide.http.headers import X_INERTIA_LOCATION
from glide.http.request import Request
from glide.http.response import Response
from glide.middleware.protocol import Next

if TYPE_CHECKING:
    from glide.inertia import Inertia

logger = logging.getLogger("glide.inertia")


def version_mismatch(request: Request, current: str) -> bool:
    """True if *request* must be bounced to a full reload."""
    if not request.is_inertia or request.method != "GET":
        return False
    return (request.inertia_version or "") != current


def version_conflict(request: Request) -> Response:
    """409 telling the client to reload ``request.url`` from scratch."""
    return Response(body="", status=409).with_header(X_INERTIA_LOCATION, request.url)


class VersionGuard:
    """Short-circuit stale protocol GETs with 409 + location.

    Usage::

        app.add_middleware(VersionGuard(inertia))
    """

    __slots__ = ("inertia",)

    def __init__(self, inertia: Inertia) -> None:
        self.inertia = inertia

    async def __call__(self, request: Request, next: Next) -> Response:
        current = self.inertia.version
        if version_mismatch(request, current):
            logger.debug(
                "version mismatch on %s: client %r, server %r",
                request.url,
                request.inertia_version,
                current,
            )
            return version_conflict(request)
        return await next(request)
