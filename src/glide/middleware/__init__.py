"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    InertiaMiddleware -- Engine binding + version guard + redirect statuses
    VersionGuard -- 409 + X-Inertia-Location for stale protocol GETs
    RedirectStatusAdapter -- 302 -> 303 after PUT, PATCH and DELETE
"""

from glide.middleware.inertia import InertiaMiddleware
from glide.middleware.protocol import Middleware, Next
from glide.middleware.redirects import RedirectStatusAdapter, adapt_redirect_status
from glide.middleware.version import VersionGuard, version_conflict, version_mismatch

__all__ = [
    "InertiaMiddleware",
    "Middleware",
    "Next",
    "RedirectStatusAdapter",
    "VersionGuard",
    "adapt_redirect_status",
    "version_conflict",
    "version_mismatch",
]
