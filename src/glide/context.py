"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: The current ``Request`` for this task/thread.
- ``inertia_var``: The protocol engine bound by ``InertiaMiddleware``.
- ``env_var``: The app's kida Environment, for the default root renderer.

All are set by the handler pipeline or middleware and reset after each
request. Outside a request, the getters raise.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING

from glide.errors import ConfigurationError
from glide.http.request import Request

if TYPE_CHECKING:
    from kida import Environment

    from glide.inertia import Inertia

request_var: ContextVar[Request] = ContextVar("glide_request")
"""The current request. Set by the ASGI handler before dispatch."""

inertia_var: ContextVar[Inertia] = ContextVar("glide_inertia")
"""The engine serving the current request. Set by ``InertiaMiddleware``."""

env_var: ContextVar[Environment | None] = ContextVar("glide_env", default=None)
"""The app's template environment, if the app has one."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


def get_inertia() -> Inertia:
    """Return the engine bound to the current request.

    Raises ``ConfigurationError`` when no ``InertiaMiddleware`` ran.
    """
    try:
        return inertia_var.get()
    except LookupError:
        msg = (
            "No Inertia middleware configured. "
            "Add it with app.add_middleware(InertiaMiddleware(inertia))."
        )
        raise ConfigurationError(msg) from None
