"""Turns exceptions raised while handling a request into responses.

Three tiers, tried by the ASGI handler in order: ``HTTPError`` (expected
client-facing statuses), ``RenderError`` (a page that could not be
produced) and everything else (a bug, answered with 500).
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from glide._internal.invoke import invoke
from glide._internal.types import ErrorHandler
from glide.errors import HTTPError, RenderError
from glide.http.request import Request
from glide.http.response import Response
from glide.server.negotiation import negotiate

logger = logging.getLogger("glide.server")

type ErrorHandlers = dict[int | type, ErrorHandler]


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Call a user error handler with as many of ``(request, exc)`` as it takes.

    The return value goes through normal negotiation, so handlers may
    return a string, a ``Render``, a ``(body, status)`` tuple and so on.
    """
    arity = len(inspect.signature(handler).parameters)
    result = await invoke(handler, *(request, exc)[: min(arity, 2)])
    return await negotiate(result, request=request)


def _lookup(handlers: ErrorHandlers, *keys: int | type) -> Callable[..., Any] | None:
    for key in keys:
        if key in handlers:
            return handlers[key]
    return None


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Answer an ``HTTPError`` with its status, via a registered handler if any."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = _lookup(error_handlers, type(exc), exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # A handler that left the default 200 inherits the error status
        return response.with_status(exc.status) if response.status == 200 else response

    body = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        body = f"{exc.status}: {exc.detail}"
    return Response(body=body, status=exc.status).with_headers(exc.headers)


async def handle_render_error(
    exc: RenderError,
    request: Request,
    error_handlers: ErrorHandlers,
) -> Response:
    """A page that could not be produced becomes a bare 500.

    Nothing of the failed page is sent: the body is empty.
    """
    logger.exception("500 %s %s: cannot render %s", request.method, request.path, exc)

    handler = _lookup(error_handlers, type(exc), RenderError)
    if handler is not None:
        return await call_error_handler(handler, request, exc)
    return Response(body="", status=500)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Answer an unexpected exception with 500."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = _lookup(error_handlers, 500, type(exc))
    if handler is not None:
        return await call_error_handler(handler, request, exc)

    body = "Internal Server Error"
    if debug:
        body = f"{body}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, status=500)
