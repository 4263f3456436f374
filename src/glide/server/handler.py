"""The per-request pipeline behind ``App.__call__``.

Builds the ``Request``, binds request context, runs the middleware chain
around route dispatch, maps exceptions to responses, and writes the
result. Nothing else in glide sees raw ASGI messages on the way in.
"""

import inspect
from collections.abc import Callable
from functools import partial
from typing import Any

from kida import Environment

from glide._internal.asgi import Receive, Scope, Send
from glide._internal.invoke import invoke
from glide.context import env_var, request_var
from glide.errors import HTTPError, RenderError
from glide.http.request import Request
from glide.http.response import Response
from glide.middleware.protocol import Middleware, Next
from glide.routing import RouteTable
from glide.server.errors import (
    ErrorHandlers,
    handle_http_error,
    handle_internal_error,
    handle_render_error,
)
from glide.server.negotiation import negotiate
from glide.server.sender import send_response


def build_chain(middleware: tuple[Middleware, ...], endpoint: Next) -> Next:
    """Nest *middleware* around *endpoint*; ``middleware[0]`` runs outermost."""
    chain = endpoint
    for mw in reversed(middleware):
        chain = partial(_step, mw, chain)
    return chain


async def _step(mw: Middleware, next: Next, request: Request) -> Response:
    return await mw(request, next)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    middleware: tuple[Middleware, ...],
    error_handlers: ErrorHandlers,
    kida_env: Environment | None = None,
    debug: bool,
) -> None:
    """Answer one HTTP request."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    async def dispatch(req: Request) -> Response:
        match = routes.match(req.method, req.path)
        handler = match.route.handler
        result = await invoke(handler, **handler_kwargs(handler, req, match.path_params))
        return await negotiate(result, request=req)

    request_token = request_var.set(request)
    env_token = env_var.set(kida_env)
    try:
        response = await build_chain(middleware, dispatch)(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except RenderError as exc:
        response = await handle_render_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)
    finally:
        env_var.reset(env_token)
        request_var.reset(request_token)

    await send_response(response, send)


def handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Keyword arguments for *handler* by parameter name.

    ``request`` (or any parameter annotated ``Request``) gets the request.
    A parameter named like a path placeholder gets that segment, passed
    through its annotation when one is given and the conversion succeeds.
    """
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
            continue
        if name not in path_params:
            continue
        raw = path_params[name]
        convert = param.annotation
        if convert is inspect.Parameter.empty:
            kwargs[name] = raw
            continue
        try:
            kwargs[name] = convert(raw)
        except (TypeError, ValueError):
            kwargs[name] = raw
    return kwargs
