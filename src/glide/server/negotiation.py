"""Content negotiation: maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from glide.context import env_var, get_inertia
from glide.http.request import Request
from glide.http.response import Redirect, Response
from glide.returns import Render


async def negotiate(value: Any, *, request: Request) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Redirect``            -> 302 (or custom status) with Location header
    3. ``Render``              -> page via the bound engine (JSON or HTML shell)
    4. ``str``                 -> 200, text/html
    5. ``bytes``               -> 200, application/octet-stream
    6. ``dict`` / ``list``     -> 200, application/json
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(value.headers)
            )
        case Render():
            inertia = get_inertia()
            return await inertia.render(
                request,
                value.component,
                value.props,
                kida_env=env_var.get(),
            )
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as status):
            response = await negotiate(inner, request=request)
            return response.with_status(status)
        case (inner, int() as status, dict() as headers):
            response = await negotiate(inner, request=request)
            return response.with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, dict, bytes, Render, Response, or Redirect."
            )
            raise TypeError(msg)
