"""Glide exception hierarchy.

Shared across the engine, handler, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class GlideError(Exception):
    """Base for all glide-specific errors."""


class ConfigurationError(GlideError):
    """Raised when app or engine configuration is invalid.

    Typically raised during ``App._freeze()`` at startup, or on the first
    render when no engine or root renderer is available.
    """


class RenderError(GlideError):
    """A page could not be produced.

    Fatal for the request: the error pipeline answers with a bare 500
    and nothing of the failed page is written.
    """

    def __init__(self, component: str, detail: str = "") -> None:
        self.component = component
        self.detail = detail
        super().__init__(component, detail)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.component}: {self.detail}"
        return self.component


class PageSerializationError(RenderError):
    """The page envelope could not be encoded as JSON."""


class ShellRenderError(RenderError):
    """The root HTML shell failed to render."""


@dataclass(frozen=True, slots=True)
class HTTPError(GlideError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
