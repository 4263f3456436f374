"""Glide: server-side page protocol engine for ASGI.

Answers each visit with either a JSON page envelope (component + props)
for protocol-aware clients, or a full HTML shell with the envelope
embedded for first loads.

Basic usage::

    from glide import App, Inertia, InertiaConfig, InertiaMiddleware, Render

    inertia = Inertia(InertiaConfig(root_template="app.html", version="1"))
    inertia.share("app_name", "Glide")

    app = App()
    app.add_middleware(InertiaMiddleware(inertia))

    @app.route("/events")
    def events():
        return Render("Events/Index", events=load_events())

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "GlideError",
    "HTTPError",
    "Inertia",
    "InertiaConfig",
    "InertiaMiddleware",
    "Lazy",
    "Middleware",
    "Next",
    "PageSerializationError",
    "Redirect",
    "Render",
    "RenderError",
    "Request",
    "Response",
    "ShellRenderError",
    "get_request",
    "lazy",
    "merge_props",
    "render",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import glide`` fast while providing a clean top-level API.
    """
    if name == "App":
        from glide.app import App

        return App

    if name in ("AppConfig", "InertiaConfig"):
        from glide import config as _config

        return getattr(_config, name)

    if name in ("Inertia", "render"):
        from glide import inertia as _inertia

        return getattr(_inertia, name)

    if name == "InertiaMiddleware":
        from glide.middleware.inertia import InertiaMiddleware

        return InertiaMiddleware

    if name in ("Middleware", "Next"):
        from glide.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("Lazy", "lazy", "merge_props"):
        from glide import props as _props

        return getattr(_props, name)

    if name == "Render":
        from glide.returns import Render

        return Render

    if name == "Request":
        from glide.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from glide.http import response as _resp

        return getattr(_resp, name)

    if name == "get_request":
        from glide.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "GlideError",
        "HTTPError",
        "PageSerializationError",
        "RenderError",
        "ShellRenderError",
    ):
        from glide import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
