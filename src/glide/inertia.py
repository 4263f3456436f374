"""The protocol engine.

``Inertia`` turns a component name and its props into either a JSON page
envelope (for protocol-aware clients) or the full HTML shell with the
envelope embedded (for first visits and hard reloads).

Usage::

    inertia = Inertia(InertiaConfig(root_template="app.html", version="1"))
    inertia.share("app_name", "Glide")

    app.add_middleware(InertiaMiddleware(inertia))

    @app.route("/events")
    async def events(request: Request):
        return await inertia.render(request, "Events/Index", {"events": load_events()})
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from kida import Environment

from glide.config import InertiaConfig
from glide.context import env_var, get_inertia, get_request
from glide.errors import ConfigurationError, ShellRenderError
from glide.http.headers import X_INERTIA
from glide.http.request import Request
from glide.http.response import Response
from glide.page import PageEnvelope, embed_page, serialize_page
from glide.props import PropMap, SharedProps
from glide.resolve import ResponseContext, resolve_props
from glide.templating.integration import KidaRootRenderer, RootRenderer

logger = logging.getLogger("glide.inertia")


class Inertia:
    """Server side of the page protocol.

    Holds the engine configuration, the shared props registry, and an
    optional root renderer. Without an explicit renderer, the root
    template is loaded from the app's kida environment.
    """

    __slots__ = ("config", "renderer", "shared")

    def __init__(
        self,
        config: InertiaConfig | None = None,
        *,
        renderer: RootRenderer | None = None,
    ) -> None:
        self.config: InertiaConfig = config or InertiaConfig()
        self.renderer: RootRenderer | None = renderer
        self.shared: SharedProps = SharedProps()

    # -- Configuration --

    def share(self, key: str, value: Any) -> None:
        """Add one prop to every page rendered by this engine."""
        self.shared.share(key, value)

    def share_many(self, props: PropMap) -> None:
        """Merge several props into the shared set."""
        self.shared.share_many(props)

    def set_version_func(self, func: Callable[[], str]) -> None:
        """Compute the asset version on demand instead of using a constant."""
        self.config = replace(self.config, version_func=func)

    @property
    def version(self) -> str:
        """Current asset version; the version function wins when set."""
        if self.config.version_func is not None:
            return self.config.version_func()
        return self.config.version

    # -- Rendering --

    async def render(
        self,
        request: Request,
        component: str,
        props: PropMap | None = None,
        *,
        kida_env: Environment | None = None,
    ) -> Response:
        """Render *component* for *request*.

        Raises ``PageSerializationError`` or ``ShellRenderError`` when the
        page cannot be produced; exceptions from lazy props propagate.
        """
        response_ctx = ResponseContext()
        resolved = await resolve_props(
            self.shared.snapshot(),
            props,
            component,
            request,
            response_ctx,
        )
        page = PageEnvelope(
            component=component,
            props=resolved,
            url=request.url,
            version=self.version,
        )
        payload = serialize_page(page)
        logger.debug(
            "%s %s -> %s (%s)",
            request.method,
            page.url,
            component,
            "json" if request.is_inertia else "html",
        )
        response = self.emit(request, page, payload, kida_env=kida_env)
        return response.with_headers(response_ctx.headers)

    def emit(
        self,
        request: Request,
        page: PageEnvelope,
        payload: bytes,
        *,
        kida_env: Environment | None = None,
    ) -> Response:
        """Wrap a serialized page in the response the client expects."""
        if request.is_inertia:
            return (
                Response(body=payload, content_type="application/json")
                .with_header("Vary", "Accept")
                .with_header(X_INERTIA, "true")
            )

        renderer = self._root_renderer(kida_env)
        try:
            html = renderer(embed_page(payload), self.config.root_template_data)
        except Exception as exc:
            raise ShellRenderError(page.component, str(exc)) from exc
        return Response(body=html)

    def _root_renderer(self, kida_env: Environment | None) -> RootRenderer:
        if self.renderer is not None:
            return self.renderer
        env = kida_env or env_var.get()
        if env is None:
            msg = (
                "No root renderer available. Pass renderer= to Inertia() "
                "or configure a template_dir on the app."
            )
            raise ConfigurationError(msg)
        return KidaRootRenderer(env, self.config.root_template)


async def render(component: str, props: PropMap | None = None, /, **kwprops: Any) -> Response:
    """Render through the engine bound to the current request.

    Shorthand for handlers behind ``InertiaMiddleware``::

        @app.route("/")
        async def home():
            return await render("Home", greeting="hi")
    """
    inertia = get_inertia()
    merged = {**(props or {}), **kwprops}
    return await inertia.render(get_request(), component, merged)
