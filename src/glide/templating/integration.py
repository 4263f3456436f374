"""Kida environment setup and the root shell renderer.

The environment is created once during ``App._freeze()`` from AppConfig
and bound per request so the engine can find it. The root shell is the
only template the protocol engine renders; everything else is drawn by
client-side components.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from kida import ChoiceLoader, Environment, FileSystemLoader
from kida.template import Markup

from glide.config import AppConfig


class RootRenderer(Protocol):
    """Produces the full HTML document for non-protocol visits.

    Receives the HTML-escaped page payload and the engine's root template
    data. Any callable with this shape works::

        def shell(page: Markup, data: Mapping[str, Any]) -> str:
            return f'<div id="app" data-page="{page}"></div>'
    """

    def __call__(self, page: Markup, data: Mapping[str, Any]) -> str: ...


def create_environment(config: AppConfig) -> Environment:
    """Build the kida Environment for the root shell from *config*.

    Called once while the app freezes. ``template_dir`` is searched first,
    then each of ``component_dirs``.
    """
    search = [config.template_dir, *config.component_dirs]
    return Environment(
        loader=ChoiceLoader([FileSystemLoader(str(path)) for path in search]),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


class KidaRootRenderer:
    """Render the root shell from a kida template.

    The template sees two names: ``page`` (escaped JSON, safe to drop into
    an attribute) and ``data`` (the engine's root template data)::

        <!DOCTYPE html>
        <html>
          <head><title>{{ data.title }}</title></head>
          <body><div id="app" data-page="{{ page }}"></div></body>
        </html>
    """

    __slots__ = ("env", "template_name")

    def __init__(self, env: Environment, template_name: str) -> None:
        self.env = env
        self.template_name = template_name

    def __call__(self, page: Markup, data: Mapping[str, Any]) -> str:
        template = self.env.get_template(self.template_name)
        return template.render({"page": page, "data": data})
