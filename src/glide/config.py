"""Application and engine configuration.

Both are frozen dataclasses; settings are attributes, not
string keys looked up in a dict.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, template_dir="views")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode, requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html", ".css")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Templates (the root shell lives here)
    template_dir: str | Path = "templates"
    component_dirs: tuple[str | Path, ...] = ()
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Production
    workers: int = 0  # 0 = auto-detect from CPU count
    log_level: str = "info"
    request_timeout: float = 30.0


@dataclass(frozen=True, slots=True)
class InertiaConfig:
    """Protocol engine configuration.

    ``version_func`` wins over ``version`` when both are set, so a build
    hash can be computed lazily (e.g. from a manifest file)::

        InertiaConfig(root_template="app.html", version="3f2a9c")
        InertiaConfig(version_func=lambda: manifest_hash("dist/manifest.json"))

    ``root_template_data`` is handed to the root shell as ``data`` on every
    full-page render.
    """

    root_template: str = "app.html"
    version: str = ""
    version_func: Callable[[], str] | None = None
    root_template_data: Mapping[str, Any] = field(default_factory=dict)
