"""Serve a glide App with pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``), but
glide has a live ``App`` object, so ``pounce.Server`` is driven directly
with the ASGI callable.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
    workers: int = 1,
    log_level: str = "info",
    request_timeout: float = 30.0,
) -> None:
    """Start a pounce server for *app* and block until it stops.

    Development (``reload=True``) always runs a single worker; file
    changes restart it.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    if reload:
        config = ServerConfig(
            host=host,
            port=port,
            workers=1,
            reload=True,
            reload_include=reload_include,
            reload_dirs=reload_dirs,
        )
    else:
        config = ServerConfig(
            host=host,
            port=port,
            workers=workers,
            log_level=log_level,
            request_timeout=request_timeout,
        )
    Server(config, app).run()
