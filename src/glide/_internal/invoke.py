"""One place for the sync/async split.

Handlers, lifespan hooks, error handlers and lazy prop resolvers may all
be plain functions or coroutine functions; callers never branch on it.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func*, awaiting whatever awaitable it hands back.

    ::

        await invoke(lambda: ["ada"])          # -> ["ada"]
        await invoke(load_stats, request)      # async def load_stats(request)
    """
    value = func(*args, **kwargs)
    return await value if inspect.isawaitable(value) else value
