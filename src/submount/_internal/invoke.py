"""Invoke helper — call sync or async handlers uniformly.

Middleware may be written as ``def`` or ``async def``. Composition and the
mount wrapper both call user-provided handlers, so the sync/async check
lives here and nowhere else.

Usage::

    from submount._internal.invoke import invoke

    result = await invoke(middleware, ctx, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result when it is awaitable.

    A sync leaf handler that never calls ``next`` works as is::

        def no_content(ctx, next):
            ctx.status = 204

    A sync handler that wants to continue the pipeline can return the
    awaitable produced by ``next()``; it is awaited here::

        def passthrough(ctx, next):
            return next()
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
