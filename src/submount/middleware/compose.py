"""Compose an ordered list of middleware into a single middleware.

The composed handler runs the list front to back. Each middleware gets a
``next`` that runs the one after it; after the last one, the ``next``
handed to the composed handler (if any) runs.

The sequence is read at call time, so middleware appended to a live list
after composition still takes part.
"""

from collections.abc import Sequence
from typing import Any

from submount._internal.invoke import invoke
from submount.errors import MiddlewareError
from submount.http.context import Context
from submount.middleware.protocol import Middleware, Next


def compose(middleware: Sequence[Middleware]) -> Middleware:
    """Return one middleware that runs *middleware* in order.

    Usage::

        pipeline = compose([logger, auth, mount("/api", api)])
        await pipeline(ctx, final_next)
    """
    stack = middleware

    async def composed(ctx: Context, next: Next | None = None) -> Any:
        index = -1

        async def dispatch(i: int) -> Any:
            nonlocal index
            if i <= index:
                msg = "next() called multiple times"
                raise MiddlewareError(msg)
            index = i

            if i < len(stack):
                return await invoke(stack[i], ctx, lambda: dispatch(i + 1))
            if next is not None:
                return await next()
            return None

        return await dispatch(0)

    return composed
