"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> None: ...

No base class required. The framework checks the shape, not the lineage.

Code before ``await next()`` runs on the way in, code after it runs on
the way out, with the same ``ctx`` both times.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeAlias, runtime_checkable

from submount.http.context import Context

# The rest of the pipeline, as seen from inside a middleware
Next: TypeAlias = Callable[[], Awaitable[Any]]


class Middleware(Protocol):
    """Protocol for submount middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: Context, next: Next) -> None:
            start = time.monotonic()
            await next()
            ctx.set_header("X-Time", f"{time.monotonic() - start:.3f}")

        # Class middleware
        class Greeter:
            async def __call__(self, ctx: Context, next: Next) -> None:
                ...
    """

    def __call__(self, ctx: Context, next: Next) -> Any: ...


@runtime_checkable
class Composable(Protocol):
    """Anything exposing an ordered list of middleware, such as ``App``.

    Mounting a composable composes its ``middleware`` sequence into a
    single handler.
    """

    @property
    def middleware(self) -> Sequence[Middleware]: ...
