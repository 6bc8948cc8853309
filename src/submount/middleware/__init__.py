"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> None

Building blocks:
    compose -- Run an ordered list of middleware as one

Mounting lives in ``submount.routing``.
"""

from submount.middleware.compose import compose
from submount.middleware.protocol import Composable, Middleware, Next

__all__ = [
    "Composable",
    "Middleware",
    "Next",
    "compose",
]
