"""ASGI handler — translates ASGI scope/messages to submount types.

The only component that touches raw ASGI directly. Converts the scope
dict to a ``Context``, runs it through the composed middleware, and
sends the resulting ``Response`` back through ASGI ``send()``.
"""

from collections.abc import Callable
from contextvars import Token
from typing import Any

from submount._internal.asgi import Receive, Scope, Send
from submount.context import context_var
from submount.errors import HTTPError
from submount.http.context import Context
from submount.middleware.protocol import Middleware
from submount.server.errors import handle_http_error, handle_internal_error
from submount.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Middleware,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline.

    A request nobody writes a body or status for ends as a 404, the same
    as an explicit ``NotFound``.
    """
    if scope["type"] != "http":
        return

    ctx = Context.from_asgi(scope)
    token: Token[Context] = context_var.set(ctx)

    try:
        await pipeline(ctx, _end_of_pipeline)
        response = ctx.to_response()
    except HTTPError as exc:
        response = await handle_http_error(exc, ctx, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, ctx, error_handlers, debug)
    finally:
        context_var.reset(token)

    await send_response(response, send, head=ctx.method == "HEAD")


async def _end_of_pipeline() -> None:
    """The ``next`` of the outermost middleware: nothing left to run."""
