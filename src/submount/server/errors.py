"""Error handling for submount requests.

Maps ``HTTPError`` exceptions and unexpected failures to ``Response``
objects, using registered error handlers or plain-text defaults.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from submount.errors import HTTPError
from submount.http.context import Context
from submount.http.response import Response

logger = logging.getLogger("submount.server")


async def call_error_handler(
    handler: Callable[..., Any],
    ctx: Context,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (ctx), or two (ctx, exc) args and
    may be sync or async. A ``Response`` is used as returned; a string or
    bytes becomes the body; anything else falls back to what the handler
    wrote on ``ctx``.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(ctx, exc)
    elif len(params) == 1:
        result = handler(ctx)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    if isinstance(result, Response):
        return result
    if isinstance(result, (str, bytes)):
        return Response(body=result, content_type=ctx.content_type)
    return ctx.to_response()


async def handle_http_error(
    exc: HTTPError,
    ctx: Context,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, ctx.method, ctx.original_path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, ctx, exc)
        # Keep the status from the exception unless the handler chose one
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    ctx: Context,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", ctx.method, ctx.original_path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        response = await call_error_handler(handler, ctx, exc)
        if response.status in (200, 404):
            response = response.with_status(500)
        return response

    if debug:
        body = "".join(traceback.format_exception(exc))
        return Response(body=body, status=500)

    return Response(body="Internal Server Error", status=500)
