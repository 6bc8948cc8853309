"""Submount exception hierarchy.

Shared across the mount layer, the pattern compiler, composition, and the
ASGI handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class SubmountError(Exception):
    """Base for all submount-specific errors."""


class ConfigurationError(SubmountError):
    """Raised when a mount, pattern, or app is set up incorrectly.

    Always raised while building the pipeline, never while serving a
    request.
    """


class MiddlewareError(SubmountError):
    """Raised when a handler misuses its ``next`` continuation."""


@dataclass(frozen=True, slots=True)
class HTTPError(SubmountError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers (usually via ``ctx.throw()``). The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — nothing in the pipeline handled the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
