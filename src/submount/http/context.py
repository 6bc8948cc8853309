"""Mutable per-request context.

One ``Context`` is created per request and passed by reference through
every middleware. Mounts rewrite ``path`` and ``params`` on this shared
instance, so every handler holding it sees the currently active pair.

Response fields live here too: handlers set ``status`` and ``body`` and
the ASGI handler snapshots them into a ``Response`` at the end.
"""

from __future__ import annotations

from typing import Any, TypeAlias

from submount.errors import HTTPError
from submount.http.headers import Headers
from submount.http.response import Response

# Ordered mapping of decoded path captures (names or positional indexes)
Params: TypeAlias = dict[str | int, str]


class Context:
    """The request/response context handed to every middleware.

    ``path`` and ``params`` are the mount-visible view of the request and
    change while mounted pipelines run. ``original_path`` is the path the
    client requested and never changes.
    """

    __slots__ = (
        "_body",
        "_explicit_status",
        "_status",
        "client",
        "content_type",
        "headers",
        "http_version",
        "method",
        "original_path",
        "params",
        "path",
        "query_string",
        "response_headers",
        "server",
    )

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        *,
        params: Params | None = None,
        headers: Headers | None = None,
        query_string: str = "",
        http_version: str = "1.1",
        client: tuple[str, int] | None = None,
        server: tuple[str, int] | None = None,
    ) -> None:
        self.method = method
        self.path = path
        self.original_path = path
        self.params: Params = params if params is not None else {}
        self.headers = headers if headers is not None else Headers()
        self.query_string = query_string
        self.http_version = http_version
        self.client = client
        self.server = server

        # Response side
        self._status = 404
        self._explicit_status = False
        self._body: str | bytes | None = None
        self.content_type = "text/plain; charset=utf-8"
        self.response_headers: list[tuple[str, str]] = []

    # -- Response fields --

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        self._status = value
        self._explicit_status = True

    @property
    def body(self) -> str | bytes | None:
        return self._body

    @body.setter
    def body(self, value: str | bytes | None) -> None:
        self._body = value
        # A body without an explicit status means the request was handled
        if value is not None and not self._explicit_status:
            self._status = 200

    def set_header(self, name: str, value: str) -> None:
        """Add a response header."""
        self.response_headers.append((name, value))

    def throw(self, status: int, detail: str = "") -> None:
        """Abort the pipeline with an ``HTTPError``."""
        raise HTTPError(status=status, detail=detail)

    def to_response(self) -> Response:
        """Snapshot the response fields into an immutable ``Response``."""
        body = self._body
        if body is None:
            # Nothing wrote a body: fall back to the status as text
            body = "" if self._status in (204, 304) else _default_body(self._status)
        return Response(
            body=body,
            status=self._status,
            content_type=self.content_type,
            headers=tuple(self.response_headers),
        )

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Context:
        """Create a Context from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            server=tuple(server) if server else None,
        )

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path!r} params={self.params!r}>"


def _default_body(status: int) -> str:
    from http import HTTPStatus

    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)
