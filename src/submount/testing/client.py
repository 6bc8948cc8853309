"""In-process test client for submount applications.

Requests go straight into the app's ASGI callable; the messages it sends
back are folded into a ``Response``. No sockets, no server.
"""

from __future__ import annotations

from submount._internal.asgi import Message, Scope
from submount.app import App
from submount.http.response import Response

_DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


class TestClient:
    """Async test client for submount applications.

    Entering the client freezes the app and runs its startup hooks;
    leaving it runs the shutdown hooks.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/blog/hello")
            assert response.status == 200
            assert response.text == "post hello"
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        await App._run_hooks(self.app._startup_hooks)
        return self

    async def __aexit__(self, *args: object) -> None:
        await App._run_hooks(self.app._shutdown_hooks)

    # -- Verbs --

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Run one request through the app and return what it sent."""
        pending: list[Message] = [
            {"type": "http.request", "body": body or b"", "more_body": False},
        ]
        sent: list[Message] = []

        async def receive() -> Message:
            if pending:
                return pending.pop(0)
            return {"type": "http.disconnect"}

        async def send(message: Message) -> None:
            sent.append(message)

        await self.app(build_scope(method, path, headers), receive, send)
        return collect_response(sent)


def build_scope(method: str, path: str, headers: dict[str, str] | None = None) -> Scope:
    """Build an ASGI HTTP scope for *path*, which may carry a query string."""
    path, _, query = path.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


def collect_response(messages: list[Message]) -> Response:
    """Fold the ASGI messages an app sent into a ``Response``.

    ``content-type`` becomes ``Response.content_type``; every other
    header is kept in order.
    """
    status = 200
    content_type = _DEFAULT_CONTENT_TYPE
    headers: list[tuple[str, str]] = []
    body = bytearray()

    for message in messages:
        if message["type"] == "http.response.start":
            status = message["status"]
            for raw_name, raw_value in message.get("headers", ()):
                name = raw_name.decode("latin-1")
                value = raw_value.decode("latin-1")
                if name == "content-type":
                    content_type = value
                else:
                    headers.append((name, value))
        elif message["type"] == "http.response.body":
            body += message.get("body", b"")

    return Response(
        body=bytes(body),
        status=status,
        content_type=content_type,
        headers=tuple(headers),
    )
