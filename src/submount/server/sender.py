"""ASGI response sending — translates a ``Response`` into ASGI messages."""

from submount._internal.asgi import Send
from submount.http.response import Response

# 1xx, 204 and 304 responses never carry a body
_BODYLESS = frozenset({204, 304})


def _has_body(status: int) -> bool:
    return status >= 200 and status not in _BODYLESS


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as ``http.response.start`` plus one body message.

    ``head`` keeps the Content-Length of the full body but sends none.
    """
    body = response.body_bytes if _has_body(response.status) else b""
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
