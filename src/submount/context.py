"""Request-scoped access to the active ``Context`` via ContextVar.

Handlers receive ``ctx`` as an argument; ``get_context()`` is for code
deeper in the call stack that does not. The ASGI handler sets the var
before dispatch and resets it afterward.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. Concurrent requests never see each other's context.
"""

from contextvars import ContextVar

from submount.http.context import Context

context_var: ContextVar[Context] = ContextVar("submount_context")
"""The current request context. Set by the ASGI handler before dispatch."""


def get_context() -> Context:
    """Return the current request context.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
