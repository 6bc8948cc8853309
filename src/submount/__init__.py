"""Submount — mount sub-applications under path prefixes.

A pipeline of ``async def mw(ctx, next)`` middleware where any range of
paths can be handed to a nested app or a single middleware. Inside the
mount, ``ctx.path`` is the remainder after the prefix and ``ctx.params``
holds its captures; both are restored whenever control leaves the mount.

Basic usage::

    from submount import App

    blog = App(name="blog")

    @blog.use
    async def post(ctx, next):
        ctx.body = f"post {ctx.params['slug']} at {ctx.path}"

    app = App()
    app.mount("/blog/:slug", blog)

Serve ``app`` with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "Middleware",
    "MountOptions",
    "Next",
    "NotFound",
    "Response",
    "SubmountError",
    "compose",
    "compile_pattern",
    "get_context",
    "mount",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import submount`` fast while providing a clean top-level API.
    """
    if name == "App":
        from submount.app import App

        return App

    if name in ("AppConfig", "MountOptions"):
        from submount import config as _config

        return getattr(_config, name)

    if name == "Context":
        from submount.http.context import Context

        return Context

    if name == "Response":
        from submount.http.response import Response

        return Response

    if name in ("Middleware", "Next", "compose"):
        from submount import middleware as _mw

        return getattr(_mw, name)

    if name in ("mount", "compile_pattern"):
        from submount import routing as _routing

        return getattr(_routing, name)

    if name == "get_context":
        from submount.context import get_context

        return get_context

    if name in ("SubmountError", "ConfigurationError", "HTTPError", "NotFound"):
        from submount import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
