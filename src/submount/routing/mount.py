"""Mount a sub-app or a single middleware under a path prefix.

While the mounted pipeline runs, ``ctx.path`` is the remainder after the
prefix and ``ctx.params`` holds the prefix captures. Whenever control
leaves the mounted pipeline (through its ``next`` or by returning or
raising), the enclosing path and params are put back. Nested mounts
therefore unwind in strict LIFO order.

Usage::

    api = App()
    api.use(users_middleware)

    app = App()
    app.use(mount("/api/:version", api))
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from submount._internal.invoke import invoke
from submount.config import MountOptions
from submount.errors import ConfigurationError
from submount.http.context import Context
from submount.middleware.compose import compose
from submount.middleware.protocol import Composable, Middleware, Next
from submount.routing.matcher import ROOT, PrefixMatcher, check_pattern, is_root
from submount.routing.params import merge_params as _merge_params

logger = logging.getLogger("submount.mount")


@dataclass(frozen=True, slots=True)
class MountSpec:
    """What to mount, where, and how.

    Literal string patterns must begin with ``/``; this is checked here so
    a bad prefix fails at setup, never at request time.
    """

    pattern: str | re.Pattern[str]
    target: Middleware | Composable
    options: MountOptions = field(default_factory=MountOptions)

    def __post_init__(self) -> None:
        check_pattern(self.pattern)
        if not callable(self.target) and not isinstance(self.target, Composable):
            msg = f"Mount target must be a middleware or an app, got {self.target!r}."
            raise ConfigurationError(msg)

    @property
    def is_root(self) -> bool:
        return is_root(self.pattern)


def mount(
    prefix: str | re.Pattern[str] | Middleware | Composable = ROOT,
    target: Middleware | Composable | None = None,
    *,
    merge_params: bool = False,
) -> Middleware:
    """Mount *target* at *prefix*.

    *prefix* may be left out, in which case the first argument is the
    target and it is mounted at ``/`` (plain composition, no rewriting)::

        app.use(mount(sub_app))
        app.use(mount("/blog", blog_app))
        app.use(mount("/users/:id", profile, merge_params=True))
        app.use(mount(re.compile(r"/(\\d+)"), by_number))

    Args:
        prefix: Literal path or pattern string starting with ``/``, or a
            precompiled ``re.Pattern`` matched from the start of the path.
        target: An app (anything with a ``middleware`` sequence) or a
            single middleware.
        merge_params: Keep params captured by enclosing mounts, with this
            mount's captures winning on collision.

    Raises:
        ConfigurationError: For a prefix not starting with ``/``, an
            invalid pattern, or a missing or non-callable target.
    """
    if target is None:
        if isinstance(prefix, (str, re.Pattern)):
            msg = f"mount({prefix!r}) is missing the app or middleware to mount."
            raise ConfigurationError(msg)
        prefix, target = ROOT, prefix

    spec = MountSpec(
        pattern=prefix,  # type: ignore[arg-type]
        target=target,
        options=MountOptions(merge_params=merge_params),
    )
    return build_mount(spec)


def build_mount(spec: MountSpec) -> Middleware:
    """Build the middleware that delegates to ``spec.target``.

    A root mount is just the composed target: every path matches and
    nothing is rewritten.
    """
    downstream = _downstream(spec.target)
    if spec.is_root:
        return downstream

    matcher = PrefixMatcher(spec.pattern)
    merge = spec.options.merge_params
    logger.debug("mount %s %s", _pattern_source(spec.pattern), _target_name(spec.target))

    async def mounted(ctx: Context, next: Next) -> Any:
        prev_path = ctx.path
        prev_params = ctx.params

        match = matcher.match(prev_path)
        if match is None:
            return await next()

        new_path = match.path
        new_params = _merge_params(prev_params, match.params) if merge else match.params
        ctx.path = new_path
        ctx.params = new_params
        logger.debug("enter %s -> %s", prev_path, new_path)

        async def upstream() -> Any:
            ctx.path = prev_path
            ctx.params = prev_params
            try:
                return await next()
            finally:
                ctx.path = new_path
                ctx.params = new_params

        try:
            return await invoke(downstream, ctx, upstream)
        finally:
            ctx.path = prev_path
            ctx.params = prev_params
            logger.debug("leave %s -> %s", prev_path, new_path)

    mounted.__name__ = f"mount({_pattern_source(spec.pattern)})"
    return mounted


def _downstream(target: Middleware | Composable) -> Middleware:
    if isinstance(target, Composable):
        return compose(target.middleware)
    return target


def _pattern_source(pattern: str | re.Pattern[str]) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def _target_name(target: Any) -> str:
    return getattr(target, "name", None) or getattr(target, "__name__", None) or "unnamed"
