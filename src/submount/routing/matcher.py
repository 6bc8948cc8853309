"""Prefix matching for mounts.

``PrefixMatcher`` runs a mount pattern against the front of a path and
reports the rewritten remainder plus the decoded captures.
"""

import re
from dataclasses import dataclass, field

from submount.errors import ConfigurationError
from submount.http.context import Params
from submount.routing.params import safe_unquote
from submount.routing.pattern import compile_pattern

ROOT = "/"


@dataclass(frozen=True, slots=True)
class MountMatch:
    """Result of a successful prefix match.

    ``path`` is the remainder, always rooted at ``/``.
    """

    path: str
    params: Params = field(default_factory=dict)


def is_root(pattern: str | re.Pattern[str]) -> bool:
    """True for the identity mount: ``"/"`` or a regex whose source is ``"/"``."""
    if isinstance(pattern, re.Pattern):
        return pattern.pattern == ROOT
    return pattern == ROOT


def check_pattern(pattern: object) -> None:
    """Raise ``ConfigurationError`` unless *pattern* can be mounted.

    Strings must begin with ``/``; anything else must be an ``re.Pattern``.
    """
    if isinstance(pattern, str):
        if not pattern.startswith(ROOT):
            msg = f"Mount path must begin with '/', got {pattern!r}."
            raise ConfigurationError(msg)
    elif not isinstance(pattern, re.Pattern):
        msg = f"Mount pattern must be a str or re.Pattern, got {type(pattern).__name__}."
        raise ConfigurationError(msg)


class PrefixMatcher:
    """Matches one mount pattern against the front of request paths.

    The regex is compiled once at construction and reused for every
    request. String patterns go through ``compile_pattern``; a
    precompiled ``re.Pattern`` is used as is and matched with
    ``Pattern.match`` (anchored at the start, free to stop early).

    Usage::

        matcher = PrefixMatcher("/users/:id")
        matcher.match("/users/42/posts")
        # MountMatch(path="/posts", params={"id": "42"})
    """

    __slots__ = ("_regex", "pattern", "root")

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        check_pattern(pattern)
        self.pattern = pattern
        self.root = is_root(pattern)
        if self.root:
            self._regex: re.Pattern[str] | None = None
        elif isinstance(pattern, re.Pattern):
            self._regex = pattern
        else:
            self._regex = compile_pattern(pattern).regex

    @property
    def regex(self) -> re.Pattern[str] | None:
        """The compiled regex, or None for the root mount."""
        return self._regex

    def match(self, path: str) -> MountMatch | None:
        """Match *path*, returning the remainder and captures or None."""
        if self._regex is None:
            return MountMatch(path=path)

        m = self._regex.match(path)
        if m is None:
            return None

        remainder = path[m.end() :]
        if not remainder.startswith("/"):
            remainder = "/" + remainder
        return MountMatch(path=remainder, params=extract_params(m))

    def __repr__(self) -> str:
        return f"PrefixMatcher({self.pattern!r})"


def match_prefix(matcher: PrefixMatcher, path: str) -> MountMatch | None:
    """Functional form of ``PrefixMatcher.match``."""
    return matcher.match(path)


def extract_params(m: re.Match[str]) -> Params:
    """Collect captures from *m* in declaration order.

    Named groups win: if the regex declares any, only those are returned,
    keyed by name. Otherwise every group is keyed by its position.
    Groups that took no part in the match are left out.
    """
    params: Params = {}
    groupindex = m.re.groupindex
    if groupindex:
        # groupindex maps name -> group number; sort by number for declaration order
        for name, number in sorted(groupindex.items(), key=lambda item: item[1]):
            value = m.group(number)
            if value is not None:
                params[name] = safe_unquote(value) if value else value
    else:
        for position, value in enumerate(m.groups()):
            if value is not None:
                params[position] = safe_unquote(value) if value else value
    return params
