"""Compile mount patterns into anchored regexes.

Pattern syntax::

    /users              literal text
    /users/:id          named segment, matches one path segment
    /files/:name(\\d+)   named segment with a custom regex
    /:lang?             optional segment (the "/" is optional too)
    /tags/:tag+         one or more segments
    /tags/:tag*         zero or more segments
    /(\\d+)              unnamed capture
    /static/*           unnamed capture of everything that follows
    /a\\:b               backslash escapes the next character

Named segments become Python named groups, unnamed ones plain groups,
so the matcher reads captures straight off ``re.Match``.
"""

import re
from dataclasses import dataclass

from submount.errors import ConfigurationError

_DELIMITER = "/"

# escaped char | optional prefix, then :name(custom)? | (group), modifier? | asterisk
_TOKEN = re.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))"
)


@dataclass(frozen=True, slots=True)
class PatternToken:
    """A parameter in a parsed pattern.

    ``name`` is the parameter name, or a positional index for unnamed
    captures and ``*``.
    """

    name: str | int
    prefix: str
    pattern: str
    optional: bool = False
    repeat: bool = False
    partial: bool = False


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled pattern and the keys of its captures, in order."""

    source: str
    regex: re.Pattern[str]
    keys: tuple[str | int, ...]


def parse_pattern(path: str) -> list[str | PatternToken]:
    """Split *path* into literal strings and ``PatternToken`` parameters.

    Examples::

        "/users"        -> ["/users"]
        "/users/:id"    -> ["/users", PatternToken("id", "/", "[^/]+?")]
        "/static/*"     -> ["/static", PatternToken(0, "/", ".*")]
    """
    tokens: list[str | PatternToken] = []
    literal = ""
    index = 0
    auto_key = 0

    for match in _TOKEN.finditer(path):
        escaped, prefix, name, capture, group, modifier, asterisk = match.groups()
        literal += path[index : match.start()]
        index = match.end()

        if escaped:
            literal += escaped[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        following = path[index] if index < len(path) else None

        if name is None:
            key: str | int = auto_key
            auto_key += 1
        else:
            key = name

        if capture or group:
            regex = capture or group
        elif asterisk:
            regex = ".*"
        else:
            regex = f"[^{re.escape(prefix or _DELIMITER)}]+?"

        tokens.append(
            PatternToken(
                name=key,
                prefix=prefix or "",
                pattern=regex,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=prefix is not None and following is not None and following != prefix,
            )
        )

    literal += path[index:]
    if literal:
        tokens.append(literal)
    return tokens


def compile_pattern(
    path: str,
    *,
    strict: bool = True,
    end: bool = False,
    sensitive: bool = False,
) -> CompiledPattern:
    """Compile *path* into a ``CompiledPattern``.

    The defaults are mount semantics: anchored at the start, not required
    to consume the whole path, and only matching on segment boundaries
    (``/prefix`` matches ``/prefix`` and ``/prefix/x`` but not
    ``/prefixx``). A trailing ``/`` in *path* must be present in the
    matched path.

    Args:
        path: The pattern, e.g. ``"/users/:id"``.
        strict: When False, tolerate one trailing ``/`` after the pattern.
        end: When True, the pattern must match the whole path.
        sensitive: Match case-sensitively. Case-insensitive by default.

    Raises:
        ConfigurationError: If a parameter name is not a valid identifier,
            is declared twice, or a custom regex does not compile.
    """
    route = ""
    keys: list[str | int] = []

    for token in parse_pattern(path):
        if isinstance(token, str):
            route += re.escape(token)
            continue

        if isinstance(token.name, str) and not token.name.isidentifier():
            msg = f"Invalid parameter name {token.name!r} in pattern {path!r}."
            raise ConfigurationError(msg)
        keys.append(token.name)

        prefix = re.escape(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"
        opener = f"(?P<{token.name}>" if isinstance(token.name, str) else "("

        if token.optional:
            if token.partial:
                capture = f"{prefix}{opener}{capture})?"
            else:
                capture = f"(?:{prefix}{opener}{capture}))?"
        else:
            capture = f"{prefix}{opener}{capture})"
        route += capture

    ends_with_delimiter = route.endswith(_DELIMITER)
    if not strict:
        if ends_with_delimiter:
            route = route[: -len(_DELIMITER)]
        route += f"(?:{_DELIMITER}(?=$))?"
    if end:
        route += "$"
    elif not (strict and ends_with_delimiter):
        route += f"(?={_DELIMITER}|$)"

    try:
        regex = re.compile(f"^{route}", 0 if sensitive else re.IGNORECASE)
    except re.error as exc:
        msg = f"Invalid pattern {path!r}: {exc}"
        raise ConfigurationError(msg) from exc

    return CompiledPattern(source=path, regex=regex, keys=tuple(keys))
