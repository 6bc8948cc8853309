"""Path parameter helpers.

``safe_unquote`` decodes captured segments without ever raising, and
``merge_params`` combines the params of nested mounts.
"""

import re
from collections.abc import Mapping
from urllib.parse import unquote

from submount.http.context import Params

# A "%" that does not start a two-digit hex escape
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def safe_unquote(value: str) -> str:
    """Percent-decode *value*, returning it unchanged if it is malformed.

    Malformed means a stray ``%`` (``"100%"``) or escapes that do not form
    valid UTF-8 (``"%E0%A4%A"``). Decoding failures never propagate.
    """
    if _MALFORMED_ESCAPE.search(value):
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def merge_params(previous: Params, captured: Mapping[str | int, str] | None) -> Params:
    """Right-biased merge: keys in *captured* win, keys only in *previous* survive.

    Always returns a new dict, even when *captured* is empty, so writes to
    the result never reach *previous*. Neither argument is modified.
    """
    merged: Params = dict(previous)
    if captured:
        merged.update(captured)
    return merged
