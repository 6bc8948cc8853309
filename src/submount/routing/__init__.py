"""Routing — mount sub-apps and middleware under path prefixes.

Patterns are compiled once when a mount is built; each request only runs
the compiled regex against the currently active path.
"""

from submount.routing.matcher import MountMatch, PrefixMatcher, match_prefix
from submount.routing.mount import MountSpec, build_mount, mount
from submount.routing.params import merge_params, safe_unquote
from submount.routing.pattern import CompiledPattern, compile_pattern

__all__ = [
    "CompiledPattern",
    "MountMatch",
    "MountSpec",
    "PrefixMatcher",
    "build_mount",
    "compile_pattern",
    "match_prefix",
    "merge_params",
    "mount",
    "safe_unquote",
]
