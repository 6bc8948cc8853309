"""Application and mount configuration.

Both are frozen dataclasses — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(debug=True, merge_params=True)
    """

    # Include tracebacks in 500 responses
    debug: bool = False

    # Default for ``App.mount(..., merge_params=None)``
    merge_params: bool = False


@dataclass(frozen=True, slots=True)
class MountOptions:
    """Per-mount options.

    ``merge_params`` keeps the params captured by enclosing mounts and lets
    the params captured by this mount win on collision. When false, the
    mounted pipeline sees only its own captures.
    """

    merge_params: bool = False
