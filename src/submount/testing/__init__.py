"""Test utilities for submount applications::

    from submount.testing import TestClient
"""

from submount.testing.client import TestClient

__all__ = ["TestClient"]
