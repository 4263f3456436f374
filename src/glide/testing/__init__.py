"""Test utilities for glide applications.

Provides a test client and assertions for protocol responses::

    from glide.testing import TestClient, assert_inertia_page
"""

from glide.testing.assertions import (
    assert_inertia_page,
    assert_version_conflict,
    page_of,
    page_props,
)
from glide.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_inertia_page",
    "assert_version_conflict",
    "page_of",
    "page_props",
]
