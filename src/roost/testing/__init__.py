"""Test utilities for roost applications.

    from roost.testing import RecordingOpener, TestClient
"""

from roost.testing.client import TestClient
from roost.testing.opener import RecordingOpener

__all__ = [
    "RecordingOpener",
    "TestClient",
]
