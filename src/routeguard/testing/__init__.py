"""Test utilities for routeguard applications.

Provides an in-process ASGI test client::

    from routeguard.testing import TestClient
"""

from routeguard.testing.client import TestClient, encode_multipart

__all__ = [
    "TestClient",
    "encode_multipart",
]
