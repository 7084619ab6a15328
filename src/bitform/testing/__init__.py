"""Testing utilities for bitform applications.

Usage::

    from bitform.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/")
        assert response.status == 200

``RecordingProvider`` stands in for a real provider when a test only
needs routes registered, not served.
"""

from bitform.testing.client import TestClient
from bitform.testing.provider import RecordingProvider

__all__ = ["RecordingProvider", "TestClient"]
