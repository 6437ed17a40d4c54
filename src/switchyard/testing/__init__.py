"""Testing utilities for switchyard applications.

Usage::

    from switchyard.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/users/42")
        assert response.json() == {"id": "42"}
"""

from switchyard.testing.client import TestClient

__all__ = ["TestClient"]
