"""Test utilities for wren applications.

    from wren.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/items/1", headers={"Authorization": "Bearer X"})
        assert response.status == 200
"""

from wren.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
