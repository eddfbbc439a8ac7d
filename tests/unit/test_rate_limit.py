"""
Unit tests for the auth rate limiting middleware.
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from qslcard.api.app import RateLimitMiddleware


@pytest.fixture
def limited_client():
    """Small app allowing two auth POSTs per window."""
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=2,
        window_seconds=60,
        path_prefix="/api/auth",
    )

    @app.post("/api/auth/login")
    async def login():
        return {"ok": True}

    @app.get("/api/auth/me")
    async def me():
        return {"ok": True}

    @app.post("/api/qsl")
    async def create_log():
        return {"ok": True}

    return TestClient(app)


class TestRateLimitMiddleware:
    """Test request counting."""

    def test_limit_exceeded(self, limited_client):
        """Test the third POST within the window."""
        with patch("qslcard.api.app.security_logger") as mock_logger:
            assert limited_client.post("/api/auth/login").status_code == 200
            assert limited_client.post("/api/auth/login").status_code == 200

            response = limited_client.post("/api/auth/login")

        assert response.status_code == 429
        assert response.json()["detail"] == "Rate limit exceeded"
        mock_logger.log_rate_limit_exceeded.assert_called_once()

    def test_get_not_limited(self, limited_client):
        """Test that reads are not counted."""
        for _ in range(5):
            assert limited_client.get("/api/auth/me").status_code == 200

    def test_other_paths_not_limited(self, limited_client):
        """Test POSTs outside the auth prefix."""
        for _ in range(5):
            assert limited_client.post("/api/qsl").status_code == 200
