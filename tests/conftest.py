"""
Pytest configuration and fixtures for QSL Card Manager tests.

Unit tests need nothing here beyond markers. API tests get an application
bound to a throwaway SQLite database.
"""

from typing import Any, Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from qslcard.core.config import (
    APIConfig,
    DatabaseConfig,
    Environment,
    LoggingConfig,
    QSLCardConfig,
    get_config,
    set_config,
)
from qslcard.core.database import reset_database_factories


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "api" in str(item.fspath):
            item.add_marker(pytest.mark.api)


@pytest.fixture
def test_config(tmp_path) -> Iterator[QSLCardConfig]:
    """Install a testing configuration backed by a temporary database."""
    previous = get_config()
    config = QSLCardConfig(
        environment=Environment.TESTING,
        logging=LoggingConfig(level="WARNING", json_output=False),
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        api=APIConfig(rate_limit_enabled=False, max_upload_bytes=64 * 1024),
    )
    set_config(config)
    reset_database_factories()
    yield config
    reset_database_factories()
    set_config(previous)


@pytest.fixture
def client(test_config: QSLCardConfig) -> Iterator[TestClient]:
    """Create a test client; the lifespan creates the tables."""
    from qslcard.api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., Dict[str, Any]]:
    """Register an account through the API; the client keeps its cookie."""

    def _register(
        username: str = "operator",
        email: str = "operator@example.com",
        password: str = "secret123",
        callsign: str = "BH1ABC",
        name: str = "Zhang San",
    ) -> Dict[str, Any]:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "username": username,
                "password": password,
                "callsign": callsign,
                "name": name,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _register


@pytest.fixture
def auth_client(client: TestClient, register_user) -> TestClient:
    """Test client signed in as a freshly registered operator."""
    register_user()
    return client


@pytest.fixture
def sample_log_payload() -> Dict[str, Any]:
    """A complete log entry request body."""
    return {
        "contactCall": "bh9xyz",
        "contactName": "Li Si",
        "frequency": "14.205",
        "mode": "ssb",
        "band": "20m",
        "date": "2024-01-15",
        "time": "13:30",
        "rstSent": "59",
        "rstReceived": "58",
        "power": "100W",
        "antenna": "Yagi",
        "qth": "Chengdu",
        "locator": "OL30",
        "notes": "Thanks for the QSO",
    }
