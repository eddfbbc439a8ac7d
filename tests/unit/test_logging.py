"""Tests for the logging system."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from qslcard.core.logging import (
    SecurityEventType,
    SecurityLogger,
    SecuritySeverity,
    get_logger,
)


def make_request(forwarded_for=None):
    headers = {"user-agent": "pytest"}
    if forwarded_for:
        headers["x-forwarded-for"] = forwarded_for
    return SimpleNamespace(headers=headers, client=SimpleNamespace(host="10.0.0.5"))


@pytest.fixture
def security_logger():
    """Security logger with its structlog backend mocked."""
    logger = SecurityLogger()
    logger.logger = MagicMock()
    return logger


@pytest.mark.unit
class TestLogging:
    """Test logging functionality."""

    def test_get_logger(self) -> None:
        """Test that get_logger returns a structlog logger."""
        logger = get_logger("test_module")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "debug")
        logger.info("test message")


@pytest.mark.unit
class TestSecurityLogger:
    """Test security event logging."""

    def test_event_fields(self, security_logger) -> None:
        """Test the structured event payload."""
        event_id = security_logger.log_security_event(
            SecurityEventType.PROFILE_UPDATED,
            user_id="7",
            details={"callsign": "BH1ABC"},
            severity=SecuritySeverity.LOW,
            request=make_request(),
        )

        security_logger.logger.info.assert_called_once()
        data = security_logger.logger.info.call_args.kwargs
        assert data["event_id"] == event_id
        assert data["event_type"] == "profile_updated"
        assert data["user_id"] == "7"
        assert data["ip_address"] == "10.0.0.5"
        assert data["user_agent"] == "pytest"
        assert data["details"] == {"callsign": "BH1ABC"}

    def test_severity_levels(self, security_logger) -> None:
        """Test that severity selects the log level."""
        security_logger.log_security_event(
            SecurityEventType.AUTH_FAILURE, severity=SecuritySeverity.HIGH
        )
        security_logger.log_security_event(SecurityEventType.AUTH_FAILURE)

        security_logger.logger.error.assert_called_once()
        security_logger.logger.warning.assert_called_once()

    def test_forwarded_for(self, security_logger) -> None:
        """Test client IP from a proxy header."""
        security_logger.log_auth_success(
            "7", request=make_request("203.0.113.9, 10.0.0.1")
        )
        data = security_logger.logger.info.call_args.kwargs
        assert data["ip_address"] == "203.0.113.9"
        assert data["event_type"] == "auth_success"

    def test_auth_failure(self, security_logger) -> None:
        """Test failed login details."""
        security_logger.log_auth_failure("BH1ABC", reason="Wrong password")
        data = security_logger.logger.warning.call_args.kwargs
        assert data["details"] == {"identifier": "BH1ABC", "reason": "Wrong password"}
        assert data["ip_address"] is None

    def test_rate_limit(self, security_logger) -> None:
        """Test rate limit events."""
        security_logger.log_rate_limit_exceeded("/api/auth/login")
        data = security_logger.logger.warning.call_args.kwargs
        assert data["event_type"] == "rate_limit_exceeded"
        assert data["details"] == {"endpoint": "/api/auth/login"}

    def test_unique_event_ids(self, security_logger) -> None:
        """Test that each event gets its own ID."""
        first = security_logger.log_logout("7")
        second = security_logger.log_user_created("8")
        assert first != second
