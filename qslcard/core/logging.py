"""
Logging configuration for QSL Card Manager using structlog.

This module provides structured logging configuration for development
consoles and JSON log collectors alike.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from .config import get_config

SERVICE_NAME = "qslcard"
SERVICE_VERSION = "0.1.0"


def _add_service_metadata(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Add service metadata for log filtering."""
    config = get_config()

    event_dict.update(
        {
            "service_name": SERVICE_NAME,
            "service_version": SERVICE_VERSION,
            "environment": config.environment.value,
        }
    )

    return event_dict


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Set up structured logging for QSL Card Manager.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        json_output: Whether to output JSON logs; defaults to the configured value
    """
    config = get_config()

    log_level = level or config.logging.level
    if json_output is None:
        json_output = config.logging.json_output
    if log_file is None and config.logging.log_file:
        log_file = Path(config.logging.log_file)

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_service_metadata,
    ]

    if json_output or config.is_production():
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Human-readable format for development
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Logging initialized",
        level=log_level,
        json_output=json_output,
        log_file=str(log_file) if log_file else None,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


# Security Logging Components


class SecurityEventType(Enum):
    """Types of security events to log."""

    AUTH_SUCCESS = "auth_success"
    AUTH_FAILURE = "auth_failure"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    USER_CREATED = "user_created"
    PROFILE_UPDATED = "profile_updated"
    LOGOUT = "logout"


class SecuritySeverity(Enum):
    """Security event severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SecurityLogger:
    """Specialized logger for security events with structured data."""

    def __init__(self) -> None:
        self.logger = structlog.get_logger("security")

    def _get_client_info(self, request: Optional[Any] = None) -> Dict[str, Any]:
        """Extract client information from request."""
        if not request:
            return {}

        client_info: Dict[str, Any] = {}

        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            client_info["ip_address"] = forwarded_for.split(",")[0].strip()
        elif request.client:
            client_info["ip_address"] = request.client.host
        else:
            client_info["ip_address"] = "unknown"

        client_info["user_agent"] = request.headers.get("user-agent", "unknown")
        return client_info

    def log_security_event(
        self,
        event_type: SecurityEventType,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: SecuritySeverity = SecuritySeverity.MEDIUM,
        request: Optional[Any] = None,
    ) -> str:
        """
        Log a security event with structured data.

        Returns:
            str: Event ID for tracking
        """
        event_id = str(uuid.uuid4())
        client_info = self._get_client_info(request)

        log_data = {
            "event_id": event_id,
            "event_type": event_type.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": severity.value,
            "user_id": user_id,
            "ip_address": client_info.get("ip_address"),
            "user_agent": client_info.get("user_agent"),
            "details": details or {},
        }

        if severity == SecuritySeverity.HIGH:
            self.logger.error("Security event", **log_data)
        elif severity == SecuritySeverity.MEDIUM:
            self.logger.warning("Security event", **log_data)
        else:
            self.logger.info("Security event", **log_data)

        return event_id

    def log_auth_success(
        self, user_id: str, request: Optional[Any] = None
    ) -> str:
        """Log successful authentication."""
        return self.log_security_event(
            SecurityEventType.AUTH_SUCCESS,
            user_id=user_id,
            request=request,
            severity=SecuritySeverity.LOW,
        )

    def log_auth_failure(
        self,
        identifier: str,
        reason: str = "Invalid credentials",
        request: Optional[Any] = None,
    ) -> str:
        """Log failed authentication attempt."""
        return self.log_security_event(
            SecurityEventType.AUTH_FAILURE,
            request=request,
            details={"identifier": identifier, "reason": reason},
            severity=SecuritySeverity.MEDIUM,
        )

    def log_rate_limit_exceeded(
        self, endpoint: str, request: Optional[Any] = None
    ) -> str:
        """Log rate limit violations."""
        return self.log_security_event(
            SecurityEventType.RATE_LIMIT_EXCEEDED,
            request=request,
            details={"endpoint": endpoint},
            severity=SecuritySeverity.MEDIUM,
        )

    def log_user_created(self, user_id: str, request: Optional[Any] = None) -> str:
        """Log a new account registration."""
        return self.log_security_event(
            SecurityEventType.USER_CREATED,
            user_id=user_id,
            request=request,
            severity=SecuritySeverity.LOW,
        )

    def log_logout(self, user_id: Optional[str], request: Optional[Any] = None) -> str:
        """Log an explicit logout."""
        return self.log_security_event(
            SecurityEventType.LOGOUT,
            user_id=user_id,
            request=request,
            severity=SecuritySeverity.LOW,
        )


# Global security logger instance
security_logger = SecurityLogger()
