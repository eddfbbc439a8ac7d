"""
Unified configuration management for QSL Card Manager.

This module provides a single, environment-aware configuration system that
consolidates all configuration sources into a clean, validated approach.
"""

import os
import secrets
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Supported environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


def generate_secure_secret() -> str:
    """Generate a cryptographically secure secret key for development."""
    return secrets.token_urlsafe(32)


class LoggingConfig(BaseSettings):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level")
    json_output: bool = Field(default=True, description="Output logs in JSON format")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(env_prefix="LOG_")


class DatabaseConfig(BaseSettings):
    """Configuration for database connection."""

    url: str = Field(
        default="sqlite+aiosqlite:///./qslcard.db",
        description="Async SQLAlchemy database URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    auto_create: bool = Field(
        default=True, description="Create missing tables on application startup"
    )

    model_config = SettingsConfigDict(env_prefix="DB_")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an async driver in the database URL."""
        if not v:
            raise ValueError("Database URL is required")
        scheme = v.split("://", 1)[0]
        if "+" not in scheme:
            raise ValueError(
                f"Database URL must name an async driver, e.g. "
                f"sqlite+aiosqlite or postgresql+asyncpg (got {scheme})"
            )
        return v

    @property
    def is_sqlite(self) -> bool:
        """Check whether the configured database is SQLite."""
        return self.url.startswith("sqlite")


class SecurityConfig(BaseSettings):
    """Configuration for security settings."""

    secret_key: str = Field(
        default_factory=lambda: (
            generate_secure_secret()
            if os.getenv("ENVIRONMENT", "development") != "production"
            else os.getenv("SECURITY_SECRET_KEY", "")
        ),
        description="Secret key for JWT tokens (required in production)",
    )
    jwt_lifetime_seconds: int = Field(
        default=7 * 24 * 3600, description="JWT lifetime in seconds"
    )
    cookie_name: str = Field(default="auth-token", description="Auth cookie name")
    cookie_secure: bool = Field(
        default=False, description="Send the auth cookie over HTTPS only"
    )
    cookie_samesite: str = Field(default="lax", description="Auth cookie SameSite")
    min_password_length: int = Field(default=6, description="Minimum password length")

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate secret key meets security requirements."""
        if not v:
            raise ValueError("Secret key is required")

        if len(v) < 32:
            raise ValueError("Secret key must be at least 32 characters long")

        weak_patterns = [
            "change-me",
            "changeme",
            "password",
            "123456",
            "qslcard",
        ]

        if any(pattern in v.lower() for pattern in weak_patterns):
            raise ValueError("Secret key contains weak patterns and is not secure")

        return v

    @field_validator("cookie_samesite")
    @classmethod
    def validate_samesite(cls, v: str) -> str:
        """Validate the SameSite cookie policy."""
        v = v.lower()
        if v not in ("lax", "strict", "none"):
            raise ValueError("cookie_samesite must be one of: lax, strict, none")
        return v


class APIConfig(BaseSettings):
    """Configuration for the API server."""

    host: str = Field(default="127.0.0.1", description="API server host")
    port: int = Field(default=8000, description="API server port")
    reload: bool = Field(default=True, description="Enable auto-reload in development")
    cors_origins: List[str] = Field(
        default_factory=list, description="Allowed CORS origins"
    )
    cors_credentials: bool = Field(default=True, description="Allow CORS credentials")
    cors_max_age: int = Field(
        default=600, description="CORS preflight cache time in seconds"
    )
    rate_limit_enabled: bool = Field(
        default=True, description="Rate limit authentication endpoints"
    )
    rate_limit_requests: int = Field(
        default=10, description="Requests allowed per window on auth endpoints"
    )
    rate_limit_window_seconds: int = Field(
        default=60, description="Rate limit window in seconds"
    )
    max_upload_bytes: int = Field(
        default=5 * 1024 * 1024, description="Largest accepted log upload"
    )

    model_config = SettingsConfigDict(env_prefix="API_")

    def cors_origins_resolved(self, environment: str = "development") -> List[str]:
        """Get CORS origins based on environment."""
        if self.cors_origins:
            return self.cors_origins

        if environment in ("development", "testing"):
            return [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:8000",
                "http://127.0.0.1:8000",
            ]
        return []


class ExportConfig(BaseSettings):
    """Configuration for PDF and PNG export."""

    font_path: Optional[str] = Field(
        default=None,
        description="TrueType font used for non-Latin text in generated PDFs",
    )
    png_zoom: float = Field(default=2.0, description="PNG rasterization zoom factor")
    default_paper: str = Field(default="A4", description="Default paper size")

    model_config = SettingsConfigDict(env_prefix="EXPORT_")

    @field_validator("png_zoom")
    @classmethod
    def validate_zoom(cls, v: float) -> float:
        """Keep the zoom factor in a sane range."""
        if v <= 0 or v > 8:
            raise ValueError("png_zoom must be between 0 and 8")
        return v

    @field_validator("default_paper")
    @classmethod
    def validate_paper(cls, v: str) -> str:
        """Validate the default paper size."""
        normalized = v.upper() if v.upper() == "A4" else v.capitalize()
        if normalized not in ("A4", "Letter"):
            raise ValueError("default_paper must be A4 or Letter")
        return normalized


class QSLCardConfig(BaseSettings):
    """Main unified configuration class for QSL Card Manager."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Current environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Union[str, Environment]) -> Environment:
        """Validate and convert environment string to enum."""
        if isinstance(v, Environment):
            return v
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid environment: {v}. "
                    f"Must be one of: {[e.value for e in Environment]}"
                )
        raise ValueError(f"Invalid environment type: {type(v)}")

    @field_validator("debug")
    @classmethod
    def validate_debug(cls, v: bool, info: Any) -> bool:
        """Ensure debug is False in production."""
        if v and info.data.get("environment") == Environment.PRODUCTION:
            raise ValueError("Debug mode cannot be enabled in production")
        return v

    def model_post_init(self, __context: Any) -> None:
        """Post-initialization validation."""
        super().model_post_init(__context)
        self._validate_production_cors_config()

    @property
    def cors_origins_resolved(self) -> List[str]:
        """Get resolved CORS origins for this environment."""
        return self.api.cors_origins_resolved(self.environment.value)

    def _validate_production_cors_config(self) -> None:
        """Validate production CORS configuration security."""
        if self.environment != Environment.PRODUCTION:
            return

        cors_origins = self.api.cors_origins
        if not cors_origins:
            raise ValueError(
                "Production environment must specify allowed CORS origins. "
                "Set API_CORS_ORIGINS environment variable."
            )

        if "*" in cors_origins:
            raise ValueError(
                "Production environment cannot allow all CORS origins (*). "
                "Please specify allowed origins explicitly."
            )

        for origin in cors_origins:
            if not origin.startswith("https://"):
                raise ValueError(
                    f"Production CORS origin must use HTTPS: {origin}. "
                    "All production origins must be secure."
                )
            if "localhost" in origin or "127.0.0.1" in origin:
                raise ValueError(
                    f"Production environment cannot allow localhost origins: "
                    f"{origin}. Use production domain names only."
                )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


# Global configuration instance
_config: Optional[QSLCardConfig] = None


def get_config() -> QSLCardConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = QSLCardConfig()
    return _config


def set_config(config: QSLCardConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reload_config() -> QSLCardConfig:
    """Reload configuration from environment variables."""
    global _config
    _config = QSLCardConfig()
    return _config


def get_environment() -> Environment:
    """Get the current environment."""
    return get_config().environment


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().is_development()


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().is_production()


def is_testing() -> bool:
    """Check if running in testing environment."""
    return get_config().is_testing()
