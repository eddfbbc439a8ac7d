"""
Configuration package for QSL Card Manager.

This package provides centralized configuration management for the API,
database, security, export and logging settings.
"""

from .settings import (
    APIConfig,
    DatabaseConfig,
    Environment,
    ExportConfig,
    LoggingConfig,
    QSLCardConfig,
    SecurityConfig,
    get_config,
    get_environment,
    is_development,
    is_production,
    is_testing,
    reload_config,
    set_config,
)

__all__ = [
    # Main configuration classes
    "QSLCardConfig",
    "Environment",
    # Component configurations
    "APIConfig",
    "DatabaseConfig",
    "ExportConfig",
    "LoggingConfig",
    "SecurityConfig",
    # Configuration functions
    "get_config",
    "get_environment",
    "is_development",
    "is_production",
    "is_testing",
    "reload_config",
    "set_config",
]
