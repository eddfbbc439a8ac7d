"""
Core module for QSL Card Manager.

This module contains configuration, logging, errors, persistence, log
importers, card rendering and the service layer.
"""

from .config import QSLCardConfig
from .errors import (
    AuthenticationError,
    ConflictError,
    ExportError,
    ImportFormatError,
    NotFoundError,
    PayloadTooLargeError,
    QSLCardError,
    ValidationError,
)
from .logging import get_logger, setup_logging

__all__ = [
    "QSLCardConfig",
    "setup_logging",
    "get_logger",
    "QSLCardError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "ConflictError",
    "ImportFormatError",
    "PayloadTooLargeError",
    "ExportError",
]
