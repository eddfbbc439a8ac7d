"""
Database package for QSL Card Manager.

This package provides the SQLAlchemy models and async session utilities.
"""

from .connection import (
    check_database,
    close_database,
    get_async_engine,
    get_async_session,
    init_database,
    reset_database_factories,
)
from .models import Base, CardTemplate, QslLog

__all__ = [
    "Base",
    "CardTemplate",
    "QslLog",
    "check_database",
    "close_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
    "reset_database_factories",
]
