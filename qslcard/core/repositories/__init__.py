"""
Repository package for QSL Card Manager.

This package provides data access repositories over the async SQLAlchemy
session.
"""

from .base import BaseRepository
from .card_template_repository import CardTemplateRepository
from .factory import RepositoryFactory, get_repository_factory
from .qsl_log_repository import QslLogRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CardTemplateRepository",
    "QslLogRepository",
    "RepositoryFactory",
    "UserRepository",
    "get_repository_factory",
]
