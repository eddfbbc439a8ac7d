"""
Repository factory for QSL Card Manager.

This module provides a factory for creating repository instances
and managing their lifecycle for dependency injection.
"""

from typing import Any, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from .card_template_repository import CardTemplateRepository
from .qsl_log_repository import QslLogRepository
from .user_repository import UserRepository

R = TypeVar("R", bound=BaseRepository)


class RepositoryFactory:
    """
    Factory for creating repository instances.

    All repositories built by one factory share its session.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository factory with database session.

        Args:
            session: Async database session
        """
        self.session = session

    def get_user_repository(self) -> UserRepository:
        """Get user repository instance."""
        return UserRepository(self.session)

    def get_qsl_log_repository(self) -> QslLogRepository:
        """Get QSL log repository instance."""
        return QslLogRepository(self.session)

    def get_card_template_repository(self) -> CardTemplateRepository:
        """Get card template repository instance."""
        return CardTemplateRepository(self.session)

    def get_repository(self, repository_class: Type[R]) -> R:
        """
        Get repository instance by class.

        Args:
            repository_class: Repository class to instantiate

        Returns:
            Repository instance

        Raises:
            ValueError: If repository class is not supported
        """
        if repository_class in (
            UserRepository,
            QslLogRepository,
            CardTemplateRepository,
        ):
            return repository_class(self.session)  # type: ignore[call-arg]

        raise ValueError(f"Unsupported repository class: {repository_class}")

    def create_repository(
        self, repository_class: Type[R], *args: Any, **kwargs: Any
    ) -> R:
        """Create custom repository instance."""
        return repository_class(self.session, *args, **kwargs)


def get_repository_factory(session: AsyncSession) -> RepositoryFactory:
    """
    Get repository factory instance for dependency injection.

    Args:
        session: Async database session

    Returns:
        RepositoryFactory instance
    """
    return RepositoryFactory(session)
