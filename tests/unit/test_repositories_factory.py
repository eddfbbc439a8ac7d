"""
Unit tests for repository factory functionality.

This module tests the RepositoryFactory class and its repository creation methods.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from qslcard.core.repositories.card_template_repository import CardTemplateRepository
from qslcard.core.repositories.factory import RepositoryFactory, get_repository_factory
from qslcard.core.repositories.qsl_log_repository import QslLogRepository
from qslcard.core.repositories.user_repository import UserRepository


@pytest.fixture
def mock_session():
    """Create a mock async session."""
    session = AsyncMock(spec=AsyncSession)
    return session


@pytest.fixture
def repository_factory(mock_session):
    """Create a repository factory instance."""
    return RepositoryFactory(mock_session)


class TestRepositoryFactory:
    """Test repository factory functionality."""

    def test_init(self, mock_session):
        """Test factory initialization."""
        factory = RepositoryFactory(mock_session)
        assert factory.session == mock_session

    def test_get_user_repository(self, repository_factory):
        """Test getting user repository instance."""
        user_repo = repository_factory.get_user_repository()

        assert isinstance(user_repo, UserRepository)
        assert user_repo.session == repository_factory.session
        assert user_repo.model.__name__ == "User"

    def test_get_qsl_log_repository(self, repository_factory):
        """Test getting QSL log repository instance."""
        log_repo = repository_factory.get_qsl_log_repository()

        assert isinstance(log_repo, QslLogRepository)
        assert log_repo.model.__name__ == "QslLog"

    def test_get_card_template_repository(self, repository_factory):
        """Test getting card template repository instance."""
        template_repo = repository_factory.get_card_template_repository()

        assert isinstance(template_repo, CardTemplateRepository)
        assert template_repo.model.__name__ == "CardTemplate"

    @pytest.mark.parametrize(
        "repository_class",
        [UserRepository, QslLogRepository, CardTemplateRepository],
    )
    def test_get_repository_by_class(self, repository_factory, repository_class):
        """Test getting repository by class."""
        repo = repository_factory.get_repository(repository_class)

        assert isinstance(repo, repository_class)
        assert repo.session == repository_factory.session

    def test_get_repository_unsupported_class(self, repository_factory):
        """Test getting repository with unsupported class."""
        with pytest.raises(ValueError, match="Unsupported repository class"):
            repository_factory.get_repository(str)

    def test_create_repository(self, repository_factory):
        """Test creating a repository instance."""
        log_repo = repository_factory.create_repository(QslLogRepository)

        assert isinstance(log_repo, QslLogRepository)
        assert log_repo.session == repository_factory.session

    def test_get_repository_factory(self, mock_session):
        """Test the dependency injection helper."""
        factory = get_repository_factory(mock_session)
        assert isinstance(factory, RepositoryFactory)
        assert factory.session == mock_session
