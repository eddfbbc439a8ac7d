"""
Unit tests for base repository functionality.

This module tests the BaseRepository class and its common CRUD operations.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from qslcard.core.database.models import QslLog
from qslcard.core.repositories.base import BaseRepository


class LogRepository(BaseRepository[QslLog]):
    """Repository over a real model for testing base functionality."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, QslLog)


@pytest.fixture
def mock_session():
    """Create a mock async session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def repository(mock_session):
    """Create a repository instance."""
    return LogRepository(mock_session)


class TestBaseRepository:
    """Test base repository functionality."""

    def test_init(self, mock_session):
        """Test repository initialization."""
        repo = LogRepository(mock_session)
        assert repo.session == mock_session
        assert repo.model == QslLog

    @pytest.mark.asyncio
    async def test_create(self, repository, mock_session):
        """Test entity creation."""
        # Act
        result = await repository.create(user_id=1, contact_call="K1AB")

        # Assert
        mock_session.add.assert_called_once_with(result)
        mock_session.commit.assert_called_once()
        mock_session.refresh.assert_called_once_with(result)
        assert isinstance(result, QslLog)
        assert result.contact_call == "K1AB"

    @pytest.mark.asyncio
    async def test_get_by_id(self, repository, mock_session):
        """Test getting entity by ID."""
        # Arrange
        log = QslLog(id=3, contact_call="K1AB")
        mock_session.execute.return_value = MagicMock(
            scalar_one_or_none=MagicMock(return_value=log)
        )

        # Act
        result = await repository.get_by_id(3)

        # Assert
        assert result is log
        mock_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_save(self, repository, mock_session):
        """Test applying changes to a loaded entity."""
        # Arrange
        log = QslLog(id=3, contact_call="K1AB", mode="SSB")

        # Act
        result = await repository.save(log, mode="CW")

        # Assert
        assert result is log
        assert log.mode == "CW"
        mock_session.commit.assert_called_once()
        mock_session.refresh.assert_called_once_with(log)

    @pytest.mark.asyncio
    async def test_delete(self, repository, mock_session):
        """Test deleting an existing entity."""
        # Arrange
        mock_session.execute.return_value = MagicMock(rowcount=1)

        # Act
        result = await repository.delete(3)

        # Assert
        assert result is True
        mock_session.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete_not_found(self, repository, mock_session):
        """Test deleting a missing entity."""
        # Arrange
        mock_session.execute.return_value = MagicMock(rowcount=0)

        # Act & Assert
        assert await repository.delete(99) is False

    @pytest.mark.asyncio
    async def test_exists(self, repository, mock_session):
        """Test the existence check."""
        # Arrange
        mock_session.execute.return_value = MagicMock(
            scalar_one_or_none=MagicMock(return_value=3)
        )

        # Act & Assert
        assert await repository.exists(3) is True

    @pytest.mark.asyncio
    async def test_count(self, repository, mock_session):
        """Test counting with a filter."""
        # Arrange
        mock_session.execute.return_value = MagicMock(
            scalar_one=MagicMock(return_value=12)
        )

        # Act
        result = await repository.count(user_id=1)

        # Assert
        assert result == 12

    @pytest.mark.asyncio
    async def test_find_by(self, repository, mock_session):
        """Test finding entities by filters."""
        # Arrange
        logs = [QslLog(id=1), QslLog(id=2)]
        scalars = MagicMock()
        scalars.all.return_value = logs
        mock_session.execute.return_value = MagicMock(
            scalars=MagicMock(return_value=scalars)
        )

        # Act
        result = await repository.find_by(user_id=1, not_a_column="ignored")

        # Assert
        assert result == logs

    @pytest.mark.asyncio
    async def test_add_all(self, repository, mock_session):
        """Test bulk insertion."""
        # Arrange
        logs = [QslLog(contact_call="K1AB"), QslLog(contact_call="K2CD")]

        # Act
        result = await repository.add_all(logs)

        # Assert
        assert result == 2
        mock_session.add_all.assert_called_once_with(logs)
        mock_session.commit.assert_called_once()
