"""
Unit tests for the station profile service.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from qslcard.core.errors import ConflictError, NotFoundError, ValidationError
from qslcard.core.repositories.user_repository import UserRepository
from qslcard.core.services.profile_service import ProfileService


@pytest.fixture
def mock_user_repository():
    """Create a mock user repository."""
    repository = AsyncMock(spec=UserRepository)
    repository.get_by_id = AsyncMock()
    repository.is_callsign_taken = AsyncMock(return_value=False)
    repository.save = AsyncMock(
        side_effect=lambda entity, **kw: SimpleNamespace(**{**vars(entity), **kw})
    )
    return repository


@pytest.fixture
def profile_service(mock_user_repository):
    """Create a profile service instance."""
    return ProfileService(mock_user_repository)


@pytest.fixture
def sample_user():
    """A stored operator."""
    return SimpleNamespace(
        id=7,
        username="operator",
        email="operator@example.com",
        name="Old",
        callsign="BH1ABC",
        qth=None,
        locator=None,
        power=None,
        antenna=None,
    )


class TestValidation:
    """Test profile normalization."""

    def test_normalizes_fields(self, profile_service):
        """Test callsign, locator and blank handling."""
        values = profile_service.validate_business_rules(
            {
                "name": " Zhang San ",
                "callsign": "bh1abc/p",
                "locator": "om89ej",
                "qth": "  ",
                "power": "100W",
            }
        )
        assert values == {
            "name": "Zhang San",
            "callsign": "BH1ABC/P",
            "locator": "OM89ej",
            "qth": None,
            "power": "100W",
            "antenna": None,
        }

    def test_name_required(self, profile_service):
        """Test a missing name."""
        with pytest.raises(ValidationError, match="Name is required"):
            profile_service.validate_business_rules({"callsign": "BH1ABC"})

    def test_callsign_required(self, profile_service):
        """Test a missing callsign."""
        with pytest.raises(ValidationError, match="Callsign is required"):
            profile_service.validate_business_rules({"name": "A", "callsign": ""})

    def test_bad_locator(self, profile_service):
        """Test a malformed locator."""
        with pytest.raises(ValidationError, match="Maidenhead"):
            profile_service.validate_business_rules(
                {"name": "A", "callsign": "BH1ABC", "locator": "XX"}
            )


class TestUpdateProfile:
    """Test profile updates."""

    @pytest.mark.asyncio
    async def test_update(self, profile_service, mock_user_repository, sample_user):
        """Test a successful update."""
        mock_user_repository.get_by_id.return_value = sample_user

        user = await profile_service.update_profile(
            7, {"name": "Zhang San", "callsign": "bh1abc", "qth": "Beijing"}
        )

        assert user.name == "Zhang San"
        assert user.qth == "Beijing"
        mock_user_repository.is_callsign_taken.assert_called_once_with(
            "BH1ABC", exclude_user_id=7
        )

    @pytest.mark.asyncio
    async def test_callsign_conflict(
        self, profile_service, mock_user_repository, sample_user
    ):
        """Test a callsign used by another account."""
        mock_user_repository.get_by_id.return_value = sample_user
        mock_user_repository.is_callsign_taken.return_value = True

        with pytest.raises(ConflictError, match="already used"):
            await profile_service.update_profile(
                7, {"name": "A", "callsign": "BH9XYZ"}
            )
        mock_user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_user(self, profile_service, mock_user_repository):
        """Test a deleted account."""
        mock_user_repository.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match="User not found"):
            await profile_service.get_profile(7)
