"""
Station profile service for QSL Card Manager.
"""

from typing import Any, Dict

from ..auth.models import User
from ..auth.validation import normalize_callsign, normalize_locator, optional_text
from ..errors import ConflictError, ValidationError
from ..logging import SecurityEventType, SecuritySeverity, get_logger, security_logger
from ..repositories.user_repository import UserRepository
from .base import BaseService

logger = get_logger("core.services.profile")

PROFILE_FIELDS = ("name", "callsign", "qth", "locator", "power", "antenna")


class ProfileService(BaseService[User]):
    """Service for reading and editing the operator's station profile."""

    not_found_message = "User not found"

    def __init__(self, repository: UserRepository):
        super().__init__(repository)
        self.repository: UserRepository = repository

    def validate_business_rules(
        self, data: Dict[str, Any], partial: bool = False
    ) -> Dict[str, Any]:
        """
        Validate and normalize profile fields.

        Name and callsign are required. Blank optional fields become None.

        Raises:
            ValidationError: If a required field is blank or a callsign or
                locator is malformed
        """
        values = {k: data.get(k) for k in PROFILE_FIELDS if k in data or not partial}

        if "name" in values:
            name = optional_text(values["name"])
            if not name:
                raise ValidationError("Name is required", details={"field": "name"})
            values["name"] = name

        if "callsign" in values:
            callsign = optional_text(values["callsign"])
            if not callsign:
                raise ValidationError(
                    "Callsign is required", details={"field": "callsign"}
                )
            values["callsign"] = normalize_callsign(callsign)

        if "locator" in values:
            locator = optional_text(values["locator"])
            values["locator"] = normalize_locator(locator) if locator else None

        for name in ("qth", "power", "antenna"):
            if name in values:
                values[name] = optional_text(values[name])

        return values

    async def get_profile(self, user_id: int) -> User:
        """Get the operator's account and profile."""
        return self.ensure_found(await self.repository.get_by_id(user_id))

    async def update_profile(self, user_id: int, data: Dict[str, Any]) -> User:
        """
        Replace the operator's profile fields.

        Raises:
            ConflictError: If another account already uses the callsign
        """
        user = await self.get_profile(user_id)
        values = self.validate_business_rules(data)

        if await self.repository.is_callsign_taken(
            values["callsign"], exclude_user_id=user_id
        ):
            raise ConflictError(
                "Callsign is already used by another account",
                details={"field": "callsign"},
            )

        user = await self.repository.save(user, **values)
        security_logger.log_security_event(
            SecurityEventType.PROFILE_UPDATED,
            user_id=str(user_id),
            details={"callsign": user.callsign},
            severity=SecuritySeverity.LOW,
        )
        logger.info("Profile updated", user_id=user_id)
        return user
