"""
User repository for QSL Card Manager.

This module provides operator account lookups used by login, registration
and profile updates.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    User repository providing account-specific data access operations.

    Usernames are matched exactly, emails and callsigns case-insensitively.
    """

    def __init__(self, session: AsyncSession):
        """Initialize user repository with session."""
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: User's email address

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        return await self.find_one_by(username=username.strip())

    async def get_by_callsign(self, callsign: str) -> Optional[User]:
        """Get user by callsign."""
        return await self.find_one_by(callsign=callsign.strip().upper())

    async def get_by_identifier(self, identifier: str) -> Optional[User]:
        """
        Get user by username, email or callsign.

        Args:
            identifier: Any of the three login identifiers

        Returns:
            The user whose username matches, else whose email matches, else
            whose callsign matches; None if nothing matches
        """
        value = identifier.strip()
        if not value:
            return None
        for lookup in (self.get_by_username, self.get_by_email, self.get_by_callsign):
            user = await lookup(value)
            if user is not None:
                return user
        return None

    async def is_username_taken(self, username: str) -> bool:
        """Check whether a username is already registered."""
        return await self.get_by_username(username) is not None

    async def is_callsign_taken(
        self, callsign: str, exclude_user_id: Optional[int] = None
    ) -> bool:
        """
        Check whether a callsign belongs to another account.

        Args:
            callsign: Callsign to check
            exclude_user_id: Account allowed to hold the callsign already

        Returns:
            True if another account uses the callsign
        """
        stmt = select(User.id).where(User.callsign == callsign.strip().upper())
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        result = await self.session.execute(stmt)
        return result.first() is not None
