"""
FastAPI Users user manager for QSL Card Manager.

Extends the stock manager with username/callsign uniqueness, login by any
identifier, and seeding a starter card template for new accounts.
"""

from typing import Any, AsyncGenerator, Optional, Union

from fastapi import Depends, Request
from fastapi_users import BaseUserManager, IntegerIDMixin, exceptions, schemas
from fastapi_users.db import SQLAlchemyUserDatabase
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_config
from ..database.connection import get_async_session
from ..errors import AuthenticationError, ConflictError, ValidationError
from ..logging import get_logger, security_logger
from ..rendering.defaults import (
    DEFAULT_CSS,
    DEFAULT_HTML,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_NAME,
)
from ..repositories.card_template_repository import CardTemplateRepository
from ..repositories.user_repository import UserRepository
from .models import User

logger = get_logger("core.auth.manager")


class UserCreate(schemas.BaseUserCreate):
    """Registration payload passed to the user manager."""

    username: str
    callsign: Optional[str] = None
    name: Optional[str] = None


class UserManager(IntegerIDMixin, BaseUserManager[User, int]):
    """User manager with operator-specific rules."""

    def __init__(self, user_db: SQLAlchemyUserDatabase) -> None:
        super().__init__(user_db)
        secret = get_config().security.secret_key
        self.reset_password_token_secret = secret
        self.verification_token_secret = secret

    @property
    def users(self) -> UserRepository:
        return UserRepository(self.user_db.session)

    async def validate_password(
        self, password: str, user: Union[schemas.UC, User]
    ) -> None:
        """Reject passwords shorter than the configured minimum."""
        min_length = get_config().security.min_password_length
        if len(password) < min_length:
            raise exceptions.InvalidPasswordException(
                reason=f"Password must be at least {min_length} characters"
            )

    async def create(
        self,
        user_create: schemas.UC,
        safe: bool = False,
        request: Optional[Request] = None,
    ) -> User:
        """
        Create an account after checking every unique identifier.

        Raises:
            ConflictError: If the email, username or callsign is taken
            ValidationError: If the password is rejected
        """
        username = getattr(user_create, "username", None)
        callsign = getattr(user_create, "callsign", None)

        if username and await self.users.is_username_taken(username):
            raise ConflictError(
                "Username is already taken", details={"field": "username"}
            )
        if callsign and await self.users.is_callsign_taken(callsign):
            raise ConflictError(
                "Callsign is already registered", details={"field": "callsign"}
            )

        try:
            return await super().create(user_create, safe=safe, request=request)
        except exceptions.UserAlreadyExists:
            raise ConflictError(
                "Email is already registered", details={"field": "email"}
            )
        except exceptions.InvalidPasswordException as e:
            raise ValidationError(str(e.reason), details={"field": "password"})

    async def authenticate_identifier(self, identifier: str, password: str) -> User:
        """
        Authenticate with a username, email or callsign.

        Args:
            identifier: Username, email or callsign
            password: Plain password

        Returns:
            The authenticated user

        Raises:
            AuthenticationError: If the user is unknown, inactive or the
                password is wrong
        """
        user = await self.users.get_by_identifier(identifier)
        if user is None:
            # Hash anyway so unknown users cost the same time as known ones
            self.password_helper.hash(password)
            raise AuthenticationError("User not found")

        verified, updated_hash = self.password_helper.verify_and_update(
            password, user.hashed_password
        )
        if not verified:
            raise AuthenticationError("Wrong password")
        if not user.is_active:
            raise AuthenticationError("Account is inactive")

        if updated_hash is not None:
            await self.user_db.update(user, {"hashed_password": updated_hash})
        return user

    async def on_after_register(
        self, user: User, request: Optional[Request] = None
    ) -> None:
        """Give the new operator a default card template."""
        await CardTemplateRepository(self.user_db.session).create(
            user_id=user.id,
            name=DEFAULT_TEMPLATE_NAME,
            description=DEFAULT_TEMPLATE_DESCRIPTION,
            html_content=DEFAULT_HTML,
            css_content=DEFAULT_CSS,
            is_default=True,
            is_public=False,
        )
        security_logger.log_user_created(str(user.id), request=request)
        logger.info("User registered", user_id=user.id, username=user.username)


async def get_user_db(
    session: AsyncSession = Depends(get_async_session),
) -> AsyncGenerator[SQLAlchemyUserDatabase, None]:
    """Get user database adapter."""
    yield SQLAlchemyUserDatabase(session, User)


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase = Depends(get_user_db),
) -> AsyncGenerator[UserManager, Any]:
    """Get user manager instance."""
    yield UserManager(user_db)
