"""
FastAPI Users configuration for QSL Card Manager.

Authentication is a JWT carried in the ``auth-token`` cookie.
"""

from fastapi import Response
from fastapi_users import FastAPIUsers
from fastapi_users.authentication import (
    AuthenticationBackend,
    CookieTransport,
    JWTStrategy,
)

from ..config import get_config
from .manager import get_user_manager
from .models import User

_security = get_config().security

cookie_transport = CookieTransport(
    cookie_name=_security.cookie_name,
    cookie_max_age=_security.jwt_lifetime_seconds,
    cookie_secure=_security.cookie_secure,
    cookie_httponly=True,
    cookie_samesite=_security.cookie_samesite,  # type: ignore[arg-type]
)


def get_jwt_strategy() -> JWTStrategy:
    """Get JWT strategy signed with the configured secret."""
    security = get_config().security
    return JWTStrategy(
        secret=security.secret_key, lifetime_seconds=security.jwt_lifetime_seconds
    )


auth_backend = AuthenticationBackend(
    name="cookie",
    transport=cookie_transport,
    get_strategy=get_jwt_strategy,
)

fastapi_users = FastAPIUsers[User, int](get_user_manager, [auth_backend])

current_active_user = fastapi_users.current_user(active=True)
current_optional_user = fastapi_users.current_user(active=True, optional=True)


async def issue_token(user: User) -> str:
    """Create a session token for the user."""
    return await get_jwt_strategy().write_token(user)


def set_auth_cookie(response: Response, token: str) -> None:
    """Attach the session token cookie to a response."""
    security = get_config().security
    response.set_cookie(
        key=security.cookie_name,
        value=token,
        max_age=security.jwt_lifetime_seconds,
        path="/",
        secure=security.cookie_secure,
        httponly=True,
        samesite=security.cookie_samesite,  # type: ignore[arg-type]
    )


def clear_auth_cookie(response: Response) -> None:
    """Expire the session token cookie."""
    security = get_config().security
    response.delete_cookie(
        key=security.cookie_name,
        path="/",
        secure=security.cookie_secure,
        httponly=True,
        samesite=security.cookie_samesite,  # type: ignore[arg-type]
    )
