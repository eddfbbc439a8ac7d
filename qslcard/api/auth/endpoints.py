"""
Authentication endpoints for QSL Card Manager API using FastAPI Users.

Registration and login issue a JWT in an HTTP-only cookie; the station
profile is read and replaced through ``/auth/profile``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from ...core.auth.fastapi_users import (
    clear_auth_cookie,
    current_active_user,
    current_optional_user,
    issue_token,
    set_auth_cookie,
)
from ...core.auth.manager import UserCreate, UserManager, get_user_manager
from ...core.auth.models import User
from ...core.auth.validation import normalize_callsign, optional_text
from ...core.dependencies import get_profile_service
from ...core.errors import AuthenticationError
from ...core.logging import get_logger, security_logger
from ...core.services.profile_service import ProfileService
from ..models import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserInfo,
)

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = get_logger("api.auth.endpoints")


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    body: RegisterRequest,
    request: Request,
    response: Response,
    user_manager: UserManager = Depends(get_user_manager),
) -> AuthResponse:
    """
    Create an account and sign it in.

    Raises:
        ConflictError: If the email, username or callsign is taken
        ValidationError: If the callsign or password is rejected
    """
    callsign = optional_text(body.callsign)
    user = await user_manager.create(
        UserCreate(
            email=body.email,
            password=body.password,
            username=body.username,
            callsign=normalize_callsign(callsign) if callsign else None,
            name=optional_text(body.name),
        ),
        safe=True,
        request=request,
    )
    set_auth_cookie(response, await issue_token(user))
    return AuthResponse(
        message="Registration successful", user=UserInfo.model_validate(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    user_manager: UserManager = Depends(get_user_manager),
) -> AuthResponse:
    """
    Sign in with a username, email or callsign.

    Raises:
        AuthenticationError: If the user is unknown or the password is wrong
    """
    try:
        user = await user_manager.authenticate_identifier(body.username, body.password)
    except AuthenticationError as e:
        security_logger.log_auth_failure(body.username, e.message, request=request)
        raise

    set_auth_cookie(response, await issue_token(user))
    security_logger.log_auth_success(str(user.id), request=request)
    logger.info("User logged in", user_id=user.id)
    return AuthResponse(message="Login successful", user=UserInfo.model_validate(user))


@router.delete("/login", response_model=MessageResponse)
@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    user: Optional[User] = Depends(current_optional_user),
) -> MessageResponse:
    """Clear the session cookie. Succeeds even without a session."""
    clear_auth_cookie(response)
    security_logger.log_logout(str(user.id) if user else None, request=request)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(
    user: User = Depends(current_active_user),
) -> UserInfo:
    """
    Get current user information.

    Args:
        user: Current authenticated user

    Returns:
        UserInfo with current user details
    """
    return UserInfo.model_validate(user)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: User = Depends(current_active_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the operator's station profile."""
    return ProfileResponse.model_validate(await service.get_profile(user.id))


@router.put("/profile", response_model=ProfileEnvelope)
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(current_active_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileEnvelope:
    """
    Replace the operator's station profile.

    Raises:
        ValidationError: If the name or callsign is missing or malformed
        ConflictError: If another account uses the callsign
    """
    updated = await service.update_profile(user.id, body.model_dump())
    return ProfileEnvelope(
        message="Profile updated", user=ProfileResponse.model_validate(updated)
    )
