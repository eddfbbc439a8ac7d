"""
Dependency injection for QSL Card Manager.

This module provides FastAPI dependency functions wiring the request's
database session through repositories into services.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .auth.fastapi_users import current_active_user
from .auth.models import User
from .database.connection import get_async_session
from .repositories.factory import RepositoryFactory
from .services.export_service import ExportService
from .services.factory import ServiceFactory
from .services.profile_service import ProfileService
from .services.qsl_log_service import QslLogService
from .services.template_service import TemplateService


async def get_services(
    session: AsyncSession = Depends(get_async_session),
) -> ServiceFactory:
    """
    Get a service factory bound to the request's session.

    Args:
        session: Database session for this request

    Returns:
        ServiceFactory instance
    """
    return ServiceFactory(RepositoryFactory(session))


async def get_qsl_log_service(
    services: ServiceFactory = Depends(get_services),
) -> QslLogService:
    """Get QSL log service dependency."""
    return services.get_qsl_log_service()


async def get_template_service(
    services: ServiceFactory = Depends(get_services),
) -> TemplateService:
    """Get card template service dependency."""
    return services.get_template_service()


async def get_profile_service(
    services: ServiceFactory = Depends(get_services),
) -> ProfileService:
    """Get profile service dependency."""
    return services.get_profile_service()


async def get_export_service(
    services: ServiceFactory = Depends(get_services),
) -> ExportService:
    """Get export service dependency."""
    return services.get_export_service()


async def get_current_user(user: User = Depends(current_active_user)) -> User:
    """
    Get current authenticated user.

    Args:
        user: Current authenticated user from FastAPI Users

    Returns:
        Current user instance
    """
    return user
