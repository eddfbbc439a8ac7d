"""
Service factory for QSL Card Manager.

This module provides a factory for creating service instances
with proper dependency injection and configuration.
"""

from typing import Any, Dict, Type

from ..repositories.factory import RepositoryFactory
from .export_service import ExportService
from .profile_service import ProfileService
from .qsl_log_service import QslLogService
from .template_service import TemplateService


class ServiceFactory:
    """
    Factory for creating service instances.

    Services are cached per factory, which lives for one request.
    """

    def __init__(self, repository_factory: RepositoryFactory):
        """
        Initialize service factory.

        Args:
            repository_factory: Repository factory instance
        """
        self.repository_factory = repository_factory
        self._services: Dict[Type, Any] = {}

    def get_qsl_log_service(self) -> QslLogService:
        """Get QSL log service instance."""
        if QslLogService not in self._services:
            self._services[QslLogService] = QslLogService(
                self.repository_factory.get_qsl_log_repository()
            )
        return self._services[QslLogService]  # type: ignore[no-any-return]

    def get_template_service(self) -> TemplateService:
        """Get card template service instance."""
        if TemplateService not in self._services:
            self._services[TemplateService] = TemplateService(
                self.repository_factory.get_card_template_repository()
            )
        return self._services[TemplateService]  # type: ignore[no-any-return]

    def get_profile_service(self) -> ProfileService:
        """Get profile service instance."""
        if ProfileService not in self._services:
            self._services[ProfileService] = ProfileService(
                self.repository_factory.get_user_repository()
            )
        return self._services[ProfileService]  # type: ignore[no-any-return]

    def get_export_service(self) -> ExportService:
        """Get export service instance."""
        if ExportService not in self._services:
            self._services[ExportService] = ExportService(
                self.repository_factory.get_qsl_log_repository(),
                self.repository_factory.get_card_template_repository(),
            )
        return self._services[ExportService]  # type: ignore[no-any-return]

    def clear_cache(self) -> None:
        """Clear service instance cache."""
        self._services.clear()


def get_service_factory(repository_factory: RepositoryFactory) -> ServiceFactory:
    """
    Get service factory instance for dependency injection.

    Args:
        repository_factory: Repository factory instance

    Returns:
        ServiceFactory instance
    """
    return ServiceFactory(repository_factory)
