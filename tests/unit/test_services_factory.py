"""
Unit tests for service factory functionality.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from qslcard.core.repositories.factory import RepositoryFactory
from qslcard.core.services.export_service import ExportService
from qslcard.core.services.factory import ServiceFactory, get_service_factory
from qslcard.core.services.profile_service import ProfileService
from qslcard.core.services.qsl_log_service import QslLogService
from qslcard.core.services.template_service import TemplateService


@pytest.fixture
def repository_factory():
    """Create a repository factory over a mock session."""
    return RepositoryFactory(AsyncMock(spec=AsyncSession))


@pytest.fixture
def service_factory(repository_factory):
    """Create a service factory instance."""
    return ServiceFactory(repository_factory)


class TestServiceFactory:
    """Test service factory functionality."""

    def test_init(self, repository_factory):
        """Test factory initialization."""
        factory = ServiceFactory(repository_factory)
        assert factory.repository_factory == repository_factory
        assert factory._services == {}

    def test_services(self, service_factory):
        """Test each service type."""
        assert isinstance(service_factory.get_qsl_log_service(), QslLogService)
        assert isinstance(service_factory.get_template_service(), TemplateService)
        assert isinstance(service_factory.get_profile_service(), ProfileService)
        assert isinstance(service_factory.get_export_service(), ExportService)

    def test_services_are_cached(self, service_factory):
        """Test that repeated calls return the same instance."""
        first = service_factory.get_qsl_log_service()
        assert service_factory.get_qsl_log_service() is first

    def test_clear_cache(self, service_factory):
        """Test clearing the service cache."""
        first = service_factory.get_template_service()
        service_factory.clear_cache()
        assert service_factory.get_template_service() is not first

    def test_shared_session(self, service_factory, repository_factory):
        """Test that services share the factory session."""
        export = service_factory.get_export_service()
        assert export.log_repository.session is repository_factory.session
        assert export.template_repository.session is repository_factory.session

    def test_get_service_factory(self, repository_factory):
        """Test the dependency injection helper."""
        assert isinstance(get_service_factory(repository_factory), ServiceFactory)
