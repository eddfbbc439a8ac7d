"""
Service package for QSL Card Manager.

This package contains the business logic layer sitting between the API
routes and the repositories.
"""

from .base import BaseService
from .export_service import ExportedFile, ExportService
from .factory import ServiceFactory, get_service_factory
from .profile_service import ProfileService
from .qsl_log_service import ImportSummary, LogPage, QslLogService
from .template_service import TemplateService

__all__ = [
    "BaseService",
    "ExportService",
    "ExportedFile",
    "ImportSummary",
    "LogPage",
    "ProfileService",
    "QslLogService",
    "ServiceFactory",
    "TemplateService",
    "get_service_factory",
]
