"""
Base service interface for QSL Card Manager.

This module defines the base service class that provides common
service operations and patterns for all business logic services.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from ..errors import NotFoundError
from ..repositories.base import BaseRepository

T = TypeVar("T")


class BaseService(Generic[T], ABC):
    """
    Base service class providing common service operations.

    Subclasses own the validation and normalization of incoming field
    values through ``validate_business_rules``.
    """

    not_found_message = "Not found"

    def __init__(self, repository: BaseRepository[T]):
        """
        Initialize service with repository.

        Args:
            repository: Repository instance for data access
        """
        self.repository = repository

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity identifier

        Returns:
            Entity instance or None if not found
        """
        return await self.repository.get_by_id(entity_id)

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching the filters.

        Returns:
            Number of matching entities
        """
        return await self.repository.count(**filters)

    def ensure_found(self, entity: Optional[T], message: Optional[str] = None) -> T:
        """
        Return the entity or raise if it is missing.

        Raises:
            NotFoundError: If ``entity`` is None
        """
        if entity is None:
            raise NotFoundError(message or self.not_found_message)
        return entity

    @abstractmethod
    def validate_business_rules(
        self, data: Dict[str, Any], partial: bool = False
    ) -> Dict[str, Any]:
        """
        Validate and normalize field values.

        Args:
            data: Field values keyed by column name
            partial: Only the given fields are being changed

        Returns:
            Normalized field values

        Raises:
            ValidationError: If business rules are violated
        """
