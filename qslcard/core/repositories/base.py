"""
Base repository interface for QSL Card Manager.

This module provides the base repository pattern implementation
that all data access repositories should extend.
"""

from abc import ABC
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT], ABC):
    """
    Base repository interface providing common CRUD operations.

    This abstract base class defines the contract that all repositories
    must implement, providing a consistent interface for data access.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        """
        Initialize repository with database session and model.

        Args:
            session: Async database session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model: Any = model

    async def create(self, **kwargs: Any) -> ModelT:
        """
        Create a new entity.

        Args:
            **kwargs: Entity attributes

        Returns:
            Created entity instance
        """
        entity = self.model(**kwargs)
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity  # type: ignore[no-any-return]

    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity identifier

        Returns:
            Entity instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()  # type: ignore[no-any-return]

    async def get_all(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[ModelT]:
        """
        Get all entities with optional pagination.

        Args:
            limit: Maximum number of entities to return
            offset: Number of entities to skip

        Returns:
            List of entities
        """
        stmt = select(self.model).order_by(self.model.id)

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, entity_id: int, **kwargs: Any) -> Optional[ModelT]:
        """
        Update entity by ID.

        Args:
            entity_id: Entity identifier
            **kwargs: Fields to update

        Returns:
            Updated entity instance or None if not found
        """
        stmt = update(self.model).where(self.model.id == entity_id).values(**kwargs)
        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_id(entity_id)

    async def save(self, entity: ModelT, **changes: Any) -> ModelT:
        """
        Apply attribute changes to a loaded entity and persist them.

        Args:
            entity: Entity previously loaded through this session
            **changes: Attributes to set

        Returns:
            The refreshed entity
        """
        for field, value in changes.items():
            setattr(entity, field, value)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        """
        Delete entity by ID.

        Args:
            entity_id: Entity identifier

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        await self.session.commit()

        return bool(result.rowcount > 0)

    async def exists(self, entity_id: int) -> bool:
        """
        Check if entity exists by ID.

        Args:
            entity_id: Entity identifier

        Returns:
            True if exists, False otherwise
        """
        stmt = select(self.model.id).where(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self, **filters: Any) -> int:
        """
        Count entities, optionally filtered by field values.

        Returns:
            Number of matching entities
        """
        stmt = select(func.count()).select_from(self.model)
        for field, value in filters.items():
            stmt = stmt.where(getattr(self.model, field) == value)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_by(self, **filters: Any) -> List[ModelT]:
        """
        Find entities by filters.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            List of matching entities
        """
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one_by(self, **filters: Any) -> Optional[ModelT]:
        """
        Find single entity by filters.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            Matching entity or None if not found
        """
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.session.execute(stmt)
        return result.scalars().first()  # type: ignore[no-any-return]

    async def add_all(self, entities: Sequence[ModelT]) -> int:
        """
        Insert several entities in one transaction.

        Returns:
            Number of entities inserted
        """
        self.session.add_all(entities)
        await self.session.commit()
        return len(entities)
