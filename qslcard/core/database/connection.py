"""
Database connection management for QSL Card Manager.

This module provides a single async-first database architecture with
session management using SQLAlchemy.
"""

from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ..config import get_config
from ..logging import get_logger

logger = get_logger("core.database")

_engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def get_async_database_url() -> str:
    """
    Get async database connection URL from configuration.

    Returns:
        Async database connection string
    """
    return get_config().database.url


def get_async_engine() -> AsyncEngine:
    """
    Get the shared async SQLAlchemy engine, creating it on first use.

    Returns:
        Configured async SQLAlchemy engine with NullPool
    """
    global _engine
    if _engine is not None:
        return _engine

    config = get_config().database
    engine = create_async_engine(
        get_async_database_url(),
        poolclass=NullPool,
        echo=config.echo,
    )

    if config.is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
            """Enforce foreign keys so owner deletes cascade."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @event.listens_for(engine.sync_engine, "checkout")
    def receive_checkout(
        dbapi_connection: Any, connection_record: Any, connection_proxy: Any
    ) -> None:
        """Log connection checkout."""
        logger.debug("Database connection checked out")

    _engine = engine
    logger.info("Database engine created", sqlite=config.is_sqlite)
    return engine


def _get_async_session_local() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global AsyncSessionLocal
    if AsyncSessionLocal is None:
        AsyncSessionLocal = async_sessionmaker(
            bind=get_async_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return AsyncSessionLocal


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get async database session.

    Yields:
        Async database session instance
    """
    session_local = _get_async_session_local()
    async with session_local() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_database() -> None:
    """Create all tables that do not exist yet."""
    from ..auth.models import User  # noqa: F401  registers the users table
    from .models import Base

    engine = get_async_engine()

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error("Failed to create database tables", error=str(e))
        raise


async def check_database() -> bool:
    """
    Run a trivial query against the database.

    Returns:
        True if the database answered
    """
    engine = get_async_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def close_database() -> None:
    """Dispose the engine and drop the cached factories."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connections closed")
    reset_database_factories()


def reset_database_factories() -> None:
    """Reset database engine and session factory to pick up new config."""
    global _engine, AsyncSessionLocal
    _engine = None
    AsyncSessionLocal = None
    logger.debug("Database session factories reset")
