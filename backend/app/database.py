"""
Inkwell Backend - Database Session Management
===============================================

What:  Async SQLAlchemy engine lifecycle, session factory, and FastAPI dependency.
How:   The engine is opened once in the application lifespan (init_engine)
       and disposed at shutdown (dispose_engine). Each request gets its own
       AsyncSession that commits on success and rolls back on error.
Who:   Route handlers receive sessions via Depends(get_db_session); services
       take the session as an explicit argument.

Tests override get_db_session with a session bound to an in-memory SQLite
engine, so no live database is required.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations
    and init_engine uses when DB_CREATE_TABLES is enabled.
    """
    pass


# Populated by init_engine(); None until the application has started
engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options only apply to server databases; SQLite picks its own pool."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


async def init_engine(url: Optional[str] = None, create_tables: Optional[bool] = None) -> AsyncEngine:
    """
    Open the process-wide engine and session factory.

    Args:
        url: Database URL; defaults to settings.database_url
        create_tables: Run metadata.create_all(); defaults to settings.db_create_tables
    """
    global engine, async_session_factory

    url = url or settings.database_url
    engine = create_async_engine(url, **_engine_options(url))
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    if settings.db_create_tables if create_tables is None else create_tables:
        # Import models so their tables are registered on Base.metadata
        from app.models import post, user  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    logger.info("Database engine initialized (%s)", engine.url.render_as_string(hide_password=True))
    return engine


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Creates a new session from the factory
    2. Yields it to the route handler
    3. On success: commits the transaction
    4. On error: rolls back and re-raises for the global error handlers
    5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/blogs")
        async def list_blogs(db: AsyncSession = Depends(get_db_session)):
            return await post_service.list_posts(db)
    """
    if async_session_factory is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Close every pooled connection. Called during application shutdown."""
    global engine, async_session_factory
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    async_session_factory = None
