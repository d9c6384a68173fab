"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and the FastAPI
dependency for request-scoped session injection.

Dependencies: sqlalchemy, invoice_extractor.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from invoice_extractor.boundary.db.base import Base
from invoice_extractor.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the async engine once per process.

    Uses the default async queue pool with pre-ping so stale connections are
    detected before use. SQLite URLs skip the pool sizing options.

    Returns:
        AsyncEngine: Configured async engine
    """
    db_config = get_settings().database

    engine_kwargs: dict = {"echo": db_config.echo_sql, "pool_pre_ping": True}
    if not db_config.is_sqlite:
        engine_kwargs.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
        )

    return create_async_engine(db_config.async_database_url, **engine_kwargs)


def get_async_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    expire_on_commit=False keeps loaded attributes usable after commit, which
    the pipeline relies on between its progress commits.

    Args:
        engine: Engine to bind (defaults to the process engine)

    Returns:
        async_sessionmaker: Async session factory with manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Routes commit explicitly; an exception rolls back whatever is pending.

    Yields:
        AsyncSession: Async session scoped to the request lifetime

    Usage:
        @router.get("/jobs/{job_id}")
        async def get_job(job_id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await job_crud.get_by_id(db, job_id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create every registered table that does not exist yet.

    Args:
        engine: Engine to use (defaults to the process engine)
    """
    # Register every model with the metadata before create_all
    import invoice_extractor.boundary.db.models  # noqa: F401

    async with (engine or get_async_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
