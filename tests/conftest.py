"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite engine and sessions, pipeline settings, a scripted
completion client and mock services
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock

import pytest


class ScriptedCompletionClient:
    """
    CompletionClient returning canned responses in order.

    An Exception in the script is raised instead of returned. The last
    response repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or ["[]"]
        self.calls: list[dict] = []

    async def complete(
        self,
        instructions,
        content,
        *,
        temperature,
        max_tokens,
        json_mode=True,
        attachment=None,
    ):
        self.calls.append({
            "instructions": instructions,
            "content": content,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
            "attachment": attachment,
        })
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def scripted_client():
    """Factory for ScriptedCompletionClient."""
    return ScriptedCompletionClient


@pytest.fixture
def pipeline_settings():
    """Pipeline settings without the finalization pause."""
    from invoice_extractor.core.extraction.configs import ExtractionPipelineSettings

    return ExtractionPipelineSettings(
        dispatch_mode="background",
        batch_concurrency=1,
        finalize_delay_seconds=0.0,
    )


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of the test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from invoice_extractor.boundary.db import models  # noqa: F401
    from invoice_extractor.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    from invoice_extractor.boundary.db.connection import get_async_session_factory

    return get_async_session_factory(test_engine)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db():
    """AsyncSession stand-in for service tests."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def job_id():
    """Generate a test job ID."""
    return uuid.uuid4()
