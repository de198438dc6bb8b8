"""
Core pytest configuration for the entire test suite.

Provides logging setup and the database fixtures shared by every test module.
Domain-specific fixtures (repositories, validators, sample rows) live in
tests/test_fixtures/ and are imported at the bottom of this file so they are
available everywhere.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Silence noisy third-party loggers before they are imported by the modules below.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from orm_validators.config.settings import get_settings
from orm_validators.core.logging.builder import setup_logging
from .test_fixtures.models import ModelBase

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the package logging configuration once for the whole session,
    so formatters and filters behave as they do for a host application.
    caplog installs its own handler per test, after this runs.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


def get_test_database_url() -> str:
    """
    1. TEST_DATABASE_URL from settings/environment (CI override)
    2. in-memory SQLite through aiosqlite
    """
    return settings.TEST_DATABASE_URL or "sqlite+aiosqlite://"


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    url = get_test_database_url()
    if url.startswith("sqlite"):
        # one shared connection, otherwise every connection sees its own empty in-memory DB
        engine = create_async_engine(url, poolclass=StaticPool)
    else:
        engine = create_async_engine(url, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(ModelBase.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(ModelBase.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session per test; everything it wrote is rolled back, then tables are dropped."""
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


# Repository / validator fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    object_manager,
    user_repository,
    tag_repository,
    membership_repository,
    sample_user_data,
    create_user,
    created_user,
    create_tag,
    create_membership,
)
