"""
Preference database engine and sessions.

The default store is a SQLite file next to the working directory. Any
async SQLAlchemy URL works; a SQLite file's parent directory is created
on first use.
"""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from deckprints.config import settings
from deckprints.models.db import Base

logger = logging.getLogger(__name__)


def sqlite_file(url: URL) -> Path | None:
    """Path of a file-backed SQLite database, None for anything else."""
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for a database URL.

    Server databases get pre-ping so dropped connections are replaced.
    """
    url = make_url(database_url)
    path = sqlite_file(url)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(url, echo=settings.debug)

    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True)


engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler returns; rolls back on a database error.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            logger.exception("Rolling back preference session")
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create the preference table if it does not exist yet."""
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Preference database ready at %s", bind.url.render_as_string(hide_password=True))
