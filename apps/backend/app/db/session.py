"""Database engines and request-scoped sessions."""

from collections.abc import AsyncGenerator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings

settings = get_settings()

_echo_sql = settings.log_level.upper() == "DEBUG"

# Async engine for request handlers
async_engine = create_async_engine(
    settings.database_url,
    echo=_echo_sql,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Sync engine for the table creation and seed script
sync_engine = create_engine(
    settings.database_url_sync,
    echo=_echo_sql,
    pool_pre_ping=True,
)

sync_session_factory = sessionmaker(
    sync_engine,
    autocommit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a session, committing on success."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled connections on application shutdown."""
    await async_engine.dispose()
