"""
Database session management.

Provides the async SQLAlchemy engine for the configured hosted database
(PostgreSQL via asyncpg, MySQL via aiomysql) or an in-memory SQLite
database, and a session dependency for FastAPI's ``Depends()``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lab_system.core.config import Settings, settings


def create_engine(config: Settings) -> AsyncEngine:
    """Build the async engine described by ``config``."""
    if config.USE_SQLITE:
        # StaticPool makes every connection share the SAME in-memory database.
        from sqlalchemy.pool import StaticPool

        sqlite_engine = create_async_engine(
            config.SQLALCHEMY_DATABASE_URL,
            echo=config.DEBUG,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # SQLite does not enforce FK constraints by default.  aiosqlite
        # delegates to a sync connection, so listen on the sync engine.
        @event.listens_for(sqlite_engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_async_engine(
        config.SQLALCHEMY_DATABASE_URL,
        echo=config.DEBUG,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


engine = create_engine(settings)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    # Attributes must stay readable after commit(); async sessions cannot lazy-load.
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an async database session.

    The session is closed when the request finishes.
    """
    async with AsyncSessionLocal() as session:
        yield session
