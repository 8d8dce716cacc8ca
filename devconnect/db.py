"""
Database Management Layer.

Wraps an SQLAlchemy ``AsyncEngine`` for:
- Connection pooling (PostgreSQL) / NullPool (SQLite)
- Session management with async context managers
- Auto-commit/rollback behavior

Usage:
    from devconnect.db import Database

    database = Database(settings)
    async with database.session() as session:
        user = await session.get(User, 1)
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from .config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


class Database:
    """
    Async database handle owned by the application.

    Features:
    - Connection pooling (pooled for PostgreSQL, one connection per session for SQLite)
    - Async context manager for automatic commit/rollback
    - Health check support
    """

    def __init__(self, settings: Settings):
        url = settings.database_url
        self.dialect = url.split(":", 1)[0].split("+", 1)[0]

        if settings.is_sqlite:
            engine_kwargs: dict = {"poolclass": NullPool}
        else:
            engine_kwargs = {
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_max_overflow,
                "pool_pre_ping": settings.db_pool_pre_ping,
            }

        self.engine: AsyncEngine = create_async_engine(url, echo=settings.debug, **engine_kwargs)

        # Enable foreign keys for SQLite
        if settings.is_sqlite:

            @event.listens_for(self.engine.sync_engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    async def create_all_tables(self) -> None:
        """Create all tables defined by models."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Async context manager for database sessions with auto-commit/rollback.

        Usage:
            async with database.session() as session:
                profile = await session.get(Profile, 1)
        """
        session = self.SessionLocal()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict:
        """
        Perform database health check.

        Returns:
            dict with 'healthy' (bool), 'latency_ms' (float), and 'error' (str or None)
        """
        start = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency = (time.perf_counter() - start) * 1000
            return {"healthy": True, "latency_ms": round(latency, 2), "error": None}
        except Exception as e:
            latency = (time.perf_counter() - start) * 1000
            return {"healthy": False, "latency_ms": round(latency, 2), "error": str(e)}

    async def dispose(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()


__all__ = ["Base", "Database"]
