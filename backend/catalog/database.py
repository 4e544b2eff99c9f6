"""
Product Catalog Backend: Database Session Management
====================================================

What:  Async SQLAlchemy engine + session factory, and the FastAPI dependency
       that hands one session to each request.
How:   `Database` owns the engine. The application factory builds one (or
       receives one from the caller) and stores it on `app.state.database`;
       `get_db_session` reads it from there, so nothing here is global.

Connection pool (PostgreSQL):
    pool_size / max_overflow: from settings
    pool_pre_ping:            validate connections before use
    pool_recycle=3600:        recycle connections every hour
"""

from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Engine and session factory for one database.

    Creating a Database does not open a connection; the pool connects
    lazily on the first statement.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False: loaded rows stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs: dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
        # SQLite pools do not accept sizing arguments
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(settings.database_url, **engine_kwargs)

    async def ping(self) -> None:
        """Run `SELECT 1`; raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Opens a session from the application's Database
    2. Yields it to the route handler
    3. On success: commits (a no-op when the service already committed)
    4. On error: rolls back and re-raises for the global error handlers
    5. Always: closes the session, returning its connection to the pool

    Example:
        @router.get("/product")
        async def get_product(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
