"""
Database connection and session management.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends
from sqlalchemy import engine as sa_engine
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.core.config import get_settings
from app.core.exceptions import StorageError

settings = get_settings()


@event.listens_for(sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    connect_args = {}
    if database_url.startswith("postgresql+asyncpg"):
        connect_args["command_timeout"] = settings.db_command_timeout_seconds
    return create_async_engine(database_url, echo=echo, connect_args=connect_args)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url, echo=settings.debug)
async_session_factory = build_session_factory(engine)


async def init_db(bind: AsyncEngine = engine):
    """Create all tables (development and tests; production uses migrations)."""
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency; every session and unit of work is derived from it."""
    return async_session_factory


async def get_session(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StorageError(f"Database error: {exc.__class__.__name__}") from exc
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def unit_of_work(factory: async_sessionmaker[AsyncSession]):
    """One transaction: commits when the block exits cleanly, rolls back otherwise.

    Store failures and timeouts are re-raised as StorageError after rollback.
    """
    try:
        async with factory() as session:
            async with session.begin():
                yield session
    except SQLAlchemyError as exc:
        raise StorageError(f"Database error: {exc.__class__.__name__}") from exc
    except TimeoutError as exc:
        raise StorageError("Database operation timed out") from exc


async def check_connection(factory: async_sessionmaker[AsyncSession]) -> None:
    async with unit_of_work(factory) as session:
        await session.execute(text("SELECT 1"))
