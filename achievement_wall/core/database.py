"""
Database setup and connections
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.engine import make_url
from sqlalchemy import MetaData, event
from fastapi import Request
from typing import AsyncGenerator
import logging
import os

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy Base class"""
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s"
        }
    )


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def ensure_sqlite_parent_dir(database_url: str) -> None:
    """Create the directory holding a file-based SQLite database."""
    if not _is_sqlite(database_url):
        return
    database = make_url(database_url).database
    if database and database != ":memory:":
        parent = os.path.dirname(os.path.abspath(database))
        os.makedirs(parent, exist_ok=True)


def build_engine(database_url: str, *, echo: bool = False, busy_timeout: float = 15.0) -> AsyncEngine:
    """Create the async engine.

    For SQLite the driver waits up to ``busy_timeout`` seconds for the write
    lock, and every new connection enforces foreign keys.
    """
    if _is_sqlite(database_url):
        engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": busy_timeout},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables and rows are left untouched."""
    # Register the mappers on Base.metadata
    from achievement_wall import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables checked/created")


# Database session dependency
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the factory attached to the running app."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# SQLite INTEGER PRIMARY KEY is a signed 64-bit value
MIN_ROW_ID = -(2 ** 63)
MAX_ROW_ID = 2 ** 63 - 1


def is_storable_id(value: int) -> bool:
    """False for ids no row can ever have (the driver refuses to bind them)."""
    return MIN_ROW_ID <= value <= MAX_ROW_ID
