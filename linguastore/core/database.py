from __future__ import annotations

import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from linguastore.core.config import get_settings
from linguastore.core.migrations import migrate_database


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _sslmode_to_asyncpg_ssl(sslmode: str) -> bool | ssl.SSLContext:
    """Translate a libpq ``sslmode`` into the ``ssl`` argument asyncpg understands."""
    mode = sslmode.strip().lower()
    if mode in {"disable", "allow", "prefer"}:
        return False
    if mode == "verify-ca":
        context = ssl.create_default_context()
        context.check_hostname = False
        return context
    return True


def prepare_engine_arguments(database_url: str) -> tuple[str, dict[str, Any]]:
    """Strip driver-incompatible query options and return (url, connect_args)."""
    url = make_url(database_url)
    if url.drivername != "postgresql+asyncpg":
        return database_url, {}

    query = dict(url.query)
    sslmode = query.pop("sslmode", None)
    if sslmode is None:
        return database_url, {}

    sanitized = url.set(query=query)
    connect_args: dict[str, Any] = {"ssl": _sslmode_to_asyncpg_ssl(str(sslmode))}
    return sanitized.render_as_string(hide_password=False), connect_args


def _init_engine() -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    settings = get_settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not configured.")

    url, connect_args = prepare_engine_arguments(settings.database_url)
    engine = create_async_engine(url, future=True, connect_args=connect_args)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    return engine, session_factory


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None or _session_factory is None:
        _engine, _session_factory = _init_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _engine, _session_factory
    if _engine is None or _session_factory is None:
        _engine, _session_factory = _init_engine()
    return _session_factory


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    session = get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_database() -> None:
    """Ensure the database schema is up to date via Alembic migrations."""
    # Initialize engine so session factory is ready for subsequent usage.
    get_engine()
    await migrate_database()


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
