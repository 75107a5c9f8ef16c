from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Iterator

import pytest
import pytest_asyncio
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from linguastore.api.deps import get_auth_service, get_db_session
from linguastore.core.app import create_app
from linguastore.core.config import AppSettings
from linguastore.models import Base
from linguastore.services.auth import AuthService

API_USER_EMAIL = "translator@example.com"
API_USER_PASSWORD = "correct horse battery staple"


def make_settings(**overrides) -> AppSettings:
    """Settings for tests, independent of the caller's environment."""
    values = {
        "JWT_SECRET_KEY": "unit-test-secret",
        "ACCESS_TOKEN_TTL": 120,
        "REFRESH_TOKEN_TTL": 3600,
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


@pytest_asyncio.fixture()
async def db_session() -> AsyncSession:
    """Provide an isolated in-memory database session with the full schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async with session_factory() as session:
        yield session

    await engine.dispose()


async def _prepare_api_database(url: str) -> None:
    engine = create_async_engine(url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with session_factory() as session:
        service = AuthService(session, make_settings())
        await service.create_user(name="Translator", email=API_USER_EMAIL, password=API_USER_PASSWORD)
        await session.commit()
    await engine.dispose()


@pytest.fixture()
def client(tmp_path) -> Iterator[TestClient]:
    """Application wired to a throwaway SQLite file with one registered user."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"
    asyncio.run(_prepare_api_database(url))

    session_factory = async_sessionmaker(
        create_async_engine(url, poolclass=NullPool),
        expire_on_commit=False,
        class_=AsyncSession,
    )

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_auth_service(
        session: AsyncSession = Depends(get_db_session),
    ) -> AuthService:
        return AuthService(session, make_settings())

    app = create_app()
    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_auth_service] = override_auth_service

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    response = client.post(
        "/api/login",
        json={"email": API_USER_EMAIL, "password": API_USER_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}
