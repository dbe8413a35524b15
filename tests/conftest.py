from typing import AsyncGenerator, Generator
from unittest import mock

import docker
import pytest
import pytest_asyncio
from alembic import command
from alembic.config import Config
from docker.errors import DockerException
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from testcontainers.postgres import PostgresContainer

from api.dependencies import db
from db.models import Base
from main import app
from schemas import ProjectResponse
from settings import BASE_PATH
from usecases import ProjectUsecase


@pytest.fixture(autouse=True)
def redis_lock() -> mock.MagicMock:
    lock = mock.MagicMock()
    lock.acquire = mock.AsyncMock(return_value=True)
    lock.release = mock.AsyncMock(return_value=None)

    with mock.patch(
        "utils.locks.redis_client", new_callable=mock.MagicMock
    ) as mock_redis_client:
        mock_redis_client.lock.return_value = lock
        yield lock


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        url="sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def project_token(
    test_session: AsyncSession,
) -> tuple[ProjectResponse, str]:
    return await ProjectUsecase().create_project(
        session=test_session, name="Test project"
    )


@pytest_asyncio.fixture(scope="function")
async def test_client(
    test_session: AsyncSession, project_token: tuple[ProjectResponse, str]
) -> AsyncGenerator[AsyncClient, None]:
    def override_get_session():
        return test_session

    app.dependency_overrides[db.get_session] = override_get_session

    _, token = project_token
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    try:
        docker.from_env().ping()
    except DockerException:
        pytest.skip(reason="Docker is not available for the Postgres container")

    with PostgresContainer() as postgres:
        yield postgres


@pytest.fixture(scope="session")
def migrated_postgres_url(
    postgres_container: PostgresContainer,
) -> Generator[str, None, None]:
    url = postgres_container.get_connection_url().replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://", 1
    )

    config = Config(file_=BASE_PATH / "alembic.ini")
    config.set_main_option("script_location", str(BASE_PATH / "db" / "alembic"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config=config, revision="head")
    yield url
    command.downgrade(config=config, revision="base")
