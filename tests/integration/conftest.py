"""Integration test fixtures for database and HTTP client operations.

These fixtures require a reachable PostgreSQL database (``DATABASE_URL``).
Tables are created from the model metadata for each test and dropped after it.
"""

from collections.abc import AsyncGenerator, Callable
from uuid import UUID, uuid7

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.kanban.models  # noqa: F401 - registers tables on the metadata
from src.kanban.api.dependencies import get_db_session
from src.kanban.core.config import get_settings
from src.kanban.core.db import get_session
from src.kanban.main import create_app
from src.kanban.models import ProjectMember, ProjectRole


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine with a fresh schema."""
    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    try:
        async with test_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
            await conn.run_sync(SQLModel.metadata.create_all)
    except (OSError, OperationalError) as e:
        await test_engine.dispose()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting rows. Tests commit explicitly."""
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client whose requests each get their own session on the test engine."""
    app = create_app()

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth(token_for: Callable[[UUID], str]) -> Callable[[UUID], dict[str, str]]:
    def _headers(actor_id: UUID) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(actor_id)}"}

    return _headers


@pytest.fixture
def owner_id() -> UUID:
    return uuid7()


@pytest.fixture
async def project_id(client: AsyncClient, auth, owner_id: UUID) -> UUID:
    """A project owned by ``owner_id``."""
    response = await client.post(
        "/api/v1/projects", json={"name": "Integration"}, headers=auth(owner_id)
    )
    assert response.status_code == 201
    return UUID(response.json()["id"])


@pytest.fixture
def add_member(db_session: AsyncSession) -> Callable:
    async def _add(project_id: UUID, role: ProjectRole) -> UUID:
        user_id = uuid7()
        db_session.add(ProjectMember(project_id=project_id, user_id=user_id, role=role.value))
        await db_session.commit()
        return user_id

    return _add
