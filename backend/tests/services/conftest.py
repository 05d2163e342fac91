"""Service test fixtures — async in-memory DB, repository, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DatabaseSessionManager
    - db_manager patched so the readiness probe sees the test database

Design Decisions:
    - SQLite in-memory: same embedded store as production, no external dependency
    - Real DatabaseSessionManager (not a bare session factory): request-boundary
      error mapping is exercised by route tests too
"""

import pytest
from httpx import ASGITransport, AsyncClient

import users_api.infrastructure.database as db_module
from users_api.infrastructure.database import DatabaseSessionManager, get_db
from users_api.infrastructure.user_repository import SqlUserRepository
from users_api.main import app
from users_api.models.user import User


@pytest.fixture
async def test_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(test_manager):
    async with test_manager.session() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
async def seed_user(test_db):
    """Insert a single user directly through the ORM."""
    user = User(full_name="Nick Chapsas")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
