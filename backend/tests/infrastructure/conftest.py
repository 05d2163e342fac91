"""Infrastructure test fixtures — fresh in-memory database per test."""

import pytest

from users_api.infrastructure.database import DatabaseSessionManager
from users_api.infrastructure.user_repository import SqlUserRepository


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def db(manager):
    async with manager.session() as session:
        yield session


@pytest.fixture
def repo(db):
    return SqlUserRepository(db)
