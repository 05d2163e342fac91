"""Dependency Providers — per-request wiring of repository and service.

Invariants:
    - One AsyncSession per request (get_db), shared by repository and service
    - No global registry: every collaborator is built from its providers

Design Decisions:
    - FastAPI Depends chain over a container library: overridable in tests via
      app.dependency_overrides at any link
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.infrastructure.database import get_db
from users_api.infrastructure.observability import get_logger_adapter
from users_api.infrastructure.user_repository import SqlUserRepository
from users_api.services.user_service import UserService


def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_user_service(
    repository: SqlUserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(repository, get_logger_adapter(UserService.__module__))
