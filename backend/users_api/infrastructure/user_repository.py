"""User Repository — SQLAlchemy-backed persistence for User rows.

Invariants:
    - One statement per operation; writes commit before returning
    - create/delete_by_id report success from the affected row count, never by
      re-reading the table
    - Store faults (SQLAlchemyError family) propagate unchanged to the caller;
      write paths roll back first so the session stays usable
"""

from typing import Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.core.domain_types import UserId
from users_api.models.user import User


class SqlUserRepository:
    """UserRepository implementation over a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_all(self) -> Sequence[User]:
        result = await self._db.execute(select(User).order_by(User.full_name))
        return result.scalars().all()

    async def get_by_id(self, user_id: UserId) -> User | None:
        result = await self._db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def create(self, user: User) -> bool:
        try:
            result = await self._db.execute(
                insert(User.__table__).values(
                    id=user.id, full_name=user.full_name,
                ),
            )
            await self._db.commit()
        except SQLAlchemyError:
            await self._db.rollback()
            raise
        return result.rowcount > 0

    async def delete_by_id(self, user_id: UserId) -> bool:
        try:
            result = await self._db.execute(
                delete(User).where(User.id == user_id),
            )
            await self._db.commit()
        except SQLAlchemyError:
            await self._db.rollback()
            raise
        return result.rowcount > 0
