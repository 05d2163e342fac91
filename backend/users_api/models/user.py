"""User ORM — the single persisted entity of the Users API.

Invariants:
    - id is a UUID primary key, assigned at construction when the caller omits it
    - id never changes after assignment (no update operation exists)
    - full_name is non-nullable text

Design Decisions:
    - Generic Uuid type over the postgresql dialect type: the store is embedded SQLite
    - id defaulted in __init__ rather than only at flush: the service logs the id
      before the repository ever sees the row
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from users_api.db.base import Base


class User(Base):
    """User entity — identity plus display name."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"User(id={self.id!s}, full_name={self.full_name!r})"
