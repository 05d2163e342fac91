"""Boundary Protocols — contracts between the user service and its collaborators.

Invariants:
    - The service only sees these Protocols, never SQLAlchemy or logging directly
    - Implementations provided via constructor injection
    - Repository methods may raise store faults; ServiceLogger methods never raise

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no base class
"""

from typing import Any, Protocol, Sequence

from users_api.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for User objects passed through the service."""
    id: UserId
    full_name: str


class UserRepository(Protocol):
    """Contract for user persistence — implemented by infrastructure."""
    async def get_all(self) -> Sequence[UserLike]: ...
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def create(self, user: UserLike) -> bool: ...
    async def delete_by_id(self, user_id: UserId) -> bool: ...


class ServiceLogger(Protocol):
    """Contract for parameterized, leveled logging used by services."""
    def log_information(self, template: str, *args: Any) -> None: ...
    def log_error(self, exc: BaseException, template: str, *args: Any) -> None: ...
