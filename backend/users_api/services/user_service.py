"""User Service — orchestrates one repository call per operation with logging and timing.

Invariants:
    - Exactly one repository call per operation
    - Every operation logs one info line before the repository call
    - Success: one info line with elapsed ms, no error line
    - Failure: one error line carrying the caught exception, then the SAME
      exception is re-raised; no success line, no elapsed-time line
    - Elapsed time covers only the repository call (Stopwatch wraps the await)
    - Return values pass through unmodified (None and False are not errors)

Design Decisions:
    - Log-and-rethrow over translation: callers see the store fault's own type
      and message, the service only adds an observability side effect
    - Templates are module constants so tests and log queries match on them
"""

from typing import Sequence

from users_api.core.domain_types import UserId
from users_api.core.repository_protocols import (
    ServiceLogger, UserLike, UserRepository,
)
from users_api.infrastructure.observability import Stopwatch

RETRIEVING_ALL = "Retrieving all users"
RETRIEVED_ALL = "All users retrieved in %sms"
RETRIEVE_ALL_FAILED = "Something went wrong while retrieving all users"

RETRIEVING_ONE = "Retrieving user with id: %s"
RETRIEVED_ONE = "User with id %s retrieved in %sms"
RETRIEVE_ONE_FAILED = "Something went wrong while retrieving user with id %s"

CREATING = "Creating user with id %s and name: %s"
CREATED = "User with id %s created in %sms"
CREATE_FAILED = "Something went wrong while creating a user"

DELETING = "Deleting user with id: %s"
DELETED = "User with id %s deleted in %sms"
DELETE_FAILED = "Something went wrong while deleting user with id %s"


class UserService:
    """Service layer between the users routes and a UserRepository."""

    def __init__(self, user_repository: UserRepository, logger: ServiceLogger):
        self._user_repository = user_repository
        self._logger = logger

    async def get_all(self) -> list[UserLike]:
        self._logger.log_information(RETRIEVING_ALL)
        try:
            with Stopwatch() as sw:
                users: Sequence[UserLike] = await self._user_repository.get_all()
        except Exception as e:
            self._logger.log_error(e, RETRIEVE_ALL_FAILED)
            raise
        self._logger.log_information(RETRIEVED_ALL, sw.elapsed_ms)
        return list(users)

    async def get_by_id(self, user_id: UserId) -> UserLike | None:
        self._logger.log_information(RETRIEVING_ONE, user_id)
        try:
            with Stopwatch() as sw:
                user = await self._user_repository.get_by_id(user_id)
        except Exception as e:
            self._logger.log_error(e, RETRIEVE_ONE_FAILED, user_id)
            raise
        self._logger.log_information(RETRIEVED_ONE, user_id, sw.elapsed_ms)
        return user

    async def create(self, user: UserLike) -> bool:
        self._logger.log_information(CREATING, user.id, user.full_name)
        try:
            with Stopwatch() as sw:
                created = await self._user_repository.create(user)
        except Exception as e:
            self._logger.log_error(e, CREATE_FAILED)
            raise
        self._logger.log_information(CREATED, user.id, sw.elapsed_ms)
        return created

    async def delete_by_id(self, user_id: UserId) -> bool:
        self._logger.log_information(DELETING, user_id)
        try:
            with Stopwatch() as sw:
                deleted = await self._user_repository.delete_by_id(user_id)
        except Exception as e:
            self._logger.log_error(e, DELETE_FAILED, user_id)
            raise
        self._logger.log_information(DELETED, user_id, sw.elapsed_ms)
        return deleted
