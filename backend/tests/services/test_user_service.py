"""UserService — orchestration contract around repository calls.

Invariants:
    - Success: exactly two info lines (before, after-with-elapsed), no error line
    - Failure: one before line, one error line with the caught exception, the
      same exception re-raised, and no success line
    - Return values pass through unmodified (empty list, None, True/False)

Design Decisions:
    - Repository is an AsyncMock, logger a MagicMock spec'd on LoggerAdapter:
      the service is tested against its Protocols only
"""

from unittest.mock import ANY, AsyncMock, MagicMock, call
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from users_api.infrastructure.observability import (
    LoggerAdapter, Stopwatch, get_logger_adapter,
)
from users_api.models.user import User
from users_api.services import user_service as msg
from users_api.services.user_service import UserService


@pytest.fixture
def user_repository():
    return AsyncMock()


@pytest.fixture
def logger():
    return MagicMock(spec=LoggerAdapter)


@pytest.fixture
def sut(user_repository, logger):
    return UserService(user_repository, logger)


def _store_fault() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("Something went wrong"))


def _elapsed(logger, index: int = -1):
    """Last positional arg of the index-th info call — the elapsed ms."""
    return logger.log_information.call_args_list[index].args[-1]


# ==============================================================================
# get_all
# ==============================================================================


async def test_get_all_returns_empty_list_when_no_users_exist(sut, user_repository):
    user_repository.get_all.return_value = []

    result = await sut.get_all()

    assert result == []


async def test_get_all_returns_users_when_some_users_exist(sut, user_repository):
    nick = User(full_name="Nick Chapsas")
    user_repository.get_all.return_value = (nick,)

    result = await sut.get_all()

    assert result == [nick]


async def test_get_all_logs_messages_when_invoked(sut, user_repository, logger):
    user_repository.get_all.return_value = []

    await sut.get_all()

    assert logger.log_information.call_args_list == [
        call(msg.RETRIEVING_ALL),
        call(msg.RETRIEVED_ALL, ANY),
    ]
    assert isinstance(_elapsed(logger), int)
    logger.log_error.assert_not_called()


async def test_get_all_logs_and_reraises_when_repository_fails(
    sut, user_repository, logger,
):
    fault = _store_fault()
    user_repository.get_all.side_effect = fault

    with pytest.raises(OperationalError, match="Something went wrong") as exc_info:
        await sut.get_all()

    assert exc_info.value is fault
    logger.log_error.assert_called_once_with(fault, msg.RETRIEVE_ALL_FAILED)
    logger.log_information.assert_called_once_with(msg.RETRIEVING_ALL)


# ==============================================================================
# get_by_id
# ==============================================================================


async def test_get_by_id_returns_user_when_user_exists(sut, user_repository):
    user = User(full_name="Enedy Cordeiro")
    user_repository.get_by_id.return_value = user

    result = await sut.get_by_id(user.id)

    assert result is user
    user_repository.get_by_id.assert_awaited_once_with(user.id)


async def test_get_by_id_returns_none_when_user_does_not_exist(sut, user_repository):
    user_repository.get_by_id.return_value = None

    result = await sut.get_by_id(uuid4())

    assert result is None


async def test_get_by_id_logs_both_lines_when_user_is_absent(
    sut, user_repository, logger,
):
    user_id = uuid4()
    user_repository.get_by_id.return_value = None

    await sut.get_by_id(user_id)

    assert logger.log_information.call_args_list == [
        call(msg.RETRIEVING_ONE, user_id),
        call(msg.RETRIEVED_ONE, user_id, ANY),
    ]
    assert isinstance(_elapsed(logger), int)
    logger.log_error.assert_not_called()


async def test_get_by_id_logs_and_reraises_when_repository_fails(
    sut, user_repository, logger,
):
    user_id = uuid4()
    fault = _store_fault()
    user_repository.get_by_id.side_effect = fault

    with pytest.raises(OperationalError) as exc_info:
        await sut.get_by_id(user_id)

    assert exc_info.value is fault
    logger.log_information.assert_called_once_with(msg.RETRIEVING_ONE, user_id)
    logger.log_error.assert_called_once_with(
        fault, msg.RETRIEVE_ONE_FAILED, user_id,
    )


# ==============================================================================
# create
# ==============================================================================


async def test_create_returns_true_when_repository_creates(sut, user_repository):
    user = User(full_name="Enedy Cordeiro")
    user_repository.create.return_value = True

    assert await sut.create(user) is True
    user_repository.create.assert_awaited_once_with(user)


async def test_create_returns_false_when_repository_does_not_create(
    sut, user_repository,
):
    user_repository.create.return_value = False

    assert await sut.create(User(full_name="Enedy Cordeiro")) is False


async def test_create_logs_messages_when_creating_a_user(sut, user_repository, logger):
    user = User(full_name="Enedy Cordeiro")
    user_repository.create.return_value = True

    await sut.create(user)

    assert logger.log_information.call_args_list == [
        call(msg.CREATING, user.id, "Enedy Cordeiro"),
        call(msg.CREATED, user.id, ANY),
    ]
    logger.log_error.assert_not_called()


async def test_create_logs_and_reraises_when_repository_fails(
    sut, user_repository, logger,
):
    user = User(full_name="Enedy Cordeiro")
    fault = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))
    user_repository.create.side_effect = fault

    with pytest.raises(IntegrityError) as exc_info:
        await sut.create(user)

    assert exc_info.value is fault
    logger.log_information.assert_called_once_with(
        msg.CREATING, user.id, user.full_name,
    )
    logger.log_error.assert_called_once_with(fault, msg.CREATE_FAILED)


# ==============================================================================
# delete_by_id
# ==============================================================================


async def test_delete_by_id_returns_true_when_user_exists(sut, user_repository):
    user_id = uuid4()
    user_repository.delete_by_id.return_value = True

    assert await sut.delete_by_id(user_id) is True
    user_repository.delete_by_id.assert_awaited_once_with(user_id)


async def test_delete_by_id_returns_false_when_user_does_not_exist(
    sut, user_repository,
):
    user_repository.delete_by_id.return_value = False

    assert await sut.delete_by_id(uuid4()) is False


async def test_delete_by_id_logs_messages_when_invoked(sut, user_repository, logger):
    user_id = uuid4()
    user_repository.delete_by_id.return_value = True

    await sut.delete_by_id(user_id)

    assert logger.log_information.call_args_list == [
        call(msg.DELETING, user_id),
        call(msg.DELETED, user_id, ANY),
    ]
    logger.log_error.assert_not_called()


async def test_delete_by_id_logs_and_reraises_when_repository_fails(
    sut, user_repository, logger,
):
    user_id = uuid4()
    fault = _store_fault()
    user_repository.delete_by_id.side_effect = fault

    with pytest.raises(OperationalError) as exc_info:
        await sut.delete_by_id(user_id)

    assert exc_info.value is fault
    logger.log_information.assert_called_once_with(msg.DELETING, user_id)
    logger.log_error.assert_called_once_with(fault, msg.DELETE_FAILED, user_id)


# ==============================================================================
# Timing
# ==============================================================================


async def test_elapsed_time_covers_the_repository_call(
    sut, user_repository, logger, monkeypatch,
):
    """Stopwatch starts after the before-line and stops when the await returns."""
    ticks = iter([10.0, 10.25])
    monkeypatch.setattr(
        "users_api.services.user_service.Stopwatch",
        lambda: Stopwatch(clock=lambda: next(ticks)),
    )
    user_repository.get_all.return_value = []

    await sut.get_all()

    assert _elapsed(logger) == 250


# ==============================================================================
# With real collaborators
# ==============================================================================


async def test_service_over_sql_repository_logs_through_stdlib(repository, caplog):
    """End-to-end over SqlUserRepository and LoggerAdapter with caplog."""
    service = UserService(repository, get_logger_adapter("users_api.services.user_service"))
    user = User(full_name="Nick Chapsas")

    with caplog.at_level("INFO", logger="users_api.services.user_service"):
        assert await service.create(user) is True
        assert await service.get_by_id(user.id) is not None

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == f"Creating user with id {user.id} and name: Nick Chapsas"
    assert messages[1].startswith(f"User with id {user.id} created in ")
    assert messages[1].endswith("ms")
    assert messages[2] == f"Retrieving user with id: {user.id}"
    assert all(r.levelname == "INFO" for r in caplog.records)
