"""Authorization — ownership isolation by list id and by task id."""

import pytest

from todolists.core.domain_types import TaskId, TodoListId, UserId
from todolists.core.errors import (
    AuthorizationFailedError, InvalidArgumentError,
    TaskNotFoundError, TodoListNotFoundError,
)


@pytest.fixture
def two_owners(services, alice_token, bob_token, todo_service):
    todo_service.create_list(TodoListId("L1")).authorized_with(alice_token).execute()
    todo_service.create_list(TodoListId("L2")).authorized_with(bob_token).execute()
    alice = services.authentication.validate(alice_token)
    bob = services.authentication.validate(bob_token)
    return alice, bob


def test_owner_has_access(todo_service, two_owners):
    alice, _ = two_owners
    todo_service.authorization.validate_access(alice, TodoListId("L1"))


def test_other_user_is_rejected(todo_service, two_owners):
    alice, bob = two_owners
    with pytest.raises(AuthorizationFailedError):
        todo_service.authorization.validate_access(bob, TodoListId("L1"))
    with pytest.raises(AuthorizationFailedError):
        todo_service.authorization.validate_access(alice, TodoListId("L2"))


def test_missing_list(todo_service):
    with pytest.raises(TodoListNotFoundError):
        todo_service.authorization.validate_access(UserId("u"), TodoListId("nope"))


def test_task_target_resolves_through_its_list(todo_service, alice_token, two_owners):
    alice, bob = two_owners
    (
        todo_service.add_task(TaskId("T1"))
        .with_todo_list_id(TodoListId("L1"))
        .with_description("buy milk")
        .authorized_with(alice_token)
        .execute()
    )

    todo_service.authorization.validate_access(alice, TaskId("T1"))
    with pytest.raises(AuthorizationFailedError):
        todo_service.authorization.validate_access(bob, TaskId("T1"))


def test_missing_task_reported_before_ownership(todo_service):
    with pytest.raises(TaskNotFoundError):
        todo_service.authorization.validate_access(UserId("anyone"), TaskId("missing"))


def test_unsupported_target_type(todo_service):
    with pytest.raises(InvalidArgumentError):
        todo_service.authorization.validate_access(UserId("u"), UserId("x"))
