"""Operations — the ordered authenticate -> authorize -> precondition -> store sequence.

Tests cover:
    - CreateList / AddTask / UpdateTask / RemoveTask / FindTask / ReadTasks / ReadTodoLists
    - Duplicate ids rejected before an operation is handed out
    - Completed-task lock
    - Failures leave the stores untouched
    - execute() without a token is a programming error
    - Scenarios: alice reads her list, bob probes alice's task
"""

import pytest

from todolists.core.domain_types import TaskId, TodoListId, Token
from todolists.core.errors import (
    AuthorizationFailedError, EmptyTaskDescriptionError, InvalidArgumentError,
    TaskAlreadyExistsError, TaskNotFoundError, TodoListAlreadyExistsError,
    TodoListNotFoundError, UpdateCompletedTaskError,
)


@pytest.fixture
def add_task(todo_service):
    def _add(task_id: str, todo_list_id: TodoListId, token: Token, description="buy milk"):
        (
            todo_service.add_task(TaskId(task_id))
            .with_todo_list_id(todo_list_id)
            .with_description(description)
            .authorized_with(token)
            .execute()
        )
        return TaskId(task_id)
    return _add


# --- scenarios ----------------------------------------------------------------

def test_alice_reads_her_single_task(todo_service, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)

    tasks = todo_service.read_tasks_from(alice_list).authorized_with(alice_token).execute()

    assert [t.id for t in tasks] == [task_id]
    assert tasks[0].description == "buy milk"
    assert tasks[0].completed is False


def test_bob_cannot_find_alices_task(todo_service, alice_token, bob_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    with pytest.raises(AuthorizationFailedError):
        todo_service.find_task(task_id).authorized_with(bob_token).execute()


def test_add_task_twice_rejected(todo_service, alice_token, alice_list, add_task):
    add_task("T", alice_list, alice_token)
    with pytest.raises(TaskAlreadyExistsError):
        todo_service.add_task(TaskId("T"))


# --- CreateList ---------------------------------------------------------------

def test_create_list_sets_caller_as_owner(services, alice_token, alice_list):
    todo_list = services.todo_lists.read(alice_list)
    assert todo_list.owner == services.authentication.validate(alice_token)


def test_create_list_duplicate_id(todo_service, alice_list):
    with pytest.raises(TodoListAlreadyExistsError):
        todo_service.create_list(alice_list)


def test_create_list_with_invalid_token_writes_nothing(services, todo_service):
    operation = todo_service.create_list(TodoListId("L")).authorized_with(Token("bogus"))
    with pytest.raises(AuthorizationFailedError):
        operation.execute()
    assert len(services.todo_lists) == 0


def test_execute_without_token_is_programming_error(todo_service):
    with pytest.raises(InvalidArgumentError):
        todo_service.create_list(TodoListId("L")).execute()


# --- AddTask ------------------------------------------------------------------

def test_add_task_stamps_creation_date(services, clock, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token, description="  walk dog  ")
    task = services.tasks.read(task_id)
    assert task.description == "walk dog"
    assert task.creation_date == clock.now
    assert task.last_update_date == clock.now


def test_add_task_blank_description_fails_at_chain(todo_service):
    with pytest.raises(EmptyTaskDescriptionError):
        todo_service.add_task(TaskId("T")).with_description("   ")


def test_add_task_without_description(services, todo_service, alice_token, alice_list):
    operation = (
        todo_service.add_task(TaskId("T"))
        .with_todo_list_id(alice_list)
        .authorized_with(alice_token)
    )
    with pytest.raises(EmptyTaskDescriptionError):
        operation.execute()
    assert len(services.tasks) == 0


def test_add_task_to_missing_list(services, todo_service, alice_token):
    operation = (
        todo_service.add_task(TaskId("T"))
        .with_todo_list_id(TodoListId("nope"))
        .with_description("x")
        .authorized_with(alice_token)
    )
    with pytest.raises(TodoListNotFoundError):
        operation.execute()
    assert len(services.tasks) == 0


def test_add_task_to_foreign_list(services, bob_token, alice_list, add_task):
    with pytest.raises(AuthorizationFailedError):
        add_task("T", alice_list, bob_token)
    assert len(services.tasks) == 0


def test_add_task_without_list_id(todo_service, alice_token):
    operation = todo_service.add_task(TaskId("T")).with_description("x").authorized_with(alice_token)
    with pytest.raises(InvalidArgumentError):
        operation.execute()


# --- UpdateTask ---------------------------------------------------------------

def test_update_description_keeps_status(services, todo_service, clock, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    created = services.tasks.read(task_id).creation_date
    later = clock.advance()

    todo_service.update_task(task_id).with_description(" oat milk ").authorized_with(alice_token).execute()

    task = services.tasks.read(task_id)
    assert task.description == "oat milk"
    assert task.completed is False
    assert task.creation_date == created
    assert task.last_update_date == later


def test_update_status_keeps_description(services, todo_service, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    todo_service.update_task(task_id).completed().authorized_with(alice_token).execute()

    task = services.tasks.read(task_id)
    assert task.completed is True
    assert task.description == "buy milk"


def test_completed_task_is_locked(todo_service, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    todo_service.update_task(task_id).set_completed(True).authorized_with(alice_token).execute()

    with pytest.raises(UpdateCompletedTaskError):
        todo_service.update_task(task_id).with_description("again").authorized_with(alice_token).execute()
    with pytest.raises(UpdateCompletedTaskError):
        todo_service.update_task(task_id).set_completed(False).authorized_with(alice_token).execute()


def test_update_missing_task(todo_service, alice_token):
    with pytest.raises(TaskNotFoundError):
        todo_service.update_task(TaskId("missing")).completed().authorized_with(alice_token).execute()


def test_update_foreign_task_leaves_it_unchanged(services, todo_service, alice_token, bob_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    with pytest.raises(AuthorizationFailedError):
        todo_service.update_task(task_id).completed().authorized_with(bob_token).execute()
    assert services.tasks.read(task_id).completed is False


# --- RemoveTask / FindTask ----------------------------------------------------

def test_remove_task_returns_removed(services, todo_service, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    removed = todo_service.remove_task(task_id).authorized_with(alice_token).execute()

    assert removed.id == task_id
    assert services.tasks.read(task_id) is None
    with pytest.raises(TaskNotFoundError):
        todo_service.remove_task(task_id).authorized_with(alice_token).execute()


def test_remove_foreign_task(services, todo_service, alice_token, bob_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    with pytest.raises(AuthorizationFailedError):
        todo_service.remove_task(task_id).authorized_with(bob_token).execute()
    assert services.tasks.read(task_id) is not None


def test_find_task(todo_service, alice_token, alice_list, add_task):
    task_id = add_task("T", alice_list, alice_token)
    task = todo_service.find_task(task_id).authorized_with(alice_token).execute()
    assert task.id == task_id
    assert task.todo_list_id == alice_list


def test_find_missing_task(todo_service, alice_token):
    with pytest.raises(TaskNotFoundError):
        todo_service.find_task(TaskId("missing")).authorized_with(alice_token).execute()


# --- ReadTasks / ReadTodoLists ------------------------------------------------

def test_read_tasks_only_returns_that_list(todo_service, clock, alice_token, alice_list, add_task):
    other = TodoListId("alice-other")
    todo_service.create_list(other).authorized_with(alice_token).execute()
    add_task("T1", alice_list, alice_token)
    clock.advance()
    add_task("T2", alice_list, alice_token)
    add_task("T3", other, alice_token)

    tasks = todo_service.read_tasks_from(alice_list).authorized_with(alice_token).execute()
    assert [t.id for t in tasks] == [TaskId("T1"), TaskId("T2")]


def test_read_tasks_of_missing_list(todo_service, alice_token):
    with pytest.raises(TodoListNotFoundError):
        todo_service.read_tasks_from(TodoListId("nope")).authorized_with(alice_token).execute()


def test_read_tasks_of_foreign_list(todo_service, bob_token, alice_list):
    with pytest.raises(AuthorizationFailedError):
        todo_service.read_tasks_from(alice_list).authorized_with(bob_token).execute()


def test_read_todo_lists_only_returns_own(todo_service, alice_token, bob_token, alice_list):
    todo_service.create_list(TodoListId("bob-list")).authorized_with(bob_token).execute()

    alice_lists = todo_service.read_todo_lists().authorized_with(alice_token).execute()
    assert [t.id for t in alice_lists] == [alice_list]


def test_signed_out_token_cannot_operate(todo_service, authentication, alice_token, alice_list):
    authentication.sign_out(alice_token)
    with pytest.raises(AuthorizationFailedError):
        todo_service.read_tasks_from(alice_list).authorized_with(alice_token).execute()
