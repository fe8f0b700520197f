"""Operations — fluent, deferred-execution request objects, one per use case.

Invariants:
    - Chained with_*/set_* calls only accumulate fields; nothing touches a store before execute()
    - execute() runs strictly: authenticate -> authorize -> domain precondition -> one store call
    - execute() without authorized_with(token) is a caller defect (InvalidArgumentError)
    - Failures before the store call leave every store untouched

Design Decisions:
    - Task-addressed operations authorize through validate_access(user, TaskId), so a
      task miss surfaces as TaskNotFound before any ownership decision
    - Time comes from an injected clock: creation/update dates are testable
    - Duplicate-id checks for CreateList/AddTask happen in TodoService before an
      operation is handed out; they are not repeated here
"""

import logging
from datetime import datetime
from typing import Callable, TypeVar

from todolists.core.domain_types import UserId, TodoListId, TaskId, Token
from todolists.core.entities import (
    Task, TodoList, new_task, new_todo_list, normalize_description, utc_now,
)
from todolists.core.errors import (
    EmptyTaskDescriptionError, InvalidArgumentError,
    TaskNotFoundError, UpdateCompletedTaskError,
)
from todolists.core.repository_protocols import TodoListRepository, TaskRepository
from todolists.services.authentication import Authentication
from todolists.services.authorization import Authorization

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
OpT = TypeVar("OpT", bound="Operation")


class Operation:
    """Shared token handling. Subclasses implement execute()."""

    def __init__(self, authentication: Authentication):
        self._authentication = authentication
        self._token: Token | None = None

    def authorized_with(self: OpT, token: Token) -> OpT:
        if token is None:
            raise InvalidArgumentError("token is required")
        self._token = token
        return self

    def _authenticate(self) -> UserId:
        if self._token is None:
            raise InvalidArgumentError(
                f"{type(self).__name__}.authorized_with(token) must be called before execute()",
            )
        return self._authentication.validate(self._token)


class CreateList(Operation):
    def __init__(
        self, todo_list_id: TodoListId,
        todo_list_storage: TodoListRepository, authentication: Authentication,
    ):
        super().__init__(authentication)
        if todo_list_id is None:
            raise InvalidArgumentError("todo_list_id is required")
        self._todo_list_id = todo_list_id
        self._lists = todo_list_storage

    def execute(self) -> None:
        owner = self._authenticate()
        self._lists.write(new_todo_list(self._todo_list_id, owner))
        logger.info(
            "TodoList created",
            extra={"user_id": owner, "todo_list_id": self._todo_list_id},
        )


class AddTask(Operation):
    def __init__(
        self, task_id: TaskId, task_storage: TaskRepository,
        authentication: Authentication, authorization: Authorization,
        clock: Clock = utc_now,
    ):
        super().__init__(authentication)
        if task_id is None:
            raise InvalidArgumentError("task_id is required")
        self._task_id = task_id
        self._tasks = task_storage
        self._authorization = authorization
        self._clock = clock
        self._todo_list_id: TodoListId | None = None
        self._description: str | None = None

    def with_todo_list_id(self, todo_list_id: TodoListId) -> "AddTask":
        self._todo_list_id = todo_list_id
        return self

    def with_description(self, description: str) -> "AddTask":
        """Set the description. Blank input raises EmptyTaskDescriptionError here."""
        self._description = normalize_description(description)
        return self

    def execute(self) -> None:
        user_id = self._authenticate()
        if self._todo_list_id is None:
            raise InvalidArgumentError("AddTask requires with_todo_list_id()")
        self._authorization.validate_access(user_id, self._todo_list_id)
        if self._description is None:
            raise EmptyTaskDescriptionError()

        task = new_task(
            self._task_id, self._todo_list_id, self._description, self._clock(),
        )
        self._tasks.write(task)
        logger.info(
            "Task added",
            extra={"user_id": user_id, "task_id": task.id, "todo_list_id": task.todo_list_id},
        )


class UpdateTask(Operation):
    """Update description and/or completion. Completed tasks are locked."""

    def __init__(
        self, task_id: TaskId, task_storage: TaskRepository,
        authentication: Authentication, authorization: Authorization,
        clock: Clock = utc_now,
    ):
        super().__init__(authentication)
        if task_id is None:
            raise InvalidArgumentError("task_id is required")
        self._task_id = task_id
        self._tasks = task_storage
        self._authorization = authorization
        self._clock = clock
        self._description: str | None = None
        self._completed: bool | None = None

    def with_description(self, description: str) -> "UpdateTask":
        self._description = normalize_description(description)
        return self

    def set_completed(self, completed: bool) -> "UpdateTask":
        self._completed = bool(completed)
        return self

    def completed(self) -> "UpdateTask":
        return self.set_completed(True)

    def execute(self) -> None:
        user_id = self._authenticate()
        self._authorization.validate_access(user_id, self._task_id)

        current = self._tasks.read(self._task_id)
        if current is None:
            raise TaskNotFoundError(self._task_id.value)
        if current.completed:
            raise UpdateCompletedTaskError(self._task_id.value)

        self._tasks.write(current.updated(
            description=self._description,
            completed=self._completed,
            at=self._clock(),
        ))
        logger.info("Task updated", extra={"user_id": user_id, "task_id": self._task_id})


class RemoveTask(Operation):
    def __init__(
        self, task_id: TaskId, task_storage: TaskRepository,
        authentication: Authentication, authorization: Authorization,
    ):
        super().__init__(authentication)
        if task_id is None:
            raise InvalidArgumentError("task_id is required")
        self._task_id = task_id
        self._tasks = task_storage
        self._authorization = authorization

    def execute(self) -> Task:
        """Remove the task and return the record that was stored."""
        user_id = self._authenticate()
        self._authorization.validate_access(user_id, self._task_id)

        removed = self._tasks.remove(self._task_id)
        if removed is None:
            raise TaskNotFoundError(self._task_id.value)
        logger.info("Task removed", extra={"user_id": user_id, "task_id": self._task_id})
        return removed


class FindTask(Operation):
    def __init__(
        self, task_id: TaskId, task_storage: TaskRepository,
        authentication: Authentication, authorization: Authorization,
    ):
        super().__init__(authentication)
        if task_id is None:
            raise InvalidArgumentError("task_id is required")
        self._task_id = task_id
        self._tasks = task_storage
        self._authorization = authorization

    def execute(self) -> Task:
        user_id = self._authenticate()
        self._authorization.validate_access(user_id, self._task_id)

        task = self._tasks.read(self._task_id)
        if task is None:
            raise TaskNotFoundError(self._task_id.value)
        return task


class ReadTasks(Operation):
    def __init__(
        self, todo_list_id: TodoListId, task_storage: TaskRepository,
        authentication: Authentication, authorization: Authorization,
    ):
        super().__init__(authentication)
        if todo_list_id is None:
            raise InvalidArgumentError("todo_list_id is required")
        self._todo_list_id = todo_list_id
        self._tasks = task_storage
        self._authorization = authorization

    def execute(self) -> list[Task]:
        """Tasks of the list, oldest first."""
        user_id = self._authenticate()
        self._authorization.validate_access(user_id, self._todo_list_id)
        tasks = self._tasks.tasks_of(self._todo_list_id)
        return sorted(tasks, key=lambda t: (t.creation_date, t.id.value))


class ReadTodoLists(Operation):
    def __init__(
        self, todo_list_storage: TodoListRepository, authentication: Authentication,
    ):
        super().__init__(authentication)
        self._lists = todo_list_storage

    def execute(self) -> list[TodoList]:
        user_id = self._authenticate()
        return sorted(self._lists.lists_of(user_id), key=lambda t: t.id.value)
