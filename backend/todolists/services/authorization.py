"""Authorization — decides whether a user may act on a to-do list.

Invariants:
    - Ownership is the only access dimension: the list owner may act, nobody else
    - A TaskId target resolves to its list first; a task miss is TaskNotFound
      and is reported before any ownership check

Design Decisions:
    - One validate_access accepting TodoListId or TaskId: single authority for both
      list-addressed and task-addressed operations
"""

from todolists.core.domain_types import UserId, TodoListId, TaskId
from todolists.core.errors import (
    AuthorizationFailedError, ErrorContext, InvalidArgumentError,
    TaskNotFoundError, TodoListNotFoundError,
)
from todolists.core.repository_protocols import TodoListRepository, TaskRepository


class Authorization:
    def __init__(
        self, todo_list_storage: TodoListRepository, task_storage: TaskRepository,
    ):
        self._lists = todo_list_storage
        self._tasks = task_storage

    def validate_access(self, user_id: UserId, target: TodoListId | TaskId) -> None:
        """Raise unless user_id owns the list behind target."""
        if user_id is None or target is None:
            raise InvalidArgumentError("user_id and target are required")
        if isinstance(target, TaskId):
            task = self._tasks.read(target)
            if task is None:
                raise TaskNotFoundError(target.value)
            target = task.todo_list_id
        if not isinstance(target, TodoListId):
            raise InvalidArgumentError(
                f"Cannot authorize access to {type(target).__name__}",
            )

        todo_list = self._lists.read(target)
        if todo_list is None:
            raise TodoListNotFoundError(target.value)
        if todo_list.owner != user_id:
            raise AuthorizationFailedError(
                "Access to the to-do list is denied.",
                ErrorContext(user_id=user_id.value, todo_list_id=target.value),
            )
