"""TodoService — entry point that hands out one Operation per use case.

Invariants:
    - create_list / add_task reject an id that is already stored before any Operation exists
    - Every Operation shares the same Authentication, Authorization and stores

Design Decisions:
    - Existence checks here, not in execute(): a duplicate id is a request error that the
      caller sees immediately (ADR: matches the two-step create-then-execute flow)
    - The check-then-write gap is not closed: two racing callers can both pass the check
"""

from todolists.core.domain_types import TodoListId, TaskId
from todolists.core.entities import utc_now
from todolists.core.errors import (
    InvalidArgumentError, TaskAlreadyExistsError, TodoListAlreadyExistsError,
)
from todolists.core.repository_protocols import TodoListRepository, TaskRepository
from todolists.services.authentication import Authentication
from todolists.services.authorization import Authorization
from todolists.services.operations import (
    AddTask, Clock, CreateList, FindTask, ReadTasks, ReadTodoLists,
    RemoveTask, UpdateTask,
)


class TodoService:
    def __init__(
        self,
        authentication: Authentication,
        todo_list_storage: TodoListRepository,
        task_storage: TaskRepository,
        clock: Clock = utc_now,
    ):
        self._authentication = authentication
        self._lists = todo_list_storage
        self._tasks = task_storage
        self._authorization = Authorization(todo_list_storage, task_storage)
        self._clock = clock

    @property
    def authorization(self) -> Authorization:
        return self._authorization

    def create_list(self, todo_list_id: TodoListId) -> CreateList:
        if todo_list_id is None:
            raise InvalidArgumentError("todo_list_id is required")
        if self._lists.read(todo_list_id) is not None:
            raise TodoListAlreadyExistsError(todo_list_id.value)
        return CreateList(todo_list_id, self._lists, self._authentication)

    def add_task(self, task_id: TaskId) -> AddTask:
        if task_id is None:
            raise InvalidArgumentError("task_id is required")
        if self._tasks.read(task_id) is not None:
            raise TaskAlreadyExistsError(task_id.value)
        return AddTask(
            task_id, self._tasks, self._authentication, self._authorization,
            clock=self._clock,
        )

    def update_task(self, task_id: TaskId) -> UpdateTask:
        return UpdateTask(
            task_id, self._tasks, self._authentication, self._authorization,
            clock=self._clock,
        )

    def remove_task(self, task_id: TaskId) -> RemoveTask:
        return RemoveTask(task_id, self._tasks, self._authentication, self._authorization)

    def find_task(self, task_id: TaskId) -> FindTask:
        return FindTask(task_id, self._tasks, self._authentication, self._authorization)

    def read_tasks_from(self, todo_list_id: TodoListId) -> ReadTasks:
        return ReadTasks(
            todo_list_id, self._tasks, self._authentication, self._authorization,
        )

    def read_todo_lists(self) -> ReadTodoLists:
        return ReadTodoLists(self._lists, self._authentication)
