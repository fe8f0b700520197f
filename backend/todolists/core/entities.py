"""Entities — the records the stores hold: User, AuthSession, TodoList, Task.

Invariants:
    - Every entity carries exactly one EntityId, exposed as `id`, assigned at construction
    - Entities are frozen: a change is a new record written over the old id (upsert)
    - Task.description is non-empty and trimmed; last_update_date defaults to creation_date
    - Task.todo_list_id and TodoList.owner never change for the record's lifetime

Design Decisions:
    - Validating factory functions (new_task, new_todo_list) over builders: required
      fields are checked at the call site and fail with a typed error
    - Domain equality compares every field (dataclass eq); identity comparison is `a.id == b.id`
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from todolists.core.domain_types import (
    EntityId, UserId, TodoListId, TaskId, Token, Username, Password,
)
from todolists.core.errors import EmptyTaskDescriptionError, InvalidArgumentError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_description(description: str | None) -> str:
    """Trim a task description, rejecting None and whitespace-only values."""
    if description is None:
        raise EmptyTaskDescriptionError()
    trimmed = description.strip()
    if not trimmed:
        raise EmptyTaskDescriptionError()
    return trimmed


def _require(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} is required")


class Entity:
    """Marker base — anything stored must expose an `id` EntityId."""
    id: EntityId


@dataclass(frozen=True)
class User(Entity):
    id: UserId
    username: Username
    password: Password = field(repr=False)


@dataclass(frozen=True)
class AuthSession(Entity):
    """Live binding from a token to the user who signed in. No expiry."""
    token: Token
    user_id: UserId

    @property
    def id(self) -> Token:
        return self.token


@dataclass(frozen=True)
class TodoList(Entity):
    id: TodoListId
    owner: UserId


@dataclass(frozen=True)
class Task(Entity):
    id: TaskId
    todo_list_id: TodoListId
    description: str
    completed: bool = False
    creation_date: datetime = field(default_factory=utc_now)
    last_update_date: datetime | None = None

    def __post_init__(self):
        if self.last_update_date is None:
            object.__setattr__(self, "last_update_date", self.creation_date)

    def updated(
        self,
        *,
        description: str | None = None,
        completed: bool | None = None,
        at: datetime,
    ) -> "Task":
        """Copy with the given fields changed; unset fields keep their stored values."""
        return replace(
            self,
            description=(
                self.description if description is None
                else normalize_description(description)
            ),
            completed=self.completed if completed is None else completed,
            last_update_date=at,
        )


# ─── Factories ───────────────────────────────────────────────────

def new_todo_list(todo_list_id: TodoListId, owner: UserId) -> TodoList:
    _require(todo_list_id, "todo_list_id")
    _require(owner, "owner")
    return TodoList(id=todo_list_id, owner=owner)


def new_task(
    task_id: TaskId,
    todo_list_id: TodoListId,
    description: str | None,
    creation_date: datetime,
) -> Task:
    _require(task_id, "task_id")
    _require(todo_list_id, "todo_list_id")
    _require(creation_date, "creation_date")
    return Task(
        id=task_id,
        todo_list_id=todo_list_id,
        description=normalize_description(description),
        creation_date=creation_date,
    )
