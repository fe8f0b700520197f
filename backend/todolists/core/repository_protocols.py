"""Boundary Protocols — storage contracts the services depend on.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Services receive storage through these Protocol types (dependency injection)
    - read/remove return None on a miss; they never raise for absent records

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-memory stores need no shared base
      with test doubles (ADR: ExMA anti-pattern)
    - Synchronous methods: the core has no suspension points; every call runs to completion
"""

from typing import Protocol, TypeVar

from todolists.core.domain_types import (
    EntityId, UserId, TodoListId, TaskId, Token, Username,
)
from todolists.core.entities import Entity, User, AuthSession, TodoList, Task

IdT = TypeVar("IdT", bound=EntityId, contravariant=True)
EntityT = TypeVar("EntityT", bound=Entity)


class Storage(Protocol[IdT, EntityT]):
    """Keyed container for one entity kind."""
    def write(self, entity: EntityT) -> None: ...
    def read(self, entity_id: IdT) -> EntityT | None: ...
    def remove(self, entity_id: IdT) -> EntityT | None: ...
    def clear(self) -> None: ...


class UserRepository(Storage[UserId, User], Protocol):
    def find_by_username(self, username: Username) -> User | None: ...


class AuthSessionRepository(Storage[Token, AuthSession], Protocol):
    def sessions_of(self, user_id: UserId) -> list[AuthSession]: ...


class TodoListRepository(Storage[TodoListId, TodoList], Protocol):
    def lists_of(self, user_id: UserId) -> list[TodoList]: ...


class TaskRepository(Storage[TaskId, Task], Protocol):
    def tasks_of(self, todo_list_id: TodoListId) -> list[Task]: ...
