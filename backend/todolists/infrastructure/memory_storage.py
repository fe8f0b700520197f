"""In-Memory Storage — keyed stores with explicit secondary indexes.

Invariants:
    - write() is an upsert: one record per id, the latest write wins
    - Secondary indexes (value -> set of primary ids) change in the same critical
      section as the primary map, so a lookup never sees a half-applied write
    - One RLock per store guards every map access
    - read()/remove() of an absent id return None; a None id is a caller defect

Design Decisions:
    - Indexes declared up front as {name: key_fn}: no attribute introspection at lookup
      time, and an unknown index name fails loudly as UnknownIndexError
    - Per-store lock only: cross-store or read-then-write sequences are NOT atomic
      (two concurrent add_task calls with one id can both pass the existence check)
    - Non-durable by design: process restart loses all state
"""

import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Generic, Hashable, TypeVar

from todolists.core.domain_types import (
    EntityId, UserId, TodoListId, TaskId, Token, Username,
)
from todolists.core.entities import Entity, User, AuthSession, TodoList, Task
from todolists.core.errors import InvalidArgumentError, UnknownIndexError

logger = logging.getLogger(__name__)

IdT = TypeVar("IdT", bound=EntityId)
EntityT = TypeVar("EntityT", bound=Entity)

IndexKey = Callable[[Any], Hashable]


class InMemoryStorage(Generic[IdT, EntityT]):
    """Thread-safe keyed container for one entity kind."""

    def __init__(self, indexes: dict[str, IndexKey] | None = None):
        self._lock = threading.RLock()
        self._records: dict[IdT, EntityT] = {}
        self._index_keys: dict[str, IndexKey] = dict(indexes or {})
        self._indexes: dict[str, defaultdict[Hashable, set[IdT]]] = {
            name: defaultdict(set) for name in self._index_keys
        }

    def write(self, entity: EntityT) -> None:
        """Insert, or replace the record stored under the same id."""
        if entity is None:
            raise InvalidArgumentError("Cannot write a None entity")
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            raise InvalidArgumentError("Entity to write must have an id")
        with self._lock:
            previous = self._records.get(entity_id)
            if previous is not None:
                self._unindex(previous)
            self._records[entity_id] = entity
            self._index(entity)

    def read(self, entity_id: IdT) -> EntityT | None:
        if entity_id is None:
            raise InvalidArgumentError("Entity id cannot be None")
        with self._lock:
            return self._records.get(entity_id)

    def remove(self, entity_id: IdT) -> EntityT | None:
        """Delete and return the prior record, or None if nothing was stored."""
        if entity_id is None:
            raise InvalidArgumentError("Cannot remove entity with None id")
        with self._lock:
            removed = self._records.pop(entity_id, None)
            if removed is not None:
                self._unindex(removed)
            return removed

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            for index in self._indexes.values():
                index.clear()

    def find_by(self, index_name: str, value: Hashable) -> list[EntityT]:
        """All records whose indexed attribute equals value."""
        index = self._indexes.get(index_name)
        if index is None:
            raise UnknownIndexError(index_name)
        with self._lock:
            ids = index.get(value, ())
            return [self._records[i] for i in ids]

    def all(self) -> list[EntityT]:
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._records

    # --- index maintenance (caller holds the lock) -------------------

    def _index(self, entity: EntityT) -> None:
        for name, key_fn in self._index_keys.items():
            self._indexes[name][key_fn(entity)].add(entity.id)

    def _unindex(self, entity: EntityT) -> None:
        for name, key_fn in self._index_keys.items():
            key = key_fn(entity)
            bucket = self._indexes[name].get(key)
            if bucket is None:
                continue
            bucket.discard(entity.id)
            if not bucket:
                del self._indexes[name][key]


# ─── Specialized stores ─────────────────────────────────────────

class UserStorage(InMemoryStorage[UserId, User]):
    def __init__(self):
        super().__init__(indexes={"username": lambda user: user.username})

    def find_by_username(self, username: Username) -> User | None:
        users = self.find_by("username", username)
        if len(users) > 1:
            logger.error(
                f"Username index holds {len(users)} users for one username",
            )
        return users[0] if users else None


class AuthSessionStorage(InMemoryStorage[Token, AuthSession]):
    def __init__(self):
        super().__init__(indexes={"user_id": lambda session: session.user_id})

    def sessions_of(self, user_id: UserId) -> list[AuthSession]:
        return self.find_by("user_id", user_id)


class TodoListStorage(InMemoryStorage[TodoListId, TodoList]):
    def __init__(self):
        super().__init__(indexes={"owner": lambda todo_list: todo_list.owner})

    def lists_of(self, user_id: UserId) -> list[TodoList]:
        return self.find_by("owner", user_id)


class TaskStorage(InMemoryStorage[TaskId, Task]):
    def __init__(self):
        super().__init__(indexes={"todo_list_id": lambda task: task.todo_list_id})

    def tasks_of(self, todo_list_id: TodoListId) -> list[Task]:
        return self.find_by("todo_list_id", todo_list_id)
