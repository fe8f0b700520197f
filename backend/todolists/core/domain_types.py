"""Domain Types — identity and credential value types that replace bare strings.

Invariants:
    - Every EntityId wraps a non-empty string; equality and hash by wrapped value
    - Ids of different kinds never compare equal (UserId("a") != TaskId("a"))
    - All value types are immutable (frozen dataclasses)

Design Decisions:
    - Frozen dataclass over NewType: ids must stay distinct at runtime, not only for
      the type checker, because storage keys of different kinds share one hashing scheme
    - Username/Password accept blank values: the Authentication service owns the
      EmptyCredentials rule, so construction must not pre-empt it
"""

import uuid
from dataclasses import dataclass
from typing import TypeVar

from todolists.core.errors import InvalidArgumentError

_IdT = TypeVar("_IdT", bound="EntityId")


# ─── Identity Types ──────────────────────────────────────────────

@dataclass(frozen=True)
class EntityId:
    """Opaque identifier of a stored record."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidArgumentError(
                f"{type(self).__name__} requires a non-empty string value",
            )

    @classmethod
    def generate(cls: type[_IdT]) -> _IdT:
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserId(EntityId):
    pass


@dataclass(frozen=True)
class TodoListId(EntityId):
    pass


@dataclass(frozen=True)
class TaskId(EntityId):
    pass


@dataclass(frozen=True)
class Token(EntityId):
    """Session credential. Repr is masked so tokens never land in logs verbatim."""

    def __repr__(self) -> str:
        return f"Token('{self.masked()}')"

    def masked(self) -> str:
        return f"{self.value[:4]}…" if len(self.value) > 4 else "…"


# ─── Credential Types ────────────────────────────────────────────

@dataclass(frozen=True)
class Username:
    value: str

    def is_blank(self) -> bool:
        return not self.value.strip()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Password:
    """Opaque comparable secret. Stored as given; never printed."""
    value: str

    def is_blank(self) -> bool:
        return not self.value.strip()

    def __repr__(self) -> str:
        return "Password('***')"
