"""Todo Schemas — Pydantic request/response models for the list, task, and auth routes.

Invariants:
    - Request models only shape input; emptiness rules (credentials, descriptions)
      stay in core so they fail with the same typed error on every path
    - Response models are built from core entities, never from request data

Design Decisions:
    - from_entity classmethods keep entity -> JSON mapping next to the response shape
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from todolists.core.entities import Task, TodoList


class UserCreate(BaseModel):
    """Registration payload."""
    username: str = Field(max_length=200)
    password: str = Field(max_length=200)


class TokenResponse(BaseModel):
    token: str


class TodoListCreate(BaseModel):
    todo_list_id: str = Field(min_length=1, max_length=100)

    @field_validator("todo_list_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("todo_list_id cannot be empty or whitespace")
        return v


class TaskCreate(BaseModel):
    description: str = Field(max_length=2000)


class TaskUpdate(BaseModel):
    """Partial update — omitted fields keep their stored values."""
    description: str | None = Field(None, max_length=2000)
    completed: bool | None = None


class TodoListResponse(BaseModel):
    id: str
    owner: str

    @classmethod
    def from_entity(cls, todo_list: TodoList) -> "TodoListResponse":
        return cls(id=todo_list.id.value, owner=todo_list.owner.value)


class TaskResponse(BaseModel):
    id: str
    todo_list_id: str
    description: str
    completed: bool
    creation_date: datetime
    last_update_date: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id.value,
            todo_list_id=task.todo_list_id.value,
            description=task.description,
            completed=task.completed,
            creation_date=task.creation_date,
            last_update_date=task.last_update_date,
        )
