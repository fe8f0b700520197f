"""To-Do List Routes — create lists, list the caller's lists, read a list's tasks.

Invariants:
    - Every route is secured by the token header
    - Routes only build and execute Operations; ownership rules live in core services
"""

from fastapi import APIRouter, Depends, status

from todolists.api.dependencies import get_services, id_path, require_token
from todolists.core.domain_types import TodoListId, Token
from todolists.schemas.todo import TaskResponse, TodoListCreate, TodoListResponse
from todolists.services.container import Services

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_list(
    body: TodoListCreate,
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    todo_list_id = TodoListId(body.todo_list_id)
    services.todo_service.create_list(todo_list_id).authorized_with(token).execute()
    return {"id": todo_list_id.value}


@router.get("", response_model=list[TodoListResponse])
async def read_todo_lists(
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    lists = services.todo_service.read_todo_lists().authorized_with(token).execute()
    return [TodoListResponse.from_entity(t) for t in lists]


@router.get("/{todo_list_id}", response_model=list[TaskResponse])
async def read_tasks(
    todo_list_id: str = id_path("To-do list id"),
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    tasks = (
        services.todo_service.read_tasks_from(TodoListId(todo_list_id))
        .authorized_with(token)
        .execute()
    )
    return [TaskResponse.from_entity(t) for t in tasks]
