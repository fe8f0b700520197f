"""Task Routes — find, add, update, and remove a task inside a list.

Invariants:
    - POST uses the path's list id as the new task's list
    - GET/PUT/DELETE authorize through the task itself; the path's list id is not consulted
    - A blank description answers 400 (EmptyTaskDescriptionError), never 422
    - A blank list or task id in the path answers 400 (VALIDATION_ERROR)
"""

from fastapi import APIRouter, Depends, status

from todolists.api.dependencies import get_services, id_path, require_token
from todolists.core.domain_types import TaskId, TodoListId, Token
from todolists.schemas.todo import TaskCreate, TaskResponse, TaskUpdate
from todolists.services.container import Services

router = APIRouter(prefix="/api/v1/lists/{todo_list_id}", tags=["tasks"])


@router.get("/{task_id}", response_model=TaskResponse)
async def find_task(
    todo_list_id: str = id_path("To-do list id"),
    task_id: str = id_path("Task id"),
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    task = services.todo_service.find_task(TaskId(task_id)).authorized_with(token).execute()
    return TaskResponse.from_entity(task)


@router.post("/{task_id}", status_code=status.HTTP_201_CREATED)
async def add_task(
    body: TaskCreate,
    todo_list_id: str = id_path("To-do list id"),
    task_id: str = id_path("Task id"),
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    (
        services.todo_service.add_task(TaskId(task_id))
        .with_todo_list_id(TodoListId(todo_list_id))
        .with_description(body.description)
        .authorized_with(token)
        .execute()
    )
    return {"id": task_id}


@router.put("/{task_id}")
async def update_task(
    body: TaskUpdate,
    todo_list_id: str = id_path("To-do list id"),
    task_id: str = id_path("Task id"),
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    operation = services.todo_service.update_task(TaskId(task_id)).authorized_with(token)
    if body.description is not None:
        operation = operation.with_description(body.description)
    if body.completed is not None:
        operation = operation.set_completed(body.completed)
    operation.execute()
    return {"id": task_id}


@router.delete("/{task_id}", response_model=TaskResponse)
async def remove_task(
    todo_list_id: str = id_path("To-do list id"),
    task_id: str = id_path("Task id"),
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    removed = services.todo_service.remove_task(TaskId(task_id)).authorized_with(token).execute()
    return TaskResponse.from_entity(removed)
