"""Service Container — explicit construction of stores and services at process start.

Invariants:
    - One store instance per entity kind per container; services share them by reference
    - No module-level singletons: the FastAPI lifespan builds a container and puts it on app.state
    - Pre-registered users are created once per container; a duplicate entry is skipped

Design Decisions:
    - Plain dataclass over a DI framework: four stores and two services, wiring fits on one screen
"""

import logging
from dataclasses import dataclass

from todolists.config import Settings, PreRegisteredUser
from todolists.core.domain_types import Username, Password
from todolists.core.entities import utc_now
from todolists.core.errors import UserAlreadyExistsError
from todolists.infrastructure.memory_storage import (
    AuthSessionStorage, TaskStorage, TodoListStorage, UserStorage,
)
from todolists.services.authentication import Authentication
from todolists.services.operations import Clock
from todolists.services.todo_service import TodoService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    users: UserStorage
    sessions: AuthSessionStorage
    todo_lists: TodoListStorage
    tasks: TaskStorage
    authentication: Authentication
    todo_service: TodoService

    def clear(self) -> None:
        """Drop every record from every store."""
        for storage in (self.users, self.sessions, self.todo_lists, self.tasks):
            storage.clear()


def build_services(
    settings: Settings | None = None, clock: Clock = utc_now,
) -> Services:
    users = UserStorage()
    sessions = AuthSessionStorage()
    todo_lists = TodoListStorage()
    tasks = TaskStorage()
    authentication = Authentication(users, sessions)
    services = Services(
        users=users,
        sessions=sessions,
        todo_lists=todo_lists,
        tasks=tasks,
        authentication=authentication,
        todo_service=TodoService(authentication, todo_lists, tasks, clock=clock),
    )
    if settings is not None:
        register_users(authentication, settings.pre_registered_users)
    return services


def register_users(
    authentication: Authentication, users: list[PreRegisteredUser],
) -> None:
    for user in users:
        try:
            authentication.create_user(
                Username(user.username), Password(user.password),
            )
        except UserAlreadyExistsError:
            logger.warning(f"Pre-registered user '{user.username}' listed twice")
