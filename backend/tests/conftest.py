"""Root conftest — shared fixtures: fresh stores per test, a controllable clock, signed-in users.

Invariants:
    - Every test gets its own Services container (no state shared between tests)
    - The clock only moves when a test advances it
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Human-readable logs in test output; no .env leakage into defaults
os.environ.setdefault("TODOLISTS_LOG_FORMAT", "text")

from todolists.core.domain_types import Password, TodoListId, Username  # noqa: E402
from todolists.services.container import build_services  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 60) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def services(clock):
    return build_services(clock=clock)


@pytest.fixture
def authentication(services):
    return services.authentication


@pytest.fixture
def todo_service(services):
    return services.todo_service


@pytest.fixture
def sign_up(authentication):
    """Register a user and return a fresh session token for them."""
    def _sign_up(username: str, password: str):
        authentication.create_user(Username(username), Password(password))
        return authentication.sign_in(Username(username), Password(password))
    return _sign_up


@pytest.fixture
def alice_token(sign_up):
    return sign_up("alice", "secret1")


@pytest.fixture
def bob_token(sign_up):
    return sign_up("bob", "secret2")


@pytest.fixture
def alice_list(todo_service, alice_token):
    """A to-do list owned by alice."""
    todo_list_id = TodoListId("alice-list")
    todo_service.create_list(todo_list_id).authorized_with(alice_token).execute()
    return todo_list_id
