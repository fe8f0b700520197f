"""API test fixtures — isolated app per test + httpx ASGI client.

Invariants:
    - Every test gets an app built around the per-test Services container
    - No pre-registered users: tests register who they need

Design Decisions:
    - create_app(settings, services) over dependency_overrides: the container is the only
      thing routes resolve, so injecting it covers every route
"""

import base64

import pytest
from httpx import ASGITransport, AsyncClient

from todolists.config import Settings
from todolists.main import create_app


def basic_auth(username: str, password: str) -> dict:
    raw = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {raw}"}


@pytest.fixture
async def client(services):
    app = create_app(Settings(pre_registered_users=[]), services)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def login(client):
    """Register + sign in over HTTP; returns the token header dict."""
    async def _login(username: str, password: str) -> dict:
        res = await client.post(
            "/api/v1/users", json={"username": username, "password": password},
        )
        assert res.status_code == 201
        res = await client.post("/api/v1/auth", headers=basic_auth(username, password))
        assert res.status_code == 200
        return {"X-Todo-Token": res.json()["token"]}
    return _login


@pytest.fixture
def basic_auth_header():
    return basic_auth
