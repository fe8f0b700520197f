"""Route Dependencies — services and caller token resolved per request.

Invariants:
    - Services come from app.state (built by the lifespan), never from a module global
    - Secured routes without the token header answer 401 before any core call
    - Blank ids in the path answer 400 (VALIDATION_ERROR) before any id is built

Design Decisions:
    - Header name read from settings: deployments can rename X-Todo-Token without code changes
"""

from fastapi import HTTPException, Path, Request, status

from todolists.config import Settings
from todolists.core.domain_types import Token
from todolists.services.container import Services


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized")
    return services


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_token(request: Request) -> Token:
    """Caller's session token from the configured header."""
    header = get_app_settings(request).token_header
    value = request.headers.get(header)
    if not value or not value.strip():
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {header} header",
        )
    return Token(value.strip())


# Path ids must hold at least one non-whitespace character.
NON_BLANK_ID = r"^\s*\S"


def id_path(description: str):
    return Path(pattern=NON_BLANK_ID, description=description)
