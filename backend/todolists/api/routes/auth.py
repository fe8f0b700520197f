"""Auth Routes — registration, sign-in via Basic credentials, sign-out.

Invariants:
    - POST /auth without an Authorization header answers 401
    - A header that is not `Basic <base64(user:pass)>` answers 403
    - DELETE /auth always succeeds for a present token (sign-out is idempotent)

Design Decisions:
    - Credentials travel in the Authorization header (Basic scheme), not in the body
"""

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from todolists.api.dependencies import get_services, require_token
from todolists.core.domain_types import Token, Username, Password
from todolists.schemas.todo import TokenResponse, UserCreate
from todolists.services.container import Services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["auth"])

AUTHENTICATION_SCHEME = "Basic"


def parse_basic_credentials(header: str) -> tuple[Username, Password]:
    """Decode `Basic base64(username:password)`; 403 on any malformed part."""
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != AUTHENTICATION_SCHEME:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Unsupported authentication scheme")
    try:
        decoded = base64.b64decode(parts[1], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Malformed credentials")
    username, sep, password = decoded.partition(":")
    if not sep:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Malformed credentials")
    return Username(username), Password(password)


@router.post("/auth", response_model=TokenResponse)
async def sign_in(request: Request, services: Services = Depends(get_services)):
    header = request.headers.get("Authorization")
    if header is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Missing Authorization header")
    username, password = parse_basic_credentials(header)
    token = services.authentication.sign_in(username, password)
    return TokenResponse(token=token.value)


@router.delete("/auth")
async def sign_out(
    token: Token = Depends(require_token),
    services: Services = Depends(get_services),
):
    services.authentication.sign_out(token)
    return {"status": "signed_out"}


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def register(body: UserCreate, services: Services = Depends(get_services)):
    services.authentication.create_user(Username(body.username), Password(body.password))
    return {"status": "created", "username": body.username.strip()}
