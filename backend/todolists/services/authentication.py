"""Authentication — registers users and issues, validates, and revokes session tokens.

Invariants:
    - Token lifecycle: absent -> active (sign_in) -> absent (sign_out); no time-based expiry
    - A username is registered at most once, compared after trimming surrounding whitespace
    - Tokens are random UUIDs; every validate() is a session-store lookup
    - sign_out of an unknown token is a silent no-op
    - Passwords and full tokens are never logged

Design Decisions:
    - Stateless logic over injected stores: all trust decisions live in the session store
    - create_user returns nothing; callers sign in as a separate step
"""

import logging

from todolists.core.domain_types import UserId, Token, Username, Password
from todolists.core.entities import User, AuthSession
from todolists.core.errors import (
    AuthorizationFailedError, EmptyCredentialsError,
    InvalidCredentialsError, UserAlreadyExistsError, InvalidArgumentError,
)
from todolists.core.repository_protocols import (
    UserRepository, AuthSessionRepository,
)

logger = logging.getLogger(__name__)


def _check_credentials(username: Username, password: Password) -> Username:
    """Reject missing or blank credentials; return the trimmed username."""
    if username is None or password is None:
        raise InvalidArgumentError("username and password are required")
    if username.is_blank() or password.is_blank():
        raise EmptyCredentialsError()
    return Username(username.value.strip())


class Authentication:
    """Owns the user and session stores."""

    def __init__(
        self, user_storage: UserRepository, session_storage: AuthSessionRepository,
    ):
        self._users = user_storage
        self._sessions = session_storage

    def create_user(self, username: Username, password: Password) -> None:
        username = _check_credentials(username, password)
        if self._users.find_by_username(username) is not None:
            raise UserAlreadyExistsError(username.value)

        user = User(id=UserId.generate(), username=username, password=password)
        self._users.write(user)
        logger.info(
            f"Registered user '{username.value}'",
            extra={"user_id": user.id},
        )

    def sign_in(self, username: Username, password: Password) -> Token:
        username = _check_credentials(username, password)
        user = self._users.find_by_username(username)
        if user is None or user.password != password:
            logger.warning(f"Failed sign-in for '{username.value}'")
            raise InvalidCredentialsError()

        token = Token.generate()
        self._sessions.write(AuthSession(token=token, user_id=user.id))
        logger.info(
            f"Session {token.masked()} opened", extra={"user_id": user.id},
        )
        return token

    def sign_out(self, token: Token) -> None:
        if token is None:
            raise InvalidArgumentError("token is required")
        removed = self._sessions.remove(token)
        if removed is not None:
            logger.info(
                f"Session {token.masked()} closed",
                extra={"user_id": removed.user_id},
            )

    def validate(self, token: Token) -> UserId:
        """Return the id of the user owning the live session for token."""
        if token is None:
            raise InvalidArgumentError("token is required")
        session = self._sessions.read(token)
        if session is None:
            raise AuthorizationFailedError("Session is not valid.")
        return session.user_id
