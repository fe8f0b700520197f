"""Error Hierarchy — typed, categorized exceptions for every todolists failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status the web boundary answers with
    - to_response() produces the REST envelope
    - No passwords or tokens in user-facing messages

Design Decisions:
    - Single hierarchy with TodoError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Programming errors (InvalidArgumentError, UnknownIndexError) share the hierarchy but are
      INTERNAL/500 — they signal a defect, never bad user input
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    todo_list_id: str | None = None
    task_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TodoError(Exception):
    """Base exception for all todolists errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "todo_list_id": self.context.todo_list_id,
                    "task_id": self.context.task_id,
                },
            }
        }


# ─── Authentication Errors ──────────────────────────────────────

class EmptyCredentialsError(TodoError):
    """Username or password is blank on registration or sign-in."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Username and password must not be empty.",
            "EMPTY_CREDENTIALS", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidCredentialsError(TodoError):
    """Unknown username or password mismatch on sign-in."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class UserAlreadyExistsError(TodoError):
    """Registration attempted with a username that is already taken."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{username}' already exists.",
            "USER_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.username = username


class AuthorizationFailedError(TodoError):
    """Token is unknown/signed out, or the caller does not own the resource."""
    def __init__(self, reason: str = "Authorization failed.", context: ErrorContext | None = None):
        super().__init__(
            reason, "AUTHORIZATION_FAILED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Domain Errors (400-level) ──────────────────────────────────

class TodoListNotFoundError(TodoError):
    """Referenced to-do list does not exist."""
    def __init__(self, todo_list_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.todo_list_id = todo_list_id
        super().__init__(
            f"TodoList '{todo_list_id}' not found",
            "TODO_LIST_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class TaskNotFoundError(TodoError):
    """Referenced task does not exist."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Task '{task_id}' not found",
            "TASK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class TodoListAlreadyExistsError(TodoError):
    """To-do list id collision on creation."""
    def __init__(self, todo_list_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.todo_list_id = todo_list_id
        super().__init__(
            f"TodoList '{todo_list_id}' already exists",
            "TODO_LIST_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class TaskAlreadyExistsError(TodoError):
    """Task id collision on creation."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Task '{task_id}' already exists",
            "TASK_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class EmptyTaskDescriptionError(TodoError):
    """Blank description supplied to add or update."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Task description must not be empty.",
            "EMPTY_TASK_DESCRIPTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UpdateCompletedTaskError(TodoError):
    """Attempt to modify a task that is already completed."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Task '{task_id}' is completed and cannot be updated.",
            "UPDATE_COMPLETED_TASK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 403,
        )


# ─── Programming Errors (500-level) ─────────────────────────────

class InvalidArgumentError(TodoError):
    """A required argument was missing — caller defect, not user input."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class UnknownIndexError(TodoError):
    """Secondary lookup requested on an index the store never declared."""
    def __init__(self, index_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage has no index named '{index_name}'",
            "UNKNOWN_INDEX", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.index_name = index_name
