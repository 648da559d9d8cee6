"""Error Taxonomy — closed set of failure kinds raised by the user store.

Invariants:
    - Every store failure is a UserDalError whose kind is one of ErrorKind (4 members)
    - Each kind maps to exactly one HTTP status (400 / 404 / 410 / 500)
    - PersistenceError always chains the underlying driver exception (__cause__)
    - No internal details leaked in to_response() messages

Design Decisions:
    - ErrorKind enum over identity-compared sentinels: callers branch on .kind
      exhaustively, or catch the subclass (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorKind(str, Enum):
    """The closed taxonomy every store operation signals."""
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    DELETED = "deleted"
    PERSISTENCE = "persistence"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RESOURCE_GONE = "resource_gone"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class UserDalError(Exception):
    """Base exception for every user store failure."""

    kind: ErrorKind

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
                "kind": self.kind.value,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InvalidInputError(UserDalError):
    """Malformed identifier or missing required argument."""
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class UserNotFoundError(UserDalError):
    """No row with the given id has ever existed."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"user {user_id} does not exist",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.user_id = user_id


class UserDeletedError(UserDalError):
    """Row exists but has been soft-deleted."""
    kind = ErrorKind.DELETED

    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"user {user_id} has been deleted",
            "USER_DELETED", ErrorCategory.RESOURCE_GONE,
            ErrorSeverity.INFO, ctx, 410,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(UserDalError):
    """The backing store failed (connectivity, constraint violation, scan error)."""
    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
