"""Error Hierarchy — typed, categorized exceptions for all forum failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; storage/consistency errors (500-level) are critical
    - to_response() produces the REST envelope
    - InvalidCredentialsError never says which half of the credentials was wrong

Design Decisions:
    - Single hierarchy with ForumError base: FastAPI global handler catches all
    - UsernameTakenError is a FormValidationError: surfaces as a field error on "username"
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    topic_id: int | None = None
    username: str | None = None
    debug_info: dict[str, Any] | None = None


class ForumError(Exception):
    """Base exception for all forum errors."""

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
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class FormValidationError(ForumError):
    """One or more form fields failed validation."""
    def __init__(
        self,
        field_errors: dict[str, list[str]],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Form contains invalid fields",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field_errors = field_errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": name, "message": msg}
            for name, messages in self.field_errors.items()
            for msg in messages
        ]
        return response


USERNAME_TAKEN_MESSAGE = "Username already taken."


class UsernameTakenError(FormValidationError):
    """Registration hit an existing username (pre-check or storage constraint).

    other_errors carries the remaining field errors of the same form, so the
    pre-check path reports everything at once under a single code.
    """
    def __init__(
        self,
        username: str,
        context: ErrorContext | None = None,
        other_errors: dict[str, list[str]] | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.username = username
        field_errors = {"username": [USERNAME_TAKEN_MESSAGE]}
        for name, messages in (other_errors or {}).items():
            if name != "username":
                field_errors[name] = list(messages)
        super().__init__(field_errors, ctx)
        self.code = "USERNAME_TAKEN"
        self.username = username


class InvalidCredentialsError(ForumError):
    """Unknown user or wrong password — deliberately indistinguishable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Incorrect username or password.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class LoginRequiredError(ForumError):
    """Mutating action attempted by an anonymous session."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Login required",
            "LOGIN_REQUIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(ForumError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Storage / Consistency Errors (500-level) ───────────────────

class DatabaseError(ForumError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class TopicConsistencyError(ForumError):
    """A topic was found without its originating reply."""
    def __init__(self, topic_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.topic_id = topic_id
        super().__init__(
            f"Topic {topic_id} has no replies",
            "TOPIC_INCONSISTENT", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.topic_id = topic_id
