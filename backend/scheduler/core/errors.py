"""Error Hierarchy — typed, categorized exceptions for every scheduler failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule failures map to 400, missing session to 401, infrastructure to 500
    - to_response() produces the REST envelope {"error": {...}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SchedulerError base: one global handler renders all of them
    - ErrorContext carries the ids involved so handlers can log them as extras
"""

from dataclasses import dataclass, field
from enum import Enum
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    schedule_id: int | None = None
    comment_id: int | None = None


class SchedulerError(Exception):
    """Base exception for all scheduler errors."""

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

class ResourceNotFoundError(SchedulerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, code: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: object, context: ErrorContext | None = None):
        super().__init__("User", user_id, "USER_NOT_FOUND", context)


class ScheduleNotFoundError(ResourceNotFoundError):
    def __init__(self, schedule_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(schedule_id=schedule_id)
        super().__init__("Schedule", schedule_id, "SCHEDULE_NOT_FOUND", ctx)


class CommentNotFoundError(ResourceNotFoundError):
    def __init__(self, comment_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(comment_id=comment_id)
        super().__init__("Comment", comment_id, "COMMENT_NOT_FOUND", ctx)


class ForbiddenError(SchedulerError):
    """Authenticated, but not the owner/author of the resource."""
    def __init__(self, action: str, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Only the owner may {action} this {resource_type.lower()}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.action = action
        self.resource_type = resource_type


class ScheduleMismatchError(SchedulerError):
    """Comment does not belong to the schedule named in the request path."""
    def __init__(
        self, comment_id: int, schedule_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext(schedule_id=schedule_id, comment_id=comment_id)
        super().__init__(
            f"Comment '{comment_id}' does not belong to schedule '{schedule_id}'",
            "SCHEDULE_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )


class DuplicateEmailError(SchedulerError):
    """Email already registered to another user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email is already registered",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class DuplicateUsernameError(SchedulerError):
    """Username already taken by another user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Username is already taken",
            "DUPLICATE_USERNAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidCredentialsError(SchedulerError):
    """Email unknown or password hash did not verify."""
    def __init__(
        self, message: str = "Invalid email or password",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UserHasContentError(SchedulerError):
    """User still owns schedules or comments; deletion does not cascade."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(user_id=user_id)
        super().__init__(
            "User still owns schedules or comments; delete them first",
            "USER_HAS_CONTENT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )


class UnauthorizedError(SchedulerError):
    """No valid session for a protected route."""
    def __init__(
        self, message: str = "Authentication required",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SchedulerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
