"""Error Hierarchy — typed, categorized exceptions for every HR Leave failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 400-level; infrastructure errors are 500-level
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with HRLeaveError base: one global handler catches all
    - Unauthorized (no relationship to the resource) and Forbidden (relationship
      exists, role insufficient) are distinct classes with distinct codes even
      though both map to HTTP 403
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    employee_id: int | None = None
    leave_request_id: int | None = None
    debug_info: dict[str, Any] | None = None


class HRLeaveError(Exception):
    """Base exception for all HR Leave errors."""

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

class ResourceNotFoundError(HRLeaveError):
    """Requested resource does not exist (or is soft-deleted)."""
    def __init__(
        self, resource_type: str, resource_id: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidInputError(HRLeaveError):
    """Request shape is malformed."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class InvalidDateRangeError(HRLeaveError):
    """start_date is after end_date."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "start date cannot be after end date",
            "INVALID_DATE_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class PastDateError(HRLeaveError):
    """start_date lies before the current time."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "leave request cannot start in the past",
            "PAST_DATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class OverlapConflictError(HRLeaveError):
    """An approved leave request of the same employee overlaps the range."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "overlapping approved leave request exists for this date range",
            "OVERLAP_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class UnauthorizedError(HRLeaveError):
    """Requester has no relationship to the resource."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"unauthorized to {action} this leave request",
            "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class ForbiddenError(HRLeaveError):
    """Requester's role is insufficient for the specific action."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class EmailExistsError(HRLeaveError):
    """An employee with this email is already registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "email already exists",
            "EMAIL_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class InvalidCredentialsError(HRLeaveError):
    """Login failed. Same message whether the email or the password was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "invalid email or password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthenticationFailedError(HRLeaveError):
    """Bearer token missing, malformed, invalid or expired."""
    def __init__(self, message: str = "Invalid or expired token", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(HRLeaveError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
