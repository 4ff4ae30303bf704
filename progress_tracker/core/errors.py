"""Error Hierarchy: typed, categorized exceptions for every tracker failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation (400) and not-found (404) are expected; database errors (5xx) are critical
    - to_response() produces the public JSON body; it never leaks internal details
    - ReportValidationError always names the first failing field as a dotted path

Design Decisions:
    - Single hierarchy with TrackerError base: FastAPI global handler catches all
    - Flat response bodies ({message} / {message, field}): the web client reads them directly
    - ErrorContext as dataclass: observability fields kept out of the response body
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for logs; never serialized to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    report_id: int | None = None
    debug_info: dict[str, Any] | None = None


class TrackerError(Exception):
    """Base exception for all tracker errors."""

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
        """Convert to the public REST error body."""
        return {"message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ReportValidationError(TrackerError):
    """Report input failed validation. Carries the first failing field only."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        return {"message": self.message, "field": self.field}


class ReportNotFoundError(TrackerError):
    """Requested report does not exist."""
    def __init__(self, report_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.report_id = report_id
        super().__init__(
            "Report not found",
            "REPORT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.report_id = report_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TrackerError):
    """Database operation failed. The transaction has been rolled back."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
