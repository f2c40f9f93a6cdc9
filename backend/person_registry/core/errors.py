"""Error Hierarchy — typed, categorized exceptions for all registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are not
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TRANSIENT = "transient"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_id: str | None = None
    operation: str | None = None
    attempts: int | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

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
                    "record_id": self.context.record_id,
                    "operation": self.context.operation,
                    "attempts": self.context.attempts,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RecordValidationError(RegistryError):
    """Incoming aggregate is missing a required field or repeats a child id."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class QueryParameterError(RegistryError):
    """Listing parameter outside its accepted range."""
    def __init__(self, parameter: str, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid value for '{parameter}': {value!r}",
            "INVALID_QUERY_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.parameter = parameter


class SortConfigurationError(RegistryError):
    """Sort key does not name a sortable field of the record."""
    def __init__(
        self, sort_by: str, allowed: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unknown sort field '{sort_by}'. Allowed: {', '.join(allowed)}",
            "UNKNOWN_SORT_FIELD", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.sort_by = sort_by


class ResourceNotFoundError(RegistryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SimulatedFaultError(RegistryError):
    """Synthetic failure raised by the fault-injection hook."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Simulated failure in {operation}",
            "SIMULATED_FAULT", ErrorCategory.TRANSIENT,
            ErrorSeverity.WARNING, ctx, 500,
        )


class TransientFailureError(RegistryError):
    """Operation failed on every attempt allowed by the retry policy."""
    def __init__(
        self, operation: str, attempts: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.attempts = attempts
        super().__init__(
            f"{operation} failed after {attempts} attempts",
            "TRANSIENT_FAILURE", ErrorCategory.TRANSIENT,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.attempts = attempts


class DatabaseError(RegistryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
