"""Error Hierarchy — typed, categorized exceptions for every RPC failure mode.

Invariants:
    - Every error has a code (RPC status name), category, severity and HTTP status
    - Internal failures (build, mapping, store) share one public code: INTERNAL
    - Internal errors never expose their message to clients (public_message is fixed)
    - Conflict absorption is not an error and has no class here

Design Decisions:
    - Single hierarchy with CliChatError base: one FastAPI handler renders all of them
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    TIMEOUT = "timeout"


class StatusCode(str, Enum):
    """RPC status codes that are part of the service contract."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rpc_method: str | None = None
    entity: str | None = None
    entity_id: int | None = None
    debug_info: dict[str, Any] | None = None


class CliChatError(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        message: str,
        code: StatusCode,
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

    @property
    def public_message(self) -> str:
        return self.message

    def to_response(self) -> dict:
        """Convert to the RPC error envelope."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.public_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(CliChatError):
    """Request is structurally invalid; detected before any store call."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, StatusCode.INVALID_ARGUMENT, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(CliChatError):
    """Operation required an existing row and the store matched none."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            StatusCode.NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Internal Errors (500-level) ────────────────────────────────

INTERNAL_MESSAGE = "internal server error"


class InternalError(CliChatError):
    """Caller-opaque failure. The detailed message is for logs only."""
    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, StatusCode.INTERNAL, category,
            ErrorSeverity.CRITICAL, context, 500,
        )

    @property
    def public_message(self) -> str:
        return INTERNAL_MESSAGE


class BuildError(InternalError):
    """Statement specification is malformed (a programming defect)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(f"Query build failed: {message}", context=context)


class MappingError(InternalError):
    """Result row does not match the declared column layout."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(f"Row mapping failed: {message}", context=context)


class StoreError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCategory.DATABASE, context,
        )
        self.operation = operation


# ─── Cancellation ───────────────────────────────────────────────

class DeadlineExceededError(CliChatError):
    """RPC deadline expired; the in-flight store call was cancelled."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Deadline of {timeout_seconds:g}s exceeded",
            StatusCode.DEADLINE_EXCEEDED, ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context, 504,
        )
        self.timeout_seconds = timeout_seconds
