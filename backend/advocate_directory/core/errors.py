"""Error Hierarchy — typed, categorized exceptions for all directory failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() always carries `error` as a plain string (wire contract of the
      query endpoint); code/category/severity ride alongside it
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AdvocateDirectoryError base: FastAPI global handler catches all
    - AdvocateFetchError lives here too: the client raises it, the coordinator converts it
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    search: str | None = None


class AdvocateDirectoryError(Exception):
    """Base exception for all advocate directory errors."""

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
        """Convert to the REST error envelope."""
        return {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class StoreUnavailableError(AdvocateDirectoryError):
    """A write was requested but no record store is configured."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Database not connected. Set DATABASE_URL environment variable.",
            "STORE_UNAVAILABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AdvocateDirectoryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class AdvocateQueryError(AdvocateDirectoryError):
    """The query endpoint could not produce a result set."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to fetch advocates",
            "ADVOCATE_QUERY_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class SeedError(AdvocateDirectoryError):
    """Inserting the fixture set into the store failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to seed database",
            "SEED_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class AdvocateFetchError(AdvocateDirectoryError):
    """Client-side failure reaching or reading the query endpoint.

    status_code is None for transport failures (no response at all).
    """
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "ADVOCATE_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, status_code or 502,
        )
        self.status_code = status_code
