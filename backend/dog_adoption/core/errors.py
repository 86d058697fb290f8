"""Error Hierarchy — typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it maps to; handlers never guess
    - to_response() always exposes a top-level "message" (the public API contract)
    - No internal details leaked in user-facing messages; detail is for logs only

Design Decisions:
    - Single hierarchy with DogAdoptionError base: one global handler catches all
    - Already-adopted and self-adoption are domain conflicts answered with 400,
      duplicate username is the only 409
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


INTERNAL_ERROR_MESSAGE = "Internal server error"


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
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    dog_id: str | None = None
    debug_info: dict[str, Any] | None = None


class DogAdoptionError(Exception):
    """Base exception for all Dog Adoption API errors."""

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
        self.detail = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidInputError(DogAdoptionError):
    """Missing, malformed or out-of-range input."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(DogAdoptionError):
    """Missing or invalid credential."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(DogAdoptionError):
    """Authenticated, but not permitted to act on the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(DogAdoptionError):
    """Requested resource does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class DuplicateUsernameError(DogAdoptionError):
    """Username is already registered."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Username already exists", "USERNAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class DogAlreadyAdoptedError(DogAdoptionError):
    """Adoption attempted on a dog that already has an adopter."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Dog is already adopted", "DOG_ALREADY_ADOPTED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class AdoptedDogRemovalError(DogAdoptionError):
    """Removal attempted on an adopted dog."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot remove adopted dog", "ADOPTED_DOG_REMOVAL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class SelfAdoptionError(DogAdoptionError):
    """Owner tried to adopt their own dog."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You cannot adopt your own dog", "SELF_ADOPTION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DogAdoptionError):
    """Database operation failed. Clients see only the generic message."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            INTERNAL_ERROR_MESSAGE,
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
        self.detail = f"Database {operation} failed: {message}"
