"""Error Hierarchy — typed, categorized exceptions for every denial and upstream failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Denials (401/403/404) are distinguishable by code: missing vs invalid credential,
      insufficient privilege vs ownership vs premium gating
    - Upstream failures (503) never carry collaborator internals in the message
    - to_response() produces the REST envelope used by every error handler

Design Decisions:
    - Single hierarchy with LessonsApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - "Already exists" on registration is NOT an error: it is a RegistrationOutcome value
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    UPSTREAM = "upstream"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    caller_email: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class LessonsApiError(Exception):
    """Base exception for all API errors."""

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
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Identity Gate (401) ────────────────────────────────────────

class MissingCredentialError(LessonsApiError):
    """No usable bearer credential on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized: bearer credential required",
            "MISSING_CREDENTIAL", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialError(LessonsApiError):
    """Credential present but rejected by the identity provider."""
    def __init__(self, reason: str = "invalid", context: ErrorContext | None = None):
        super().__init__(
            "Invalid token",
            "INVALID_CREDENTIAL", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


# ─── Authorization (403) ────────────────────────────────────────

class InsufficientPrivilegeError(LessonsApiError):
    """Role check failed (admin-only operation)."""
    def __init__(self, required_role: str = "admin", context: ErrorContext | None = None):
        super().__init__(
            f"Forbidden: {required_role} only",
            "INSUFFICIENT_PRIVILEGE", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_role = required_role


class OwnershipDeniedError(LessonsApiError):
    """Caller is neither the lesson creator nor an admin."""
    def __init__(self, lesson_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_id = lesson_id
        super().__init__(
            "Forbidden: only the creator or an admin may modify this lesson",
            "OWNERSHIP_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class PremiumRequiredError(LessonsApiError):
    """Premium content viewed, or premium content authored, without a premium account."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PREMIUM_REQUIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Resources (404) ────────────────────────────────────────────

class ResourceNotFoundError(LessonsApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Collaborators (503) ────────────────────────────────────────

class UpstreamFailureError(LessonsApiError):
    """Store, identity provider or payment provider failed."""
    def __init__(self, collaborator: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"{collaborator} {operation} failed",
            "UPSTREAM_FAILURE", ErrorCategory.UPSTREAM,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.collaborator = collaborator
        self.operation = operation
