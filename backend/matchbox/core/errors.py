"""Error Hierarchy: every failure the conversation core can report, with its HTTP shape.

Invariants:
    - Each error carries code, category, severity and http_status
    - 4xx errors describe the request (bad pair, blocked, unknown id); StoreError (503)
      describes the backend and is the only retryable one
    - to_response() puts user_message (when set) in front of the internal message,
      and lists only the identifiers that are known

Design Decisions:
    - One MatchboxError root: the API registers a single handler for the whole family
    - ErrorContext is a dataclass: services fill in ids, handlers read them for logs
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers and messages attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    other_user_id: str | None = None
    conversation_id: str | None = None
    match_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None

    def public_ids(self) -> dict[str, str]:
        """conversation_id and match_id, when set. User ids stay out of responses."""
        ids = {"conversation_id": self.conversation_id, "match_id": self.match_id}
        return {k: v for k, v in ids.items() if v is not None}


class MatchboxError(Exception):
    """Root of the Matchbox error family."""

    retryable = False

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
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.public_ids(),
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidPairError(MatchboxError):
    """Empty user id, or a user paired with themselves."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_PAIR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class BlockedError(MatchboxError):
    """The caller has blocked the other user. The UI shows user_message."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "You can't message this person."
        super().__init__(
            "Pair is blocked by safety settings",
            "USER_BLOCKED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 403,
        )


class ResourceNotFoundError(MatchboxError):
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Backend Errors (500-level) ─────────────────────────────────

class StoreError(MatchboxError):
    """A store read or write failed. operation names the store call."""

    retryable = True

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
