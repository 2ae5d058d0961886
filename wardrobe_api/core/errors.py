"""Error Hierarchy: typed, categorized exceptions for every wardrobe failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - code is the stable machine-checkable reason; message is for humans
    - Domain errors (4xx) are recoverable; storage and integrity errors (5xx) are critical
    - to_response() produces the REST envelope, details included for debugging

Design Decisions:
    - Single hierarchy with WardrobeError base: one FastAPI handler catches all
    - ErrorContext as dataclass: carries ids (user, wardrobe, document) without
      coupling to the logging framework
    - ReservedWardrobeError is a conflict-category error that maps to 403, matching
      the edge contract for mutating a protected wardrobe
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATA_INTEGRITY = "data_integrity"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    wardrobe_id: str | None = None
    document_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class WardrobeError(Exception):
    """Base exception for all wardrobe API errors."""

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
        details = {
            key: value for key, value in (
                ("user_id", self.context.user_id),
                ("wardrobe_id", self.context.wardrobe_id),
                ("document_id", self.context.document_id),
            ) if value is not None
        }
        details.update(self.context.details)
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": details,
            }
        }


# ─── Not Found (404) ────────────────────────────────────────────

class ResourceNotFoundError(WardrobeError):
    """Requested row or document does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details.setdefault("resource_type", resource_type)
        ctx.details.setdefault("resource_id", str(resource_id))
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Conflicts (409 / 403) ──────────────────────────────────────

class DuplicateUserError(WardrobeError):
    """An active user with this email already exists."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details.setdefault("email", email)
        super().__init__(
            "User with this email already exists.",
            "DUPLICATE_USER", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.email = email


class DuplicateLinkError(WardrobeError):
    """The (wardrobe, document) link already exists."""
    def __init__(self, kind: str, wardrobe_id: object, document_id: str):
        super().__init__(
            f"This {kind} is already in the wardrobe.",
            "DUPLICATE_LINK", ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
            ErrorContext(wardrobe_id=str(wardrobe_id), document_id=document_id),
            409,
        )


class DuplicateReservedWardrobeError(WardrobeError):
    """User already owns a wardrobe with this reserved name."""
    def __init__(self, name: str, user_id: object):
        super().__init__(
            f'A default wardrobe named "{name}" already exists for this user.',
            "DUPLICATE_RESERVED_WARDROBE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING,
            ErrorContext(user_id=str(user_id), details={"name": name}),
            409,
        )


class ReservedWardrobeError(WardrobeError):
    """Attempt to rename, delete or unlink from a protected default wardrobe."""
    def __init__(self, name: str, operation: str, wardrobe_id: object):
        super().__init__(
            f'Cannot {operation} the default "{name}" wardrobe.',
            "RESERVED_WARDROBE", ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
            ErrorContext(
                wardrobe_id=str(wardrobe_id),
                details={"name": name, "operation": operation},
            ),
            403,
        )
        self.operation = operation


class DuplicateResourceError(WardrobeError):
    """Unique key collision on a plain lookup table (taxonomy names)."""
    def __init__(self, resource_type: str, key: str):
        super().__init__(
            f"{resource_type} '{key}' already exists",
            "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
            ErrorContext(details={"resource_type": resource_type, "key": key}),
            409,
        )


class DuplicatePaymentError(WardrobeError):
    """Payment was already credited; second application fails closed."""
    def __init__(self, payment_id: object):
        super().__init__(
            "Payment has already been credited.",
            "DUPLICATE_PAYMENT", ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
            ErrorContext(details={"payment_id": str(payment_id)}),
            409,
        )


# ─── Validation (400) ───────────────────────────────────────────

class PaymentVerificationError(WardrobeError):
    """Gateway signature did not match the expected HMAC."""
    def __init__(self, order_id: str):
        super().__init__(
            "Invalid payment signature.",
            "INVALID_PAYMENT_SIGNATURE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING,
            ErrorContext(details={"order_id": order_id}),
            400,
        )


# ─── Integrity & Infrastructure (5xx) ───────────────────────────

class MissingDefaultWardrobeError(WardrobeError):
    """A bootstrapped user lacks a default wardrobe: earlier bootstrap defect."""
    def __init__(self, user_id: object, name: str = "Your Dresses"):
        super().__init__(
            f"Data integrity error: default '{name}' wardrobe is missing for user {user_id}.",
            "MISSING_DEFAULT_WARDROBE", ErrorCategory.DATA_INTEGRITY,
            ErrorSeverity.CRITICAL,
            ErrorContext(user_id=str(user_id), details={"name": name}),
            500,
        )


class StorageError(WardrobeError):
    """Underlying storage call failed unexpectedly."""
    def __init__(
        self, message: str, operation: str, store: str = "relational",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details.setdefault("store", store)
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.store = store


class PaymentGatewayError(WardrobeError):
    """Payment gateway call failed."""
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            f"Payment gateway error: {message}",
            "PAYMENT_GATEWAY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL,
            ErrorContext(details={"gateway_status": status_code}),
            502,
        )
