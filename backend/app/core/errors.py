"""Error Hierarchy - typed, categorized exceptions for every exchange failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller-correctable; storage errors (500-level) are not
    - Structured detail (ids, quantities, totals) lives in `details`, never only in the message
    - to_response() produces the REST envelope used by every error handler
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """When the error happened and the message shown to clients, if not the raw one."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_message: str | None = None


class ExchangeError(Exception):
    """Base exception for all survivor exchange errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.details,
            }
        }


# ─── Trade Errors (400-level) ───────────────────────────────────

class UnknownTradeItemsError(ExchangeError):
    """One or more offered item ids are not in the catalogue."""
    def __init__(self, item_ids: list[int], context: ErrorContext | None = None):
        missing = sorted(set(item_ids))
        super().__init__(
            f"trade items not found: {', '.join(str(i) for i in missing)}",
            "UNKNOWN_TRADE_ITEMS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"item_ids": missing},
        )
        self.item_ids = missing


class InsufficientInventoryError(ExchangeError):
    """A survivor offered more of an item than they own."""
    def __init__(
        self,
        survivor_id: int,
        item_id: int,
        requested: int,
        owned: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"survivor {survivor_id} does not have enough of item {item_id} "
            f"(requested {requested}, owned {owned})",
            "INSUFFICIENT_INVENTORY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            details={
                "survivor_id": survivor_id,
                "item_id": item_id,
                "requested": requested,
                "owned": owned,
            },
        )
        self.survivor_id = survivor_id
        self.item_id = item_id
        self.requested = requested
        self.owned = owned


class TradeValueMismatchError(ExchangeError):
    """The two offers are not worth the same number of points."""
    def __init__(
        self,
        survivor_a: int,
        total_a: int,
        survivor_b: int,
        total_b: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"trade points do not match: survivor {survivor_a} total {total_a}, "
            f"survivor {survivor_b} total {total_b}",
            "TRADE_VALUE_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
            details={
                "survivor_a": survivor_a,
                "total_a": total_a,
                "survivor_b": survivor_b,
                "total_b": total_b,
            },
        )
        self.survivor_a = survivor_a
        self.total_a = total_a
        self.survivor_b = survivor_b
        self.total_b = total_b


class InvalidOfferQuantityError(ExchangeError):
    """An offer line with a quantity of zero or less."""
    def __init__(
        self,
        survivor_id: int,
        item_id: int,
        quantity: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"offer quantity must be positive, got {quantity} for item {item_id}",
            "INVALID_OFFER_QUANTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={
                "survivor_id": survivor_id,
                "item_id": item_id,
                "quantity": quantity,
            },
        )
        self.survivor_id = survivor_id
        self.item_id = item_id
        self.quantity = quantity


# ─── Infection Report Errors (400-level) ────────────────────────

class SelfAccusationError(ExchangeError):
    """A survivor tried to report themselves."""
    def __init__(self, survivor_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"invalid reporterId: {survivor_id} cannot report themselves",
            "SELF_ACCUSATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"survivor_id": survivor_id},
        )
        self.survivor_id = survivor_id


class UnknownAccuserError(ExchangeError):
    """The reporting survivor does not exist."""
    def __init__(self, accuser_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"invalid reporterId: {accuser_id}",
            "UNKNOWN_ACCUSER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"accuser_id": accuser_id},
        )
        self.accuser_id = accuser_id


# ─── Registration Errors (400-level) ────────────────────────────

class MissingItemsError(ExchangeError):
    """Registration without any starting inventory."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "must provide at least one item",
            "MISSING_ITEMS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnknownItemsError(ExchangeError):
    """Registration references item names that are not in the catalogue."""
    def __init__(self, item_names: list[str], context: ErrorContext | None = None):
        plural = "" if len(item_names) == 1 else "s"
        super().__init__(
            f"unknown item{plural}: {', '.join(item_names)}",
            "UNKNOWN_ITEMS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"item_names": item_names},
        )
        self.item_names = item_names


class InvalidItemQuantityError(ExchangeError):
    """Registration with a non-positive item quantity."""
    def __init__(self, invalid: list[tuple[str, int]], context: ErrorContext | None = None):
        listed = ", ".join(f"{qty} for {name}" for name, qty in invalid)
        super().__init__(
            f"all quantities must be > 0, got: {listed}",
            "INVALID_ITEM_QUANTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"invalid": [{"name": n, "quantity": q} for n, q in invalid]},
        )


class ResourceNotFoundError(ExchangeError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailureError(ExchangeError):
    """Transaction aborted, ledger invariant violated, or the store errored."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "An internal storage error occurred"
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
