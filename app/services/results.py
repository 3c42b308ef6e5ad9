# app/services/results.py
"""
Typed outcomes for ledger operations.

Expected failures (bad input, missing or foreign entities, wrong lifecycle
state, not enough money) travel back as a LedgerFailure inside a
LedgerResult instead of being raised. Storage failures are folded into the
same shape with the INTERNAL_ERROR code.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    RESOURCE = "resource"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.FORBIDDEN: 403,
    FailureKind.CONFLICT: 400,
    FailureKind.RESOURCE: 400,
    FailureKind.INTERNAL: 500,
}


class ErrorCode:
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_LOCK_DAYS = "INVALID_LOCK_DAYS"
    INVALID_TARGET_AMOUNT = "INVALID_TARGET_AMOUNT"
    NOT_FOUND = "NOT_FOUND"
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    ALREADY_WITHDRAWN = "ALREADY_WITHDRAWN"
    INVALID_STATUS = "INVALID_STATUS"
    PRODUCT_NOT_AVAILABLE = "PRODUCT_NOT_AVAILABLE"
    GOAL_NOT_ACTIVE = "GOAL_NOT_ACTIVE"
    GOAL_NOT_FULLY_FUNDED = "GOAL_NOT_FULLY_FUNDED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class LedgerFailure:
    code: str
    message: str
    kind: FailureKind
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_detail(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code, **self.details}


@dataclass(frozen=True)
class LedgerResult(Generic[T]):
    value: Optional[T] = None
    failure: Optional[LedgerFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "LedgerResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: LedgerFailure) -> "LedgerResult[T]":
        return cls(failure=failure)


def validation_error(code: str, message: str) -> LedgerFailure:
    return LedgerFailure(code, message, FailureKind.VALIDATION)


def not_found(code: str, message: str) -> LedgerFailure:
    return LedgerFailure(code, message, FailureKind.NOT_FOUND)


def forbidden(message: str) -> LedgerFailure:
    return LedgerFailure(ErrorCode.FORBIDDEN, message, FailureKind.FORBIDDEN)


def conflict(code: str, message: str, **details: Any) -> LedgerFailure:
    return LedgerFailure(code, message, FailureKind.CONFLICT, details)


def insufficient_balance(available: int, required: int) -> LedgerFailure:
    return LedgerFailure(
        ErrorCode.INSUFFICIENT_BALANCE,
        "Insufficient wallet balance",
        FailureKind.RESOURCE,
        {"available": available, "required": required, "shortfall": required - available},
    )


def internal_error() -> LedgerFailure:
    return LedgerFailure(
        ErrorCode.INTERNAL_ERROR,
        "The operation could not be completed. No changes were made.",
        FailureKind.INTERNAL,
    )
