"""Exception hierarchy for pricing and trade-execution errors.

All launchpad errors inherit from LaunchpadError, allowing callers to catch
broad categories of errors. Each error carries a typed ``kind`` so the
upper layers can translate it without inspecting messages.

Error categories:
- InvalidCurveConfig: malformed or incomplete curve parameters
- InvalidAmount: non-positive trade size or quote/intent mismatch
- MathOverflow: non-finite intermediate numeric result
- SlippageExceeded: price moved beyond the accepted bound (re-quote)
- InsufficientBalance / InsufficientLiquidity: trader or curve cannot cover a debit
- SettlementFailure: transport or confirmation failure from the settlement layer
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Typed error kinds reported to callers."""

    INVALID_CURVE_CONFIG = "InvalidCurveConfig"
    INVALID_AMOUNT = "InvalidAmount"
    MATH_OVERFLOW = "MathOverflow"
    SLIPPAGE_EXCEEDED = "SlippageExceeded"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    SETTLEMENT_FAILURE = "SettlementFailure"
    NOT_FOUND = "NotFound"
    CURVE_MIGRATED = "CurveMigrated"

    def is_retryable(self) -> bool:
        """Return True if the caller may retry with a fresh quote."""
        return self in (ErrorKind.SLIPPAGE_EXCEEDED, ErrorKind.SETTLEMENT_FAILURE)


class LaunchpadError(Exception):
    """Base exception for all launchpad errors.

    Subclasses set ``kind``; the base class is never raised directly by
    the pricing or execution code.
    """

    kind: ErrorKind | None = None

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize with message and optional context.

        Args:
            message: Human-readable error description
            context: Additional structured data for logging/debugging
        """
        super().__init__(message)
        self.context = context or {}

    @property
    def retryable(self) -> bool:
        """Return True if the caller may retry after re-quoting."""
        return self.kind is not None and self.kind.is_retryable()


class InvalidCurveConfig(LaunchpadError):
    """Curve parameters are malformed, incomplete, or out of bounds."""

    kind = ErrorKind.INVALID_CURVE_CONFIG

    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending field.

        Args:
            message: Human-readable error description
            field: Name of the curve parameter with the issue
            context: Additional structured data
        """
        super().__init__(message, context)
        self.field = field


class InvalidCurveType(InvalidCurveConfig):
    """Curve type is not one of linear, exponential, logarithmic."""

    def __init__(self, curve_type: object, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"Invalid curve type: {curve_type!r}", "curve_type", context)
        self.curve_type = curve_type


class InvalidParameter(InvalidCurveConfig):
    """Required shape parameter is missing or violates its bound."""


class InvalidAmount(LaunchpadError):
    """Trade amount is non-positive or does not match the quoted amount."""

    kind = ErrorKind.INVALID_AMOUNT

    def __init__(
        self,
        message: str,
        amount: Decimal | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.amount = amount


class MathOverflow(LaunchpadError):
    """A price or cost computation produced a non-finite or non-positive value.

    Should never occur with a valid curve and a sane reserve snapshot, but
    guards degenerate inputs such as a zero total supply.
    """

    kind = ErrorKind.MATH_OVERFLOW


class SlippageExceeded(LaunchpadError):
    """Re-priced trade falls outside the caller's slippage bound.

    The caller, not the executor, decides whether to re-quote and retry.
    """

    kind = ErrorKind.SLIPPAGE_EXCEEDED

    def __init__(
        self,
        message: str,
        bound: Decimal | None = None,
        actual: Decimal | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with bound details.

        Args:
            message: Human-readable error description
            bound: The max cost (buy) or min return (sell) established at prepare
            actual: The freshly computed cost or return
            context: Additional structured data
        """
        super().__init__(message, context)
        self.bound = bound
        self.actual = actual


class InsufficientBalance(LaunchpadError):
    """Trader cannot cover the debit side of the trade."""

    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(
        self,
        message: str,
        required: Decimal | None = None,
        available: Decimal | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with balance information.

        Args:
            message: Human-readable error description
            required: Amount required for the trade
            available: Amount currently held by the trader
            context: Additional structured data
        """
        super().__init__(message, context)
        self.required = required
        self.available = available


class InsufficientLiquidity(LaunchpadError):
    """Curve reserve or supply account cannot cover its debit."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY

    def __init__(
        self,
        message: str,
        required: Decimal | None = None,
        available: Decimal | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.required = required
        self.available = available


class SettlementFailure(LaunchpadError):
    """Settlement layer failed to submit, confirm, or fully apply an instruction.

    Never reported as success. Retry policy belongs to the caller.
    """

    kind = ErrorKind.SETTLEMENT_FAILURE

    def __init__(
        self,
        message: str,
        instruction_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)
        self.instruction_id = instruction_id


class CurveNotFound(LaunchpadError):
    """No curve instance exists for the given identifier."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, curve_id: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"Curve not found: {curve_id}", context)
        self.curve_id = curve_id


class CurveMigrated(LaunchpadError):
    """Curve liquidity has moved to the external venue; trade there instead."""

    kind = ErrorKind.CURVE_MIGRATED

    def __init__(self, curve_id: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"Curve has migrated and no longer trades: {curve_id}", context)
        self.curve_id = curve_id
