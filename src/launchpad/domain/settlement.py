"""Settlement domain models.

A settlement instruction is the ordered set of balance movements for one
trade. The settlement layer must apply all of them or none of them.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import field_validator
from pydantic.dataclasses import dataclass

from launchpad.domain.trades import Quote, TradeStatus
from launchpad.domain.types import TradeDirection


class Asset(str, Enum):
    """Assets a movement can carry."""

    RESERVE = "reserve"  # Reserve currency (e.g. SOL)
    TOKEN = "token"  # The curve's token


class SettlementOutcome(str, Enum):
    """Final answer from the settlement layer for a receipt."""

    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    PARTIAL = "partial"  # Some movements applied; treated as failure


def reserve_account(curve_id: str) -> str:
    """Return the account holding a curve's reserve currency."""
    return f"{curve_id}:reserve"


def supply_account(curve_id: str) -> str:
    """Return the account holding a curve's unissued tokens."""
    return f"{curve_id}:supply"


def token_account(trader: str, curve_id: str) -> str:
    """Return the account holding a trader's tokens of one curve.

    A trader's reserve currency lives in the account named by the trader id.
    """
    return f"{trader}:{curve_id}"


@dataclass(frozen=True)
class BalanceMovement:
    """Transfer of one asset between two accounts."""

    asset: Asset
    source: str
    destination: str
    amount: Decimal

    @field_validator("amount")
    @classmethod
    def validate_positive(cls, v: Decimal) -> Decimal:
        """Ensure movement amount is positive."""
        if v <= 0:
            raise ValueError("Movement amount must be positive")
        return v


@dataclass(frozen=True)
class SettlementInstruction:
    """Atomic unit of balance movements for a single trade.

    ``bound`` is the max cost (buy) or min return (sell) the instruction
    was built under, so a settlement layer can enforce it as well.
    """

    instruction_id: str
    curve_id: str
    trader: str
    direction: TradeDirection
    amount: Decimal
    reserve_amount: Decimal  # Curve cost (buy) or return (sell), fee excluded
    fee: Decimal
    bound: Decimal
    movements: tuple[BalanceMovement, ...]

    def debits(self) -> dict[tuple[str, Asset], Decimal]:
        """Return the total debited from each (account, asset) pair."""
        totals: dict[tuple[str, Asset], Decimal] = {}
        for movement in self.movements:
            key = (movement.source, movement.asset)
            totals[key] = totals.get(key, Decimal("0")) + movement.amount
        return totals

    @staticmethod
    def new_id() -> str:
        """Generate a unique instruction ID."""
        return f"ix_{uuid4().hex[:16]}"


@dataclass(frozen=True)
class SettlementReceipt:
    """Acknowledgement that an instruction was accepted for settlement."""

    receipt_id: str
    instruction_id: str
    submitted_at: datetime


@dataclass(frozen=True)
class TradeResult:
    """Outcome of one trade attempt."""

    trade_id: str
    status: TradeStatus
    quote: Quote
    instruction: SettlementInstruction
    receipt: SettlementReceipt | None = None
    reason: str | None = None
    migration_ready: bool = False
    completed_at: datetime | None = None

    def is_confirmed(self) -> bool:
        """Return True if the trade settled."""
        return self.status == TradeStatus.CONFIRMED

    @classmethod
    def finished(
        cls,
        status: TradeStatus,
        quote: Quote,
        instruction: SettlementInstruction,
        receipt: SettlementReceipt | None = None,
        reason: str | None = None,
        migration_ready: bool = False,
    ) -> TradeResult:
        """Create a terminal TradeResult stamped with the current time."""
        return cls(
            trade_id=instruction.instruction_id,
            status=status,
            quote=quote,
            instruction=instruction,
            receipt=receipt,
            reason=reason,
            migration_ready=migration_ready,
            completed_at=datetime.now(UTC),
        )
