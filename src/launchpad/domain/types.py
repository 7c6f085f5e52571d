"""Core value objects for the pricing engine.

These types form the foundation of the domain model and are used throughout
the system. All types are immutable; a reserve snapshot is never updated in
place, the settlement layer hands out a new one after every trade.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import field_validator
from pydantic.dataclasses import dataclass


class CurveType(str, Enum):
    """Bonding curve families."""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"


class TradeDirection(str, Enum):
    """Trade direction: BUY from the curve or SELL into it."""

    BUY = "buy"
    SELL = "sell"

    def opposite(self) -> TradeDirection:
        """Return the opposite direction."""
        return TradeDirection.SELL if self == TradeDirection.BUY else TradeDirection.BUY


@dataclass(frozen=True)
class ReserveState:
    """Point-in-time snapshot of a curve's supply and reserve.

    Owned by the settlement layer; the core only reads it. A zero
    ``total_supply`` is representable so that a degenerate snapshot reaches
    the pricing layer and fails there with MathOverflow.
    """

    current_supply: int  # Tokens issued, raw base units
    total_supply: int  # Supply ceiling
    sol_reserves: Decimal  # Reserve currency backing the curve
    migrated: bool = False  # Liquidity moved to the external venue

    @field_validator("current_supply", "total_supply")
    @classmethod
    def validate_supply(cls, v: int) -> int:
        """Ensure supply counts are non-negative."""
        if v < 0:
            raise ValueError("Supply must be non-negative")
        return v

    @field_validator("sol_reserves")
    @classmethod
    def validate_reserves(cls, v: Decimal) -> Decimal:
        """Ensure reserves are non-negative."""
        if v < 0:
            raise ValueError("Reserves must be non-negative")
        return v

    def available_supply(self) -> int:
        """Return tokens still held by the curve's supply account."""
        return max(self.total_supply - self.current_supply, 0)

    def after_trade(
        self,
        direction: TradeDirection,
        amount: Decimal,
        reserve_delta: Decimal,
    ) -> ReserveState:
        """Return the snapshot a settled trade would produce.

        Args:
            direction: BUY raises supply and reserve, SELL lowers both
            amount: Tokens moved
            reserve_delta: Reserve currency moved

        Returns:
            New ReserveState

        Raises:
            ValueError: If amount is not a whole number of tokens or the
                resulting snapshot is invalid
        """
        tokens = int(amount)
        if tokens != amount:
            raise ValueError(f"Trade amount must be a whole number of tokens, got {amount}")
        if direction == TradeDirection.BUY:
            return ReserveState(
                current_supply=self.current_supply + tokens,
                total_supply=self.total_supply,
                sol_reserves=self.sol_reserves + reserve_delta,
                migrated=self.migrated,
            )
        return ReserveState(
            current_supply=self.current_supply - tokens,
            total_supply=self.total_supply,
            sol_reserves=self.sol_reserves - reserve_delta,
            migrated=self.migrated,
        )
