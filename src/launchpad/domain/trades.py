"""Quote and trade domain models.

These models represent the pricing quote, the caller's trade intent, and
the bounded trade that pins the worst acceptable price. All models are
immutable.
"""

from __future__ import annotations

from dataclasses import field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import field_validator
from pydantic.dataclasses import dataclass

from launchpad.domain.types import TradeDirection

HUNDRED = Decimal("100")


class TradeStatus(str, Enum):
    """Trade attempt lifecycle states.

    State transitions:
    - QUOTED -> BOUNDED (slippage bound computed)
    - BOUNDED -> SUBMITTED (instruction handed to settlement)
    - SUBMITTED -> CONFIRMED (applied atomically)
    - SUBMITTED -> REJECTED (settlement refused, nothing applied)
    - SUBMITTED -> FAILED (transport failure or partial application)
    """

    QUOTED = "quoted"
    BOUNDED = "bounded"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"  # terminal
    REJECTED = "rejected"  # terminal
    FAILED = "failed"  # terminal

    def is_terminal(self) -> bool:
        """Return True if this status is final (no further transitions)."""
        return self in (TradeStatus.CONFIRMED, TradeStatus.REJECTED, TradeStatus.FAILED)


@dataclass(frozen=True)
class Quote:
    """Priced trade, computed from one reserve snapshot.

    ``total_cost`` is what the trader pays (buy) or receives (sell) in
    reserve currency. It is priced at the direction-appropriate supply
    ratio, then guarded and impact-weighted, so it is not simply
    ``spot_price * amount``.
    """

    curve_id: str
    direction: TradeDirection
    amount: Decimal
    spot_price: Decimal
    adjusted_spot_price: Decimal  # spot_price after the directional guard
    price_impact_percent: Decimal
    total_cost: Decimal
    # Excluded from equality: identical inputs price to equal quotes
    quoted_at: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    def is_high_impact(self, threshold_percent: Decimal) -> bool:
        """Return True if the price impact exceeds the warning threshold."""
        return self.price_impact_percent > threshold_percent

    def age_seconds(self, now: datetime | None = None) -> float:
        """Return seconds elapsed since the quote was computed."""
        return ((now or datetime.now(UTC)) - self.quoted_at).total_seconds()

    def is_expired(self, ttl_seconds: float, now: datetime | None = None) -> bool:
        """Return True if the quote is older than its validity window."""
        return self.age_seconds(now) > ttl_seconds


@dataclass(frozen=True)
class TradeIntent:
    """Caller-supplied request to trade against a curve."""

    trader: str
    amount: Decimal
    direction: TradeDirection
    slippage_bound_percent: Decimal = Decimal("1")

    @field_validator("slippage_bound_percent")
    @classmethod
    def validate_slippage(cls, v: Decimal) -> Decimal:
        """Ensure the slippage bound is a non-negative percentage."""
        if v < 0:
            raise ValueError("Slippage bound must be non-negative")
        return v


@dataclass(frozen=True)
class BoundedTrade:
    """A quote paired with the worst price the trader accepts.

    ``bound`` is the maximum cost for a buy and the minimum return for a sell.
    """

    quote: Quote
    intent: TradeIntent
    bound: Decimal

    @property
    def curve_id(self) -> str:
        return self.quote.curve_id

    @property
    def direction(self) -> TradeDirection:
        return self.quote.direction

    @property
    def amount(self) -> Decimal:
        return self.quote.amount

    @property
    def max_cost(self) -> Decimal | None:
        """Return the cost ceiling, or None for a sell."""
        return self.bound if self.direction == TradeDirection.BUY else None

    @property
    def min_return(self) -> Decimal | None:
        """Return the return floor, or None for a buy."""
        return self.bound if self.direction == TradeDirection.SELL else None

    def within_bounds(self, cost: Decimal) -> bool:
        """Return True if a re-priced cost (buy) or return (sell) is acceptable."""
        if self.direction == TradeDirection.BUY:
            return cost <= self.bound
        return cost >= self.bound

    def repriced(self, quote: Quote) -> BoundedTrade:
        """Return a copy carrying a fresher quote under the same bound."""
        return BoundedTrade(
            quote=quote,
            intent=self.intent,
            bound=self.bound,
        )

    @classmethod
    def from_quote(cls, quote: Quote, intent: TradeIntent) -> BoundedTrade:
        """Compute the bound from the quote and the intent's slippage tolerance.

        Args:
            quote: Accepted quote
            intent: Trade intent whose slippage bound applies

        Returns:
            BoundedTrade with max cost (buy) or min return (sell)
        """
        tolerance = intent.slippage_bound_percent / HUNDRED
        if quote.direction == TradeDirection.BUY:
            return cls(quote=quote, intent=intent, bound=quote.total_cost * (1 + tolerance))
        return cls(quote=quote, intent=intent, bound=quote.total_cost * (1 - tolerance))


@dataclass(frozen=True)
class TraderBalances:
    """A trader's holdings relevant to one curve."""

    reserve_balance: Decimal  # Reserve currency
    token_balance: Decimal  # The curve's token
