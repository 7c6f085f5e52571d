"""Quote engine.

Turns a raw curve price into a caller-facing quote: applies the directional
guard and the per-family impact weighting, and prices the full trade.

Pipeline:
    ReserveState → supply ratio → spot price → guard → impact → total cost

The guard and impact constants are fixed tuning carried over from prices
already shown to users. They are not derived from a pricing model and
should go through product review before being changed.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal, DecimalException
from typing import TYPE_CHECKING

from launchpad.domain.curves import CurveConfig, curve_type_of
from launchpad.domain.errors import CurveMigrated, InvalidAmount, MathOverflow
from launchpad.domain.trades import HUNDRED, Quote
from launchpad.domain.types import CurveType, ReserveState, TradeDirection
from launchpad.pricing.curve_model import spot_price, supply_ratio

if TYPE_CHECKING:
    from launchpad.monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)

# Size sensitivity weighting per curve family
IMPACT_MULTIPLIERS: dict[CurveType, Decimal] = {
    CurveType.EXPONENTIAL: Decimal("1.5"),
    CurveType.LINEAR: Decimal("1.0"),
    CurveType.LOGARITHMIC: Decimal("0.75"),
}

# Built-in 2% buffer protecting the reserve side
BUY_GUARD = Decimal("1.02")
SELL_GUARD = Decimal("0.98")


def price_impact_percent(curve_type: CurveType, amount: Decimal, total_supply: int) -> Decimal:
    """Return the estimated price impact of a trade, in percent.

    Formula:
        impact = (amount / total_supply) * 100 * multiplier

    Args:
        curve_type: Curve family selecting the multiplier
        amount: Trade size in tokens
        total_supply: Supply ceiling

    Raises:
        MathOverflow: If total_supply is zero
    """
    if total_supply <= 0:
        raise MathOverflow("Total supply is zero, price impact is undefined")
    return amount / Decimal(total_supply) * HUNDRED * IMPACT_MULTIPLIERS[curve_type]


def guard_multiplier(direction: TradeDirection) -> Decimal:
    """Return the directional guard: above 1 for buys, below 1 for sells."""
    return BUY_GUARD if direction == TradeDirection.BUY else SELL_GUARD


class QuoteEngine:
    """Produces risk-adjusted quotes from a curve and a reserve snapshot.

    Stateless apart from optional metrics; identical inputs always produce
    equal quotes.
    """

    def __init__(
        self,
        high_impact_warning_percent: Decimal = Decimal("5"),
        metrics: MetricsCollector | None = None,
    ) -> None:
        """Initialize quote engine.

        Args:
            high_impact_warning_percent: Impact above which quotes are logged as warnings
            metrics: Optional metrics collector
        """
        self._high_impact_warning = high_impact_warning_percent
        self._metrics = metrics

    @property
    def high_impact_warning_percent(self) -> Decimal:
        return self._high_impact_warning

    def get_quote(
        self,
        curve_id: str,
        config: CurveConfig,
        state: ReserveState,
        amount: Decimal,
        direction: TradeDirection,
        now: datetime | None = None,
    ) -> Quote:
        """Price a trade against a reserve snapshot.

        Args:
            curve_id: Curve instance identifier
            config: Curve configuration
            state: Reserve snapshot (read only)
            amount: Trade size in tokens
            direction: BUY or SELL
            now: Quote timestamp (defaults to now)

        Returns:
            Quote with spot price, guarded price, impact and total cost

        Raises:
            InvalidAmount: If amount is not a positive whole number
            CurveMigrated: If the curve no longer trades on the curve
            InvalidCurveConfig: If the curve configuration is invalid
            MathOverflow: If any intermediate value is non-finite or the cost is not positive
        """
        amount = Decimal(amount)
        if not amount.is_finite() or amount <= 0:
            raise InvalidAmount(f"Amount must be greater than 0, got {amount}", amount=amount)
        if amount != amount.to_integral_value():
            raise InvalidAmount(f"Amount must be a whole number of tokens, got {amount}", amount=amount)

        if state.migrated:
            raise CurveMigrated(curve_id)

        curve_type = curve_type_of(config)
        ratio = supply_ratio(state.current_supply, state.total_supply, amount, direction)
        spot = spot_price(config, ratio)
        impact = price_impact_percent(curve_type, amount, state.total_supply)

        try:
            adjusted = spot * guard_multiplier(direction)
            total_cost = adjusted * amount * (1 + impact / HUNDRED)
        except DecimalException as err:
            raise MathOverflow("Quote computation overflowed") from err

        if not (adjusted.is_finite() and impact.is_finite() and total_cost.is_finite()):
            raise MathOverflow("Quote produced a non-finite value")
        if total_cost <= 0:
            raise MathOverflow(
                f"Quote total cost is not positive: {total_cost}",
                context={"spot_price": str(spot), "ratio": str(ratio)},
            )

        quote = Quote(
            curve_id=curve_id,
            direction=direction,
            amount=amount,
            spot_price=spot,
            adjusted_spot_price=adjusted,
            price_impact_percent=impact,
            total_cost=total_cost,
            quoted_at=now or datetime.now(UTC),
        )

        if quote.is_high_impact(self._high_impact_warning):
            logger.warning(
                f"High price impact on {curve_id}: {direction.value} {amount} "
                f"impact={impact:.2f}%"
            )
        else:
            logger.debug(
                f"Quote {curve_id}: {direction.value} {amount} @ {spot} "
                f"cost={total_cost} impact={impact:.4f}%"
            )

        if self._metrics:
            self._metrics.record_quote(curve_id, curve_type, quote)

        return quote
