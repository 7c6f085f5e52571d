"""Bonding curve price functions.

Pure functions: given a curve configuration and a supply ratio, compute the
spot price, and given a reserve snapshot, the cost of a trade.

Supply ratio convention:
    buy:  ratio = current_supply / total_supply
    sell: ratio = (current_supply + amount) / total_supply

Sells are priced against the post-trade higher ratio. This asymmetry is
deliberate and kept for compatibility with prices already quoted to users.

Trade cost is NOT a continuous integral over the trade range. It is one
spot price at the direction's ratio multiplied by the amount. A true
integral changes observable trade costs and would have to ship as a new
pricing version.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException

from launchpad.domain.curves import (
    CurveConfig,
    ExponentialCurve,
    LinearCurve,
    LogarithmicCurve,
    curve_type_of,
)
from launchpad.domain.errors import InvalidAmount, MathOverflow
from launchpad.domain.types import TradeDirection

ZERO = Decimal("0")
ONE = Decimal("1")


def _finite(value: Decimal, what: str) -> Decimal:
    if not value.is_finite():
        raise MathOverflow(f"{what} is not finite", context={"value": str(value)})
    return value


def supply_ratio(
    current_supply: int,
    total_supply: int,
    amount: Decimal,
    direction: TradeDirection,
) -> Decimal:
    """Return the supply ratio a trade is priced at.

    Args:
        current_supply: Tokens issued
        total_supply: Supply ceiling
        amount: Trade size in tokens
        direction: BUY prices at the current ratio, SELL at current + amount

    Returns:
        Ratio in [0, 1]

    Raises:
        MathOverflow: If total_supply is zero
        InvalidAmount: If a sell would push the ratio above 1
    """
    if total_supply <= 0:
        raise MathOverflow(
            "Total supply is zero, supply ratio is undefined",
            context={"total_supply": total_supply},
        )

    supply = Decimal(current_supply)
    if direction == TradeDirection.SELL:
        supply += amount

    ratio = supply / Decimal(total_supply)
    if ratio > ONE:
        raise InvalidAmount(
            f"Trade of {amount} exceeds curve supply of {total_supply}",
            amount=amount,
        )
    return ratio


def spot_price(config: CurveConfig, ratio: Decimal) -> Decimal:
    """Return the instantaneous price at a supply ratio.

    Args:
        config: Curve configuration
        ratio: Supply ratio, normally in [0, 1]

    Returns:
        Non-negative finite price

    Raises:
        InvalidCurveType: If config is not a known curve variant
        InvalidParameter: If the curve's shape parameter is out of bounds
        MathOverflow: If the ratio or the result is not finite
    """
    curve_type_of(config)
    config.validate()
    _finite(ratio, "Supply ratio")
    if ratio < ZERO:
        raise MathOverflow("Supply ratio is negative", context={"ratio": str(ratio)})

    try:
        if isinstance(config, LinearCurve):
            price = config.base_price + config.slope * ratio
        elif isinstance(config, ExponentialCurve):
            price = config.base_price * (config.exponent * ratio).exp()
        elif isinstance(config, LogarithmicCurve):
            # ln(1) == 0, so an untraded log curve prices at zero
            price = config.base_price * (ONE + config.log_base * ratio).ln()
    except DecimalException as err:
        raise MathOverflow(
            f"Price computation overflowed for {config.curve_type.value} curve",
            context={"ratio": str(ratio)},
        ) from err

    return _finite(price, "Spot price")


def integrated_cost(
    config: CurveConfig,
    current_supply: int,
    total_supply: int,
    amount: Decimal,
    direction: TradeDirection,
) -> Decimal:
    """Return the unguarded curve cost of a trade.

    Single-point evaluation: spot price at the direction's ratio times the
    amount (see module docstring).

    Args:
        config: Curve configuration
        current_supply: Tokens issued
        total_supply: Supply ceiling
        amount: Trade size in tokens
        direction: Trade direction

    Returns:
        Cost (buy) or return (sell) in reserve currency, before the
        directional guard and impact weighting
    """
    ratio = supply_ratio(current_supply, total_supply, amount, direction)
    try:
        cost = spot_price(config, ratio) * amount
    except DecimalException as err:
        raise MathOverflow("Trade cost overflowed") from err
    return _finite(cost, "Trade cost")
