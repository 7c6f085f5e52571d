"""Pricing module.

Provides the bonding curve price functions and the quote engine.
"""

from launchpad.pricing.curve_model import integrated_cost, spot_price, supply_ratio
from launchpad.pricing.quote_engine import (
    BUY_GUARD,
    IMPACT_MULTIPLIERS,
    SELL_GUARD,
    QuoteEngine,
    guard_multiplier,
    price_impact_percent,
)

__all__ = [
    "BUY_GUARD",
    "IMPACT_MULTIPLIERS",
    "SELL_GUARD",
    "QuoteEngine",
    "guard_multiplier",
    "integrated_cost",
    "price_impact_percent",
    "spot_price",
    "supply_ratio",
]
