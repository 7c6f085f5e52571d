"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest

from launchpad.domain.curves import ExponentialCurve, LinearCurve, LogarithmicCurve
from launchpad.domain.settlement import Asset
from launchpad.domain.types import ReserveState
from launchpad.ledger.memory import InMemoryLedger


@pytest.fixture
def linear_curve() -> LinearCurve:
    """Linear curve from the reference buy scenario."""
    return LinearCurve(base_price=Decimal("0.001"), slope=Decimal("0.0000001"))


@pytest.fixture
def exponential_curve() -> ExponentialCurve:
    """Exponential curve from the reference sell scenario."""
    return ExponentialCurve(base_price=Decimal("0.01"), exponent=Decimal("2"))


@pytest.fixture
def logarithmic_curve() -> LogarithmicCurve:
    """Logarithmic curve with a moderate scale factor."""
    return LogarithmicCurve(base_price=Decimal("0.01"), log_base=Decimal("10"))


@pytest.fixture
def sample_state() -> ReserveState:
    """Curve one tenth issued, backed by 100 reserve units."""
    return ReserveState(
        current_supply=100_000,
        total_supply=1_000_000,
        sol_reserves=Decimal("100"),
    )


@pytest.fixture
def sample_curve_record() -> dict:
    """Stored curve record in its wire shape."""
    return {
        "curve_type": "linear",
        "base_price": "0.001",
        "slope": "0.0000001",
    }


@pytest.fixture
def funded_ledger(linear_curve: LinearCurve) -> InMemoryLedger:
    """Ledger with one linear curve and a funded trader.

    Curve "lin": 100_000 of 1_000_000 issued, 100 reserve units.
    Trader "alice": 50 reserve units, 10_000 tokens of "lin".
    """
    ledger = InMemoryLedger()
    ledger.register_curve(
        "lin",
        linear_curve,
        total_supply=1_000_000,
        current_supply=100_000,
        sol_reserves=Decimal("100"),
    )
    ledger.credit("alice", Asset.RESERVE, Decimal("50"))
    ledger.credit("alice:lin", Asset.TOKEN, Decimal("10000"))
    return ledger
