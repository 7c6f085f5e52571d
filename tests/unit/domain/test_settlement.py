"""Tests for settlement models and trade events."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from launchpad.domain.events import EventType, TradeEvent
from launchpad.domain.settlement import (
    Asset,
    BalanceMovement,
    SettlementInstruction,
    TradeResult,
    reserve_account,
    supply_account,
    token_account,
)
from launchpad.domain.trades import Quote, TradeStatus
from launchpad.domain.types import TradeDirection


@pytest.fixture
def buy_instruction() -> SettlementInstruction:
    return SettlementInstruction(
        instruction_id="ix_test",
        curve_id="lin",
        trader="alice",
        direction=TradeDirection.BUY,
        amount=Decimal("1000"),
        reserve_amount=Decimal("1.5"),
        fee=Decimal("0.015"),
        bound=Decimal("1.515"),
        movements=(
            BalanceMovement(Asset.RESERVE, "alice", "lin:reserve", Decimal("1.5")),
            BalanceMovement(Asset.RESERVE, "alice", "fee_collector", Decimal("0.015")),
            BalanceMovement(Asset.TOKEN, "lin:supply", "alice:lin", Decimal("1000")),
        ),
    )


class TestAccounts:
    """Tests for account naming."""

    def test_curve_accounts(self) -> None:
        assert reserve_account("lin") == "lin:reserve"
        assert supply_account("lin") == "lin:supply"

    def test_trader_token_account(self) -> None:
        assert token_account("alice", "lin") == "alice:lin"


class TestBalanceMovement:
    """Tests for BalanceMovement."""

    def test_zero_amount_raises(self) -> None:
        with pytest.raises(ValueError, match="Movement amount must be positive"):
            BalanceMovement(Asset.TOKEN, "a", "b", Decimal("0"))


class TestSettlementInstruction:
    """Tests for SettlementInstruction."""

    def test_debits_sum_per_account(self, buy_instruction: SettlementInstruction) -> None:
        debits = buy_instruction.debits()
        assert debits[("alice", Asset.RESERVE)] == Decimal("1.515")
        assert debits[("lin:supply", Asset.TOKEN)] == Decimal("1000")
        assert len(debits) == 2

    def test_new_id_unique(self) -> None:
        first = SettlementInstruction.new_id()
        assert first.startswith("ix_")
        assert first != SettlementInstruction.new_id()


class TestTradeResult:
    """Tests for TradeResult."""

    def test_finished(self, buy_instruction: SettlementInstruction) -> None:
        quote = Quote(
            curve_id="lin",
            direction=TradeDirection.BUY,
            amount=Decimal("1000"),
            spot_price=Decimal("0.00147"),
            adjusted_spot_price=Decimal("0.0014994"),
            price_impact_percent=Decimal("0.1"),
            total_cost=Decimal("1.5"),
        )

        result = TradeResult.finished(TradeStatus.CONFIRMED, quote, buy_instruction)

        assert result.trade_id == "ix_test"
        assert result.is_confirmed()
        assert result.completed_at is not None
        assert result.migration_ready is False


class TestTradeEvent:
    """Tests for TradeEvent."""

    def test_trade_event(self) -> None:
        event = TradeEvent(
            event_type=EventType.TRADE,
            timestamp=datetime.now(UTC),
            curve_id="lin",
            trader="alice",
            direction=TradeDirection.SELL,
            amount=Decimal("10"),
            reserve_amount=Decimal("0.01"),
            trade_id="ix_1",
        )
        assert not event.is_buy()
        assert event.migration_ready is False
