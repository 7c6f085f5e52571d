"""Curve trading service.

Caller-facing entry point that wires the quote engine and trade executor
to the settlement-side collaborators.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING

from launchpad.core.config import LaunchpadConfig
from launchpad.domain.errors import InvalidAmount, LaunchpadError
from launchpad.domain.trades import Quote, TradeIntent
from launchpad.domain.types import TradeDirection
from launchpad.execution.executor import TradeExecutor
from launchpad.pricing.quote_engine import QuoteEngine

if TYPE_CHECKING:
    from launchpad.domain.events import Event
    from launchpad.domain.settlement import TradeResult
    from launchpad.ledger.base import (
        BalanceProvider,
        CurveConfigStore,
        ReserveStateProvider,
        SettlementLayer,
    )
    from launchpad.monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)


class CurveTradingService:
    """Quotes and executes trades against bonding curves.

    Holds no curve state of its own: every call reads the current
    configuration and reserve snapshot from its collaborators.
    """

    def __init__(
        self,
        store: CurveConfigStore,
        reserves: ReserveStateProvider,
        balances: BalanceProvider,
        settlement: SettlementLayer,
        config: LaunchpadConfig | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Curve configuration store
            reserves: Reserve snapshot provider
            balances: Trader balance provider
            settlement: Settlement layer
            config: Engine configuration (defaults if omitted)
            metrics: Optional metrics collector
        """
        self._config = config or LaunchpadConfig()
        self._store = store
        self._reserves = reserves
        self._metrics = metrics

        self._quote_engine = QuoteEngine(
            high_impact_warning_percent=self._config.quote.high_impact_warning_percent,
            metrics=metrics,
        )
        execution = self._config.execution
        self._executor = TradeExecutor(
            reserves=reserves,
            balances=balances,
            settlement=settlement,
            quote_engine=self._quote_engine,
            quote_ttl_seconds=self._config.quote.quote_ttl_seconds,
            trade_fee_bps=execution.trade_fee_bps,
            fee_collector=execution.fee_collector,
            migration_threshold=execution.migration_threshold,
            metrics=metrics,
        )

    @property
    def config(self) -> LaunchpadConfig:
        return self._config

    @property
    def executor(self) -> TradeExecutor:
        return self._executor

    def set_event_handler(self, handler: Callable[[Event], None]) -> None:
        """Set the handler for trade events."""
        self._executor.set_event_handler(handler)

    async def get_quote(
        self,
        curve_id: str,
        amount: Decimal,
        direction: TradeDirection,
    ) -> Quote:
        """Quote a trade against the curve's current snapshot.

        Args:
            curve_id: Curve instance identifier
            amount: Trade size in tokens
            direction: BUY or SELL

        Returns:
            Quote
        """
        config = await self._store.load(curve_id)
        state = await self._reserves.fetch(curve_id)
        return self._quote_engine.get_quote(curve_id, config, state, Decimal(amount), direction)

    async def execute_trade(
        self,
        curve_id: str,
        amount: Decimal,
        direction: TradeDirection,
        slippage_bound_percent: Decimal | None = None,
        trader: str = "",
    ) -> TradeResult:
        """Quote, bound and execute a trade.

        Args:
            curve_id: Curve instance identifier
            amount: Trade size in tokens
            direction: BUY or SELL
            slippage_bound_percent: Accepted price movement (config default if None)
            trader: Trader account identifier

        Returns:
            TradeResult with status CONFIRMED or REJECTED

        Raises:
            InvalidAmount: If the amount is not a positive whole number of tokens or
                the slippage bound is negative
            SlippageExceeded: If the price moved beyond the bound (nothing submitted)
            SettlementFailure: If settlement did not reach a clean outcome
            LaunchpadError: Any other typed validation error
        """
        if slippage_bound_percent is None:
            slippage_bound_percent = self._config.execution.default_slippage_percent

        try:
            slippage = Decimal(slippage_bound_percent)
            if not slippage.is_finite() or slippage < 0:
                raise InvalidAmount(
                    f"Slippage bound must be a non-negative percentage, got {slippage}",
                    context={"slippage_bound_percent": str(slippage)},
                )

            config = await self._store.load(curve_id)
            state = await self._reserves.fetch(curve_id)
            quote = self._quote_engine.get_quote(curve_id, config, state, Decimal(amount), direction)
            intent = TradeIntent(
                trader=trader,
                amount=quote.amount,
                direction=direction,
                slippage_bound_percent=slippage,
            )
            bounded = self._executor.prepare(quote, intent)
        except LaunchpadError as e:
            logger.warning(f"Trade on {curve_id} refused before submission: {e}")
            raise

        logger.info(
            f"Executing {direction.value} {quote.amount} on {curve_id} for {trader}: "
            f"quoted {quote.total_cost}, bound {bounded.bound}"
        )
        return await self._executor.execute(bounded, config)
