"""Trade executor.

Turns an accepted quote and a trade intent into an atomic settlement
instruction and drives it to finality.

Per-attempt state machine:
    QUOTED → BOUNDED → SUBMITTED → CONFIRMED | REJECTED | FAILED

Ordering guarantee: within one attempt the reserve snapshot is re-read and
the quote recomputed immediately before submission; a trade is never
submitted against a price computed from an older snapshot.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from launchpad.domain.errors import (
    CurveMigrated,
    InsufficientBalance,
    InsufficientLiquidity,
    InvalidAmount,
    LaunchpadError,
    SettlementFailure,
    SlippageExceeded,
)
from launchpad.domain.events import Event, EventType, TradeEvent
from launchpad.domain.settlement import (
    Asset,
    BalanceMovement,
    SettlementInstruction,
    SettlementOutcome,
    SettlementReceipt,
    TradeResult,
    reserve_account,
    supply_account,
    token_account,
)
from launchpad.domain.trades import BoundedTrade, Quote, TradeIntent, TraderBalances, TradeStatus
from launchpad.domain.types import ReserveState, TradeDirection
from launchpad.pricing.quote_engine import QuoteEngine

if TYPE_CHECKING:
    from launchpad.domain.curves import CurveConfig
    from launchpad.ledger.base import BalanceProvider, ReserveStateProvider, SettlementLayer
    from launchpad.monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)

BPS = Decimal("10000")


class TradeExecutor:
    """Builds settlement instructions and submits them exactly once.

    Features:
    - Slippage bound computed from the accepted quote
    - Re-validation against a fresh snapshot before submission
    - Trader and curve side balance checks
    - At most one in-flight submission per curve
    - Trade events for confirmed trades

    Retries are the caller's decision; every public method makes at most
    one submission.
    """

    def __init__(
        self,
        reserves: ReserveStateProvider,
        balances: BalanceProvider,
        settlement: SettlementLayer,
        quote_engine: QuoteEngine | None = None,
        quote_ttl_seconds: float = 30.0,
        trade_fee_bps: int = 0,
        fee_collector: str = "fee_collector",
        migration_threshold: Decimal = Decimal("80"),
        metrics: MetricsCollector | None = None,
    ) -> None:
        """Initialize with settlement-side collaborators.

        Args:
            reserves: Source of reserve snapshots for re-validation
            balances: Source of trader balances
            settlement: Settlement layer instructions are submitted to
            quote_engine: Engine used to re-price at commit time
            quote_ttl_seconds: Validity window of a quote handed to prepare()
            trade_fee_bps: Fee in basis points of the reserve amount
            fee_collector: Account receiving fees
            migration_threshold: Reserve level at which a curve is ready to migrate
            metrics: Optional metrics collector

        Raises:
            ValueError: If trade_fee_bps is outside [0, 10000)
        """
        if not 0 <= trade_fee_bps < BPS:
            raise ValueError(f"trade_fee_bps must be in [0, 10000), got {trade_fee_bps}")

        self._reserves = reserves
        self._balances = balances
        self._settlement = settlement
        self._quote_engine = quote_engine or QuoteEngine(metrics=metrics)
        self._quote_ttl = quote_ttl_seconds
        self._fee_rate = Decimal(trade_fee_bps) / BPS
        self._fee_collector = fee_collector
        self._migration_threshold = migration_threshold
        self._metrics = metrics

        # Curves with a submission awaiting finality
        self._in_flight: set[str] = set()

        self._event_handler: Callable[[Event], None] | None = None

    def set_event_handler(self, handler: Callable[[Event], None]) -> None:
        """Set the handler called with a TradeEvent for each confirmed trade."""
        self._event_handler = handler

    def has_in_flight(self, curve_id: str) -> bool:
        """Return True if a submission for the curve awaits finality."""
        return curve_id in self._in_flight

    # --- Bounding ---

    def prepare(
        self,
        quote: Quote,
        intent: TradeIntent,
        now: datetime | None = None,
    ) -> BoundedTrade:
        """Pin the worst acceptable price for a quote.

        Buy: max_cost = total_cost * (1 + slippage / 100)
        Sell: min_return = total_cost * (1 - slippage / 100)

        Args:
            quote: Accepted quote
            intent: Trade intent (must match the quote's amount and direction)
            now: Current time for the validity check (defaults to now)

        Returns:
            BoundedTrade

        Raises:
            InvalidAmount: If the intent does not match the quote
            SlippageExceeded: If the quote is older than its validity window
        """
        if intent.amount != quote.amount:
            raise InvalidAmount(
                f"Intent amount {intent.amount} does not match quoted amount {quote.amount}",
                amount=intent.amount,
            )
        if intent.direction != quote.direction:
            raise InvalidAmount(
                f"Intent direction {intent.direction.value} does not match "
                f"quoted direction {quote.direction.value}",
                amount=intent.amount,
            )
        if quote.is_expired(self._quote_ttl, now):
            raise SlippageExceeded(
                f"Quote for {quote.curve_id} expired after {self._quote_ttl}s, re-quote",
                context={"age_seconds": quote.age_seconds(now)},
            )

        bounded = BoundedTrade.from_quote(quote, intent)
        logger.debug(
            f"Bounded {quote.direction.value} {quote.amount} on {quote.curve_id}: "
            f"cost={quote.total_cost} bound={bounded.bound}"
        )
        return bounded

    # --- Instruction building ---

    def build_instruction(
        self,
        bounded: BoundedTrade,
        state: ReserveState,
        balances: TraderBalances,
    ) -> SettlementInstruction:
        """Build the atomic set of balance movements for a bounded trade.

        Buy:  reserve trader → curve reserve, [fee → collector], tokens curve supply → trader
        Sell: tokens trader → curve supply, reserve curve reserve → trader, [fee → collector]

        Args:
            bounded: Bounded trade carrying the quote to settle
            state: Reserve snapshot the quote was priced from
            balances: Trader balances

        Returns:
            SettlementInstruction

        Raises:
            CurveMigrated: If the curve no longer trades on the curve
            InsufficientBalance: If the trader cannot cover the debit
            InsufficientLiquidity: If the curve cannot cover its debit
        """
        curve_id = bounded.curve_id
        trader = bounded.intent.trader
        amount = bounded.amount
        reserve_amount = bounded.quote.total_cost
        fee = reserve_amount * self._fee_rate

        if state.migrated:
            raise CurveMigrated(curve_id)

        trader_reserve = trader
        trader_tokens = token_account(trader, curve_id)
        movements: list[BalanceMovement] = []

        if bounded.direction == TradeDirection.BUY:
            required = reserve_amount + fee
            if balances.reserve_balance < required:
                raise InsufficientBalance(
                    f"Trader {trader} holds {balances.reserve_balance}, needs {required}",
                    required=required,
                    available=balances.reserve_balance,
                )
            available = Decimal(state.available_supply())
            if available < amount:
                raise InsufficientLiquidity(
                    f"Curve {curve_id} has {available} tokens left, trade needs {amount}",
                    required=amount,
                    available=available,
                )
            movements.append(
                BalanceMovement(
                    asset=Asset.RESERVE,
                    source=trader_reserve,
                    destination=reserve_account(curve_id),
                    amount=reserve_amount,
                )
            )
            if fee > 0:
                movements.append(
                    BalanceMovement(
                        asset=Asset.RESERVE,
                        source=trader_reserve,
                        destination=self._fee_collector,
                        amount=fee,
                    )
                )
            movements.append(
                BalanceMovement(
                    asset=Asset.TOKEN,
                    source=supply_account(curve_id),
                    destination=trader_tokens,
                    amount=amount,
                )
            )
        else:
            if balances.token_balance < amount:
                raise InsufficientBalance(
                    f"Trader {trader} holds {balances.token_balance} tokens, needs {amount}",
                    required=amount,
                    available=balances.token_balance,
                )
            if state.sol_reserves < reserve_amount:
                raise InsufficientLiquidity(
                    f"Curve {curve_id} reserve {state.sol_reserves} cannot pay {reserve_amount}",
                    required=reserve_amount,
                    available=state.sol_reserves,
                )
            movements.append(
                BalanceMovement(
                    asset=Asset.TOKEN,
                    source=trader_tokens,
                    destination=supply_account(curve_id),
                    amount=amount,
                )
            )
            movements.append(
                BalanceMovement(
                    asset=Asset.RESERVE,
                    source=reserve_account(curve_id),
                    destination=trader_reserve,
                    amount=reserve_amount - fee,
                )
            )
            if fee > 0:
                movements.append(
                    BalanceMovement(
                        asset=Asset.RESERVE,
                        source=reserve_account(curve_id),
                        destination=self._fee_collector,
                        amount=fee,
                    )
                )

        return SettlementInstruction(
            instruction_id=SettlementInstruction.new_id(),
            curve_id=curve_id,
            trader=trader,
            direction=bounded.direction,
            amount=amount,
            reserve_amount=reserve_amount,
            fee=fee,
            bound=bounded.bound,
            movements=tuple(movements),
        )

    # --- Re-validation ---

    async def revalidate(self, bounded: BoundedTrade, config: CurveConfig) -> tuple[Quote, ReserveState]:
        """Re-read the reserve snapshot and re-price the trade.

        Args:
            bounded: Bounded trade to check
            config: Curve configuration

        Returns:
            Tuple of (fresh quote, snapshot it was priced from)

        Raises:
            SlippageExceeded: If the fresh cost or return falls outside the bound
        """
        state = await self._reserves.fetch(bounded.curve_id)
        fresh = self._quote_engine.get_quote(
            bounded.curve_id,
            config,
            state,
            bounded.amount,
            bounded.direction,
        )
        if not bounded.within_bounds(fresh.total_cost):
            logger.warning(
                f"Slippage exceeded on {bounded.curve_id}: {bounded.direction.value} "
                f"{bounded.amount} now {fresh.total_cost}, bound {bounded.bound}"
            )
            if self._metrics:
                self._metrics.inc_slippage_rejection(bounded.curve_id)
            raise SlippageExceeded(
                f"Price moved beyond the accepted bound on {bounded.curve_id}",
                bound=bounded.bound,
                actual=fresh.total_cost,
            )
        return fresh, state

    # --- Submission ---

    async def submit_and_confirm(
        self,
        instruction: SettlementInstruction,
        quote: Quote,
    ) -> TradeResult:
        """Submit an instruction once and wait for finality.

        Not cancellable once called.

        Args:
            instruction: Instruction to settle
            quote: Quote the instruction was priced from

        Returns:
            TradeResult with status CONFIRMED or REJECTED

        Raises:
            SettlementFailure: On transport failure, partial application, or a
                concurrent submission for the same curve
        """
        curve_id = instruction.curve_id
        if curve_id in self._in_flight:
            raise SettlementFailure(
                f"Submission already in flight for {curve_id}, re-quote and retry",
                instruction_id=instruction.instruction_id,
            )

        self._in_flight.add(curve_id)
        try:
            if self._metrics:
                with self._metrics.time_settlement(curve_id):
                    receipt, outcome = await self._settle(instruction)
            else:
                receipt, outcome = await self._settle(instruction)
        finally:
            self._in_flight.discard(curve_id)

        if outcome == SettlementOutcome.PARTIAL:
            logger.error(f"Partial settlement of {instruction.instruction_id} on {curve_id}")
            raise SettlementFailure(
                f"Settlement applied {instruction.instruction_id} only partially",
                instruction_id=instruction.instruction_id,
                context={"receipt_id": receipt.receipt_id},
            )

        if outcome == SettlementOutcome.REJECTED:
            logger.warning(f"Settlement rejected {instruction.instruction_id} on {curve_id}")
            return TradeResult.finished(
                TradeStatus.REJECTED,
                quote,
                instruction,
                receipt=receipt,
                reason="Settlement layer rejected the instruction",
            )

        logger.info(
            f"Trade confirmed: {instruction.instruction_id} {instruction.direction.value} "
            f"{instruction.amount} on {curve_id} for {instruction.reserve_amount}"
        )
        return TradeResult.finished(TradeStatus.CONFIRMED, quote, instruction, receipt=receipt)

    async def _settle(
        self, instruction: SettlementInstruction
    ) -> tuple[SettlementReceipt, SettlementOutcome]:
        """Run submit then confirm, wrapping foreign errors as SettlementFailure."""
        try:
            receipt = await self._settlement.submit(instruction)
            logger.info(f"Submitted {instruction.instruction_id} as {receipt.receipt_id}")
            outcome = await self._settlement.confirm(receipt)
        except LaunchpadError:
            raise
        except Exception as e:
            logger.error(f"Settlement failed for {instruction.instruction_id}: {e}")
            raise SettlementFailure(
                f"Settlement failed: {e}",
                instruction_id=instruction.instruction_id,
            ) from e
        return receipt, outcome

    # --- Full attempt ---

    async def execute(self, bounded: BoundedTrade, config: CurveConfig) -> TradeResult:
        """Run one trade attempt: re-validate, build, submit, confirm.

        Steps:
        1. Fetch trader balances
        2. Re-read the snapshot and re-price (SlippageExceeded, nothing submitted)
        3. Build the instruction from the fresh quote
        4. Submit once and wait for finality
        5. On confirmation, refresh the snapshot and emit a TradeEvent

        Args:
            bounded: Bounded trade from prepare()
            config: Curve configuration

        Returns:
            TradeResult

        Raises:
            LaunchpadError: Any typed error from the steps above
        """
        try:
            balances = await self._balances.fetch_balances(bounded.intent.trader, bounded.curve_id)
            fresh, state = await self.revalidate(bounded, config)
            instruction = self.build_instruction(bounded.repriced(fresh), state, balances)
            result = await self.submit_and_confirm(instruction, fresh)
        except LaunchpadError as e:
            if self._metrics:
                self._metrics.inc_error(e.kind.value if e.kind else type(e).__name__)
                if isinstance(e, SettlementFailure):
                    self._metrics.inc_trade(bounded.direction, TradeStatus.FAILED)
            raise

        if result.is_confirmed():
            result = await self._after_confirmation(bounded, result)

        if self._metrics:
            self._metrics.inc_trade(bounded.direction, result.status)
        return result

    async def _after_confirmation(self, bounded: BoundedTrade, result: TradeResult) -> TradeResult:
        """Flag migration readiness and emit the trade event.

        The trade has already settled, so failures here are logged and the
        CONFIRMED result is still returned.
        """
        migration_ready = False
        try:
            refreshed = await self._reserves.fetch(bounded.curve_id)
        except Exception as e:
            logger.error(
                f"Post-trade refresh failed for {bounded.curve_id} "
                f"after confirmed {result.trade_id}: {e}"
            )
        else:
            migration_ready = (
                bounded.direction == TradeDirection.BUY
                and refreshed.sol_reserves >= self._migration_threshold
            )
            if migration_ready:
                logger.info(
                    f"Curve {bounded.curve_id} reached migration threshold "
                    f"({refreshed.sol_reserves} >= {self._migration_threshold})"
                )

        result = dataclasses.replace(result, migration_ready=migration_ready)
        try:
            self._emit_trade_event(result)
        except Exception as e:
            logger.error(f"Trade event handler failed for {result.trade_id}: {e}", exc_info=True)
        return result

    def _emit_trade_event(self, result: TradeResult) -> None:
        if not self._event_handler:
            return
        instruction = result.instruction
        self._event_handler(
            TradeEvent(
                event_type=EventType.TRADE,
                timestamp=result.completed_at or datetime.now(UTC),
                curve_id=instruction.curve_id,
                trader=instruction.trader,
                direction=instruction.direction,
                amount=instruction.amount,
                reserve_amount=instruction.reserve_amount,
                trade_id=result.trade_id,
                migration_ready=result.migration_ready,
            )
        )
