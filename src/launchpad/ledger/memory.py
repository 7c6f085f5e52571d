"""In-memory ledger.

Provides a complete in-process implementation of every settlement-side
collaborator, useful for unit tests, simulations and local development.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from launchpad.domain.curves import CurveConfig, parse_curve_config
from launchpad.domain.errors import CurveNotFound, SettlementFailure
from launchpad.domain.settlement import (
    Asset,
    SettlementInstruction,
    SettlementOutcome,
    SettlementReceipt,
    reserve_account,
    supply_account,
    token_account,
)
from launchpad.domain.trades import TraderBalances
from launchpad.domain.types import ReserveState
from launchpad.ledger.base import (
    BalanceProvider,
    CurveConfigStore,
    ReserveStateProvider,
    SettlementLayer,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class InMemoryLedger(ReserveStateProvider, CurveConfigStore, BalanceProvider, SettlementLayer):
    """Ledger that keeps every account in a dict.

    All state changes happen synchronously inside ``submit``, so an
    instruction is applied completely or not at all. Useful for:
    - Unit testing quote and execution logic
    - Simulating trade sequences against a curve
    - Development without a chain connection
    """

    def __init__(self, confirm_delay_seconds: float = 0.0) -> None:
        """Initialize ledger.

        Args:
            confirm_delay_seconds: Simulated finality latency in confirm()
        """
        self._confirm_delay = confirm_delay_seconds
        self._configs: dict[str, CurveConfig | dict[str, Any]] = {}
        self._states: dict[str, ReserveState] = {}
        self._balances: dict[tuple[str, Asset], Decimal] = {}
        self._outcomes: dict[str, SettlementOutcome] = {}
        self._submissions: list[SettlementInstruction] = []
        self._receipt_counter = 0

        # Failure injection for tests
        self._fail_next = False
        self._reject_next = False
        self._partial_next = False

    # --- Collaborator interfaces ---

    async def fetch(self, curve_id: str) -> ReserveState:
        """Return the current reserve snapshot."""
        if curve_id not in self._states:
            raise CurveNotFound(curve_id)
        return self._states[curve_id]

    async def load(self, curve_id: str) -> CurveConfig:
        """Return the curve configuration, parsing stored dict records."""
        if curve_id not in self._configs:
            raise CurveNotFound(curve_id)
        config = self._configs[curve_id]
        if isinstance(config, dict):
            return parse_curve_config(config)
        return config

    async def fetch_balances(self, trader: str, curve_id: str) -> TraderBalances:
        """Return a trader's reserve and token balances."""
        return TraderBalances(
            reserve_balance=self.balance_of(trader, Asset.RESERVE),
            token_balance=self.balance_of(token_account(trader, curve_id), Asset.TOKEN),
        )

    async def submit(self, instruction: SettlementInstruction) -> SettlementReceipt:
        """Apply an instruction atomically and return its receipt.

        Raises:
            ConnectionError: If a transport failure was injected with fail_next()
        """
        if self._fail_next:
            self._fail_next = False
            raise ConnectionError("Simulated settlement transport failure")

        self._submissions.append(instruction)
        self._receipt_counter += 1
        receipt = SettlementReceipt(
            receipt_id=f"mem_rcpt_{self._receipt_counter:06d}",
            instruction_id=instruction.instruction_id,
            submitted_at=datetime.now(UTC),
        )

        if self._reject_next:
            self._reject_next = False
            self._outcomes[receipt.receipt_id] = SettlementOutcome.REJECTED
            return receipt

        if self._partial_next:
            self._partial_next = False
            self._apply_movement(instruction, 0)
            self._outcomes[receipt.receipt_id] = SettlementOutcome.PARTIAL
            return receipt

        shortfall = self._find_shortfall(instruction)
        if shortfall:
            logger.info(f"Rejecting {instruction.instruction_id}: {shortfall}")
            self._outcomes[receipt.receipt_id] = SettlementOutcome.REJECTED
            return receipt

        try:
            new_state = self._states[instruction.curve_id].after_trade(
                instruction.direction,
                instruction.amount,
                instruction.reserve_amount,
            )
        except ValueError as e:
            logger.info(f"Rejecting {instruction.instruction_id}: {e}")
            self._outcomes[receipt.receipt_id] = SettlementOutcome.REJECTED
            return receipt

        for index in range(len(instruction.movements)):
            self._apply_movement(instruction, index)
        self._states[instruction.curve_id] = new_state
        self._outcomes[receipt.receipt_id] = SettlementOutcome.CONFIRMED
        return receipt

    async def confirm(self, receipt: SettlementReceipt) -> SettlementOutcome:
        """Return the outcome recorded for a receipt."""
        if self._confirm_delay:
            await asyncio.sleep(self._confirm_delay)
        outcome = self._outcomes.get(receipt.receipt_id)
        if outcome is None:
            raise SettlementFailure(
                f"Unknown receipt: {receipt.receipt_id}",
                instruction_id=receipt.instruction_id,
            )
        return outcome

    # --- Internals ---

    def _find_shortfall(self, instruction: SettlementInstruction) -> str | None:
        for (account, asset), required in instruction.debits().items():
            available = self.balance_of(account, asset)
            if available < required:
                return f"{account} holds {available} {asset.value}, needs {required}"
        return None

    def _apply_movement(self, instruction: SettlementInstruction, index: int) -> None:
        movement = instruction.movements[index]
        source = (movement.source, movement.asset)
        destination = (movement.destination, movement.asset)
        self._balances[source] = self._balances.get(source, ZERO) - movement.amount
        self._balances[destination] = self._balances.get(destination, ZERO) + movement.amount

    # --- Test helpers ---

    def register_curve(
        self,
        curve_id: str,
        config: CurveConfig | dict[str, Any],
        total_supply: int,
        current_supply: int = 0,
        sol_reserves: Decimal = ZERO,
    ) -> ReserveState:
        """Create a curve with its supply and reserve accounts funded.

        Args:
            curve_id: Curve instance identifier
            config: Curve configuration, or its stored dict form
            total_supply: Supply ceiling
            current_supply: Tokens already issued
            sol_reserves: Reserve currency already backing the curve

        Returns:
            The initial reserve snapshot
        """
        state = ReserveState(
            current_supply=current_supply,
            total_supply=total_supply,
            sol_reserves=sol_reserves,
        )
        self._configs[curve_id] = config
        self.set_reserve_state(curve_id, state)
        return state

    def set_reserve_state(self, curve_id: str, state: ReserveState) -> None:
        """Replace a curve's snapshot and resync its curve-side accounts."""
        self._states[curve_id] = state
        self._balances[(supply_account(curve_id), Asset.TOKEN)] = Decimal(state.available_supply())
        self._balances[(reserve_account(curve_id), Asset.RESERVE)] = state.sol_reserves

    def credit(self, account: str, asset: Asset, amount: Decimal) -> None:
        """Add funds to an account."""
        key = (account, asset)
        self._balances[key] = self._balances.get(key, ZERO) + Decimal(amount)

    def balance_of(self, account: str, asset: Asset) -> Decimal:
        """Return an account's balance of an asset."""
        return self._balances.get((account, asset), ZERO)

    def fail_next(self) -> None:
        """Make the next submit raise a transport error."""
        self._fail_next = True

    def reject_next(self) -> None:
        """Make the next submit settle as REJECTED without applying anything."""
        self._reject_next = True

    def partial_next(self) -> None:
        """Make the next submit apply only its first movement and report PARTIAL."""
        self._partial_next = True

    @property
    def submissions(self) -> list[SettlementInstruction]:
        """Return every instruction that reached submit."""
        return list(self._submissions)
