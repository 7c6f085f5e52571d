"""Settlement-side collaborator abstractions.

Defines the narrow interfaces the pricing and execution core depends on.
Concrete ledgers (an on-chain program client, an external ledger service,
the in-memory ledger used in tests) implement these; the core never sees
the underlying account model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from launchpad.domain.curves import CurveConfig
    from launchpad.domain.settlement import (
        SettlementInstruction,
        SettlementOutcome,
        SettlementReceipt,
    )
    from launchpad.domain.trades import TraderBalances
    from launchpad.domain.types import ReserveState


class ReserveStateProvider(ABC):
    """Supplies point-in-time reserve snapshots."""

    @abstractmethod
    async def fetch(self, curve_id: str) -> ReserveState:
        """Fetch a consistent snapshot of a curve's supply and reserve.

        Args:
            curve_id: Curve instance identifier

        Returns:
            Current reserve snapshot

        Raises:
            CurveNotFound: If the curve instance does not exist
        """
        ...


class CurveConfigStore(ABC):
    """Loads immutable curve configurations."""

    @abstractmethod
    async def load(self, curve_id: str) -> CurveConfig:
        """Load the curve configuration fixed at token creation.

        Args:
            curve_id: Curve instance identifier

        Returns:
            Curve configuration

        Raises:
            CurveNotFound: If the curve instance does not exist
            InvalidCurveConfig: If the stored configuration is malformed
        """
        ...


class BalanceProvider(ABC):
    """Supplies trader balances for pre-trade checks."""

    @abstractmethod
    async def fetch_balances(self, trader: str, curve_id: str) -> TraderBalances:
        """Fetch a trader's reserve and token balances for a curve.

        Args:
            trader: Trader account identifier
            curve_id: Curve instance identifier

        Returns:
            Trader balances
        """
        ...


class SettlementLayer(ABC):
    """System of record that applies instructions atomically.

    Implementations must apply every movement of an instruction or none.
    A layer that cannot guarantee this must report PARTIAL, which the
    core treats as a failure.
    """

    @abstractmethod
    async def submit(self, instruction: SettlementInstruction) -> SettlementReceipt:
        """Submit an instruction for settlement.

        Args:
            instruction: Instruction to apply

        Returns:
            Receipt identifying the submission

        Raises:
            SettlementFailure: If the submission could not be delivered
        """
        ...

    @abstractmethod
    async def confirm(self, receipt: SettlementReceipt) -> SettlementOutcome:
        """Wait for a submitted instruction to finalize.

        Args:
            receipt: Receipt returned by submit

        Returns:
            CONFIRMED, REJECTED or PARTIAL

        Raises:
            SettlementFailure: If finality could not be determined
        """
        ...
