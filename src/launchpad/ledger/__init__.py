"""Ledger module.

Provides the settlement-side collaborator interfaces and an in-memory
implementation.
"""

from launchpad.ledger.base import (
    BalanceProvider,
    CurveConfigStore,
    ReserveStateProvider,
    SettlementLayer,
)
from launchpad.ledger.memory import InMemoryLedger

__all__ = [
    "BalanceProvider",
    "CurveConfigStore",
    "InMemoryLedger",
    "ReserveStateProvider",
    "SettlementLayer",
]
