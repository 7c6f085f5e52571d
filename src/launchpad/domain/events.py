"""Domain event types.

Events are emitted by the trade executor after a trade settles and are
used to notify outer layers (activity feeds, chart updates). All events
are immutable.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic.dataclasses import dataclass

from launchpad.domain.types import TradeDirection


class EventType(str, Enum):
    """Types of events emitted by the engine."""

    TRADE = "trade"


@dataclass(frozen=True)
class Event:
    """Base class for all events.

    All events have a type and timestamp.
    """

    event_type: EventType
    timestamp: datetime


@dataclass(frozen=True)
class TradeEvent(Event):
    """Confirmed trade notification.

    ``migration_ready`` is set when a buy lifts the reserve to the
    migration threshold.
    """

    curve_id: str
    trader: str
    direction: TradeDirection
    amount: Decimal
    reserve_amount: Decimal
    trade_id: str
    migration_ready: bool = False

    def is_buy(self) -> bool:
        """Return True for a buy."""
        return self.direction == TradeDirection.BUY
