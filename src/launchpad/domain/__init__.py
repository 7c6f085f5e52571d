"""Domain models for the pricing and trade-execution engine.

This package contains all domain models that are settlement-agnostic.
All models are immutable and use Decimal for prices and reserves.
"""

from launchpad.domain.curves import (
    CurveConfig,
    ExponentialCurve,
    LinearCurve,
    LogarithmicCurve,
    curve_type_of,
    parse_curve_config,
)
from launchpad.domain.errors import (
    CurveMigrated,
    CurveNotFound,
    ErrorKind,
    InsufficientBalance,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidCurveConfig,
    InvalidCurveType,
    InvalidParameter,
    LaunchpadError,
    MathOverflow,
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
from launchpad.domain.trades import (
    BoundedTrade,
    Quote,
    TradeIntent,
    TraderBalances,
    TradeStatus,
)
from launchpad.domain.types import CurveType, ReserveState, TradeDirection

__all__ = [
    # Types
    "CurveType",
    "ReserveState",
    "TradeDirection",
    # Curves
    "CurveConfig",
    "ExponentialCurve",
    "LinearCurve",
    "LogarithmicCurve",
    "curve_type_of",
    "parse_curve_config",
    # Trades
    "BoundedTrade",
    "Quote",
    "TradeIntent",
    "TraderBalances",
    "TradeStatus",
    # Settlement
    "Asset",
    "BalanceMovement",
    "SettlementInstruction",
    "SettlementOutcome",
    "SettlementReceipt",
    "TradeResult",
    "reserve_account",
    "supply_account",
    "token_account",
    # Events
    "Event",
    "EventType",
    "TradeEvent",
    # Errors
    "CurveMigrated",
    "CurveNotFound",
    "ErrorKind",
    "InsufficientBalance",
    "InsufficientLiquidity",
    "InvalidAmount",
    "InvalidCurveConfig",
    "InvalidCurveType",
    "InvalidParameter",
    "LaunchpadError",
    "MathOverflow",
    "SettlementFailure",
    "SlippageExceeded",
]
