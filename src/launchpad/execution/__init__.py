"""Execution module.

Provides the trade executor that bounds, builds and settles trades.
"""

from launchpad.execution.executor import TradeExecutor

__all__ = ["TradeExecutor"]
