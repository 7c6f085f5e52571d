"""Core application components."""

from launchpad.core.config import LaunchpadConfig, load_config
from launchpad.core.service import CurveTradingService

__all__ = [
    "CurveTradingService",
    "LaunchpadConfig",
    "load_config",
]
