"""Monitoring module.

Provides Prometheus metrics for quoting and trade execution.
"""

from launchpad.monitoring.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
