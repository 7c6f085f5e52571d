"""Prometheus metrics for the pricing and execution engine.

Provides metrics for:
- Quoting (quotes issued, spot price, price impact)
- Trading (trades by outcome, slippage rejections, errors)
- Settlement latency
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

if TYPE_CHECKING:
    from launchpad.domain.trades import Quote, TradeStatus
    from launchpad.domain.types import CurveType, TradeDirection

logger = logging.getLogger(__name__)


class MetricsCollector:
    """Collects and exposes Prometheus metrics.

    Each collector owns its registry, so several engines (or tests) can
    coexist in one process. A disabled collector accepts every call and
    records nothing.
    """

    def __init__(
        self,
        prefix: str = "launchpad",
        enabled: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize metrics collector.

        Args:
            prefix: Metric name prefix
            enabled: Record metrics when True
            registry: Registry to register into (a private one if omitted)
        """
        self._prefix = prefix
        self._enabled = enabled
        self._registry = registry or CollectorRegistry()

        if not self._enabled:
            logger.info("Metrics disabled")
            return

        # Quote metrics
        self._quotes = Counter(
            f"{prefix}_quotes_total",
            "Total quotes issued",
            ["curve_type", "direction"],
            registry=self._registry,
        )

        self._spot_price = Gauge(
            f"{prefix}_spot_price",
            "Spot price of the last quote",
            ["curve_id"],
            registry=self._registry,
        )

        self._price_impact = Histogram(
            f"{prefix}_price_impact_percent",
            "Price impact of quoted trades",
            ["curve_type"],
            buckets=[0.01, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 25.0],
            registry=self._registry,
        )

        # Trade metrics
        self._trades = Counter(
            f"{prefix}_trades_total",
            "Trade attempts by final status",
            ["direction", "status"],
            registry=self._registry,
        )

        self._slippage_rejections = Counter(
            f"{prefix}_slippage_rejections_total",
            "Trades refused because the re-priced cost left the bound",
            ["curve_id"],
            registry=self._registry,
        )

        # Latency metrics
        self._settlement_latency = Histogram(
            f"{prefix}_settlement_latency_seconds",
            "Submit-to-finality latency",
            ["curve_id"],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=self._registry,
        )

        # Error metrics
        self._errors = Counter(
            f"{prefix}_errors_total",
            "Total errors by kind",
            ["error_kind"],
            registry=self._registry,
        )

    @property
    def enabled(self) -> bool:
        """Check if metrics are enabled."""
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    # --- Quote Metrics ---

    def record_quote(self, curve_id: str, curve_type: CurveType, quote: Quote) -> None:
        """Record an issued quote."""
        if self._enabled:
            self._quotes.labels(
                curve_type=curve_type.value, direction=quote.direction.value
            ).inc()
            self._spot_price.labels(curve_id=curve_id).set(float(quote.spot_price))
            self._price_impact.labels(curve_type=curve_type.value).observe(
                float(quote.price_impact_percent)
            )

    # --- Trade Metrics ---

    def inc_trade(self, direction: TradeDirection, status: TradeStatus) -> None:
        """Increment trade counter for a final status."""
        if self._enabled:
            self._trades.labels(direction=direction.value, status=status.value).inc()

    def inc_slippage_rejection(self, curve_id: str) -> None:
        """Increment slippage rejection counter."""
        if self._enabled:
            self._slippage_rejections.labels(curve_id=curve_id).inc()

    def inc_error(self, error_kind: str) -> None:
        """Increment error counter."""
        if self._enabled:
            self._errors.labels(error_kind=error_kind).inc()

    # --- Latency Metrics ---

    def observe_settlement_latency(self, curve_id: str, seconds: float) -> None:
        """Record settlement latency."""
        if self._enabled:
            self._settlement_latency.labels(curve_id=curve_id).observe(seconds)

    @contextmanager
    def time_settlement(self, curve_id: str) -> Generator[None, None, None]:
        """Context manager to time a submit/confirm round trip."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe_settlement_latency(curve_id, time.perf_counter() - start)

    # --- Export ---

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format.

        Returns:
            Metrics as bytes in Prometheus exposition format
        """
        if self._enabled:
            return generate_latest(self._registry)
        return b""
