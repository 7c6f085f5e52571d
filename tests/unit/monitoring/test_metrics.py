"""Tests for Prometheus metrics."""

from decimal import Decimal

from prometheus_client import CollectorRegistry

from launchpad.domain.trades import Quote, TradeStatus
from launchpad.domain.types import CurveType, TradeDirection
from launchpad.monitoring.metrics import MetricsCollector


def sample_quote() -> Quote:
    return Quote(
        curve_id="lin",
        direction=TradeDirection.BUY,
        amount=Decimal("1000"),
        spot_price=Decimal("0.00100001"),
        adjusted_spot_price=Decimal("0.0010200102"),
        price_impact_percent=Decimal("0.1"),
        total_cost=Decimal("1.0210302102"),
    )


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_record_quote(self) -> None:
        registry = CollectorRegistry()
        metrics = MetricsCollector(registry=registry)

        metrics.record_quote("lin", CurveType.LINEAR, sample_quote())

        assert registry.get_sample_value(
            "launchpad_quotes_total", {"curve_type": "linear", "direction": "buy"}
        ) == 1
        assert registry.get_sample_value("launchpad_spot_price", {"curve_id": "lin"}) == float(
            Decimal("0.00100001")
        )

    def test_trade_and_error_counters(self) -> None:
        registry = CollectorRegistry()
        metrics = MetricsCollector(prefix="test", registry=registry)

        metrics.inc_trade(TradeDirection.SELL, TradeStatus.CONFIRMED)
        metrics.inc_trade(TradeDirection.SELL, TradeStatus.CONFIRMED)
        metrics.inc_slippage_rejection("lin")
        metrics.inc_error("SlippageExceeded")

        assert registry.get_sample_value(
            "test_trades_total", {"direction": "sell", "status": "confirmed"}
        ) == 2
        assert registry.get_sample_value("test_slippage_rejections_total", {"curve_id": "lin"}) == 1
        assert registry.get_sample_value("test_errors_total", {"error_kind": "SlippageExceeded"}) == 1

    def test_time_settlement(self) -> None:
        registry = CollectorRegistry()
        metrics = MetricsCollector(registry=registry)

        with metrics.time_settlement("lin"):
            pass

        assert registry.get_sample_value(
            "launchpad_settlement_latency_seconds_count", {"curve_id": "lin"}
        ) == 1

    def test_collectors_are_independent(self) -> None:
        """Two collectors with the same prefix do not clash."""
        first = MetricsCollector()
        second = MetricsCollector()
        first.inc_error("MathOverflow")
        assert b"launchpad_errors_total" in first.get_metrics()
        assert first.registry is not second.registry

    def test_disabled_records_nothing(self) -> None:
        metrics = MetricsCollector(enabled=False)

        metrics.record_quote("lin", CurveType.LINEAR, sample_quote())
        metrics.inc_trade(TradeDirection.BUY, TradeStatus.FAILED)
        with metrics.time_settlement("lin"):
            pass

        assert not metrics.enabled
        assert metrics.get_metrics() == b""
