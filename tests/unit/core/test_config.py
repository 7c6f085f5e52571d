"""Tests for configuration loading."""

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from launchpad.core.config import ExecutionConfig, LaunchpadConfig, QuoteConfig, load_config


class TestLaunchpadConfig:
    """Tests for LaunchpadConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = LaunchpadConfig()
        assert config.quote.quote_ttl_seconds == 30
        assert config.quote.high_impact_warning_percent == Decimal("5")
        assert config.execution.default_slippage_percent == Decimal("1")
        assert config.execution.trade_fee_bps == 0
        assert config.execution.fee_collector == "fee_collector"
        assert config.execution.migration_threshold == Decimal("80")
        assert config.metrics.enabled is True
        assert config.metrics.prefix == "launchpad"
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_from_dict(self) -> None:
        config = LaunchpadConfig.from_dict(
            {
                "quote": {"quote_ttl_seconds": 10},
                "execution": {"trade_fee_bps": 100, "migration_threshold": "85"},
            }
        )
        assert config.quote.quote_ttl_seconds == 10
        assert config.execution.trade_fee_bps == 100
        assert config.execution.migration_threshold == Decimal("85")

    def test_negative_slippage_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ExecutionConfig(default_slippage_percent=Decimal("-1"))

    def test_fee_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ExecutionConfig(trade_fee_bps=10000)

    def test_non_positive_ttl_rejected(self) -> None:
        with pytest.raises(ValidationError):
            QuoteConfig(quote_ttl_seconds=0)


class TestYaml:
    """Tests for YAML round trips."""

    def test_yaml_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "launchpad.yaml"
        original = LaunchpadConfig.from_dict({"execution": {"trade_fee_bps": 25}, "log_level": "DEBUG"})

        original.to_yaml(path)
        loaded = LaunchpadConfig.from_yaml(path)

        assert loaded == original

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert LaunchpadConfig.from_yaml(path) == LaunchpadConfig()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            LaunchpadConfig.from_yaml(tmp_path / "missing.yaml")


class TestLoadConfig:
    """Tests for load_config search order."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("execution:\n  trade_fee_bps: 50\n")
        assert load_config(path).execution.trade_fee_bps == 50

    def test_default_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "launchpad.yaml").write_text("log_level: WARNING\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().log_level == "WARNING"

    def test_falls_back_to_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config() == LaunchpadConfig()
