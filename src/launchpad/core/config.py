"""Configuration models for the launchpad engine.

Loads and validates configuration from YAML files using pydantic.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class QuoteConfig(BaseModel):
    """Quote configuration."""

    quote_ttl_seconds: float = 30.0  # How long a quote can be bounded
    high_impact_warning_percent: Decimal = Decimal("5")

    @field_validator("quote_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("quote_ttl_seconds must be positive")
        return v


class ExecutionConfig(BaseModel):
    """Trade execution configuration."""

    default_slippage_percent: Decimal = Decimal("1")
    trade_fee_bps: int = 0
    fee_collector: str = "fee_collector"
    migration_threshold: Decimal = Decimal("80")  # Reserve currency units

    @field_validator("default_slippage_percent")
    @classmethod
    def validate_slippage(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("default_slippage_percent cannot be negative")
        return v

    @field_validator("trade_fee_bps")
    @classmethod
    def validate_fee(cls, v: int) -> int:
        if not 0 <= v < 10000:
            raise ValueError("trade_fee_bps must be in [0, 10000)")
        return v


class MetricsConfig(BaseModel):
    """Metrics configuration."""

    enabled: bool = True
    prefix: str = "launchpad"


class LaunchpadConfig(BaseModel):
    """Root configuration for the launchpad engine."""

    quote: QuoteConfig = Field(default_factory=QuoteConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> LaunchpadConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Validated LaunchpadConfig

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValidationError: If the config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LaunchpadConfig:
        """Load configuration from a dictionary."""
        return cls.model_validate(data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path to write the configuration
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)


def load_config(path: str | Path | None = None) -> LaunchpadConfig:
    """Load launchpad configuration.

    Looks for config in the following order:
    1. Provided path argument
    2. ./config/launchpad.yaml
    3. ./config/config.yaml
    4. ./launchpad.yaml
    5. Default configuration

    Args:
        path: Optional explicit path to config file

    Returns:
        Validated LaunchpadConfig
    """
    if path:
        return LaunchpadConfig.from_yaml(path)

    default_paths = [
        Path("./config/launchpad.yaml"),
        Path("./config/config.yaml"),
        Path("./launchpad.yaml"),
    ]

    for default_path in default_paths:
        if default_path.exists():
            return LaunchpadConfig.from_yaml(default_path)

    return LaunchpadConfig()
