"""Curve configuration models.

A curve configuration is a tagged union keyed by CurveType. Each variant
carries the base price plus only the shape parameter its family needs, so a
linear curve cannot be missing its slope. Configurations are fixed at token
creation and never mutated; a new curve requires a new token.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, Union

from pydantic import ValidationError
from pydantic.dataclasses import dataclass

from launchpad.domain.errors import InvalidCurveType, InvalidParameter
from launchpad.domain.types import CurveType


def _require_positive(value: Decimal, field: str) -> None:
    if not value.is_finite() or value <= 0:
        raise InvalidParameter(f"{field} must be greater than 0", field=field)


@dataclass(frozen=True)
class LinearCurve:
    """price = base_price + slope * ratio"""

    curve_type: ClassVar[CurveType] = CurveType.LINEAR

    base_price: Decimal
    slope: Decimal

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidParameter if a parameter violates its bound."""
        _require_positive(self.base_price, "base_price")
        _require_positive(self.slope, "slope")

    def shape_parameter(self) -> Decimal:
        """Return the family-specific parameter."""
        return self.slope

    def to_dict(self) -> dict[str, str]:
        """Serialize to the wire shape accepted by parse_curve_config."""
        return {
            "curve_type": self.curve_type.value,
            "base_price": str(self.base_price),
            "slope": str(self.slope),
        }


@dataclass(frozen=True)
class ExponentialCurve:
    """price = base_price * exp(exponent * ratio)"""

    curve_type: ClassVar[CurveType] = CurveType.EXPONENTIAL

    base_price: Decimal
    exponent: Decimal

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidParameter if a parameter violates its bound."""
        _require_positive(self.base_price, "base_price")
        _require_positive(self.exponent, "exponent")

    def shape_parameter(self) -> Decimal:
        """Return the family-specific parameter."""
        return self.exponent

    def to_dict(self) -> dict[str, str]:
        """Serialize to the wire shape accepted by parse_curve_config."""
        return {
            "curve_type": self.curve_type.value,
            "base_price": str(self.base_price),
            "exponent": str(self.exponent),
        }


@dataclass(frozen=True)
class LogarithmicCurve:
    """price = base_price * ln(1 + log_base * ratio)"""

    curve_type: ClassVar[CurveType] = CurveType.LOGARITHMIC

    base_price: Decimal
    log_base: Decimal

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise InvalidParameter if a parameter violates its bound."""
        _require_positive(self.base_price, "base_price")
        if not self.log_base.is_finite() or self.log_base <= 1:
            raise InvalidParameter("log_base must be greater than 1", field="log_base")

    def shape_parameter(self) -> Decimal:
        """Return the family-specific parameter."""
        return self.log_base

    def to_dict(self) -> dict[str, str]:
        """Serialize to the wire shape accepted by parse_curve_config."""
        return {
            "curve_type": self.curve_type.value,
            "base_price": str(self.base_price),
            "log_base": str(self.log_base),
        }


CurveConfig = Union[LinearCurve, ExponentialCurve, LogarithmicCurve]

# Curve family -> (variant class, name of its shape parameter)
_CURVE_VARIANTS: dict[CurveType, tuple[type, str]] = {
    CurveType.LINEAR: (LinearCurve, "slope"),
    CurveType.EXPONENTIAL: (ExponentialCurve, "exponent"),
    CurveType.LOGARITHMIC: (LogarithmicCurve, "log_base"),
}


def parse_curve_config(data: dict[str, Any]) -> CurveConfig:
    """Build a curve configuration from its loosely-typed dict form.

    Expected format:
    {
        "curve_type": "linear" | "exponential" | "logarithmic",
        "base_price": "0.001",
        "slope" | "exponent" | "log_base": "...",
    }

    Parameters belonging to other families are ignored.

    Args:
        data: Dictionary, e.g. a stored token record or parsed YAML

    Returns:
        The matching curve variant

    Raises:
        InvalidCurveType: If curve_type is missing or unknown
        InvalidParameter: If base_price or the shape parameter is missing or invalid
    """
    raw_type = data.get("curve_type")
    try:
        curve_type = CurveType(raw_type)
    except ValueError as err:
        raise InvalidCurveType(raw_type) from err

    cls, param = _CURVE_VARIANTS[curve_type]
    for field in ("base_price", param):
        if data.get(field) is None:
            raise InvalidParameter(
                f"{curve_type.value} curve requires {field} parameter",
                field=field,
            )

    try:
        return cls(base_price=data["base_price"], **{param: data[param]})
    except ValidationError as err:
        raise InvalidParameter(
            f"Invalid {curve_type.value} curve parameters: {err.error_count()} error(s)",
            context={"errors": err.errors(include_url=False)},
        ) from err


def curve_type_of(config: object) -> CurveType:
    """Return the family of a curve configuration.

    Raises:
        InvalidCurveType: If config is not one of the curve variants
    """
    if isinstance(config, (LinearCurve, ExponentialCurve, LogarithmicCurve)):
        return config.curve_type
    raise InvalidCurveType(type(config).__name__)
