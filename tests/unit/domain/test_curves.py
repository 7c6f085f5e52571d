"""Tests for curve configuration variants and parsing."""

from decimal import Decimal

import pytest

from launchpad.domain.curves import (
    ExponentialCurve,
    LinearCurve,
    LogarithmicCurve,
    curve_type_of,
    parse_curve_config,
)
from launchpad.domain.errors import InvalidCurveType, InvalidParameter
from launchpad.domain.types import CurveType


class TestCurveVariants:
    """Tests for construction-time parameter bounds."""

    def test_linear(self, linear_curve: LinearCurve) -> None:
        assert linear_curve.curve_type == CurveType.LINEAR
        assert linear_curve.shape_parameter() == Decimal("0.0000001")

    def test_exponential(self, exponential_curve: ExponentialCurve) -> None:
        assert exponential_curve.curve_type == CurveType.EXPONENTIAL
        assert exponential_curve.shape_parameter() == Decimal("2")

    def test_logarithmic(self, logarithmic_curve: LogarithmicCurve) -> None:
        assert logarithmic_curve.curve_type == CurveType.LOGARITHMIC
        assert logarithmic_curve.shape_parameter() == Decimal("10")

    def test_zero_base_price_raises(self) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            LinearCurve(base_price=Decimal("0"), slope=Decimal("1"))
        assert exc_info.value.field == "base_price"

    def test_zero_slope_raises(self) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            LinearCurve(base_price=Decimal("1"), slope=Decimal("0"))
        assert exc_info.value.field == "slope"

    def test_negative_exponent_raises(self) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            ExponentialCurve(base_price=Decimal("1"), exponent=Decimal("-0.5"))
        assert exc_info.value.field == "exponent"

    def test_log_base_of_one_raises(self) -> None:
        """log_base must be strictly greater than 1."""
        with pytest.raises(InvalidParameter) as exc_info:
            LogarithmicCurve(base_price=Decimal("1"), log_base=Decimal("1"))
        assert exc_info.value.field == "log_base"

    def test_infinite_parameter_raises(self) -> None:
        with pytest.raises((InvalidParameter, ValueError)):
            LinearCurve(base_price=Decimal("Infinity"), slope=Decimal("1"))

    def test_is_immutable(self, linear_curve: LinearCurve) -> None:
        with pytest.raises(AttributeError):
            linear_curve.slope = Decimal("1")  # type: ignore[misc]


class TestParseCurveConfig:
    """Tests for parse_curve_config."""

    def test_parse_linear(self, sample_curve_record: dict) -> None:
        config = parse_curve_config(sample_curve_record)
        assert isinstance(config, LinearCurve)
        assert config.base_price == Decimal("0.001")
        assert config.slope == Decimal("0.0000001")

    def test_parse_exponential(self) -> None:
        config = parse_curve_config(
            {"curve_type": "exponential", "base_price": "0.01", "exponent": "2"}
        )
        assert isinstance(config, ExponentialCurve)
        assert config.exponent == Decimal("2")

    def test_parse_logarithmic(self) -> None:
        config = parse_curve_config(
            {"curve_type": "logarithmic", "base_price": "0.01", "log_base": "10"}
        )
        assert isinstance(config, LogarithmicCurve)

    def test_other_family_parameters_ignored(self, sample_curve_record: dict) -> None:
        record = {**sample_curve_record, "exponent": "3", "log_base": "5"}
        assert isinstance(parse_curve_config(record), LinearCurve)

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(InvalidCurveType):
            parse_curve_config({"curve_type": "quadratic", "base_price": "1"})

    def test_missing_type_raises(self) -> None:
        with pytest.raises(InvalidCurveType):
            parse_curve_config({"base_price": "1", "slope": "1"})

    def test_missing_shape_parameter_raises(self) -> None:
        """A linear curve without slope is rejected."""
        with pytest.raises(InvalidParameter) as exc_info:
            parse_curve_config({"curve_type": "linear", "base_price": "0.001"})
        assert exc_info.value.field == "slope"

    def test_missing_base_price_raises(self) -> None:
        with pytest.raises(InvalidParameter) as exc_info:
            parse_curve_config({"curve_type": "exponential", "exponent": "2"})
        assert exc_info.value.field == "base_price"

    def test_out_of_bound_parameter_raises(self) -> None:
        with pytest.raises(InvalidParameter):
            parse_curve_config(
                {"curve_type": "logarithmic", "base_price": "0.01", "log_base": "0.5"}
            )

    def test_unparseable_parameter_raises(self) -> None:
        with pytest.raises(InvalidParameter):
            parse_curve_config({"curve_type": "linear", "base_price": "abc", "slope": "1"})

    def test_to_dict_matches_wire_shape(self, sample_curve_record: dict) -> None:
        config = parse_curve_config(sample_curve_record)
        record = config.to_dict()
        assert record["curve_type"] == "linear"
        assert Decimal(record["slope"]) == Decimal("0.0000001")
        assert parse_curve_config(config.to_dict()) == config


class TestCurveTypeOf:
    """Tests for curve_type_of."""

    def test_known_variant(self, exponential_curve: ExponentialCurve) -> None:
        assert curve_type_of(exponential_curve) == CurveType.EXPONENTIAL

    def test_unknown_object_raises(self) -> None:
        with pytest.raises(InvalidCurveType):
            curve_type_of({"curve_type": "linear"})
