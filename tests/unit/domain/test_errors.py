"""Tests for domain error types."""

from decimal import Decimal

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


class TestLaunchpadError:
    """Tests for base LaunchpadError."""

    def test_is_exception(self) -> None:
        """LaunchpadError inherits from Exception."""
        assert isinstance(LaunchpadError("boom"), Exception)

    def test_message(self) -> None:
        error = LaunchpadError("Test message")
        assert str(error) == "Test message"

    def test_with_context(self) -> None:
        """LaunchpadError can include a context dictionary."""
        error = LaunchpadError("Failed", context={"curve_id": "abc"})
        assert error.context == {"curve_id": "abc"}

    def test_default_context(self) -> None:
        assert LaunchpadError("Test").context == {}

    def test_base_error_has_no_kind(self) -> None:
        """The base class is not retryable and has no kind."""
        error = LaunchpadError("Test")
        assert error.kind is None
        assert error.retryable is False


class TestErrorKinds:
    """Tests for error kinds and retryability."""

    def test_kinds(self) -> None:
        assert InvalidCurveConfig("x").kind == ErrorKind.INVALID_CURVE_CONFIG
        assert InvalidAmount("x").kind == ErrorKind.INVALID_AMOUNT
        assert MathOverflow("x").kind == ErrorKind.MATH_OVERFLOW
        assert SlippageExceeded("x").kind == ErrorKind.SLIPPAGE_EXCEEDED
        assert InsufficientBalance("x").kind == ErrorKind.INSUFFICIENT_BALANCE
        assert InsufficientLiquidity("x").kind == ErrorKind.INSUFFICIENT_LIQUIDITY
        assert SettlementFailure("x").kind == ErrorKind.SETTLEMENT_FAILURE
        assert CurveNotFound("c").kind == ErrorKind.NOT_FOUND
        assert CurveMigrated("c").kind == ErrorKind.CURVE_MIGRATED

    def test_only_slippage_and_settlement_are_retryable(self) -> None:
        """Callers may re-quote after slippage or settlement failures only."""
        assert SlippageExceeded("x").retryable
        assert SettlementFailure("x").retryable
        assert not InvalidAmount("x").retryable
        assert not MathOverflow("x").retryable
        assert not InsufficientBalance("x").retryable
        assert not InsufficientLiquidity("x").retryable
        assert not InvalidCurveConfig("x").retryable
        assert not CurveMigrated("c").retryable

    def test_kind_values_match_error_names(self) -> None:
        assert ErrorKind.SLIPPAGE_EXCEEDED.value == "SlippageExceeded"
        assert ErrorKind.NOT_FOUND.value == "NotFound"


class TestInvalidCurveConfig:
    """Tests for curve configuration errors."""

    def test_invalid_curve_type(self) -> None:
        error = InvalidCurveType("quadratic")
        assert isinstance(error, InvalidCurveConfig)
        assert error.field == "curve_type"
        assert error.curve_type == "quadratic"
        assert "quadratic" in str(error)

    def test_invalid_parameter(self) -> None:
        error = InvalidParameter("slope must be greater than 0", field="slope")
        assert isinstance(error, InvalidCurveConfig)
        assert error.field == "slope"

    def test_field_defaults_to_none(self) -> None:
        assert InvalidCurveConfig("bad").field is None


class TestBalanceErrors:
    """Tests for balance and liquidity errors."""

    def test_insufficient_balance_amounts(self) -> None:
        error = InsufficientBalance(
            "Not enough",
            required=Decimal("10"),
            available=Decimal("5"),
        )
        assert error.required == Decimal("10")
        assert error.available == Decimal("5")

    def test_insufficient_liquidity_amounts(self) -> None:
        error = InsufficientLiquidity("Empty", required=Decimal("3"), available=Decimal("1"))
        assert error.required == Decimal("3")
        assert error.available == Decimal("1")


class TestSlippageExceeded:
    """Tests for SlippageExceeded."""

    def test_bound_and_actual(self) -> None:
        error = SlippageExceeded("moved", bound=Decimal("1.01"), actual=Decimal("1.05"))
        assert error.bound == Decimal("1.01")
        assert error.actual == Decimal("1.05")


class TestSettlementFailure:
    """Tests for SettlementFailure."""

    def test_instruction_id(self) -> None:
        error = SettlementFailure("timeout", instruction_id="ix_1")
        assert error.instruction_id == "ix_1"

    def test_instruction_id_default(self) -> None:
        assert SettlementFailure("timeout").instruction_id is None


class TestCurveErrors:
    """Tests for curve lookup errors."""

    def test_curve_not_found(self) -> None:
        error = CurveNotFound("abc")
        assert error.curve_id == "abc"
        assert "abc" in str(error)

    def test_curve_migrated(self) -> None:
        error = CurveMigrated("abc")
        assert error.curve_id == "abc"
