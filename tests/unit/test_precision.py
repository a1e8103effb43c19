"""
Тесты для модуля Precision — Decimal Context & Numerical Guards

Проверяет:
1. Валидацию PrecisionConfig и построение decimal.Context
2. Процессную конфигурацию и её восстановление
3. Изоляцию локального decimal-контекста
4. Конверсию int/str/float → Decimal
5. Отбраковку NaN/Inf
6. Сравнения с учётом шума округления
"""

import decimal
import logging
from decimal import Decimal

import pytest

from bigvector.core.math.precision import (
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING,
    PrecisionConfig,
    clamp_cosine,
    configure_precision,
    decimal_context,
    from_float,
    get_precision_config,
    is_close,
    is_valid_decimal,
    is_zero,
    precision_eps,
    to_decimal,
    to_float,
    validate_finite,
)


@pytest.fixture
def restore_precision():
    """Восстанавливает процессную конфигурацию после теста."""
    previous = get_precision_config()
    yield
    configure_precision(previous)


# =============================================================================
# ТЕСТЫ КОНФИГУРАЦИИ
# =============================================================================


class TestPrecisionConfig:
    """Тесты PrecisionConfig: значения по умолчанию и валидация."""

    def test_defaults(self) -> None:
        """Значения по умолчанию: 50 цифр, ROUND_HALF_UP."""
        config = PrecisionConfig()
        assert config.precision == DEFAULT_PRECISION == 50
        assert config.rounding == DEFAULT_ROUNDING == decimal.ROUND_HALF_UP

    def test_immutable(self) -> None:
        """Конфигурация frozen."""
        config = PrecisionConfig()
        with pytest.raises(AttributeError):
            config.precision = 10  # type: ignore

    def test_precision_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="precision must be >= 1"):
            PrecisionConfig(precision=0)

        with pytest.raises(ValueError, match="precision must be >= 1"):
            PrecisionConfig(precision=-5)

    def test_precision_must_be_int(self) -> None:
        with pytest.raises(TypeError):
            PrecisionConfig(precision=True)  # type: ignore

        with pytest.raises(TypeError):
            PrecisionConfig(precision=10.5)  # type: ignore

    def test_unknown_rounding_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown rounding mode"):
            PrecisionConfig(rounding="ROUND_SIDEWAYS")

    def test_to_context(self) -> None:
        """Context несёт точность, округление и traps."""
        ctx = PrecisionConfig(precision=12, rounding=decimal.ROUND_DOWN).to_context()
        assert ctx.prec == 12
        assert ctx.rounding == decimal.ROUND_DOWN
        assert ctx.traps[decimal.InvalidOperation]
        assert ctx.traps[decimal.DivisionByZero]
        assert ctx.traps[decimal.Overflow]


class TestConfigurePrecision:
    """Тесты процессной конфигурации."""

    def test_configure_returns_previous(self, restore_precision) -> None:
        original = get_precision_config()
        new_config = PrecisionConfig(precision=20)

        previous = configure_precision(new_config)

        assert previous == original
        assert get_precision_config() == new_config

    def test_configure_rejects_non_config(self) -> None:
        with pytest.raises(TypeError):
            configure_precision(30)  # type: ignore

    def test_configure_logs_change(self, restore_precision, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="bigvector.core.math.precision"):
            configure_precision(PrecisionConfig(precision=30))
        assert "prec=30" in caplog.text


class TestDecimalContext:
    """Тесты локального decimal-контекста."""

    def test_context_uses_active_config(self, restore_precision) -> None:
        configure_precision(PrecisionConfig(precision=7))
        with decimal_context() as ctx:
            assert ctx.prec == 7
            assert decimal.getcontext().prec == 7

    def test_context_explicit_config(self) -> None:
        with decimal_context(PrecisionConfig(precision=3)):
            assert Decimal(1) / Decimal(3) == Decimal("0.333")

    def test_outer_context_untouched(self) -> None:
        """Глобальный контекст вызывающего не изменяется."""
        outer_prec = decimal.getcontext().prec
        with decimal_context(PrecisionConfig(precision=5)):
            pass
        assert decimal.getcontext().prec == outer_prec

    def test_precision_eps(self) -> None:
        assert precision_eps(PrecisionConfig(precision=10)) == Decimal("1E-8")
        assert precision_eps(PrecisionConfig(precision=1)) == Decimal("0.1")


# =============================================================================
# ТЕСТЫ КОНВЕРСИИ
# =============================================================================


class TestToDecimal:
    """Тесты to_decimal / from_float / to_float."""

    def test_int(self) -> None:
        assert to_decimal(3) == Decimal(3)
        assert to_decimal(-42) == Decimal(-42)

    def test_str(self) -> None:
        assert to_decimal("1.25") == Decimal("1.25")
        assert to_decimal(" -0.5 ") == Decimal("-0.5")

    def test_decimal_passthrough(self) -> None:
        value = Decimal("3.14159")
        assert to_decimal(value) is value

    def test_float_shortest_repr(self) -> None:
        """0.1 → Decimal('0.1'), а не двоичное разложение."""
        assert to_decimal(0.1) == Decimal("0.1")
        assert from_float(2.5) == Decimal("2.5")

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError, match="bool"):
            to_decimal(True)  # type: ignore

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            to_decimal([1, 2])  # type: ignore

    def test_invalid_literal(self) -> None:
        with pytest.raises(ValueError):
            to_decimal("abc")

    def test_nan_inf_rejected(self) -> None:
        with pytest.raises(ValueError, match="NaN/Inf"):
            to_decimal("NaN")

        with pytest.raises(ValueError, match="NaN/Inf"):
            to_decimal(Decimal("-Infinity"))

        with pytest.raises(ValueError, match="NaN/Inf"):
            to_decimal(float("inf"))

        with pytest.raises(ValueError, match="NaN/Inf"):
            from_float(float("nan"))

    def test_to_float(self) -> None:
        assert to_float(Decimal("0.25")) == 0.25


# =============================================================================
# ТЕСТЫ ПРОВЕРОК И СРАВНЕНИЙ
# =============================================================================


class TestChecks:
    """Тесты is_valid_decimal / validate_finite / is_zero / clamp_cosine."""

    def test_is_valid_decimal(self) -> None:
        assert is_valid_decimal(Decimal("1.5"))
        assert not is_valid_decimal(Decimal("NaN"))
        assert not is_valid_decimal(Decimal("Infinity"))

    def test_validate_finite(self) -> None:
        validate_finite(Decimal(0), "x")
        with pytest.raises(ValueError, match="x must be finite"):
            validate_finite(Decimal("NaN"), "x")

    def test_is_zero(self) -> None:
        assert is_zero(Decimal(0))
        assert is_zero(Decimal("-0"))
        assert is_zero(Decimal("0.000"))
        assert not is_zero(Decimal("1E-100"))

    def test_clamp_cosine(self) -> None:
        assert clamp_cosine(1.0000000001) == 1.0
        assert clamp_cosine(-1.5) == -1.0
        assert clamp_cosine(0.5) == 0.5


class TestIsClose:
    """Тесты is_close."""

    def test_equal_values(self) -> None:
        assert is_close(Decimal(1), Decimal("1.000"))

    def test_far_values(self) -> None:
        assert not is_close(Decimal(1), Decimal("1.1"))

    def test_rounding_noise_tolerated(self) -> None:
        """Разница в последних цифрах точности считается шумом."""
        assert is_close(Decimal(1), Decimal("1." + "0" * 48 + "1"))

    def test_custom_tolerance(self) -> None:
        assert is_close(
            Decimal(100),
            Decimal(101),
            rel_tol=Decimal("0.02"),
            abs_tol=Decimal(0),
        )
        assert not is_close(
            Decimal(100),
            Decimal(103),
            rel_tol=Decimal("0.02"),
            abs_tol=Decimal(0),
        )

    def test_zero_uses_absolute_tolerance(self) -> None:
        assert is_close(Decimal(0), Decimal("1E-60"))
        assert not is_close(Decimal(0), Decimal("1E-10"))

