"""
Precision — Decimal Context & Numerical Guards

Модуль фиксирует единую политику округления для всей арифметики BigVector:
- Точность (значащие цифры) и режим округления задаются один раз на процесс
- Все операции выполняются внутри decimal.localcontext (глобальный контекст
  вызывающего кода не изменяется)
- Конверсия int/str/float → Decimal без потери (float через shortest repr)
- NaN/Inf никогда не попадают в компоненты вектора

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Одинаковые входы + одинаковый PrecisionConfig → одинаковый результат
2. NaN/Inf отвергаются на входе (ValueError)
3. InvalidOperation / DivisionByZero / Overflow поднимаются как исключения
"""

import decimal
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Iterator, Union

logger = logging.getLogger(__name__)

DecimalLike = Union[Decimal, int, str, float]


# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Значащие цифры для всех промежуточных и итоговых результатов
DEFAULT_PRECISION: Final[int] = 50

# Режим округления исходной big-number библиотеки (half-up)
DEFAULT_ROUNDING: Final[str] = decimal.ROUND_HALF_UP

# Запас цифр, отводимый под шум округления в is_close
CLOSE_GUARD_DIGITS: Final[int] = 2

_ROUNDING_MODES: Final[frozenset] = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class PrecisionConfig:
    """Конфигурация decimal-арифметики.

    Immutable (frozen=True): смена политики только через
    configure_precision() с новым экземпляром.
    """

    precision: int = DEFAULT_PRECISION
    rounding: str = DEFAULT_ROUNDING

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(f"precision must be int, got {type(self.precision).__name__}")
        if self.precision < 1:
            raise ValueError(f"precision must be >= 1, got {self.precision}")
        if self.rounding not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding!r}")

    def to_context(self) -> decimal.Context:
        """
        Построение decimal.Context для этой конфигурации.

        Traps: InvalidOperation, DivisionByZero, Overflow: ошибки арифметики
        поднимаются как исключения, а не превращаются в NaN/Infinity.
        """
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


_active_config: PrecisionConfig = PrecisionConfig()


def get_precision_config() -> PrecisionConfig:
    """Текущая (процессная) конфигурация точности."""
    return _active_config


def configure_precision(config: PrecisionConfig) -> PrecisionConfig:
    """
    Установка процессной конфигурации точности.

    Вызывается один раз при старте встраивающего приложения.

    Args:
        config: Новая конфигурация

    Returns:
        Предыдущая конфигурация (для восстановления в тестах)
    """
    global _active_config

    if not isinstance(config, PrecisionConfig):
        raise TypeError(f"config must be PrecisionConfig, got {type(config).__name__}")

    previous = _active_config
    _active_config = config
    logger.info(
        "Decimal precision configured: prec=%d rounding=%s",
        config.precision,
        config.rounding,
    )
    return previous


@contextmanager
def decimal_context(config: PrecisionConfig | None = None) -> Iterator[decimal.Context]:
    """
    Локальный decimal-контекст для блока вычислений.

    Args:
        config: Конфигурация (default: активная процессная)

    Yields:
        decimal.Context, действующий внутри блока
    """
    cfg = config if config is not None else _active_config
    with decimal.localcontext(cfg.to_context()) as ctx:
        yield ctx


def precision_eps(config: PrecisionConfig | None = None) -> Decimal:
    """
    Относительная толерантность для сравнений: 10^-(precision - guard).

    Examples:
        >>> precision_eps(PrecisionConfig(precision=10))
        Decimal('1E-8')
    """
    cfg = config if config is not None else _active_config
    digits = max(cfg.precision - CLOSE_GUARD_DIGITS, 1)
    return Decimal(1).scaleb(-digits)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def from_float(value: float) -> Decimal:
    """
    float → Decimal через shortest repr.

    Decimal(0.1) дал бы двоичное разложение 0.1000000000000000055...,
    поэтому используется repr: from_float(0.1) == Decimal('0.1').

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not math.isfinite(value):
        raise ValueError(f"value must be finite (not NaN/Inf), got {value}")
    return Decimal(repr(value))


def to_decimal(value: DecimalLike) -> Decimal:
    """
    Конверсия входного значения в конечный Decimal.

    Args:
        value: Decimal, int, str (десятичный литерал) или float

    Returns:
        Decimal (без округления, точное значение входа)

    Raises:
        TypeError: Неподдерживаемый тип (включая bool)
        ValueError: Невалидный литерал или NaN/Inf

    Examples:
        >>> to_decimal(3)
        Decimal('3')
        >>> to_decimal("1.25")
        Decimal('1.25')
        >>> to_decimal(0.5)
        Decimal('0.5')
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a valid decimal value")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        return from_float(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Invalid decimal literal: {value!r}") from None
    else:
        raise TypeError(f"Unsupported decimal value type: {type(value).__name__}")

    validate_finite(result, "value")
    return result


def to_float(value: Decimal) -> float:
    """Decimal → float (с потерей точности за пределами double)."""
    return float(value)


# =============================================================================
# ПРОВЕРКИ И СРАВНЕНИЯ
# =============================================================================


def is_valid_decimal(value: Decimal) -> bool:
    """True если value конечный (не NaN, не Infinity)."""
    return value.is_finite()


def validate_finite(value: Decimal, name: str) -> None:
    """
    Валидация конечности значения.

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not is_valid_decimal(value):
        raise ValueError(f"{name} must be finite (not NaN/Inf), got {value}")


def is_zero(value: Decimal) -> bool:
    """Точное сравнение с нулём (-0 тоже ноль)."""
    return value == 0


def is_close(
    a: Decimal,
    b: Decimal,
    rel_tol: Decimal | None = None,
    abs_tol: Decimal | None = None,
) -> bool:
    """
    Сравнение Decimal с учётом шума округления.

    Алгоритм (как math.isclose):
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: precision_eps())
        abs_tol: Абсолютная толерантность (default: precision_eps())

    Examples:
        >>> is_close(Decimal(1), Decimal("1.0"))
        True
        >>> is_close(Decimal(1), Decimal("1.1"))
        False
    """
    eps = precision_eps()
    rel = rel_tol if rel_tol is not None else eps
    tol = abs_tol if abs_tol is not None else eps

    with decimal_context():
        diff = abs(a - b)
        bound = max(rel * max(abs(a), abs(b)), tol)
        return diff <= bound


def clamp_cosine(value: float) -> float:
    """
    Ограничение косинуса отрезком [-1, 1] перед math.acos.

    Examples:
        >>> clamp_cosine(1.0000000001)
        1.0
        >>> clamp_cosine(-0.5)
        -0.5
    """
    return max(-1.0, min(1.0, value))
