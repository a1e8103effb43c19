"""
Arithmetic — Decimal Accumulation Primitives

Примитивы, через которые проходит вся арифметика BigVector:
- Суммы квадратов и скалярных произведений накапливаются в Decimal
  (никаких промежуточных float)
- sqrt и деление выполняются в активном decimal-контексте
- hybrid_acos: единственное место, где используется float-тригонометрия

ФОРМУЛЫ:
    sum_of_squares(c)    = Σ c_i²
    sum_of_products(a,b) = Σ a_i · b_i
    euclidean_norm(c)    = 10^k · sqrt(Σ (c_i · 10^-k)²),  k = порядок max|c_i|
    hybrid_acos(r)       = acos(clamp_cosine(float(r)))
"""

import logging
import math
from decimal import Decimal
from typing import Sequence

from bigvector.core.math.precision import (
    clamp_cosine,
    decimal_context,
    from_float,
    is_zero,
    to_float,
)

logger = logging.getLogger(__name__)


# =============================================================================
# НАКОПЛЕНИЕ СУММ
# =============================================================================


def sum_of_squares(values: Sequence[Decimal]) -> Decimal:
    """
    Σ c_i² в Decimal.

    Args:
        values: Компоненты

    Returns:
        Сумма квадратов (Decimal(0) для пустой последовательности)
    """
    total = Decimal(0)
    with decimal_context():
        for value in values:
            total += value * value
    return total


def sum_of_products(left: Sequence[Decimal], right: Sequence[Decimal]) -> Decimal:
    """
    Σ a_i · b_i в Decimal.

    Длины должны совпадать: проверка размерности на стороне вызывающего.

    Raises:
        ValueError: Если длины последовательностей различаются
    """
    if len(left) != len(right):
        raise ValueError(f"Length mismatch: {len(left)} != {len(right)}")

    total = Decimal(0)
    with decimal_context():
        for a, b in zip(left, right):
            total += a * b
    return total


# =============================================================================
# SQRT / ДЕЛЕНИЕ
# =============================================================================


def decimal_sqrt(value: Decimal) -> Decimal:
    """
    Квадратный корень в активном контексте.

    sqrt(0) возвращает точный ноль.

    Raises:
        ValueError: Если value < 0
    """
    if value < 0:
        raise ValueError(f"sqrt of negative value: {value}")

    with decimal_context() as ctx:
        return value.sqrt(ctx)


def euclidean_norm(values: Sequence[Decimal]) -> Decimal:
    """
    sqrt(Σ c_i²) без выхода квадратов за Emin/Emax контекста.

    Компоненты сдвигаются на 10^-k, где k = порядок max|c_i| (scaleb точен),
    квадраты суммируются около единицы, затем корень сдвигается обратно.
    Сдвиг на степень десяти не меняет цифры округления, поэтому результат
    совпадает с прямым sqrt(Σ c_i²) везде, где тот не переполняется.

    Returns:
        Норма (точный ноль, если все компоненты нулевые)
    """
    with decimal_context() as ctx:
        largest = max((abs(v) for v in values), default=Decimal(0))
        if is_zero(largest):
            return Decimal(0)

        shift = largest.adjusted()
        scaled = [v.scaleb(-shift, ctx) for v in values]

    root = decimal_sqrt(sum_of_squares(scaled))
    with decimal_context() as ctx:
        return root.scaleb(shift, ctx)


def decimal_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    numerator / denominator в активном контексте.

    Raises:
        ZeroDivisionError: Если denominator точно равен нулю
    """
    if is_zero(denominator):
        raise ZeroDivisionError("Decimal division by exact zero")

    with decimal_context():
        return numerator / denominator


# =============================================================================
# HYBRID PRECISION
# =============================================================================


def hybrid_acos(ratio: Decimal) -> float:
    """
    acos(ratio) через float-тригонометрию.

    ВНИМАНИЕ: результат НЕ arbitrary-precision. Ratio считается в Decimal,
    конвертируется в float и ограничивается [-1, 1]: округление Decimal
    может дать 1.000...01 для коллинеарных векторов, что вне домена acos.

    Args:
        ratio: Косинус угла (Decimal)

    Returns:
        Угол в радианах, [0, pi] (float)
    """
    cosine = to_float(ratio)
    clamped = clamp_cosine(cosine)
    if clamped != cosine:
        logger.debug("Cosine %r clamped to %r before acos", cosine, clamped)
    return math.acos(clamped)


def wrap_radians(value: float) -> Decimal:
    """Обёртка float-радиан обратно в Decimal (shortest repr)."""
    return from_float(value)
