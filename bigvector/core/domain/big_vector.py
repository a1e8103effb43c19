"""
BigVector — Вектор с arbitrary-precision компонентами

Immutable Pydantic модель: упорядоченная последовательность Decimal фиксированной
размерности. Все операции — чистые функции, возвращающие новый BigVector
(или Decimal); исходный вектор никогда не изменяется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Размерность >= 1 (пустой вектор отвергается при создании)
2. Компоненты конечны и округлены до активной точности при создании
3. Бинарные операции требуют равной размерности → DimensionMismatch
4. cross только для n = 3, polar_coords только для n = 2 → DimensionUnsupported
5. Вся арифметика в Decimal, кроме acos в angle/polar_coords (float)

ФОРМУЛЫ:
    |v|        = sqrt(Σ v_i²)
    dir(v)     = v_i / |v|          (None если |v| == 0)
    v · w      = Σ v_i · w_i
    d(v, w)    = |v - w|
    angle(v,w) = acos(v · w / (|v| · |w|))
"""

import decimal
import logging
import math
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from bigvector.core.math.arithmetic import (
    decimal_divide,
    euclidean_norm,
    hybrid_acos,
    sum_of_products,
    wrap_radians,
)
from bigvector.core.math.precision import (
    DecimalLike,
    decimal_context,
    is_zero,
    to_decimal,
    to_float,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BigVectorError(Exception):
    """Базовое исключение векторной арифметики."""


class DimensionMismatch(BigVectorError, ValueError):
    """
    Операнды бинарной операции имеют разную размерность.

    Поднимается до начала вычислений: частичный результат не формируется.
    """

    def __init__(self, operation: str, expected: int, actual: int):
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{operation}: dimension mismatch, expected {expected}, got {actual}"
        )


class DimensionUnsupported(BigVectorError, ValueError):
    """Операция с фиксированной размерностью вызвана на векторе другой размерности."""

    def __init__(self, operation: str, required: int, actual: int):
        self.operation = operation
        self.required = required
        self.actual = actual
        super().__init__(
            f"{operation}: requires dimension {required}, got {actual}"
        )


class UndefinedResult(BigVectorError, ArithmeticError):
    """
    Математически неопределённый результат.

    Пример: угол с вектором нулевой длины.
    """


# =============================================================================
# BIGVECTOR MODEL
# =============================================================================


class BigVector(BaseModel):
    """
    Вектор с arbitrary-precision компонентами.

    Immutable модель (frozen=True): компоненты хранятся в tuple,
    все "изменения" создают новый экземпляр.

    Создание:
        BigVector(components=[1, "2.5", Decimal("3")])
        BigVector.of(1, 2, 3)
    """

    components: tuple[Decimal, ...] = Field(
        ..., min_length=1, description="Компоненты вектора (индексы 0..n-1)"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("components", mode="before")
    @classmethod
    def coerce_components(cls, v: Any) -> tuple[Decimal, ...]:
        """
        Конверсия входа в tuple конечных Decimal.

        Каждая компонента округляется до активной точности (unary plus
        в decimal-контексте), поэтому отрицание компоненты всегда точное.
        """
        if isinstance(v, (str, bytes)) or not isinstance(v, (list, tuple)):
            raise ValueError(
                f"components must be a list or tuple, got {type(v).__name__}"
            )

        result = []
        with decimal_context():
            for index, raw in enumerate(v):
                try:
                    value = to_decimal(raw)
                except TypeError as exc:
                    raise ValueError(f"component {index}: {exc}") from exc
                try:
                    result.append(+value)
                except decimal.Overflow as exc:
                    raise ValueError(
                        f"component {index}: {raw!r} exceeds the decimal exponent range"
                    ) from exc
        return tuple(result)

    # -------------------------------------------------------------------------
    # Construction & accessors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, *values: DecimalLike) -> "BigVector":
        """BigVector из позиционных значений: BigVector.of(3, 4)."""
        return cls(components=list(values))

    @classmethod
    def zero(cls, dimension: int) -> "BigVector":
        """Нулевой вектор заданной размерности (dimension >= 1)."""
        if dimension < 1:
            raise ValueError(f"dimension must be >= 1, got {dimension}")
        return cls(components=[Decimal(0)] * dimension)

    @property
    def dimension(self) -> int:
        """Количество компонент."""
        return len(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __getitem__(self, index: int) -> Decimal:
        return self.components[index]

    def get_components(self) -> list[Decimal]:
        """Копия компонент (изменение списка не влияет на вектор)."""
        return list(self.components)

    def to_floats(self) -> list[float]:
        """Компоненты как float (с потерей точности)."""
        return [to_float(c) for c in self.components]

    def is_zero(self) -> bool:
        """True если все компоненты точно равны нулю."""
        return all(is_zero(c) for c in self.components)

    # -------------------------------------------------------------------------
    # Preconditions
    # -------------------------------------------------------------------------

    def _require_same_dimension(self, other: "BigVector", operation: str) -> None:
        if not isinstance(other, BigVector):
            raise TypeError(
                f"{operation}: expected BigVector, got {type(other).__name__}"
            )
        if other.dimension != self.dimension:
            raise DimensionMismatch(operation, self.dimension, other.dimension)

    def _require_dimension(self, required: int, operation: str) -> None:
        if self.dimension != required:
            raise DimensionUnsupported(operation, required, self.dimension)

    def _rounded(self) -> tuple[Decimal, ...]:
        """
        Компоненты, округлённые до активной точности.

        Совпадают с components, пока точность не понижали после создания
        вектора; иначе операнды приводятся к новой точности до арифметики.
        """
        with decimal_context():
            return tuple(+c for c in self.components)

    # -------------------------------------------------------------------------
    # Unary operations
    # -------------------------------------------------------------------------

    def magnitude(self) -> Decimal:
        """
        Евклидова норма sqrt(Σ c_i²).

        Сумма накапливается в Decimal после сдвига на порядок наибольшей
        компоненты, поэтому квадраты не выходят за Emin/Emax контекста.
        Для нулевого вектора точный ноль.
        """
        return euclidean_norm(self._rounded())

    def direction(self) -> Optional["BigVector"]:
        """
        Единичный вектор того же направления.

        Magnitude вычисляется один раз; каждая компонента делится на это
        значение (Decimal-деление, без умножения на обратную величину).

        Returns:
            Новый BigVector, или None для вектора нулевой длины
        """
        magnitude = self.magnitude()
        if is_zero(magnitude):
            logger.debug("direction() of zero vector (dimension=%d)", self.dimension)
            return None

        return BigVector(
            components=[decimal_divide(c, magnitude) for c in self._rounded()]
        )

    def scale(self, factor: DecimalLike) -> "BigVector":
        """
        Умножение на скаляр.

        Args:
            factor: Decimal, int, str или float

        Returns:
            Новый BigVector той же размерности
        """
        k = to_decimal(factor)
        with decimal_context():
            return BigVector(components=[c * k for c in self._rounded()])

    # -------------------------------------------------------------------------
    # Binary operations
    # -------------------------------------------------------------------------

    def plus(self, other: "BigVector") -> "BigVector":
        """
        Покомпонентная сумма.

        Raises:
            DimensionMismatch: Если размерности различаются
        """
        self._require_same_dimension(other, "plus")
        with decimal_context():
            return BigVector(
                components=[a + b for a, b in zip(self._rounded(), other._rounded())]
            )

    def minus(self, other: "BigVector") -> "BigVector":
        """
        Покомпонентная разность.

        Raises:
            DimensionMismatch: Если размерности различаются
        """
        self._require_same_dimension(other, "minus")
        with decimal_context():
            return BigVector(
                components=[a - b for a, b in zip(self._rounded(), other._rounded())]
            )

    def dot(self, other: "BigVector") -> Decimal:
        """
        Скалярное произведение Σ a_i · b_i.

        Raises:
            DimensionMismatch: Если размерности различаются
        """
        self._require_same_dimension(other, "dot")
        return sum_of_products(self._rounded(), other._rounded())

    def distance(self, other: "BigVector") -> Decimal:
        """
        Евклидово расстояние: |self - other|.

        Raises:
            DimensionMismatch: Если размерности различаются
        """
        self._require_same_dimension(other, "distance")
        return self.minus(other).magnitude()

    def cross(self, other: "BigVector") -> "BigVector":
        """
        Векторное произведение (только n = 3).

            x = a1*b2 - a2*b1
            y = a2*b0 - a0*b2
            z = a0*b1 - a1*b0

        Raises:
            DimensionUnsupported: Если хотя бы один операнд не 3-мерный
        """
        if not isinstance(other, BigVector):
            raise TypeError(f"cross: expected BigVector, got {type(other).__name__}")
        self._require_dimension(3, "cross")
        other._require_dimension(3, "cross")

        a0, a1, a2 = self._rounded()
        b0, b1, b2 = other._rounded()
        with decimal_context():
            x = a1 * b2 - a2 * b1
            y = a2 * b0 - a0 * b2
            z = a0 * b1 - a1 * b0
        return BigVector(components=[x, y, z])

    def _angle_radians(self, other: "BigVector", operation: str) -> float:
        self._require_same_dimension(other, operation)

        magnitude_self = self.magnitude()
        magnitude_other = other.magnitude()
        if is_zero(magnitude_self) or is_zero(magnitude_other):
            raise UndefinedResult(f"{operation}: angle with a zero-magnitude vector")

        with decimal_context():
            denominator = magnitude_self * magnitude_other
        ratio = decimal_divide(self.dot(other), denominator)
        return hybrid_acos(ratio)

    def angle(self, other: "BigVector") -> Decimal:
        """
        Угол между векторами в радианах, [0, pi].

        ВНИМАНИЕ: не полностью arbitrary-precision. Косинус считается в
        Decimal, но acos через float (math.acos); результат обёрнут в
        Decimal для единообразия интерфейса.

        Raises:
            DimensionMismatch: Если размерности различаются
            UndefinedResult: Если один из векторов нулевой длины
        """
        return wrap_radians(self._angle_radians(other, "angle"))

    def polar_coords(self) -> tuple[Decimal, Decimal]:
        """
        Полярные координаты 2-мерного вектора: (magnitude, angle).

        Угол отсчитывается от положительной полуоси x против часовой
        стрелки, диапазон [0, 2*pi). acos даёт только [0, pi], поэтому
        при отрицательной компоненте y угол заменяется на 2*pi - theta.
        Для нулевого вектора угол равен точному нулю.

        Raises:
            DimensionUnsupported: Если вектор не 2-мерный
        """
        self._require_dimension(2, "polar_coords")

        magnitude = self.magnitude()
        if is_zero(magnitude):
            return magnitude, Decimal(0)

        theta = self._angle_radians(_UNIT_X, "polar_coords")
        # theta == 0: y ниже разрешения float, точка на полуоси x
        if self.components[1] < 0 and theta > 0.0:
            theta = 2.0 * math.pi - theta

        return magnitude, wrap_radians(theta)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "BigVector":
        if not isinstance(other, BigVector):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: object) -> "BigVector":
        if not isinstance(other, BigVector):
            return NotImplemented
        return self.minus(other)

    def __neg__(self) -> "BigVector":
        return self.scale(-1)

    def __mul__(self, factor: object) -> "BigVector":
        if isinstance(factor, bool) or not isinstance(factor, (Decimal, int, float)):
            return NotImplemented
        return self.scale(factor)

    __rmul__ = __mul__


_UNIT_X: BigVector = BigVector.of(1, 0)
