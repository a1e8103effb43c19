"""
Core math modules для BigVector

Политика точности и Decimal-примитивы, через которые проходит вся
векторная арифметика.
"""

# Precision
from bigvector.core.math.precision import (
    # Constants
    CLOSE_GUARD_DIGITS,
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING,
    # Config
    DecimalLike,
    PrecisionConfig,
    configure_precision,
    decimal_context,
    get_precision_config,
    precision_eps,
    # Conversion
    from_float,
    to_decimal,
    to_float,
    # Checks
    clamp_cosine,
    is_close,
    is_valid_decimal,
    is_zero,
    validate_finite,
)

# Arithmetic
from bigvector.core.math.arithmetic import (
    decimal_divide,
    decimal_sqrt,
    euclidean_norm,
    hybrid_acos,
    sum_of_products,
    sum_of_squares,
    wrap_radians,
)

__all__ = [
    # Precision — Constants
    "CLOSE_GUARD_DIGITS",
    "DEFAULT_PRECISION",
    "DEFAULT_ROUNDING",
    # Precision — Config
    "DecimalLike",
    "PrecisionConfig",
    "configure_precision",
    "decimal_context",
    "get_precision_config",
    "precision_eps",
    # Precision — Conversion
    "from_float",
    "to_decimal",
    "to_float",
    # Precision — Checks
    "clamp_cosine",
    "is_close",
    "is_valid_decimal",
    "is_zero",
    "validate_finite",
    # Arithmetic
    "decimal_divide",
    "decimal_sqrt",
    "euclidean_norm",
    "hybrid_acos",
    "sum_of_products",
    "sum_of_squares",
    "wrap_radians",
]
