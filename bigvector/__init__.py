"""
BigVector — arbitrary-precision vector arithmetic.

Vectors whose components are decimal.Decimal values rounded under a single
process-wide precision policy.
"""

from bigvector.core.domain import (
    BigVector,
    BigVectorError,
    DimensionMismatch,
    DimensionUnsupported,
    UndefinedResult,
)
from bigvector.core.math import (
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING,
    PrecisionConfig,
    configure_precision,
    decimal_context,
    get_precision_config,
)

__version__ = "0.1.0"

__all__ = [
    "BigVector",
    "BigVectorError",
    "DimensionMismatch",
    "DimensionUnsupported",
    "UndefinedResult",
    "DEFAULT_PRECISION",
    "DEFAULT_ROUNDING",
    "PrecisionConfig",
    "configure_precision",
    "decimal_context",
    "get_precision_config",
]
