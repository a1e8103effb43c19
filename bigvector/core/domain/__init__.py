"""
Domain models and value objects.

Contains the BigVector value object and its error taxonomy.
"""

from bigvector.core.domain.big_vector import (
    BigVector,
    BigVectorError,
    DimensionMismatch,
    DimensionUnsupported,
    UndefinedResult,
)

__all__ = [
    # BigVector model
    "BigVector",
    # Exceptions
    "BigVectorError",
    "DimensionMismatch",
    "DimensionUnsupported",
    "UndefinedResult",
]
