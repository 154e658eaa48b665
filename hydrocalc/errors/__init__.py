"""
errors/ - Error taxonomy

InvalidGeometry, InvalidInput, NotFound, and cancellation signals raised by
the calculation components.
"""

from .taxonomy import (
    ErrorCategory,
    ErrorCode,
    HydrostaticsError,
    InvalidGeometryError,
    InvalidInputError,
    NotFoundError,
    CalculationCancelledError,
)

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "HydrostaticsError",
    "InvalidGeometryError",
    "InvalidInputError",
    "NotFoundError",
    "CalculationCancelledError",
]
