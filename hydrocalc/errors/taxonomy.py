"""
errors/taxonomy.py - Error classification for hydrostatic calculations

Every failure surfaced by the engine is a local validation failure raised
immediately. Numerical degeneracies (zero volume, zero section area,
negligible derivative) never raise; they degrade a single value instead.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error categories."""
    GEOMETRY = "geometry"
    INPUT = "input"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"


class ErrorCode(Enum):
    """Specific error codes."""

    # Geometry (1xxx)
    GEO_NO_STATIONS = 1001
    GEO_NO_WATERLINES = 1002
    GEO_NO_OFFSETS = 1003

    # Input (2xxx)
    INP_INVALID = 2001
    INP_DRAFT_BELOW_WATERLINES = 2002
    INP_ANGLE_RANGE = 2003
    INP_NON_POSITIVE = 2004
    INP_UNKNOWN_METHOD = 2005
    INP_MISSING_KG = 2006
    INP_LENGTH_MISMATCH = 2007
    INP_SPACING = 2008

    # Lookup (3xxx)
    NF_VESSEL = 3001
    NF_LOADCASE = 3002

    # Execution (4xxx)
    EXE_CANCELLED = 4001


class HydrostaticsError(Exception):
    """Base exception for hydrostatic and stability calculations."""

    category: ErrorCategory = ErrorCategory.INPUT
    default_code: ErrorCode = ErrorCode.INP_INVALID

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"{self.message} [{self.code.name}]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "name": self.code.name,
            "category": self.category.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }


class InvalidGeometryError(HydrostaticsError):
    """Raised when hull geometry lacks stations, waterlines, or offsets."""

    category = ErrorCategory.GEOMETRY
    default_code = ErrorCode.GEO_NO_OFFSETS


class InvalidInputError(HydrostaticsError, ValueError):
    """Raised for out-of-range or self-contradictory parameters."""

    category = ErrorCategory.INPUT
    default_code = ErrorCode.INP_INVALID


class NotFoundError(HydrostaticsError, LookupError):
    """Raised when a referenced vessel or loadcase does not exist."""

    category = ErrorCategory.NOT_FOUND
    default_code = ErrorCode.NF_VESSEL

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        identifier: Any = None,
    ):
        super().__init__(message, code=code)
        self.identifier = identifier


class CalculationCancelledError(HydrostaticsError):
    """Raised when a table or curve computation is cancelled between drafts."""

    category = ErrorCategory.CANCELLED
    default_code = ErrorCode.EXE_CANCELLED

    def __init__(self, message: str = "Calculation cancelled", completed: int = 0):
        super().__init__(message, recoverable=True)
        self.completed = completed
