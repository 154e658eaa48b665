"""
hydrocalc Core Module

Physical constants and numerical tolerances shared by every component.
"""

from hydrocalc.core.constants import (
    SEAWATER_DENSITY_KG_M3,
    KG_PER_TONNE,
    CM_PER_M,
    RAD_TO_DEG,
    SPACING_TOLERANCE_M,
    WATERLINE_MATCH_TOLERANCE_M,
    WATERLINE_MATCH_RELATIVE,
    CRITERIA_RELATIVE_TOLERANCE,
)

__all__ = [
    "SEAWATER_DENSITY_KG_M3",
    "KG_PER_TONNE",
    "CM_PER_M",
    "RAD_TO_DEG",
    "SPACING_TOLERANCE_M",
    "WATERLINE_MATCH_TOLERANCE_M",
    "WATERLINE_MATCH_RELATIVE",
    "CRITERIA_RELATIVE_TOLERANCE",
]
