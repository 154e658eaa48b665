"""
stability/constants.py - Intact stability criteria and GZ method identifiers

References:
- IMO Resolution A.749(18), Code on Intact Stability, Section 3.1.2
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


CRITERIA_STANDARD = "IMO A.749(18)"

# tan(φ) diverges at 90°; the wall-sided formula is evaluated at most here
WALL_SIDED_MAX_ANGLE_DEG = 89.0


# =============================================================================
# IMO INTACT STABILITY CRITERIA
# =============================================================================

@dataclass(frozen=True)
class IMOIntactCriteria:
    """
    General intact stability criteria for all ships, A.749(18) 3.1.2.

    Fixed regulatory values; not configurable.
    """
    # Area under GZ curve (meter-radians)
    area_0_30_min_m_rad: float = 0.055
    area_0_40_min_m_rad: float = 0.090
    area_30_40_min_m_rad: float = 0.030

    # GZ curve shape
    gz_30_min_m: float = 0.20  # GZ at 30° heel
    angle_gz_max_min_deg: float = 25.0  # Angle of maximum GZ

    # Initial metacentric height
    gm_min_m: float = 0.15

    def to_dict(self) -> Dict[str, float]:
        return {
            "area_0_30_min_m_rad": self.area_0_30_min_m_rad,
            "area_0_40_min_m_rad": self.area_0_40_min_m_rad,
            "area_30_40_min_m_rad": self.area_30_40_min_m_rad,
            "gz_30_min_m": self.gz_30_min_m,
            "angle_gz_max_min_deg": self.angle_gz_max_min_deg,
            "gm_min_m": self.gm_min_m,
        }


# Singleton instance
IMO_INTACT = IMOIntactCriteria()


# =============================================================================
# GZ METHODS
# =============================================================================

class StabilityMethod(str, Enum):
    """GZ curve computation methods."""
    WALL_SIDED = "WallSided"
    FULL_IMMERSION = "FullImmersion"

    @classmethod
    def parse(cls, value: str) -> Optional["StabilityMethod"]:
        """Case-insensitive lookup by identifier; None when unknown."""
        if isinstance(value, cls):
            return value
        for method in cls:
            if method.value.lower() == str(value).lower():
                return method
        return None
