"""
stability/ - GZ curves, heeled sections, and intact stability criteria
"""

from .constants import (
    CRITERIA_STANDARD,
    WALL_SIDED_MAX_ANGLE_DEG,
    IMOIntactCriteria,
    IMO_INTACT,
    StabilityMethod,
)
from .results import (
    StabilityPoint,
    StabilityCurve,
    CriterionResult,
    CriteriaResult,
    StabilityMethodInfo,
)
from .heeled_sections import (
    SectionProperties,
    HeeledBuoyancy,
    HeeledHull,
    half_section_polygon,
    rotate,
    clip_below,
    polygon_properties,
    upright_volume,
)
from .gz_curve import StabilityCalculator
from .criteria import StabilityCriteriaChecker

__all__ = [
    "CRITERIA_STANDARD",
    "WALL_SIDED_MAX_ANGLE_DEG",
    "IMOIntactCriteria",
    "IMO_INTACT",
    "StabilityMethod",
    "StabilityPoint",
    "StabilityCurve",
    "CriterionResult",
    "CriteriaResult",
    "StabilityMethodInfo",
    "SectionProperties",
    "HeeledBuoyancy",
    "HeeledHull",
    "half_section_polygon",
    "rotate",
    "clip_below",
    "polygon_properties",
    "upright_volume",
    "StabilityCalculator",
    "StabilityCriteriaChecker",
]
