"""
physics/ - Integration engine, hydrostatic calculator, and curve generator
"""

from .integration import (
    IntegrationEngine,
    RULE_SIMPSON,
    RULE_COMPOSITE_SIMPSON,
    RULE_TRAPEZOIDAL,
    RULE_NONE,
)
from .sweep import CancelEvent, run_sweep
from .hydrostatics import HydrostaticResult, HydrostaticCalculator
from .curves import (
    CURVE_TYPES,
    CurveType,
    CurvePoint,
    Curve,
    BonjeanCurve,
    CurveGenerator,
    draft_range,
)

__all__ = [
    "IntegrationEngine",
    "RULE_SIMPSON",
    "RULE_COMPOSITE_SIMPSON",
    "RULE_TRAPEZOIDAL",
    "RULE_NONE",
    "CancelEvent",
    "run_sweep",
    "HydrostaticResult",
    "HydrostaticCalculator",
    "CURVE_TYPES",
    "CurveType",
    "CurvePoint",
    "Curve",
    "BonjeanCurve",
    "CurveGenerator",
    "draft_range",
]
