"""
hydrocalc - Hydrostatics and intact stability for offset-table hulls

Upright hydrostatics, hydrostatic curves, Bonjean curves, GZ righting-arm
curves (wall-sided and full-immersion), IMO A.749(18) intact criteria,
and an equilibrium draft solver.
"""

__version__ = "1.0.0"

from hydrocalc.errors import (
    HydrostaticsError,
    InvalidGeometryError,
    InvalidInputError,
    NotFoundError,
    CalculationCancelledError,
)
from hydrocalc.geometry import (
    Station,
    Waterline,
    Offset,
    HullGeometry,
    LoadingCondition,
    StabilityRequest,
    InMemoryVesselRepository,
    generate_rectangular_barge,
    generate_wigley_hull,
)
from hydrocalc.physics import (
    IntegrationEngine,
    HydrostaticCalculator,
    HydrostaticResult,
    CurveGenerator,
    Curve,
    BonjeanCurve,
)
from hydrocalc.stability import (
    StabilityCalculator,
    StabilityCriteriaChecker,
    StabilityCurve,
    CriteriaResult,
    StabilityMethod,
)
from hydrocalc.trim import TrimSolver, TrimSolution
from hydrocalc.services import HydrostaticsService

__all__ = [
    "__version__",
    "HydrostaticsError",
    "InvalidGeometryError",
    "InvalidInputError",
    "NotFoundError",
    "CalculationCancelledError",
    "Station",
    "Waterline",
    "Offset",
    "HullGeometry",
    "LoadingCondition",
    "StabilityRequest",
    "InMemoryVesselRepository",
    "generate_rectangular_barge",
    "generate_wigley_hull",
    "IntegrationEngine",
    "HydrostaticCalculator",
    "HydrostaticResult",
    "CurveGenerator",
    "Curve",
    "BonjeanCurve",
    "StabilityCalculator",
    "StabilityCriteriaChecker",
    "StabilityCurve",
    "CriteriaResult",
    "StabilityMethod",
    "TrimSolver",
    "TrimSolution",
    "HydrostaticsService",
]
