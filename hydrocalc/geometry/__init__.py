"""
geometry/ - Hull geometry, loading, providers, and template hulls
"""

from .models import (
    Station,
    Waterline,
    Offset,
    HullGeometry,
    LoadingCondition,
    StabilityRequest,
)
from .grid import OffsetGrid
from .providers import (
    GeometryProvider,
    LoadingProvider,
    InMemoryVesselRepository,
)
from .templates import (
    AnalyticalHydrostatics,
    generate_rectangular_barge,
    generate_wigley_hull,
    rectangular_barge_reference,
    wigley_hull_reference,
    barge_gz_reference,
    design_loading,
)

__all__ = [
    "Station",
    "Waterline",
    "Offset",
    "HullGeometry",
    "LoadingCondition",
    "StabilityRequest",
    "OffsetGrid",
    "GeometryProvider",
    "LoadingProvider",
    "InMemoryVesselRepository",
    "AnalyticalHydrostatics",
    "generate_rectangular_barge",
    "generate_wigley_hull",
    "rectangular_barge_reference",
    "wigley_hull_reference",
    "barge_gz_reference",
    "design_loading",
]
