"""
geometry/templates.py - Template hull generators and analytical references

Sample-data generation for validation and examples:
- Rectangular barge: every hydrostatic property has a closed form.
- Wigley parabolic hull: y = (B/2)·(1 - ξ²)·(1 - ζ²), ξ ∈ [-1, 1] along the
  length, ζ = (T - z)/T measured down from the design waterline.

Nothing here holds state; each call builds a fresh HullGeometry.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List
import math

from hydrocalc.core.constants import (
    SEAWATER_DENSITY_KG_M3,
    TEMPLATE_KG_DRAFT_FRACTION,
)
from .models import HullGeometry, LoadingCondition, Offset, Station, Waterline


# =============================================================================
# ANALYTICAL REFERENCE
# =============================================================================

@dataclass(frozen=True)
class AnalyticalHydrostatics:
    """Closed-form (or literature) hydrostatic values for a template hull."""
    volume: float
    displacement: float
    kb: float
    lcb: float
    tcb: float
    awp: float
    iwp_transverse: float
    iwp_longitudinal: float
    bmt: float
    bml: float
    cb: float
    cp: float
    cm: float
    cwp: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# GRID HELPERS
# =============================================================================

def _stations(length: float, count: int) -> List[Station]:
    if count < 2:
        raise ValueError(f"At least 2 stations required, got {count}")
    return [Station(index=i, x=length * i / (count - 1)) for i in range(count)]


def _waterlines(draft: float, count: int) -> List[Waterline]:
    if count < 2:
        raise ValueError(f"At least 2 waterlines required, got {count}")
    return [Waterline(index=j, z=draft * j / (count - 1)) for j in range(count)]


# =============================================================================
# RECTANGULAR BARGE
# =============================================================================

def generate_rectangular_barge(
    length: float = 100.0,
    beam: float = 20.0,
    design_draft: float = 10.0,
    num_stations: int = 5,
    num_waterlines: int = 3,
    depth: float = None,
    name: str = "Rectangular Barge",
) -> HullGeometry:
    """
    Box-shaped hull with constant half-breadth beam/2.

    Waterlines run from the keel to `depth` (defaults to the design draft),
    so the barge can be given freeboard for heeled calculations.
    """
    top = depth if depth is not None else design_draft
    stations = _stations(length, num_stations)
    waterlines = _waterlines(top, num_waterlines)

    half_breadth = beam / 2.0
    offsets = [
        Offset(station_index=s.index, waterline_index=w.index, half_breadth=half_breadth)
        for s in stations
        for w in waterlines
    ]

    return HullGeometry(
        name=name,
        lpp=length,
        beam=beam,
        design_draft=design_draft,
        stations=stations,
        waterlines=waterlines,
        offsets=offsets,
    )


def rectangular_barge_reference(
    length: float,
    beam: float,
    draft: float,
    rho: float = SEAWATER_DENSITY_KG_M3,
) -> AnalyticalHydrostatics:
    """Exact hydrostatics of a rectangular barge at a given draft."""
    volume = length * beam * draft
    iwp_t = length * beam ** 3 / 12.0
    iwp_l = beam * length ** 3 / 12.0

    return AnalyticalHydrostatics(
        volume=volume,
        displacement=rho * volume,
        kb=draft / 2.0,
        lcb=length / 2.0,
        tcb=0.0,
        awp=length * beam,
        iwp_transverse=iwp_t,
        iwp_longitudinal=iwp_l,
        bmt=iwp_t / volume,
        bml=iwp_l / volume,
        cb=1.0,
        cp=1.0,
        cm=1.0,
        cwp=1.0,
    )


def barge_gz_reference(beam: float, draft: float, kg: float, heel_deg: float) -> float:
    """
    Wall-sided GZ of a rectangular barge, exact until the deck edge immerses.

    GZ = sin φ · (GM + (BM/2)·tan²φ), BM = B²/(12T), KB = T/2
    """
    phi = math.radians(heel_deg)
    bmt = beam * beam / (12.0 * draft)
    gmt = draft / 2.0 + bmt - kg
    return math.sin(phi) * (gmt + 0.5 * bmt * math.tan(phi) ** 2)


# =============================================================================
# WIGLEY HULL
# =============================================================================

def generate_wigley_hull(
    length: float = 100.0,
    beam: float = 10.0,
    design_draft: float = 6.25,
    num_stations: int = 21,
    num_waterlines: int = 13,
    name: str = "Wigley Hull",
) -> HullGeometry:
    """
    Wigley parabolic hull (Michell 1898, Wigley 1942).

    Odd station and waterline counts keep both integration directions on
    Simpson's rule.
    """
    stations = _stations(length, num_stations)
    waterlines = _waterlines(design_draft, num_waterlines)
    half_length = length / 2.0

    offsets = []
    for s in stations:
        xi = (s.x - half_length) / half_length
        for w in waterlines:
            zeta = (design_draft - w.z) / design_draft
            half_breadth = (beam / 2.0) * (1.0 - xi * xi) * (1.0 - zeta * zeta)
            offsets.append(
                Offset(
                    station_index=s.index,
                    waterline_index=w.index,
                    half_breadth=max(0.0, half_breadth),
                )
            )

    return HullGeometry(
        name=name,
        lpp=length,
        beam=beam,
        design_draft=design_draft,
        stations=stations,
        waterlines=waterlines,
        offsets=offsets,
    )


def wigley_hull_reference(
    length: float,
    beam: float,
    draft: float,
    rho: float = SEAWATER_DENSITY_KG_M3,
) -> AnalyticalHydrostatics:
    """
    Exact Wigley hull values at design draft.

    Cb = 4/9, Cwp = Cp = Cm = 2/3, KB = 5T/8
    I_T = 4·B³·L/105, I_L = B·L³/30 (about midships)
    """
    cb = 4.0 / 9.0
    volume = length * beam * draft * cb
    iwp_t = 4.0 * beam ** 3 * length / 105.0
    iwp_l = beam * length ** 3 / 30.0

    return AnalyticalHydrostatics(
        volume=volume,
        displacement=rho * volume,
        kb=5.0 * draft / 8.0,
        lcb=length / 2.0,
        tcb=0.0,
        awp=2.0 * length * beam / 3.0,
        iwp_transverse=iwp_t,
        iwp_longitudinal=iwp_l,
        bmt=iwp_t / volume,
        bml=iwp_l / volume,
        cb=cb,
        cp=2.0 / 3.0,
        cm=2.0 / 3.0,
        cwp=2.0 / 3.0,
    )


# =============================================================================
# TEMPLATE LOADCASE
# =============================================================================

def design_loading(geometry: HullGeometry, rho: float = SEAWATER_DENSITY_KG_M3) -> LoadingCondition:
    """Design condition used by template vessels: KG at half the design draft."""
    return LoadingCondition(
        name="Design Condition",
        rho=rho,
        kg=geometry.resolved_design_draft * TEMPLATE_KG_DRAFT_FRACTION,
    )
