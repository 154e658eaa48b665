"""
physics/hydrostatics.py - Hydrostatic calculator over an offset grid

Upright hydrostatics at a draft:
- Displacement (volume and mass) from sectional areas integrated along length
- Centres of buoyancy KB, LCB (TCB = 0 by port/starboard symmetry)
- Waterplane area and second moments, metacentric radii BMt/BMl
- Metacentric heights GMt/GMl when the loading condition carries KG
- Form coefficients Cb, Cp, Cm, Cwp

All values SI: m, m², m³, kg.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import time

import numpy as np

from hydrocalc.bootstrap.config import HydroConfig, get_config
from hydrocalc.core.constants import CM_PER_M, KG_PER_TONNE, WATERLINE_MATCH_RELATIVE
from hydrocalc.errors import ErrorCode, InvalidInputError
from hydrocalc.geometry.grid import OffsetGrid
from hydrocalc.geometry.models import HullGeometry, LoadingCondition
from .integration import IntegrationEngine
from .sweep import CancelEvent, run_sweep

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================

def _round_opt(value: Optional[float], digits: int) -> Optional[float]:
    return None if value is None else round(value, digits)


@dataclass(frozen=True)
class HydrostaticResult:
    """Upright hydrostatic properties at one draft."""

    draft: float  # m
    disp_volume: float  # m³
    disp_weight: float  # kg (mass displacement)

    # Centres of buoyancy (m)
    kb: float
    lcb: float
    tcb: float

    # Metacentric radii and heights (m)
    bmt: float
    bml: float
    gmt: Optional[float]  # None without KG
    gml: Optional[float]

    # Waterplane
    awp: float  # m²
    iwp: float  # transverse second moment, m⁴
    iwp_l: float  # longitudinal second moment about the station origin, m⁴
    iwp_l_lcf: float  # longitudinal second moment about LCF, m⁴

    # Form coefficients
    cb: float
    cp: float
    cm: float
    cwp: float

    # Derived
    kmt: float  # KB + BMt
    kml: float  # KB + BMl
    tpc: float  # tonnes per cm immersion

    @property
    def displacement_t(self) -> float:
        return self.disp_weight / KG_PER_TONNE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with presentation precision."""
        return {
            "draft": round(self.draft, 4),
            "disp_volume": round(self.disp_volume, 3),
            "disp_weight": round(self.disp_weight, 1),
            "kb": round(self.kb, 4),
            "lcb": round(self.lcb, 4),
            "tcb": round(self.tcb, 4),
            "bmt": round(self.bmt, 4),
            "bml": round(self.bml, 3),
            "gmt": _round_opt(self.gmt, 4),
            "gml": _round_opt(self.gml, 3),
            "awp": round(self.awp, 3),
            "iwp": round(self.iwp, 2),
            "iwp_l": round(self.iwp_l, 1),
            "iwp_l_lcf": round(self.iwp_l_lcf, 1),
            "cb": round(self.cb, 4),
            "cp": round(self.cp, 4),
            "cm": round(self.cm, 4),
            "cwp": round(self.cwp, 4),
            "kmt": round(self.kmt, 4),
            "kml": round(self.kml, 3),
            "tpc": round(self.tpc, 4),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HydrostaticResult":
        """Deserialize from dictionary."""
        kb = data.get("kb", 0.0)
        bmt = data.get("bmt", 0.0)
        bml = data.get("bml", 0.0)
        return cls(
            draft=data.get("draft", 0.0),
            disp_volume=data.get("disp_volume", 0.0),
            disp_weight=data.get("disp_weight", 0.0),
            kb=kb,
            lcb=data.get("lcb", 0.0),
            tcb=data.get("tcb", 0.0),
            bmt=bmt,
            bml=bml,
            gmt=data.get("gmt"),
            gml=data.get("gml"),
            awp=data.get("awp", 0.0),
            iwp=data.get("iwp", 0.0),
            iwp_l=data.get("iwp_l", 0.0),
            iwp_l_lcf=data.get("iwp_l_lcf", 0.0),
            cb=data.get("cb", 0.0),
            cp=data.get("cp", 0.0),
            cm=data.get("cm", 0.0),
            cwp=data.get("cwp", 0.0),
            kmt=data.get("kmt", kb + bmt),
            kml=data.get("kml", kb + bml),
            tpc=data.get("tpc", 0.0),
        )


# =============================================================================
# CALCULATOR
# =============================================================================

def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is not positive."""
    return numerator / denominator if denominator > 0 else 0.0


class HydrostaticCalculator:
    """
    Direct-integration hydrostatics from station/waterline offsets.

    Sections are integrated vertically over the waterlines at or below the
    draft, then along the length over the stations. With
    `hydrostatics.interpolate_partial_strip` set, the strip between the
    highest active waterline and the draft is added to every section.
    """

    def __init__(
        self,
        integration_engine: Optional[IntegrationEngine] = None,
        config: Optional[HydroConfig] = None,
    ):
        self.config = config or get_config()
        self.engine = integration_engine or IntegrationEngine(
            spacing_tolerance=self.config.integration.spacing_tolerance_m
        )

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def compute_at_draft(
        self,
        geometry: HullGeometry,
        loading: Optional[LoadingCondition] = None,
        draft: Optional[float] = None,
    ) -> HydrostaticResult:
        """
        Hydrostatics at a single draft.

        Args:
            geometry: Hull offsets and principal dimensions
            loading: Density and KG; seawater without KG when omitted
            draft: Draft above keel (m); design draft when omitted

        Raises:
            InvalidGeometryError: No stations, waterlines or offsets
            InvalidInputError: Fewer than 2 waterlines at or below draft
        """
        grid = OffsetGrid.from_geometry(geometry)
        if draft is None:
            draft = grid.design_draft
        return self.compute_on_grid(grid, loading, draft)

    def compute_table(
        self,
        geometry: HullGeometry,
        loading: Optional[LoadingCondition],
        drafts: Sequence[float],
        cancel_event: Optional[CancelEvent] = None,
    ) -> List[HydrostaticResult]:
        """
        Hydrostatics at several drafts, in input order.

        The offset grid is built once and shared by every draft. Raises
        CalculationCancelledError if cancel_event is set between drafts.
        """
        start_time = time.perf_counter()
        grid = OffsetGrid.from_geometry(geometry)

        results = run_sweep(
            lambda d: self.compute_on_grid(grid, loading, d),
            list(drafts),
            cancel_event=cancel_event,
            max_workers=self.config.execution.max_workers,
        )

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            f"Computed hydrostatic table for {geometry.name or 'vessel'}: "
            f"{len(results)} drafts in {elapsed_ms} ms"
        )
        return results

    def compute_on_grid(
        self,
        grid: OffsetGrid,
        loading: Optional[LoadingCondition],
        draft: float,
    ) -> HydrostaticResult:
        """Hydrostatics at a draft for a pre-built offset grid."""
        rho, kg = self._loading_parameters(loading)

        active = grid.z <= draft
        if np.count_nonzero(active) < 2:
            raise InvalidInputError(
                f"Draft {draft} is below minimum waterline "
                f"(need 2 waterlines at or below draft, lowest z={grid.z.min():.4f})",
                code=ErrorCode.INP_DRAFT_BELOW_WATERLINES,
            )

        z_active = grid.z[active]
        y_active = grid.y[:, active]
        x = grid.x

        # 1. Sectional areas and vertical centroids
        section_areas, section_centroids = self.section_properties(
            grid, z_active, y_active, draft
        )

        # 2. Volume
        volume = self.engine.integrate(x, section_areas)
        displacement = volume * rho

        # 3. Centres of buoyancy
        kb = _ratio(self.engine.integrate(x, section_centroids * section_areas), volume)
        lcb = _ratio(self.engine.first_moment(x, section_areas), volume)
        tcb = 0.0  # port/starboard symmetry

        # 4. Waterplane at the exact draft
        y_wp = self._waterplane_half_breadths(grid, z_active, y_active, draft)
        half_awp = self.engine.integrate(x, y_wp)
        awp = 2.0 * half_awp

        it = self.engine.integrate(x, (2.0 / 3.0) * y_wp ** 3)
        il = 2.0 * self.engine.second_moment(x, y_wp)
        lcf = _ratio(self.engine.first_moment(x, y_wp), half_awp)
        il_lcf = max(0.0, il - awp * lcf * lcf)

        # 5. Metacentric radii and heights
        bmt = _ratio(it, volume)
        bml = _ratio(il, volume)
        kmt = kb + bmt
        kml = kb + bml
        gmt = kmt - kg if kg is not None else None
        gml = kml - kg if kg is not None else None

        # 6. Form coefficients at the midship station
        midship_area = float(section_areas[grid.station_count // 2])
        cb = _ratio(volume, grid.lpp * grid.beam * draft)
        cp = _ratio(volume, midship_area * grid.lpp)
        cm = _ratio(midship_area, grid.beam * draft)
        cwp = _ratio(awp, grid.lpp * grid.beam)

        tpc = rho * awp / CM_PER_M / KG_PER_TONNE

        logger.debug(
            f"Hydrostatics at draft {draft:.4f}m: Vol={volume:.3f}m³, "
            f"Disp={displacement:.1f}kg, KB={kb:.4f}m, LCB={lcb:.4f}m"
        )

        return HydrostaticResult(
            draft=float(draft),
            disp_volume=volume,
            disp_weight=displacement,
            kb=kb,
            lcb=lcb,
            tcb=tcb,
            bmt=bmt,
            bml=bml,
            gmt=gmt,
            gml=gml,
            awp=awp,
            iwp=it,
            iwp_l=il,
            iwp_l_lcf=il_lcf,
            cb=cb,
            cp=cp,
            cm=cm,
            cwp=cwp,
            kmt=kmt,
            kml=kml,
            tpc=tpc,
        )

    def section_properties(
        self,
        grid: OffsetGrid,
        z_active: np.ndarray,
        y_active: np.ndarray,
        draft: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Full sectional area and vertical centroid of every station.

        Only the active waterlines are integrated unless
        `hydrostatics.interpolate_partial_strip` is set. The strip is then
        added as a trapezoid using the half-breadth interpolated at the
        draft, and never extends above the highest waterline.
        """
        z_top = float(z_active[-1])
        strip = 0.0
        if self.config.hydrostatics.interpolate_partial_strip:
            strip = min(draft, float(grid.z.max())) - z_top

        areas = np.zeros(grid.station_count)
        centroids = np.zeros(grid.station_count)

        for i in range(grid.station_count):
            y_row = y_active[i]
            half_area = self.engine.integrate(z_active, y_row)
            moment = self.engine.first_moment(z_active, y_row)

            if strip > 0:
                y_top = float(y_row[-1])
                z_strip = z_top + strip
                y_draft = grid.half_breadth_at(i, z_strip)
                half_area += 0.5 * (y_top + y_draft) * strip
                moment += 0.5 * (z_top * y_top + z_strip * y_draft) * strip

            areas[i] = 2.0 * half_area
            centroids[i] = moment / half_area if half_area > 0 else 0.0

        return areas, centroids

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _loading_parameters(
        self, loading: Optional[LoadingCondition]
    ) -> Tuple[float, Optional[float]]:
        if loading is None:
            return self.config.hydrostatics.default_rho_kg_m3, None
        return loading.rho, loading.kg

    def _waterplane_half_breadths(
        self,
        grid: OffsetGrid,
        z_active: np.ndarray,
        y_active: np.ndarray,
        draft: float,
    ) -> np.ndarray:
        """Half-breadth of every station at the draft."""
        last_z = float(z_active[-1])
        if draft > 0 and abs(draft - last_z) / draft < WATERLINE_MATCH_RELATIVE:
            return np.array(y_active[:, -1], dtype=float)

        return np.array(
            [grid.half_breadth_at(i, draft) for i in range(grid.station_count)],
            dtype=float,
        )
