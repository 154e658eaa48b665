"""
stability/gz_curve.py - Righting arm (GZ) curve calculator

Two methods, selected by identifier:

WallSided (fast, small angles):
    GZ = (GM + ½·BM·tan²φ)·sin φ
    Uses only upright GMt and BMt; no re-integration per angle.

FullImmersion (any angle):
    Rotates every station section, finds the water plane that keeps the
    upright volume, and integrates the true centre of buoyancy.
    GZ = B_y - KG·sin φ

For both methods KN = GZ + KG·sin φ.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import math
import time

from hydrocalc.bootstrap.config import HydroConfig, get_config
from hydrocalc.errors import ErrorCode, InvalidInputError
from hydrocalc.geometry.grid import OffsetGrid
from hydrocalc.geometry.models import HullGeometry, LoadingCondition, StabilityRequest
from hydrocalc.physics.hydrostatics import HydrostaticCalculator
from hydrocalc.physics.sweep import CancelEvent, run_sweep
from .constants import WALL_SIDED_MAX_ANGLE_DEG, StabilityMethod
from .heeled_sections import HeeledHull, upright_volume
from .results import StabilityCurve, StabilityMethodInfo, StabilityPoint

logger = logging.getLogger(__name__)


# Heel angles closer to zero than this give GZ = 0
ZERO_HEEL_DEG = 0.001


class StabilityCalculator:
    """
    GZ curve calculator.

    Upright GMt, BMt and displacement come from one hydrostatic calculation
    at the requested draft.
    """

    def __init__(
        self,
        hydro_calculator: Optional[HydrostaticCalculator] = None,
        config: Optional[HydroConfig] = None,
    ):
        self.config = config or get_config()
        self.hydro = hydro_calculator or HydrostaticCalculator(config=self.config)

    @property
    def engine(self):
        return self.hydro.engine

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def compute_gz_curve(
        self,
        geometry: HullGeometry,
        loading: Optional[LoadingCondition],
        request: Optional[StabilityRequest] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> StabilityCurve:
        """
        Compute the GZ curve for a loading condition.

        Args:
            geometry: Hull offsets
            loading: Loading condition; KG is required
            request: Heel range, method and draft; configured defaults when omitted
            cancel_event: Checked between heel angles

        Raises:
            InvalidInputError: Bad angle range, missing KG, or unknown method
            InvalidGeometryError: Empty geometry
            CalculationCancelledError: cancel_event set during the sweep
        """
        start_time = time.perf_counter()
        request = request or self._default_request()

        self._validate_angles(request.min_angle, request.max_angle, request.angle_increment)

        if loading is None or loading.kg is None:
            raise InvalidInputError(
                "Loading condition must have KG defined for stability calculations",
                code=ErrorCode.INP_MISSING_KG,
            )
        kg = loading.kg

        method = StabilityMethod.parse(request.method)
        if method is None:
            raise InvalidInputError(
                f"Unknown stability method: {request.method}",
                code=ErrorCode.INP_UNKNOWN_METHOD,
            )

        grid = OffsetGrid.from_geometry(geometry)
        draft = request.draft if request.draft is not None else grid.design_draft

        upright = self.hydro.compute_on_grid(grid, loading, draft)
        gmt = upright.gmt
        bmt = upright.bmt

        angles = self.generate_angles(request.min_angle, request.max_angle, request.angle_increment)

        if method is StabilityMethod.WALL_SIDED:
            gz_values = [self.compute_gz_wall_sided(gmt, bmt, angle) for angle in angles]
        else:
            gz_values = self._full_immersion_sweep(grid, draft, kg, angles, cancel_event)

        points = [
            StabilityPoint(
                heel_angle=angle,
                gz=gz,
                kn=gz + kg * math.sin(math.radians(angle)),
            )
            for angle, gz in zip(angles, gz_values)
        ]

        max_point = max(points, key=lambda p: p.gz) if points else None
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            f"Computed GZ curve using {method.value} method for "
            f"{geometry.name or 'vessel'}: {len(points)} points in {elapsed_ms} ms"
        )

        return StabilityCurve(
            method=method.value,
            displacement=upright.disp_weight,
            kg=kg,
            initial_gmt=gmt,
            draft=draft,
            points=points,
            max_gz=max_point.gz if max_point else 0.0,
            angle_at_max_gz=max_point.heel_angle if max_point else 0.0,
            computation_time_ms=elapsed_ms,
        )

    def compute_gz_wall_sided(self, gmt: float, bmt: float, heel_deg: float) -> float:
        """
        GZ from the wall-sided formula.

        GZ = (GM + ½·BM·tan²φ)·sin φ, with |φ| clamped to 89°.
        """
        if abs(heel_deg) < ZERO_HEEL_DEG:
            return 0.0

        if abs(heel_deg) >= WALL_SIDED_MAX_ANGLE_DEG:
            heel_deg = math.copysign(WALL_SIDED_MAX_ANGLE_DEG, heel_deg)

        phi = math.radians(heel_deg)
        tan_phi = math.tan(phi)
        return (gmt + 0.5 * bmt * tan_phi * tan_phi) * math.sin(phi)

    def compute_gz_full_immersion(
        self,
        geometry: HullGeometry,
        draft: float,
        kg: float,
        heel_deg: float,
    ) -> float:
        """GZ at a single heel angle by direct integration of the heeled hull."""
        grid = OffsetGrid.from_geometry(geometry)
        target = upright_volume(grid, draft, self.engine)
        return self._full_immersion_gz(grid, target, kg, heel_deg)

    def available_methods(self) -> List[StabilityMethodInfo]:
        """Descriptors of the supported GZ methods."""
        return [
            StabilityMethodInfo(
                id=StabilityMethod.WALL_SIDED.value,
                name="Wall-Sided Formula",
                description=(
                    "Fast approximation from upright metacentric height and radius. "
                    "Suitable for small heel angles (< 15-20°)."
                ),
                max_recommended_angle=20.0,
                computation_speed="Fast",
            ),
            StabilityMethodInfo(
                id=StabilityMethod.FULL_IMMERSION.value,
                name="Full Immersion/Emersion",
                description=(
                    "Rotates every station section, solves the heeled waterline for "
                    "constant displacement and integrates the true centre of buoyancy. "
                    "Valid for all heel angles."
                ),
                max_recommended_angle=180.0,
                computation_speed="Moderate",
            ),
        ]

    @staticmethod
    def generate_angles(min_angle: float, max_angle: float, increment: float) -> List[float]:
        """min_angle, min_angle + increment, ... up to and including max_angle."""
        count = int(math.floor((max_angle - min_angle) / increment + 1e-9))
        return [min_angle + i * increment for i in range(count + 1)]

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _default_request(self) -> StabilityRequest:
        cfg = self.config.stability
        return StabilityRequest(
            min_angle=cfg.min_angle_deg,
            max_angle=cfg.max_angle_deg,
            angle_increment=cfg.angle_increment_deg,
            method=cfg.default_method,
        )

    @staticmethod
    def _validate_angles(min_angle: float, max_angle: float, increment: float) -> None:
        if increment <= 0:
            raise InvalidInputError(
                f"Angle increment must be positive, got {increment}",
                code=ErrorCode.INP_ANGLE_RANGE,
            )
        if min_angle >= max_angle:
            raise InvalidInputError(
                f"Min angle ({min_angle}) must be less than max angle ({max_angle})",
                code=ErrorCode.INP_ANGLE_RANGE,
            )

    def _full_immersion_sweep(
        self,
        grid: OffsetGrid,
        draft: float,
        kg: float,
        angles: List[float],
        cancel_event: Optional[CancelEvent],
    ) -> List[float]:
        if draft >= float(grid.z.max()):
            logger.warning(
                f"No offsets above draft {draft}m; heeled sections are closed "
                f"at the top waterline z={float(grid.z.max())}m"
            )

        target = upright_volume(grid, draft, self.engine)
        return run_sweep(
            lambda angle: self._full_immersion_gz(grid, target, kg, angle),
            angles,
            cancel_event=cancel_event,
            max_workers=self.config.execution.max_workers,
        )

    def _full_immersion_gz(
        self,
        grid: OffsetGrid,
        target_volume: float,
        kg: float,
        heel_deg: float,
    ) -> float:
        if abs(heel_deg) < ZERO_HEEL_DEG or target_volume <= 0:
            return 0.0

        cfg = self.config.stability
        buoyancy = HeeledHull(grid, heel_deg, self.engine).find_waterplane(
            target_volume,
            tolerance=cfg.waterline_volume_tolerance,
            max_iterations=cfg.waterline_max_iterations,
        )
        return buoyancy.by - kg * math.sin(math.radians(heel_deg))
