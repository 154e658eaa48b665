"""
physics/curves.py - Hydrostatic curves and Bonjean curves

Sweeps the hydrostatic calculator over a linearly spaced draft range to
build named property curves (displacement, KB, LCB, GMt, Awp), and
integrates each station up to every waterline for Bonjean curves.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
import logging

from hydrocalc.bootstrap.config import HydroConfig, get_config
from hydrocalc.errors import ErrorCode, InvalidInputError
from hydrocalc.geometry.grid import OffsetGrid
from hydrocalc.geometry.models import HullGeometry, LoadingCondition
from .hydrostatics import HydrostaticCalculator, HydrostaticResult
from .integration import IntegrationEngine
from .sweep import CancelEvent, run_sweep

logger = logging.getLogger(__name__)


# =============================================================================
# CURVE TYPES
# =============================================================================

@dataclass(frozen=True)
class CurveType:
    """How one named curve reads its ordinate from a hydrostatic result."""
    name: str
    y_label: str
    extract: Callable[[HydrostaticResult], Optional[float]]
    requires_kg: bool = False


CURVE_TYPES: Dict[str, CurveType] = {
    "displacement": CurveType("displacement", "Displacement (kg)", lambda r: r.disp_weight),
    "kb": CurveType("kb", "KB (m)", lambda r: r.kb),
    "lcb": CurveType("lcb", "LCB (m)", lambda r: r.lcb),
    "gmt": CurveType("gmt", "GMt (m)", lambda r: r.gmt, requires_kg=True),
    "awp": CurveType("awp", "Waterplane Area (m²)", lambda r: r.awp),
}

DRAFT_LABEL = "Draft (m)"


# =============================================================================
# CURVE DATA
# =============================================================================

@dataclass(frozen=True)
class CurvePoint:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": round(self.x, 4), "y": round(self.y, 4)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurvePoint":
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0))


@dataclass(frozen=True)
class Curve:
    """Named property plotted against draft."""
    type: str
    x_label: str
    y_label: str
    points: List[CurvePoint] = field(default_factory=list)

    @property
    def xs(self) -> List[float]:
        return [p.x for p in self.points]

    @property
    def ys(self) -> List[float]:
        return [p.y for p in self.points]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Curve":
        return cls(
            type=data.get("type", ""),
            x_label=data.get("x_label", DRAFT_LABEL),
            y_label=data.get("y_label", ""),
            points=[CurvePoint.from_dict(p) for p in data.get("points", [])],
        )


@dataclass(frozen=True)
class BonjeanCurve:
    """Sectional area of one station against draft."""
    station_index: int
    station_x: float
    points: List[CurvePoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "station_index": self.station_index,
            "station_x": round(self.station_x, 4),
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BonjeanCurve":
        return cls(
            station_index=data.get("station_index", 0),
            station_x=data.get("station_x", 0.0),
            points=[CurvePoint.from_dict(p) for p in data.get("points", [])],
        )


# =============================================================================
# GENERATOR
# =============================================================================

def draft_range(min_draft: float, max_draft: float, points: int) -> List[float]:
    """Linearly spaced drafts from min_draft to max_draft inclusive."""
    if points < 2:
        raise InvalidInputError(
            f"At least 2 points required, got {points}",
            code=ErrorCode.INP_INVALID,
        )
    if max_draft <= min_draft:
        raise InvalidInputError(
            f"Max draft ({max_draft}) must be greater than min draft ({min_draft})",
            code=ErrorCode.INP_INVALID,
        )

    step = (max_draft - min_draft) / (points - 1)
    return [min_draft + i * step for i in range(points)]


class CurveGenerator:
    """Hydrostatic property curves and Bonjean curves for one hull."""

    def __init__(
        self,
        calculator: Optional[HydrostaticCalculator] = None,
        config: Optional[HydroConfig] = None,
    ):
        self.config = config or get_config()
        self.calculator = calculator or HydrostaticCalculator(config=self.config)

    @property
    def engine(self) -> IntegrationEngine:
        return self.calculator.engine

    # =========================================================================
    # PROPERTY CURVES
    # =========================================================================

    def generate_curve(
        self,
        geometry: HullGeometry,
        loading: Optional[LoadingCondition],
        curve_type: str,
        min_draft: float,
        max_draft: float,
        points: Optional[int] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> Curve:
        """
        One named curve over a draft range.

        Raises:
            InvalidInputError: Unknown curve type, bad range, or GMt
                requested without KG
        """
        kind = CURVE_TYPES.get(curve_type.lower())
        if kind is None:
            raise InvalidInputError(
                f"Unknown curve type: {curve_type}. Known: {', '.join(CURVE_TYPES)}",
                code=ErrorCode.INP_INVALID,
            )
        self._check_kg([kind], loading)

        drafts = draft_range(min_draft, max_draft, self._points(points))
        results = self.calculator.compute_table(geometry, loading, drafts, cancel_event)
        return self._build_curve(kind, results)

    def generate_displacement_curve(self, geometry, loading, min_draft, max_draft, points=None, cancel_event=None) -> Curve:
        return self.generate_curve(geometry, loading, "displacement", min_draft, max_draft, points, cancel_event)

    def generate_kb_curve(self, geometry, loading, min_draft, max_draft, points=None, cancel_event=None) -> Curve:
        return self.generate_curve(geometry, loading, "kb", min_draft, max_draft, points, cancel_event)

    def generate_lcb_curve(self, geometry, loading, min_draft, max_draft, points=None, cancel_event=None) -> Curve:
        return self.generate_curve(geometry, loading, "lcb", min_draft, max_draft, points, cancel_event)

    def generate_gmt_curve(self, geometry, loading, min_draft, max_draft, points=None, cancel_event=None) -> Curve:
        return self.generate_curve(geometry, loading, "gmt", min_draft, max_draft, points, cancel_event)

    def generate_awp_curve(self, geometry, loading, min_draft, max_draft, points=None, cancel_event=None) -> Curve:
        return self.generate_curve(geometry, loading, "awp", min_draft, max_draft, points, cancel_event)

    def generate_multiple(
        self,
        geometry: HullGeometry,
        loading: Optional[LoadingCondition],
        curve_types: Iterable[str],
        min_draft: float,
        max_draft: float,
        points: Optional[int] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> Dict[str, Curve]:
        """
        Several curves from a single draft table.

        Names match case-insensitively and unknown names are skipped. The
        returned map is keyed by the names as given.
        """
        requested = [(name, CURVE_TYPES.get(name.lower())) for name in curve_types]
        known = [(name, kind) for name, kind in requested if kind is not None]

        curves: Dict[str, Curve] = {}
        if not known:
            logger.info("No known curve types requested")
            return curves

        self._check_kg([kind for _, kind in known], loading)

        drafts = draft_range(min_draft, max_draft, self._points(points))
        results = self.calculator.compute_table(geometry, loading, drafts, cancel_event)

        for name, kind in known:
            curves[name] = self._build_curve(kind, results)

        logger.info(f"Generated {len(curves)} curves for {geometry.name or 'vessel'}")
        return curves

    # =========================================================================
    # BONJEAN CURVES
    # =========================================================================

    def generate_bonjean_curves(
        self,
        geometry: HullGeometry,
        cancel_event: Optional[CancelEvent] = None,
    ) -> List[BonjeanCurve]:
        """
        Sectional area of every station at every waterline height.

        The lowest waterline has zero area by definition.
        """
        grid = OffsetGrid.from_geometry(geometry)

        curves = run_sweep(
            lambda i: self._bonjean_for_station(grid, i),
            list(range(grid.station_count)),
            cancel_event=cancel_event,
            max_workers=self.config.execution.max_workers,
        )

        logger.info(
            f"Generated Bonjean curves for {geometry.name or 'vessel'}: {len(curves)} stations"
        )
        return curves

    def _bonjean_for_station(self, grid: OffsetGrid, i: int) -> BonjeanCurve:
        points = []
        for j in range(grid.waterline_count):
            area = 2.0 * self.engine.integrate(grid.z[: j + 1], grid.y[i, : j + 1])
            points.append(CurvePoint(x=float(grid.z[j]), y=area))

        return BonjeanCurve(
            station_index=grid.station_indices[i],
            station_x=float(grid.x[i]),
            points=points,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _points(self, points: Optional[int]) -> int:
        return points if points is not None else self.config.hydrostatics.default_curve_points

    @staticmethod
    def _check_kg(kinds: Sequence[CurveType], loading: Optional[LoadingCondition]) -> None:
        if any(s.requires_kg for s in kinds) and (loading is None or loading.kg is None):
            raise InvalidInputError(
                "A loading condition with KG is required to compute GMt",
                code=ErrorCode.INP_MISSING_KG,
            )

    @staticmethod
    def _build_curve(kind: CurveType, results: Sequence[HydrostaticResult]) -> Curve:
        points = []
        for r in results:
            y = kind.extract(r)
            if y is not None:
                points.append(CurvePoint(x=r.draft, y=float(y)))
        return Curve(type=kind.name, x_label=DRAFT_LABEL, y_label=kind.y_label, points=points)
