"""
services/vessel_service.py - Identifier-based hydrostatics facade

Resolves vessel and loadcase identifiers through the geometry/loading
providers and hands immutable snapshots to the calculators. This is the
entry point for collaborators that know vessels by id rather than by
geometry.
"""

from __future__ import annotations
from typing import Dict, Hashable, Iterable, List, Optional, Sequence
import logging

from hydrocalc.bootstrap.config import HydroConfig, get_config
from hydrocalc.errors import ErrorCode, NotFoundError
from hydrocalc.geometry.models import HullGeometry, LoadingCondition, StabilityRequest
from hydrocalc.geometry.providers import GeometryProvider, LoadingProvider
from hydrocalc.physics.curves import BonjeanCurve, Curve, CurveGenerator
from hydrocalc.physics.hydrostatics import HydrostaticCalculator, HydrostaticResult
from hydrocalc.physics.integration import IntegrationEngine
from hydrocalc.physics.sweep import CancelEvent
from hydrocalc.stability.criteria import StabilityCriteriaChecker
from hydrocalc.stability.gz_curve import StabilityCalculator
from hydrocalc.stability.results import CriteriaResult, StabilityCurve, StabilityMethodInfo
from hydrocalc.trim.solver import TrimSolution, TrimSolver

logger = logging.getLogger(__name__)


class HydrostaticsService:
    """
    Wires providers to the calculation components.

    One IntegrationEngine and one HydrostaticCalculator are shared by the
    curve generator, stability calculator and trim solver.
    """

    def __init__(
        self,
        geometry_provider: GeometryProvider,
        loading_provider: Optional[LoadingProvider] = None,
        config: Optional[HydroConfig] = None,
    ):
        self.config = config or get_config()
        self._geometry = geometry_provider
        self._loading = loading_provider

        self.engine = IntegrationEngine(
            spacing_tolerance=self.config.integration.spacing_tolerance_m
        )
        self.hydro = HydrostaticCalculator(self.engine, self.config)
        self.curves = CurveGenerator(self.hydro, self.config)
        self.stability = StabilityCalculator(self.hydro, self.config)
        self.criteria = StabilityCriteriaChecker()
        self.trim = TrimSolver(self.hydro, self.config)

        logger.info("HydrostaticsService initialized")

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def get_geometry(self, vessel_id: Hashable) -> HullGeometry:
        """Geometry for a vessel; NotFoundError when absent."""
        geometry = self._geometry.get_geometry(vessel_id)
        if geometry is None:
            raise NotFoundError(
                f"Vessel {vessel_id!r} not found",
                code=ErrorCode.NF_VESSEL,
                identifier=vessel_id,
            )
        return geometry

    def get_loading(self, loadcase_id: Optional[Hashable]) -> Optional[LoadingCondition]:
        """Loading condition for a loadcase id; None when no id is given."""
        if loadcase_id is None:
            return None
        loading = self._loading.get_loading(loadcase_id) if self._loading else None
        if loading is None:
            raise NotFoundError(
                f"Loadcase {loadcase_id!r} not found",
                code=ErrorCode.NF_LOADCASE,
                identifier=loadcase_id,
            )
        return loading

    # =========================================================================
    # HYDROSTATICS
    # =========================================================================

    def compute_at_draft(
        self,
        vessel_id: Hashable,
        loadcase_id: Optional[Hashable],
        draft: float,
    ) -> HydrostaticResult:
        return self.hydro.compute_at_draft(
            self.get_geometry(vessel_id), self.get_loading(loadcase_id), draft
        )

    def compute_table(
        self,
        vessel_id: Hashable,
        loadcase_id: Optional[Hashable],
        drafts: Sequence[float],
        cancel_event: Optional[CancelEvent] = None,
    ) -> List[HydrostaticResult]:
        return self.hydro.compute_table(
            self.get_geometry(vessel_id), self.get_loading(loadcase_id), drafts, cancel_event
        )

    # =========================================================================
    # CURVES
    # =========================================================================

    def generate_curve(
        self,
        vessel_id: Hashable,
        loadcase_id: Optional[Hashable],
        curve_type: str,
        min_draft: float,
        max_draft: float,
        points: Optional[int] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> Curve:
        return self.curves.generate_curve(
            self.get_geometry(vessel_id),
            self.get_loading(loadcase_id),
            curve_type,
            min_draft,
            max_draft,
            points,
            cancel_event,
        )

    def generate_multiple(
        self,
        vessel_id: Hashable,
        loadcase_id: Optional[Hashable],
        curve_types: Iterable[str],
        min_draft: float,
        max_draft: float,
        points: Optional[int] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> Dict[str, Curve]:
        return self.curves.generate_multiple(
            self.get_geometry(vessel_id),
            self.get_loading(loadcase_id),
            curve_types,
            min_draft,
            max_draft,
            points,
            cancel_event,
        )

    def generate_bonjean_curves(
        self,
        vessel_id: Hashable,
        cancel_event: Optional[CancelEvent] = None,
    ) -> List[BonjeanCurve]:
        return self.curves.generate_bonjean_curves(self.get_geometry(vessel_id), cancel_event)

    # =========================================================================
    # STABILITY
    # =========================================================================

    def compute_gz_curve(
        self,
        vessel_id: Hashable,
        loadcase_id: Hashable,
        request: Optional[StabilityRequest] = None,
        cancel_event: Optional[CancelEvent] = None,
    ) -> StabilityCurve:
        return self.stability.compute_gz_curve(
            self.get_geometry(vessel_id),
            self.get_loading(loadcase_id),
            request,
            cancel_event,
        )

    def check_criteria(self, curve: StabilityCurve) -> CriteriaResult:
        return self.criteria.check(curve)

    def available_stability_methods(self) -> List[StabilityMethodInfo]:
        return self.stability.available_methods()

    # =========================================================================
    # TRIM
    # =========================================================================

    def solve_for_displacement(
        self,
        vessel_id: Hashable,
        loadcase_id: Optional[Hashable],
        target_displacement: float,
        initial_draft_fwd: float,
        initial_draft_aft: float,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
    ) -> TrimSolution:
        return self.trim.solve_for_displacement(
            self.get_geometry(vessel_id),
            self.get_loading(loadcase_id),
            target_displacement,
            initial_draft_fwd,
            initial_draft_aft,
            max_iterations,
            tolerance,
        )

    def is_displacement_achievable(self, vessel_id: Hashable, target_displacement: float) -> bool:
        """False for unknown vessels."""
        return self.trim.is_displacement_achievable(
            self._geometry.get_geometry(vessel_id), target_displacement
        )
