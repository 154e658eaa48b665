"""
trim/solver.py - Equilibrium draft solver

Newton-Raphson search over mean draft for a target displacement. Trim
(T_AP - T_FP) is held at its initial value; only the mean draft moves.
Non-convergence is reported through TrimSolution.converged, not raised.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from hydrocalc.bootstrap.config import HydroConfig, get_config
from hydrocalc.core.constants import CM_PER_M
from hydrocalc.errors import ErrorCode, InvalidInputError, NotFoundError
from hydrocalc.geometry.grid import OffsetGrid
from hydrocalc.geometry.models import HullGeometry, LoadingCondition
from hydrocalc.physics.hydrostatics import HydrostaticCalculator, HydrostaticResult

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================

@dataclass(frozen=True)
class TrimSolution:
    """Drafts that float the hull at a target displacement."""
    target_displacement: float  # kg
    draft_fp: float  # m
    draft_ap: float  # m
    mean_draft: float  # m
    trim_angle: float  # T_AP - T_FP (m)
    lcf: float  # m, approximated by LCB
    mtc: float  # kg·m per cm, Δ·BMl / (100·Lpp)
    converged: bool
    iterations: int
    displacement: float = 0.0  # kg at mean_draft

    @property
    def residual(self) -> float:
        return self.displacement - self.target_displacement

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_displacement": round(self.target_displacement, 1),
            "draft_fp": round(self.draft_fp, 4),
            "draft_ap": round(self.draft_ap, 4),
            "mean_draft": round(self.mean_draft, 4),
            "trim_angle": round(self.trim_angle, 4),
            "lcf": round(self.lcf, 4),
            "mtc": round(self.mtc, 2),
            "converged": self.converged,
            "iterations": self.iterations,
            "displacement": round(self.displacement, 1),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrimSolution":
        return cls(
            target_displacement=data.get("target_displacement", 0.0),
            draft_fp=data.get("draft_fp", 0.0),
            draft_ap=data.get("draft_ap", 0.0),
            mean_draft=data.get("mean_draft", 0.0),
            trim_angle=data.get("trim_angle", 0.0),
            lcf=data.get("lcf", 0.0),
            mtc=data.get("mtc", 0.0),
            converged=data.get("converged", False),
            iterations=data.get("iterations", 0),
            displacement=data.get("displacement", 0.0),
        )


# =============================================================================
# SOLVER
# =============================================================================

class TrimSolver:
    """
    Newton-Raphson displacement solver.

    The derivative dΔ/dT comes from a forward finite difference. A
    negligible derivative is replaced by a fixed fallback so the update
    stays bounded.
    """

    def __init__(
        self,
        hydro_calculator: Optional[HydrostaticCalculator] = None,
        config: Optional[HydroConfig] = None,
    ):
        self.config = config or get_config()
        self.hydro = hydro_calculator or HydrostaticCalculator(config=self.config)

    def solve_for_displacement(
        self,
        geometry: Optional[HullGeometry],
        loading: Optional[LoadingCondition],
        target_displacement: float,
        initial_draft_fwd: float,
        initial_draft_aft: float,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
    ) -> TrimSolution:
        """
        Find drafts giving the target displacement.

        Args:
            geometry: Hull offsets (NotFoundError when None)
            loading: Density; seawater when omitted
            target_displacement: Target mass displacement (kg)
            initial_draft_fwd: Starting draft at FP (m)
            initial_draft_aft: Starting draft at AP (m)
            max_iterations: Iteration limit (default from config, 20)
            tolerance: Convergence tolerance on displacement (kg, default 100)

        Returns:
            TrimSolution; check `converged`
        """
        cfg = self.config.trim
        max_iterations = cfg.max_iterations if max_iterations is None else max_iterations
        tolerance = cfg.tolerance_kg if tolerance is None else tolerance

        if geometry is None:
            raise NotFoundError("Vessel geometry not found", code=ErrorCode.NF_VESSEL)
        if initial_draft_fwd <= 0 or initial_draft_aft <= 0:
            raise InvalidInputError(
                f"Initial drafts must be positive (FP={initial_draft_fwd}, AP={initial_draft_aft})",
                code=ErrorCode.INP_NON_POSITIVE,
            )
        if target_displacement <= 0:
            raise InvalidInputError(
                f"Target displacement must be positive, got {target_displacement}",
                code=ErrorCode.INP_NON_POSITIVE,
            )
        if tolerance <= 0:
            raise InvalidInputError(
                f"Tolerance must be positive, got {tolerance}",
                code=ErrorCode.INP_NON_POSITIVE,
            )

        logger.info(
            f"Starting trim solver for {geometry.name or 'vessel'}, "
            f"target displacement {target_displacement:.0f} kg"
        )

        grid = OffsetGrid.from_geometry(geometry)
        min_draft = cfg.min_draft_m
        max_draft = grid.design_draft * cfg.max_draft_factor

        draft_fp = initial_draft_fwd
        draft_ap = initial_draft_aft
        iteration = 0
        error = 0.0

        while iteration < max_iterations:
            iteration += 1

            mean_draft = (draft_fp + draft_ap) / 2.0
            result = self.hydro.compute_on_grid(grid, loading, mean_draft)
            error = result.disp_weight - target_displacement

            logger.debug(
                f"Iteration {iteration}: T_FP={draft_fp:.3f}m, T_AP={draft_ap:.3f}m, "
                f"T_mean={mean_draft:.3f}m, Disp={result.disp_weight:.0f}kg, Error={error:.0f}kg"
            )

            if abs(error) < tolerance:
                logger.info(
                    f"Converged in {iteration} iterations: T_FP={draft_fp:.3f}m, "
                    f"T_AP={draft_ap:.3f}m, Error={error:.0f}kg"
                )
                return self._solution(
                    grid, result, target_displacement, draft_fp, draft_ap, True, iteration
                )

            perturbed = self.hydro.compute_on_grid(grid, loading, mean_draft + cfg.perturbation_m)
            derivative = (perturbed.disp_weight - result.disp_weight) / cfg.perturbation_m

            if abs(derivative) < cfg.min_derivative:
                logger.warning("Derivative too small, may not converge")
                derivative = cfg.fallback_derivative

            mean_draft -= error / derivative

            trim = draft_ap - draft_fp
            draft_fp = min(max(mean_draft - trim / 2.0, min_draft), max_draft)
            draft_ap = min(max(mean_draft + trim / 2.0, min_draft), max_draft)

        logger.warning(f"Failed to converge after {iteration} iterations. Error: {error:.0f}kg")

        final = self.hydro.compute_on_grid(grid, loading, (draft_fp + draft_ap) / 2.0)
        return self._solution(
            grid, final, target_displacement, draft_fp, draft_ap, False, iteration
        )

    def is_displacement_achievable(
        self,
        geometry: Optional[HullGeometry],
        target_displacement: float,
    ) -> bool:
        """True when the target does not exceed the displacement at design draft."""
        if geometry is None:
            return False

        grid = OffsetGrid.from_geometry(geometry)
        at_design = self.hydro.compute_on_grid(grid, None, grid.design_draft)
        return target_displacement <= at_design.disp_weight

    @staticmethod
    def _solution(
        grid: OffsetGrid,
        result: HydrostaticResult,
        target: float,
        draft_fp: float,
        draft_ap: float,
        converged: bool,
        iterations: int,
    ) -> TrimSolution:
        mtc = result.disp_weight * result.bml / (CM_PER_M * grid.lpp) if grid.lpp > 0 else 0.0
        return TrimSolution(
            target_displacement=target,
            draft_fp=draft_fp,
            draft_ap=draft_ap,
            mean_draft=result.draft,
            trim_angle=draft_ap - draft_fp,
            lcf=result.lcb,
            mtc=mtc,
            converged=converged,
            iterations=iterations,
            displacement=result.disp_weight,
        )
