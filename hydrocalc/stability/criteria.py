"""
stability/criteria.py - Intact stability criteria checker

Evaluates the IMO A.749(18) general criteria against a computed GZ curve:

| Criterion          | Requirement     |
|--------------------|-----------------|
| Area 0°-30°        | ≥ 0.055 m·rad   |
| Area 0°-40°        | ≥ 0.090 m·rad   |
| Area 30°-40°       | ≥ 0.030 m·rad   |
| Angle at max GZ    | ≥ 25°           |
| Initial GMt        | ≥ 0.15 m        |
| GZ at 30°          | ≥ 0.20 m        |
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
import logging
import math

from hydrocalc.core.constants import CRITERIA_RELATIVE_TOLERANCE, RAD_TO_DEG
from .constants import CRITERIA_STANDARD, IMO_INTACT, IMOIntactCriteria
from .results import CriteriaResult, CriterionResult, StabilityCurve, StabilityPoint

logger = logging.getLogger(__name__)


UNIT_M_RAD = "m·rad"
UNIT_DEG = "degrees"
UNIT_M = "m"


def _meets(actual: float, required: float) -> bool:
    """actual ≥ required, with floating-point rounding at the threshold."""
    return actual >= required or math.isclose(
        actual, required, rel_tol=CRITERIA_RELATIVE_TOLERANCE
    )


class StabilityCriteriaChecker:
    """Checks a StabilityCurve against fixed intact stability criteria."""

    def __init__(self, criteria: IMOIntactCriteria = IMO_INTACT):
        self.criteria = criteria

    def check(self, curve: StabilityCurve) -> CriteriaResult:
        """Evaluate all six criteria; all_passed is their logical AND."""
        c = self.criteria
        points = curve.points
        results: List[CriterionResult] = []

        for start, end, required in (
            (0.0, 30.0, c.area_0_30_min_m_rad),
            (0.0, 40.0, c.area_0_40_min_m_rad),
            (30.0, 40.0, c.area_30_40_min_m_rad),
        ):
            area = self.calculate_area_under_curve(points, start, end)
            results.append(CriterionResult(
                name=f"Area under GZ curve ({start:g}° to {end:g}°)",
                required=required,
                actual=area,
                unit=UNIT_M_RAD,
                passed=_meets(area, required),
                notes=f"Equivalent to {area * RAD_TO_DEG:.3f} m·deg",
            ))

        max_gz, angle_at_max = self.find_max_gz(points)
        results.append(CriterionResult(
            name="Angle at maximum GZ",
            required=c.angle_gz_max_min_deg,
            actual=angle_at_max,
            unit=UNIT_DEG,
            passed=_meets(angle_at_max, c.angle_gz_max_min_deg),
            notes=f"Maximum GZ = {max_gz:.3f} m",
        ))

        results.append(CriterionResult(
            name="Initial metacentric height (GMt)",
            required=c.gm_min_m,
            actual=curve.initial_gmt,
            unit=UNIT_M,
            passed=_meets(curve.initial_gmt, c.gm_min_m),
        ))

        gz_30 = self.interpolate_gz(points, 30.0)
        results.append(CriterionResult(
            name="Righting arm at 30° heel",
            required=c.gz_30_min_m,
            actual=gz_30,
            unit=UNIT_M,
            passed=_meets(gz_30, c.gz_30_min_m),
        ))

        passed_count = sum(1 for r in results if r.passed)
        total = len(results)
        all_passed = passed_count == total

        if all_passed:
            summary = f"All {total} {CRITERIA_STANDARD} intact stability criteria satisfied."
        else:
            summary = (
                f"Warning: {total - passed_count} of {total} criteria not satisfied. "
                "Vessel may not meet intact stability requirements."
            )

        logger.info(f"Stability criteria check completed: {passed_count}/{total} passed")

        return CriteriaResult(
            all_passed=all_passed,
            criteria=results,
            standard=CRITERIA_STANDARD,
            summary=summary,
        )

    # =========================================================================
    # CURVE HELPERS
    # =========================================================================

    def calculate_area_under_curve(
        self,
        points: Sequence[StabilityPoint],
        from_angle: float,
        to_angle: float,
    ) -> float:
        """
        Area under the GZ curve between two heel angles (m·rad).

        Trapezoidal over the sampled points inside [from_angle, to_angle],
        with interpolated points added at each bound that falls strictly
        between samples. Bounds outside the sampled range are not extended.
        """
        if not points or len(points) < 2 or to_angle <= from_angle:
            return 0.0

        ordered = sorted(points, key=lambda p: p.heel_angle)
        lo = ordered[0].heel_angle
        hi = ordered[-1].heel_angle

        samples = [
            (p.heel_angle, p.gz) for p in ordered if from_angle <= p.heel_angle <= to_angle
        ]
        sampled_angles = {a for a, _ in samples}

        if lo < from_angle < hi and from_angle not in sampled_angles:
            samples.append((from_angle, self.interpolate_gz(ordered, from_angle)))
        if lo < to_angle < hi and to_angle not in sampled_angles:
            samples.append((to_angle, self.interpolate_gz(ordered, to_angle)))

        samples.sort(key=lambda s: s[0])
        if len(samples) < 2:
            return 0.0

        area = 0.0
        for (a1, gz1), (a2, gz2) in zip(samples, samples[1:]):
            area += 0.5 * (gz1 + gz2) * math.radians(a2 - a1)
        return area

    def find_max_gz(self, points: Sequence[StabilityPoint]) -> Tuple[float, float]:
        """(max GZ, heel angle) of the sampled point with the largest GZ."""
        if not points:
            return 0.0, 0.0
        max_point = max(points, key=lambda p: p.gz)
        return max_point.gz, max_point.heel_angle

    def interpolate_gz(self, points: Sequence[StabilityPoint], angle: float) -> float:
        """
        Linear interpolation of GZ at a heel angle.

        Outside the sampled range the first or last GZ is returned.
        """
        if not points:
            return 0.0

        ordered = sorted(points, key=lambda p: p.heel_angle)

        if angle <= ordered[0].heel_angle:
            return ordered[0].gz
        if angle >= ordered[-1].heel_angle:
            return ordered[-1].gz

        for lower, upper in zip(ordered, ordered[1:]):
            if angle == lower.heel_angle:
                return lower.gz
            if lower.heel_angle < angle < upper.heel_angle:
                t = (angle - lower.heel_angle) / (upper.heel_angle - lower.heel_angle)
                return lower.gz + t * (upper.gz - lower.gz)
            if angle == upper.heel_angle:
                return upper.gz

        return 0.0
