"""
stability/heeled_sections.py - Heeled station sections and buoyancy

Each station is represented by two closed half-section polygons (starboard
and port), each running centreline -> offsets -> centreline at the top
waterline. For a heel angle φ (positive = starboard down) the polygons are
rotated into the earth frame:

    y' = y·cos φ + z·sin φ
    z' = z·cos φ - y·sin φ

and clipped independently against the water plane z' = h. Area and first
moments of the clipped polygons come from the shoelace formula, so the
centre of buoyancy is a true first-moment result rather than an estimate.
The water-plane height h is found by bisection so that the heeled volume
matches a target (the upright volume at the same draft).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging
import math

from hydrocalc.geometry.grid import OffsetGrid
from hydrocalc.physics.integration import IntegrationEngine

logger = logging.getLogger(__name__)

Point = Tuple[float, float]  # (y, z)


# =============================================================================
# POLYGON PRIMITIVES
# =============================================================================

@dataclass(frozen=True)
class SectionProperties:
    """Immersed area of a section and its first moments in the earth frame."""
    area: float = 0.0
    moment_y: float = 0.0  # ∫ y' dA
    moment_z: float = 0.0  # ∫ z' dA

    def __add__(self, other: "SectionProperties") -> "SectionProperties":
        return SectionProperties(
            area=self.area + other.area,
            moment_y=self.moment_y + other.moment_y,
            moment_z=self.moment_z + other.moment_z,
        )


def half_section_polygon(z: Sequence[float], half_breadths: Sequence[float], side: int) -> List[Point]:
    """
    Closed polygon of one half-section in body coordinates.

    side is +1 for starboard, -1 for port.
    """
    outline = [(side * float(y), float(zz)) for zz, y in zip(z, half_breadths)]
    return [(0.0, float(z[0]))] + outline + [(0.0, float(z[-1]))]


def rotate(points: Sequence[Point], heel_rad: float) -> List[Point]:
    """Body frame -> earth frame for a heel of heel_rad (starboard down)."""
    c = math.cos(heel_rad)
    s = math.sin(heel_rad)
    return [(y * c + z * s, z * c - y * s) for y, z in points]


def clip_below(points: Sequence[Point], h: float) -> List[Point]:
    """Sutherland-Hodgman clip of a closed polygon to the half-plane z <= h."""
    if not points:
        return []

    clipped: List[Point] = []
    prev = points[-1]
    prev_inside = prev[1] <= h

    for curr in points:
        curr_inside = curr[1] <= h
        if curr_inside != prev_inside:
            t = (h - prev[1]) / (curr[1] - prev[1])
            clipped.append((prev[0] + t * (curr[0] - prev[0]), h))
        if curr_inside:
            clipped.append(curr)
        prev, prev_inside = curr, curr_inside

    return clipped


def polygon_properties(points: Sequence[Point]) -> SectionProperties:
    """
    Area and first moments of a simple polygon (shoelace formula).

    Orientation does not matter; the result always has non-negative area.
    """
    n = len(points)
    if n < 3:
        return SectionProperties()

    area2 = 0.0
    my6 = 0.0
    mz6 = 0.0
    for i in range(n):
        y0, z0 = points[i]
        y1, z1 = points[(i + 1) % n]
        cross = y0 * z1 - y1 * z0
        area2 += cross
        my6 += (y0 + y1) * cross
        mz6 += (z0 + z1) * cross

    sign = -1.0 if area2 < 0 else 1.0
    return SectionProperties(
        area=sign * area2 / 2.0,
        moment_y=sign * my6 / 6.0,
        moment_z=sign * mz6 / 6.0,
    )


# =============================================================================
# HEELED HULL
# =============================================================================

@dataclass(frozen=True)
class HeeledBuoyancy:
    """Immersed volume and centre of buoyancy at one heel angle."""
    heel_deg: float
    waterplane_height: float  # h in the earth frame (m above keel origin)
    volume: float
    by: float  # transverse position of B, earth frame (m)
    bz: float  # vertical position of B, earth frame (m)
    iterations: int = 0
    converged: bool = True


class HeeledHull:
    """
    Station polygons of a hull rotated to a fixed heel angle.

    The rotation is done once; immersed properties can then be evaluated
    for any water-plane height.
    """

    def __init__(
        self,
        grid: OffsetGrid,
        heel_deg: float,
        engine: Optional[IntegrationEngine] = None,
    ):
        self.heel_deg = heel_deg
        self.x = grid.x
        self.engine = engine or IntegrationEngine()

        heel_rad = math.radians(heel_deg)
        self._polygons: List[Tuple[List[Point], List[Point]]] = []
        for i in range(grid.station_count):
            row = grid.y[i]
            starboard = rotate(half_section_polygon(grid.z, row, +1), heel_rad)
            port = rotate(half_section_polygon(grid.z, row, -1), heel_rad)
            self._polygons.append((starboard, port))

        all_z = [z for pair in self._polygons for poly in pair for _, z in poly]
        self.z_min = min(all_z)
        self.z_max = max(all_z)

    def section_properties(self, h: float) -> List[SectionProperties]:
        """Immersed properties of every station below z' = h."""
        return [
            polygon_properties(clip_below(starboard, h)) + polygon_properties(clip_below(port, h))
            for starboard, port in self._polygons
        ]

    def volume(self, h: float) -> float:
        areas = [p.area for p in self.section_properties(h)]
        return self.engine.integrate(self.x, areas)

    def buoyancy(self, h: float) -> HeeledBuoyancy:
        """Volume and centre of buoyancy below z' = h."""
        props = self.section_properties(h)
        volume = self.engine.integrate(self.x, [p.area for p in props])
        if volume <= 0:
            return HeeledBuoyancy(self.heel_deg, h, 0.0, 0.0, 0.0)

        by = self.engine.integrate(self.x, [p.moment_y for p in props]) / volume
        bz = self.engine.integrate(self.x, [p.moment_z for p in props]) / volume
        return HeeledBuoyancy(self.heel_deg, h, volume, by, bz)

    def find_waterplane(
        self,
        target_volume: float,
        tolerance: float = 1e-7,
        max_iterations: int = 100,
    ) -> HeeledBuoyancy:
        """
        Bisect the water-plane height until the immersed volume matches.

        tolerance is relative to target_volume. When the iteration limit is
        reached the last midpoint is returned with converged=False.
        """
        lo, hi = self.z_min, self.z_max
        if target_volume <= 0:
            return HeeledBuoyancy(self.heel_deg, lo, 0.0, 0.0, 0.0)

        full_volume = self.volume(hi)
        if target_volume >= full_volume:
            logger.debug(
                f"Heel {self.heel_deg}°: target volume {target_volume:.3f}m³ "
                f"exceeds enclosed volume {full_volume:.3f}m³; section fully immersed"
            )
            return self.buoyancy(hi)

        abs_tol = tolerance * target_volume
        h = 0.5 * (lo + hi)
        for iteration in range(1, max_iterations + 1):
            h = 0.5 * (lo + hi)
            error = self.volume(h) - target_volume
            if abs(error) <= abs_tol:
                result = self.buoyancy(h)
                return HeeledBuoyancy(
                    result.heel_deg, h, result.volume, result.by, result.bz,
                    iterations=iteration, converged=True,
                )
            if error < 0:
                lo = h
            else:
                hi = h

        logger.warning(
            f"Heel {self.heel_deg}°: water plane not converged after {max_iterations} iterations"
        )
        result = self.buoyancy(h)
        return HeeledBuoyancy(
            result.heel_deg, h, result.volume, result.by, result.bz,
            iterations=max_iterations, converged=False,
        )


def upright_volume(grid: OffsetGrid, draft: float, engine: Optional[IntegrationEngine] = None) -> float:
    """Volume enclosed by the section polygons below the draft, no heel."""
    return HeeledHull(grid, 0.0, engine).volume(draft)
