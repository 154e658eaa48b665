"""
geometry/grid.py - Dense offset grid built once per calculation

Turns the station/waterline/offset lists of a HullGeometry into ordered
coordinate arrays and an N×M half-breadth matrix. Missing intersections
read as zero half-breadth.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from hydrocalc.core.constants import WATERLINE_MATCH_TOLERANCE_M
from hydrocalc.errors import ErrorCode, InvalidGeometryError
from .models import HullGeometry


@dataclass(frozen=True, eq=False)
class OffsetGrid:
    """Ordered station positions, waterline heights, and half-breadths."""

    lpp: float
    beam: float
    design_draft: float
    station_indices: Tuple[int, ...]
    x: np.ndarray  # (N,) station positions
    z: np.ndarray  # (M,) waterline heights
    y: np.ndarray  # (N, M) half-breadths

    @classmethod
    def from_geometry(cls, geometry: HullGeometry) -> "OffsetGrid":
        """
        Build the grid, raising InvalidGeometryError for empty geometry.

        Stations and waterlines are ordered by index.
        """
        if not geometry.stations:
            raise InvalidGeometryError(
                "Vessel geometry is incomplete: no stations",
                code=ErrorCode.GEO_NO_STATIONS,
            )
        if not geometry.waterlines:
            raise InvalidGeometryError(
                "Vessel geometry is incomplete: no waterlines",
                code=ErrorCode.GEO_NO_WATERLINES,
            )
        if not geometry.offsets:
            raise InvalidGeometryError(
                "Vessel geometry is incomplete: no offsets",
                code=ErrorCode.GEO_NO_OFFSETS,
            )

        stations = sorted(geometry.stations, key=lambda s: s.index)
        waterlines = sorted(geometry.waterlines, key=lambda w: w.index)

        lookup: Dict[Tuple[int, int], float] = {
            (o.station_index, o.waterline_index): o.half_breadth
            for o in geometry.offsets
        }

        y = np.zeros((len(stations), len(waterlines)), dtype=float)
        for i, station in enumerate(stations):
            for j, waterline in enumerate(waterlines):
                y[i, j] = lookup.get((station.index, waterline.index), 0.0)

        return cls(
            lpp=float(geometry.lpp),
            beam=float(geometry.beam),
            design_draft=float(geometry.resolved_design_draft),
            station_indices=tuple(s.index for s in stations),
            x=np.array([s.x for s in stations], dtype=float),
            z=np.array([w.z for w in waterlines], dtype=float),
            y=y,
        )

    @property
    def station_count(self) -> int:
        return len(self.x)

    @property
    def waterline_count(self) -> int:
        return len(self.z)

    def active_count(self, draft: float) -> int:
        """Number of waterlines at or below the draft."""
        return int(np.count_nonzero(self.z <= draft))

    def half_breadth_at(
        self,
        station: int,
        draft: float,
        tolerance: float = WATERLINE_MATCH_TOLERANCE_M,
    ) -> float:
        """
        Half-breadth of one station at an arbitrary height.

        Uses the waterline value when the height coincides with a waterline,
        interpolates linearly between bracketing waterlines, and falls back
        to the nearest waterline when only one side exists.
        """
        z = self.z
        row = self.y[station]

        below = np.nonzero(z <= draft + tolerance)[0]
        above = np.nonzero(z >= draft - tolerance)[0]
        j_below = int(below[np.argmax(z[below])]) if below.size else None
        j_above = int(above[np.argmin(z[above])]) if above.size else None

        if j_below is not None and abs(z[j_below] - draft) < tolerance:
            return float(row[j_below])
        if j_above is not None and abs(z[j_above] - draft) < tolerance:
            return float(row[j_above])

        if j_below is None and j_above is not None:
            return float(row[j_above])
        if j_above is None and j_below is not None:
            return float(row[j_below])

        if j_below is not None and j_above is not None and abs(z[j_above] - z[j_below]) > tolerance:
            fraction = (draft - z[j_below]) / (z[j_above] - z[j_below])
            return float(row[j_below] + fraction * (row[j_above] - row[j_below]))

        return 0.0
