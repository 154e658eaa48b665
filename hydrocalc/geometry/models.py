"""
geometry/models.py - Inbound hull geometry and loading models

Immutable snapshots handed to the calculators by collaborators. Field
constraints cover single values only; structural completeness (non-empty
stations, waterlines, offsets) is checked by the calculators so that it
surfaces as InvalidGeometryError.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hydrocalc.core.constants import SEAWATER_DENSITY_KG_M3


class Station(BaseModel):
    """Transverse cut at a fixed longitudinal position."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Station index, 0..N-1")
    x: float = Field(..., description="Longitudinal position (m)")


class Waterline(BaseModel):
    """Horizontal cut at a fixed height above the keel."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Waterline index, 0..M-1")
    z: float = Field(..., description="Height above keel (m)")


class Offset(BaseModel):
    """Half-breadth sample at one station/waterline intersection."""

    model_config = ConfigDict(frozen=True)

    station_index: int = Field(..., ge=0)
    waterline_index: int = Field(..., ge=0)
    half_breadth: float = Field(..., ge=0.0, description="Distance from centerline (m)")


class HullGeometry(BaseModel):
    """Station/waterline/offset grid plus principal dimensions."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    lpp: float = Field(..., ge=0.0, description="Length between perpendiculars (m)")
    beam: float = Field(..., ge=0.0, description="Moulded beam (m)")
    design_draft: Optional[float] = Field(None, gt=0.0, description="Design draft (m)")
    stations: List[Station] = Field(default_factory=list)
    waterlines: List[Waterline] = Field(default_factory=list)
    offsets: List[Offset] = Field(default_factory=list)

    @property
    def resolved_design_draft(self) -> float:
        """Design draft, falling back to the highest waterline."""
        if self.design_draft is not None:
            return self.design_draft
        if self.waterlines:
            return max(w.z for w in self.waterlines)
        return 0.0

    @property
    def is_complete(self) -> bool:
        """True when every station/waterline pair has an offset."""
        return len(self.offsets) == len(self.stations) * len(self.waterlines)


class LoadingCondition(BaseModel):
    """Water density and vertical centre of gravity for one loadcase."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    rho: float = Field(SEAWATER_DENSITY_KG_M3, gt=0.0, description="Water density (kg/m³)")
    kg: Optional[float] = Field(None, description="Vertical centre of gravity above keel (m)")


class StabilityRequest(BaseModel):
    """Heel-angle sweep for a GZ curve. Range checks happen in the calculator."""

    model_config = ConfigDict(frozen=True)

    min_angle: float = Field(0.0, description="Minimum heel angle (deg)")
    max_angle: float = Field(90.0, description="Maximum heel angle (deg)")
    angle_increment: float = Field(1.0, description="Heel step (deg)")
    method: str = Field("WallSided", description="WallSided or FullImmersion")
    draft: Optional[float] = Field(None, description="Draft (m); design draft when absent")
