"""
stability/results.py - Result dataclasses for stability calculations
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import CRITERIA_STANDARD


# =============================================================================
# GZ CURVE
# =============================================================================

@dataclass(frozen=True)
class StabilityPoint:
    """Righting arm and cross curve value at one heel angle."""
    heel_angle: float  # degrees
    gz: float  # m
    kn: float  # m, GZ + KG·sin φ
    gm_at_angle: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heel_angle": round(self.heel_angle, 2),
            "gz": round(self.gz, 4),
            "kn": round(self.kn, 4),
            "gm_at_angle": self.gm_at_angle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StabilityPoint":
        return cls(
            heel_angle=data.get("heel_angle", 0.0),
            gz=data.get("gz", 0.0),
            kn=data.get("kn", 0.0),
            gm_at_angle=data.get("gm_at_angle"),
        )


@dataclass(frozen=True)
class StabilityCurve:
    """
    GZ curve over a heel range.

    Points are ordered by heel angle. max_gz/angle_at_max_gz refer to the
    sampled point with the largest GZ.
    """
    method: str
    displacement: float  # kg
    kg: float  # m
    initial_gmt: float  # m
    draft: float  # m
    points: List[StabilityPoint] = field(default_factory=list)
    max_gz: float = 0.0
    angle_at_max_gz: float = 0.0
    computation_time_ms: int = 0

    @property
    def angles(self) -> List[float]:
        return [p.heel_angle for p in self.points]

    @property
    def gz_values(self) -> List[float]:
        return [p.gz for p in self.points]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "displacement": round(self.displacement, 1),
            "kg": round(self.kg, 4),
            "initial_gmt": round(self.initial_gmt, 4),
            "draft": round(self.draft, 4),
            "points": [p.to_dict() for p in self.points],
            "max_gz": round(self.max_gz, 4),
            "angle_at_max_gz": round(self.angle_at_max_gz, 2),
            "computation_time_ms": self.computation_time_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StabilityCurve":
        return cls(
            method=data.get("method", ""),
            displacement=data.get("displacement", 0.0),
            kg=data.get("kg", 0.0),
            initial_gmt=data.get("initial_gmt", 0.0),
            draft=data.get("draft", 0.0),
            points=[StabilityPoint.from_dict(p) for p in data.get("points", [])],
            max_gz=data.get("max_gz", 0.0),
            angle_at_max_gz=data.get("angle_at_max_gz", 0.0),
            computation_time_ms=data.get("computation_time_ms", 0),
        )


# =============================================================================
# CRITERIA
# =============================================================================

@dataclass(frozen=True)
class CriterionResult:
    """One regulatory criterion evaluated against a GZ curve."""
    name: str
    required: float
    actual: float
    unit: str
    passed: bool
    notes: Optional[str] = None

    @property
    def margin(self) -> float:
        return self.actual - self.required

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "required": self.required,
            "actual": round(self.actual, 4),
            "unit": self.unit,
            "passed": self.passed,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CriterionResult":
        return cls(
            name=data.get("name", ""),
            required=data.get("required", 0.0),
            actual=data.get("actual", 0.0),
            unit=data.get("unit", ""),
            passed=data.get("passed", False),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class CriteriaResult:
    """All intact stability criteria for one curve."""
    all_passed: bool
    criteria: List[CriterionResult] = field(default_factory=list)
    standard: str = CRITERIA_STANDARD
    summary: str = ""

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.criteria if c.passed)

    @property
    def failed(self) -> List[CriterionResult]:
        return [c for c in self.criteria if not c.passed]

    def get(self, name: str) -> Optional[CriterionResult]:
        for criterion in self.criteria:
            if criterion.name == name:
                return criterion
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "all_passed": self.all_passed,
            "criteria": [c.to_dict() for c in self.criteria],
            "standard": self.standard,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CriteriaResult":
        return cls(
            all_passed=data.get("all_passed", False),
            criteria=[CriterionResult.from_dict(c) for c in data.get("criteria", [])],
            standard=data.get("standard", CRITERIA_STANDARD),
            summary=data.get("summary", ""),
        )


# =============================================================================
# METHOD DESCRIPTORS
# =============================================================================

@dataclass(frozen=True)
class StabilityMethodInfo:
    """Describes one available GZ computation method."""
    id: str
    name: str
    description: str
    max_recommended_angle: float  # degrees
    computation_speed: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "max_recommended_angle": self.max_recommended_angle,
            "computation_speed": self.computation_speed,
        }
