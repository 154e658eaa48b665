"""
physics/integration.py - Numerical integration over sampled data

Definite integrals and first/second moments over parallel x/y samples.
integrate() picks the quadrature rule from the sample layout:

    equally spaced, odd count   -> Simpson's 1/3 rule
    equally spaced, even count  -> Simpson on n-1 points + trapezoid tail
    irregular spacing           -> trapezoidal rule

Moments are always trapezoidal. Every method is a pure function of its
inputs, so one engine can be shared between threads.
"""

from __future__ import annotations
from typing import Sequence
import logging

import numpy as np

from hydrocalc.core.constants import SPACING_TOLERANCE_M
from hydrocalc.errors import ErrorCode, InvalidInputError

logger = logging.getLogger(__name__)


RULE_SIMPSON = "simpson"
RULE_COMPOSITE_SIMPSON = "composite_simpson"
RULE_TRAPEZOIDAL = "trapezoidal"
RULE_NONE = "none"


def _as_arrays(x: Sequence[float], y: Sequence[float]):
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    if xa.shape != ya.shape:
        raise InvalidInputError(
            f"X and Y arrays must have the same length ({xa.size} != {ya.size})",
            code=ErrorCode.INP_LENGTH_MISMATCH,
        )
    return xa, ya


class IntegrationEngine:
    """
    Quadrature primitive for hydrostatic integrals.

    Args:
        spacing_tolerance: Largest difference between adjacent spacings
            still treated as equal spacing (m)
    """

    def __init__(self, spacing_tolerance: float = SPACING_TOLERANCE_M):
        self.spacing_tolerance = spacing_tolerance

    # =========================================================================
    # RULES
    # =========================================================================

    def trapezoidal(self, x: Sequence[float], y: Sequence[float]) -> float:
        """Σ ½·(y[i] + y[i+1])·(x[i+1] - x[i]); x must be non-decreasing."""
        xa, ya = _as_arrays(x, y)
        if xa.size < 2:
            raise InvalidInputError(
                "At least 2 points required for trapezoidal rule",
                code=ErrorCode.INP_INVALID,
            )

        dx = np.diff(xa)
        if np.any(dx < 0):
            raise InvalidInputError(
                "X values must be monotonically increasing",
                code=ErrorCode.INP_SPACING,
            )

        return float(np.sum(dx * (ya[:-1] + ya[1:]) / 2.0))

    def simpsons(self, x: Sequence[float], y: Sequence[float]) -> float:
        """
        Simpson's 1/3 rule.

        ∫f dx ≈ (h/3)·[f0 + 4f1 + 2f2 + 4f3 + ... + 4f(n-1) + fn]

        Requires an odd number of points (at least 3) at equal spacing.
        """
        xa, ya = _as_arrays(x, y)
        n = xa.size
        if n < 3:
            raise InvalidInputError(
                "At least 3 points required for Simpson's rule",
                code=ErrorCode.INP_INVALID,
            )
        if n % 2 == 0:
            raise InvalidInputError(
                "Simpson's rule requires an odd number of points",
                code=ErrorCode.INP_INVALID,
            )
        if not self.is_equally_spaced(xa):
            raise InvalidInputError(
                "Simpson's rule requires equally spaced points",
                code=ErrorCode.INP_SPACING,
            )

        h = xa[1] - xa[0]
        weights = np.ones(n)
        weights[1:-1:2] = 4.0
        weights[2:-1:2] = 2.0

        return float(h / 3.0 * np.dot(weights, ya))

    def composite_simpson(self, x: Sequence[float], y: Sequence[float]) -> float:
        """
        Simpson's rule for any count of 3 or more equally spaced points.

        Even counts integrate the first n-1 points with Simpson and add a
        trapezoid for the last interval.
        """
        xa, ya = _as_arrays(x, y)
        n = xa.size
        if n < 3:
            raise InvalidInputError(
                "At least 3 points required for composite Simpson's rule",
                code=ErrorCode.INP_INVALID,
            )

        if n % 2 == 1:
            return self.simpsons(xa, ya)

        head = self.simpsons(xa[:-1], ya[:-1])
        tail = (xa[-1] - xa[-2]) * (ya[-1] + ya[-2]) / 2.0
        return float(head + tail)

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def select_rule(self, x: Sequence[float]) -> str:
        """Name of the rule integrate() applies to this abscissa."""
        n = len(x)
        if n < 2:
            return RULE_NONE
        if n >= 3 and self.is_equally_spaced(x):
            return RULE_SIMPSON if n % 2 == 1 else RULE_COMPOSITE_SIMPSON
        return RULE_TRAPEZOIDAL

    def integrate(self, x: Sequence[float], y: Sequence[float]) -> float:
        """Definite integral ∫y dx with the rule chosen by select_rule()."""
        xa, ya = _as_arrays(x, y)
        rule = self.select_rule(xa)

        if rule == RULE_NONE:
            return 0.0
        if rule == RULE_SIMPSON:
            logger.debug(f"Using Simpson's rule ({xa.size} points)")
            return self.simpsons(xa, ya)
        if rule == RULE_COMPOSITE_SIMPSON:
            logger.debug(f"Using composite Simpson's rule ({xa.size} points)")
            return self.composite_simpson(xa, ya)

        logger.debug(f"Using trapezoidal rule ({xa.size} points)")
        return self.trapezoidal(xa, ya)

    # =========================================================================
    # MOMENTS
    # =========================================================================

    def first_moment(self, x: Sequence[float], y: Sequence[float]) -> float:
        """∫ x·y dx, trapezoidal."""
        xa, ya = _as_arrays(x, y)
        if xa.size < 2:
            return 0.0
        xy = xa * ya
        return float(np.sum(np.diff(xa) * (xy[:-1] + xy[1:]) / 2.0))

    def second_moment(self, x: Sequence[float], y: Sequence[float]) -> float:
        """∫ x²·y dx, trapezoidal."""
        xa, ya = _as_arrays(x, y)
        if xa.size < 2:
            return 0.0
        x2y = xa * xa * ya
        return float(np.sum(np.diff(xa) * (x2y[:-1] + x2y[1:]) / 2.0))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def is_equally_spaced(self, x: Sequence[float]) -> bool:
        """True when every spacing is within tolerance of the first one."""
        xa = np.asarray(x, dtype=float)
        if xa.size < 2:
            return True
        dx = np.diff(xa)
        return bool(np.all(np.abs(dx - dx[0]) <= self.spacing_tolerance))
