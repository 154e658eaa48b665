"""
Unit tests for hydrocalc/physics/integration.py

Tests IntegrationEngine rules, rule selection and moments.
"""

import pytest
import numpy as np

from hydrocalc.errors import ErrorCode, InvalidInputError
from hydrocalc.physics.integration import (
    IntegrationEngine,
    RULE_SIMPSON,
    RULE_COMPOSITE_SIMPSON,
    RULE_TRAPEZOIDAL,
    RULE_NONE,
)


class TestTrapezoidal:
    """Test trapezoidal rule."""

    def setup_method(self):
        self.engine = IntegrationEngine()

    def test_linear_function_exact(self):
        """Trapezoidal rule is exact for y = 2x + 1 on [0, 4]."""
        x = [0.0, 1.0, 2.0, 3.0, 4.0]
        y = [2 * xi + 1 for xi in x]
        assert abs(self.engine.trapezoidal(x, y) - 20.0) < 1e-12

    def test_irregular_spacing(self):
        """Irregular abscissae are fine for the trapezoidal rule."""
        x = [0.0, 0.5, 2.0, 3.0]
        y = [1.0, 1.0, 1.0, 1.0]
        assert abs(self.engine.trapezoidal(x, y) - 3.0) < 1e-12

    def test_single_point_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.trapezoidal([1.0], [1.0])

    def test_length_mismatch_raises(self):
        with pytest.raises(InvalidInputError) as exc_info:
            self.engine.trapezoidal([0.0, 1.0, 2.0], [1.0, 2.0])
        assert exc_info.value.code == ErrorCode.INP_LENGTH_MISMATCH

    def test_decreasing_x_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.trapezoidal([2.0, 1.0, 0.0], [1.0, 1.0, 1.0])


class TestSimpsons:
    """Test Simpson's 1/3 rule."""

    def setup_method(self):
        self.engine = IntegrationEngine()

    def test_cubic_exact(self):
        """Simpson is exact for cubics: ∫₀² x³ dx = 4."""
        x = np.linspace(0.0, 2.0, 5)
        y = x ** 3
        assert abs(self.engine.simpsons(x, y) - 4.0) < 1e-12

    def test_sine_accuracy(self):
        """∫₀^π sin x dx = 2 to within 1e-6 with 101 points."""
        x = np.linspace(0.0, np.pi, 101)
        assert abs(self.engine.simpsons(x, np.sin(x)) - 2.0) < 1e-6

    def test_even_count_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.simpsons([0.0, 1.0, 2.0, 3.0], [1.0, 1.0, 1.0, 1.0])

    def test_too_few_points_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.simpsons([0.0, 1.0], [1.0, 1.0])

    def test_unequal_spacing_raises(self):
        with pytest.raises(InvalidInputError) as exc_info:
            self.engine.simpsons([0.0, 1.0, 3.0], [1.0, 1.0, 1.0])
        assert exc_info.value.code == ErrorCode.INP_SPACING


class TestCompositeSimpson:
    """Test composite Simpson's rule."""

    def setup_method(self):
        self.engine = IntegrationEngine()

    def test_odd_count_matches_simpson(self):
        x = np.linspace(0.0, 1.0, 7)
        y = np.exp(x)
        assert self.engine.composite_simpson(x, y) == pytest.approx(self.engine.simpsons(x, y))

    def test_even_count_adds_trapezoid_tail(self):
        """Simpson on the first n-1 points plus a trapezoid for the last interval."""
        x = [0.0, 1.0, 2.0, 3.0]
        y = [0.0, 1.0, 4.0, 9.0]
        expected = (1.0 / 3.0) * (0.0 + 4.0 * 1.0 + 4.0) + 0.5 * (4.0 + 9.0)
        assert abs(self.engine.composite_simpson(x, y) - expected) < 1e-12

    def test_too_few_points_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.composite_simpson([0.0, 1.0], [1.0, 1.0])


class TestRuleSelection:
    """Test automatic rule selection."""

    def setup_method(self):
        self.engine = IntegrationEngine()

    def test_odd_equal_spacing_selects_simpson(self):
        assert self.engine.select_rule([0.0, 1.0, 2.0]) == RULE_SIMPSON

    def test_even_equal_spacing_selects_composite(self):
        assert self.engine.select_rule([0.0, 1.0, 2.0, 3.0]) == RULE_COMPOSITE_SIMPSON

    def test_irregular_spacing_selects_trapezoidal(self):
        assert self.engine.select_rule([0.0, 1.0, 3.0]) == RULE_TRAPEZOIDAL

    def test_two_points_selects_trapezoidal(self):
        assert self.engine.select_rule([0.0, 1.0]) == RULE_TRAPEZOIDAL

    def test_single_point_selects_none(self):
        assert self.engine.select_rule([1.0]) == RULE_NONE

    def test_single_point_integrates_to_zero(self):
        assert self.engine.integrate([1.0], [5.0]) == 0.0

    def test_spacing_within_tolerance_is_equal(self):
        """Spacing jitter below 1 mm still counts as equally spaced."""
        x = [0.0, 1.0, 2.0005, 3.0]
        assert self.engine.is_equally_spaced(x)
        assert not self.engine.is_equally_spaced([0.0, 1.0, 2.01, 3.0])

    def test_custom_tolerance(self):
        engine = IntegrationEngine(spacing_tolerance=0.1)
        assert engine.is_equally_spaced([0.0, 1.0, 2.05, 3.0])

    def test_integrate_irregular_uses_trapezoid(self):
        x = [0.0, 1.0, 3.0]
        y = [0.0, 1.0, 3.0]
        assert abs(self.engine.integrate(x, y) - 4.5) < 1e-12

    def test_integrate_length_mismatch_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.integrate([0.0, 1.0, 2.0], [0.0, 1.0])


class TestMoments:
    """Test first and second moments."""

    def setup_method(self):
        self.engine = IntegrationEngine()

    def test_first_moment_of_constant(self):
        """∫₀⁴ x·1 dx = 8, exact with trapezoids."""
        x = [0.0, 1.0, 2.0, 3.0, 4.0]
        y = [1.0] * 5
        assert abs(self.engine.first_moment(x, y) - 8.0) < 1e-12

    def test_second_moment_converges(self):
        """∫₀¹ x² dx = 1/3 approached with fine sampling."""
        x = np.linspace(0.0, 1.0, 1001)
        y = np.ones_like(x)
        assert abs(self.engine.second_moment(x, y) - 1.0 / 3.0) < 1e-6

    def test_moments_of_single_point_are_zero(self):
        assert self.engine.first_moment([2.0], [3.0]) == 0.0
        assert self.engine.second_moment([2.0], [3.0]) == 0.0

    def test_moment_length_mismatch_raises(self):
        with pytest.raises(InvalidInputError):
            self.engine.first_moment([0.0, 1.0], [1.0])


class TestConstantIntegrand:
    """A constant integrates to c·(x_last - x_first) on every rule path."""

    @pytest.mark.parametrize("x", [
        [0.0, 1.0, 2.0, 3.0, 4.0],
        [0.0, 1.0, 2.0, 3.0],
        [0.0, 0.5, 2.0, 3.5],
    ])
    def test_constant(self, x):
        engine = IntegrationEngine()
        y = [2.5] * len(x)
        assert abs(engine.integrate(x, y) - 2.5 * (x[-1] - x[0])) < 1e-12
