"""
Unit tests for hydrocalc/physics/hydrostatics.py

Tests HydrostaticCalculator against closed-form barge and Wigley values.
"""

import threading
import typing

import pytest

from hydrocalc.bootstrap.config import HydroConfig
from hydrocalc.errors import (
    CalculationCancelledError,
    ErrorCode,
    InvalidGeometryError,
    InvalidInputError,
)
from hydrocalc.geometry import (
    HullGeometry,
    LoadingCondition,
    Offset,
    Station,
    Waterline,
    generate_rectangular_barge,
    rectangular_barge_reference,
    wigley_hull_reference,
)
from hydrocalc.physics.hydrostatics import HydrostaticCalculator, HydrostaticResult


class TestRectangularBarge:
    """Barge 100 × 20 × 10 m: every property has a closed form."""

    def setup_method(self):
        self.calculator = HydrostaticCalculator()
        self.ref = rectangular_barge_reference(100.0, 20.0, 10.0)

    def test_displacement(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert abs(result.disp_volume - 20000.0) < 1e-6
        assert abs(result.disp_weight - 20000.0 * 1025.0) < 1e-3
        assert abs(result.displacement_t - 20500.0) < 1e-6

    def test_centres_of_buoyancy(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert abs(result.kb - 5.0) < 1e-9
        assert abs(result.lcb - 50.0) < 1e-9
        assert result.tcb == 0.0

    def test_waterplane(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert abs(result.awp - 2000.0) < 1e-6
        assert abs(result.iwp - self.ref.iwp_transverse) < 1e-6
        assert abs(result.bmt - self.ref.bmt) < 1e-9

    def test_form_coefficients_are_unity(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        for value in (result.cb, result.cp, result.cm, result.cwp):
            assert abs(value - 1.0) < 1e-9

    def test_tpc(self, barge, seawater):
        """TPC = ρ·Awp / 100 / 1000."""
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert abs(result.tpc - 20.5) < 1e-9

    def test_km_is_kb_plus_bm(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert abs(result.kmt - (result.kb + result.bmt)) < 1e-12
        assert abs(result.kml - (result.kb + result.bml)) < 1e-12

    def test_longitudinal_inertia_about_station_origin(self):
        """BMl = 2·∫x²y dx / V with x measured from the first station."""
        barge = generate_rectangular_barge(num_stations=101)
        result = self.calculator.compute_at_draft(barge, None, 10.0)
        expected_bml = 2.0 * 10.0 * 100.0 ** 3 / 3.0 / 20000.0
        assert abs(result.bml - expected_bml) / expected_bml < 0.001
        assert abs(result.iwp_l - result.bml * result.disp_volume) < 1e-6

    def test_longitudinal_inertia_about_lcf(self):
        """I_l about LCF = B·L³/12 once stations are fine enough for trapezoidal moments."""
        barge = generate_rectangular_barge(num_stations=101)
        result = self.calculator.compute_at_draft(barge, None, 10.0)
        expected = self.ref.iwp_longitudinal
        assert abs(result.iwp_l_lcf - expected) / expected < 0.001
        assert abs(result.iwp_l_lcf - (result.iwp_l - result.awp * 50.0 ** 2)) < 1e-3

    def test_partial_draft_uses_active_waterlines(self, barge):
        """Draft 7.5 m lies between waterlines 5 and 10; only 0 and 5 m are integrated."""
        result = self.calculator.compute_at_draft(barge, None, 7.5)
        assert abs(result.disp_volume - 100.0 * 20.0 * 5.0) < 1e-6
        assert abs(result.kb - 2.5) < 1e-9
        assert abs(result.awp - 2000.0) < 1e-6

    def test_partial_strip_when_enabled(self, barge):
        config = HydroConfig()
        config.hydrostatics.interpolate_partial_strip = True
        result = HydrostaticCalculator(config=config).compute_at_draft(barge, None, 7.5)
        assert abs(result.disp_volume - 100.0 * 20.0 * 7.5) < 1e-6
        assert abs(result.kb - 3.75) < 1e-9

    def test_partial_strip_stops_at_top_waterline(self, barge):
        config = HydroConfig()
        config.hydrostatics.interpolate_partial_strip = True
        result = HydrostaticCalculator(config=config).compute_at_draft(barge, None, 12.0)
        assert abs(result.disp_volume - 20000.0) < 1e-6

    def test_default_draft_is_design_draft(self, barge):
        result = self.calculator.compute_at_draft(barge)
        assert result.draft == 10.0

    def test_draft_annotation_is_optional(self):
        hints = typing.get_type_hints(HydrostaticCalculator.compute_at_draft)
        assert hints["draft"] == typing.Optional[float]

    def test_fresh_water(self, barge):
        loading = LoadingCondition(rho=1000.0)
        result = self.calculator.compute_at_draft(barge, loading, 10.0)
        assert abs(result.disp_weight - 20000.0 * 1000.0) < 1e-3


class TestMetacentricHeight:
    """Test GMt/GMl with and without KG."""

    def setup_method(self):
        self.calculator = HydrostaticCalculator()

    def test_gm_without_kg_is_none(self, barge, seawater):
        result = self.calculator.compute_at_draft(barge, seawater, 10.0)
        assert result.gmt is None
        assert result.gml is None

    def test_gm_without_loading_is_none(self, barge):
        result = self.calculator.compute_at_draft(barge, None, 10.0)
        assert result.gmt is None

    def test_gm_with_kg(self, barge, barge_loading):
        """GMt = KB + BMt - KG = 5 + 3.333 - 5."""
        result = self.calculator.compute_at_draft(barge, barge_loading, 10.0)
        assert abs(result.gmt - (5.0 + 400.0 / 120.0 - 5.0)) < 1e-9
        assert abs(result.gml - (result.kml - 5.0)) < 1e-9


class TestWigleyHull:
    """Wigley hull against exact parabolic-hull values."""

    def setup_method(self):
        self.calculator = HydrostaticCalculator()
        self.ref = wigley_hull_reference(100.0, 10.0, 6.25)

    def _relative(self, actual, expected):
        return abs(actual - expected) / abs(expected)

    def test_volume_and_block_coefficient(self, wigley):
        result = self.calculator.compute_at_draft(wigley, None, 6.25)
        assert self._relative(result.disp_volume, self.ref.volume) < 0.02
        assert self._relative(result.cb, 4.0 / 9.0) < 0.02

    def test_vertical_centre(self, wigley):
        result = self.calculator.compute_at_draft(wigley, None, 6.25)
        assert self._relative(result.kb, self.ref.kb) < 0.02

    def test_longitudinal_centre_amidships(self, wigley):
        """Trapezoidal moment over Simpson volume: within 0.5% of Lpp."""
        result = self.calculator.compute_at_draft(wigley, None, 6.25)
        assert abs(result.lcb - 50.0) < 0.5

    def test_waterplane_and_coefficients(self, wigley):
        result = self.calculator.compute_at_draft(wigley, None, 6.25)
        assert self._relative(result.awp, self.ref.awp) < 0.02
        assert self._relative(result.cwp, 2.0 / 3.0) < 0.02
        assert self._relative(result.cm, 2.0 / 3.0) < 0.02
        assert self._relative(result.cp, 2.0 / 3.0) < 0.02

    def test_metacentric_radii(self, wigley):
        result = self.calculator.compute_at_draft(wigley, None, 6.25)
        assert self._relative(result.bmt, self.ref.bmt) < 0.02
        assert self._relative(result.iwp_l_lcf / result.disp_volume, self.ref.bml) < 0.05

    def test_displacement_increases_with_draft(self, wigley):
        drafts = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        results = self.calculator.compute_table(wigley, None, drafts)
        volumes = [r.disp_volume for r in results]
        assert all(b > a for a, b in zip(volumes, volumes[1:]))


class TestComputeTable:
    """Test multi-draft tables."""

    def setup_method(self):
        self.calculator = HydrostaticCalculator()

    def test_results_in_input_order(self, fine_barge):
        drafts = [8.0, 2.0, 5.0]
        results = self.calculator.compute_table(fine_barge, None, drafts)
        assert [r.draft for r in results] == drafts

    def test_cancelled_table_raises(self, fine_barge):
        event = threading.Event()
        event.set()
        with pytest.raises(CalculationCancelledError):
            self.calculator.compute_table(fine_barge, None, [2.0, 3.0], cancel_event=event)

    def test_table_matches_single_draft(self, fine_barge):
        table = self.calculator.compute_table(fine_barge, None, [4.0])
        single = self.calculator.compute_at_draft(fine_barge, None, 4.0)
        assert table[0] == single


class TestErrors:
    """Test validation failures."""

    def setup_method(self):
        self.calculator = HydrostaticCalculator()

    def test_no_stations_raises(self):
        geometry = HullGeometry(lpp=10.0, beam=2.0, design_draft=1.0)
        with pytest.raises(InvalidGeometryError) as exc_info:
            self.calculator.compute_at_draft(geometry, None, 1.0)
        assert exc_info.value.code == ErrorCode.GEO_NO_STATIONS

    def test_no_waterlines_raises(self):
        geometry = HullGeometry(
            lpp=10.0, beam=2.0, design_draft=1.0,
            stations=[Station(index=0, x=0.0), Station(index=1, x=10.0)],
        )
        with pytest.raises(InvalidGeometryError) as exc_info:
            self.calculator.compute_at_draft(geometry, None, 1.0)
        assert exc_info.value.code == ErrorCode.GEO_NO_WATERLINES

    def test_no_offsets_raises(self):
        geometry = HullGeometry(
            lpp=10.0, beam=2.0, design_draft=1.0,
            stations=[Station(index=0, x=0.0), Station(index=1, x=10.0)],
            waterlines=[Waterline(index=0, z=0.0), Waterline(index=1, z=1.0)],
        )
        with pytest.raises(InvalidGeometryError) as exc_info:
            self.calculator.compute_at_draft(geometry, None, 1.0)
        assert exc_info.value.code == ErrorCode.GEO_NO_OFFSETS

    def test_draft_below_second_waterline_raises(self, barge):
        """Only z = 0 lies at or below 3 m on the 0/5/10 m grid."""
        with pytest.raises(InvalidInputError) as exc_info:
            self.calculator.compute_at_draft(barge, None, 3.0)
        assert exc_info.value.code == ErrorCode.INP_DRAFT_BELOW_WATERLINES

    def test_missing_offsets_read_as_zero(self):
        """A station with no offsets contributes no area."""
        stations = [Station(index=i, x=5.0 * i) for i in range(3)]
        waterlines = [Waterline(index=j, z=float(j)) for j in range(3)]
        offsets = [
            Offset(station_index=s.index, waterline_index=w.index, half_breadth=1.0)
            for s in stations[:2]
            for w in waterlines
        ]
        geometry = HullGeometry(
            lpp=10.0, beam=2.0, design_draft=2.0,
            stations=stations, waterlines=waterlines, offsets=offsets,
        )
        result = self.calculator.compute_at_draft(geometry, None, 2.0)
        # Sections 4, 4, 0 m² integrated by Simpson over 5 m spacing
        assert abs(result.disp_volume - (5.0 / 3.0) * (4.0 + 16.0 + 0.0)) < 1e-9


class TestHydrostaticResult:
    """Test result serialization."""

    def test_to_dict_rounds(self, barge, barge_loading):
        result = HydrostaticCalculator().compute_at_draft(barge, barge_loading, 10.0)
        data = result.to_dict()
        assert data["disp_volume"] == 20000.0
        assert data["kb"] == 5.0
        assert data["gmt"] == round(result.gmt, 4)

    def test_to_dict_keeps_none_gm(self, barge):
        data = HydrostaticCalculator().compute_at_draft(barge, None, 10.0).to_dict()
        assert data["gmt"] is None

    def test_from_dict(self):
        restored = HydrostaticResult.from_dict({"draft": 2.0, "kb": 1.0, "bmt": 3.0})
        assert restored.draft == 2.0
        assert restored.kmt == 4.0
        assert restored.gmt is None
        assert restored.iwp_l_lcf == 0.0
