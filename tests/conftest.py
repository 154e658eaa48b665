"""
hydrocalc Test Configuration and Fixtures

Template hulls with closed-form hydrostatics and a fresh configuration
for every test.
"""

import pytest

from hydrocalc.bootstrap.config import HydroConfig, reset_config
from hydrocalc.geometry import (
    InMemoryVesselRepository,
    LoadingCondition,
    design_loading,
    generate_rectangular_barge,
    generate_wigley_hull,
)


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Ignore HYDROCALC_* settings from the environment and drop cached config."""
    import os

    for key in list(os.environ):
        if key.startswith("HYDROCALC_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    """Default configuration."""
    return HydroConfig()


@pytest.fixture
def barge():
    """100 × 20 m barge at 10 m draft, 5 stations, 3 waterlines."""
    return generate_rectangular_barge()


@pytest.fixture
def fine_barge():
    """100 × 20 × 10 m barge with 1 m waterline spacing and 21 stations."""
    return generate_rectangular_barge(num_stations=21, num_waterlines=11)


@pytest.fixture
def freeboard_barge():
    """100 × 20 m barge floating at 5 m with 5 m freeboard to the deck."""
    return generate_rectangular_barge(
        design_draft=5.0, depth=10.0, num_stations=5, num_waterlines=11,
        name="Freeboard Barge",
    )


@pytest.fixture
def wigley():
    """Standard Wigley hull, L = 100 m, B = 10 m, T = 6.25 m."""
    return generate_wigley_hull()


@pytest.fixture
def barge_loading(barge):
    """Design condition for the barge (KG = 5 m)."""
    return design_loading(barge)


@pytest.fixture
def seawater():
    """Seawater without KG."""
    return LoadingCondition(name="Seawater", rho=1025.0)


@pytest.fixture
def repository(barge, freeboard_barge, wigley):
    """In-memory repository with three vessels and two loadcases."""
    repo = InMemoryVesselRepository()
    repo.add_geometry("barge", barge)
    repo.add_geometry("freeboard", freeboard_barge)
    repo.add_geometry("wigley", wigley)
    repo.add_loading("design", LoadingCondition(name="Design", rho=1025.0, kg=5.0))
    repo.add_loading("low-kg", LoadingCondition(name="Low KG", rho=1025.0, kg=2.0))
    return repo
