"""
Unit tests for hydrocalc/bootstrap/config.py and logging_setup.py
"""

import json
import logging

import pytest

from hydrocalc.bootstrap.config import (
    HydroConfig,
    get_config,
    load_config,
    reset_config,
)
from hydrocalc.bootstrap.logging_setup import JSONFormatter, setup_logging


class TestHydroConfig:
    """Test configuration defaults and sources."""

    def test_defaults(self):
        config = HydroConfig()
        assert config.integration.spacing_tolerance_m == 0.001
        assert config.hydrostatics.default_rho_kg_m3 == 1025.0
        assert config.hydrostatics.default_curve_points == 100
        assert config.hydrostatics.interpolate_partial_strip is False
        assert config.stability.default_method == "WallSided"
        assert config.trim.max_iterations == 20
        assert config.trim.tolerance_kg == 100.0
        assert config.execution.max_workers == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HYDROCALC_TRIM_MAX_ITER", "50")
        monkeypatch.setenv("HYDROCALC_MAX_WORKERS", "4")
        monkeypatch.setenv("HYDROCALC_STABILITY_METHOD", "FullImmersion")
        monkeypatch.setenv("HYDROCALC_PARTIAL_STRIP", "true")
        config = HydroConfig.from_env()
        assert config.trim.max_iterations == 50
        assert config.execution.max_workers == 4
        assert config.stability.default_method == "FullImmersion"
        assert config.hydrostatics.interpolate_partial_strip is True

    def test_max_workers_at_least_one(self, monkeypatch):
        monkeypatch.setenv("HYDROCALC_MAX_WORKERS", "0")
        assert HydroConfig.from_env().execution.max_workers == 1

    def test_from_file(self, tmp_path):
        path = tmp_path / "hydrocalc.json"
        path.write_text(json.dumps({
            "hydrostatics": {"default_curve_points": 25},
            "stability": {"max_angle_deg": 60.0},
        }))
        config = HydroConfig.from_file(str(path))
        assert config.hydrostatics.default_curve_points == 25
        assert config.stability.max_angle_deg == 60.0
        assert config.trim.max_iterations == 20

    def test_unknown_key_ignored(self, tmp_path):
        path = tmp_path / "hydrocalc.json"
        path.write_text(json.dumps({"trim": {"no_such_key": 1}}))
        config = HydroConfig.from_file(str(path))
        assert not hasattr(config.trim, "no_such_key")

    def test_missing_file_uses_defaults(self, tmp_path):
        config = HydroConfig.from_file(str(tmp_path / "absent.json"))
        assert config.trim.max_iterations == 20

    def test_to_dict(self):
        data = HydroConfig().to_dict()
        assert set(data) == {
            "integration", "hydrostatics", "stability", "trim", "execution", "logging",
        }
        assert data["stability"]["waterline_max_iterations"] == 100


class TestGlobalConfig:
    """Test the cached configuration."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config(self):
        first = get_config()
        reset_config()
        assert get_config() is not first

    def test_load_config_from_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"execution": {"max_workers": 3}}))
        config = load_config(str(path))
        assert config.execution.max_workers == 3
        assert get_config() is config


class TestLogging:
    """Test logging setup."""

    def test_json_formatter(self):
        record = logging.LogRecord("hydrocalc.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "hydrocalc.test"

    def test_setup_logging_adds_handler(self):
        root = logging.getLogger()
        before = list(root.handlers)
        previous_level = root.level
        try:
            setup_logging(level="DEBUG", json_format=True)
            added = [h for h in root.handlers if h not in before]
            assert len(added) == 1
            assert isinstance(added[0].formatter, JSONFormatter)
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
            root.setLevel(previous_level)
