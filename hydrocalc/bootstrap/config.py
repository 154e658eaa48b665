"""
bootstrap/config.py - Engine configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

from hydrocalc.core.constants import SEAWATER_DENSITY_KG_M3, SPACING_TOLERANCE_M

logger = logging.getLogger("bootstrap.config")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class IntegrationConfig:
    """Quadrature settings."""

    spacing_tolerance_m: float = SPACING_TOLERANCE_M

    @classmethod
    def from_env(cls) -> "IntegrationConfig":
        return cls(
            spacing_tolerance_m=float(
                os.getenv("HYDROCALC_SPACING_TOLERANCE", str(SPACING_TOLERANCE_M))
            ),
        )


@dataclass
class HydrostaticsConfig:
    """Hydrostatic calculator defaults."""

    default_rho_kg_m3: float = SEAWATER_DENSITY_KG_M3
    default_curve_points: int = 100
    # Add the strip between the highest waterline at or below the draft and
    # the draft itself to each section. Off: active waterlines only.
    interpolate_partial_strip: bool = False

    @classmethod
    def from_env(cls) -> "HydrostaticsConfig":
        return cls(
            default_rho_kg_m3=float(
                os.getenv("HYDROCALC_DEFAULT_RHO", str(SEAWATER_DENSITY_KG_M3))
            ),
            default_curve_points=int(os.getenv("HYDROCALC_CURVE_POINTS", "100")),
            interpolate_partial_strip=_env_bool("HYDROCALC_PARTIAL_STRIP", "false"),
        )


@dataclass
class StabilityConfig:
    """GZ curve defaults and heeled-waterline solver settings."""

    min_angle_deg: float = 0.0
    max_angle_deg: float = 90.0
    angle_increment_deg: float = 1.0
    default_method: str = "WallSided"

    # Heeled water-plane height search (bisection)
    waterline_volume_tolerance: float = 1e-7  # relative to target volume
    waterline_max_iterations: int = 100

    @classmethod
    def from_env(cls) -> "StabilityConfig":
        return cls(
            min_angle_deg=float(os.getenv("HYDROCALC_MIN_ANGLE", "0")),
            max_angle_deg=float(os.getenv("HYDROCALC_MAX_ANGLE", "90")),
            angle_increment_deg=float(os.getenv("HYDROCALC_ANGLE_INCREMENT", "1")),
            default_method=os.getenv("HYDROCALC_STABILITY_METHOD", "WallSided"),
            waterline_volume_tolerance=float(
                os.getenv("HYDROCALC_HEEL_VOLUME_TOLERANCE", "1e-7")
            ),
            waterline_max_iterations=int(
                os.getenv("HYDROCALC_HEEL_MAX_ITERATIONS", "100")
            ),
        )


@dataclass
class TrimConfig:
    """Newton-Raphson trim solver settings."""

    max_iterations: int = 20
    tolerance_kg: float = 100.0
    perturbation_m: float = 0.01  # 1 cm finite difference
    min_derivative: float = 0.01
    fallback_derivative: float = 1000.0
    min_draft_m: float = 0.1
    max_draft_factor: float = 2.0  # × design draft

    @classmethod
    def from_env(cls) -> "TrimConfig":
        return cls(
            max_iterations=int(os.getenv("HYDROCALC_TRIM_MAX_ITER", "20")),
            tolerance_kg=float(os.getenv("HYDROCALC_TRIM_TOLERANCE", "100")),
            perturbation_m=float(os.getenv("HYDROCALC_TRIM_PERTURBATION", "0.01")),
            min_derivative=float(os.getenv("HYDROCALC_TRIM_MIN_DERIVATIVE", "0.01")),
            fallback_derivative=float(
                os.getenv("HYDROCALC_TRIM_FALLBACK_DERIVATIVE", "1000")
            ),
            min_draft_m=float(os.getenv("HYDROCALC_TRIM_MIN_DRAFT", "0.1")),
            max_draft_factor=float(os.getenv("HYDROCALC_TRIM_MAX_DRAFT_FACTOR", "2.0")),
        )


@dataclass
class ExecutionConfig:
    """Sweep execution settings."""

    max_workers: int = 1  # 1 = sequential

    @classmethod
    def from_env(cls) -> "ExecutionConfig":
        return cls(
            max_workers=max(1, int(os.getenv("HYDROCALC_MAX_WORKERS", "1"))),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("HYDROCALC_LOG_LEVEL", "INFO"),
            format=os.getenv(
                "HYDROCALC_LOG_FORMAT",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            ),
            log_file=os.getenv("HYDROCALC_LOG_FILE"),
            json_logs=_env_bool("HYDROCALC_JSON_LOGS", "false"),
        )


@dataclass
class HydroConfig:
    """Root configuration for the hydrostatics engine."""

    integration: IntegrationConfig = field(default_factory=IntegrationConfig)
    hydrostatics: HydrostaticsConfig = field(default_factory=HydrostaticsConfig)
    stability: StabilityConfig = field(default_factory=StabilityConfig)
    trim: TrimConfig = field(default_factory=TrimConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "HydroConfig":
        """Create configuration from environment variables."""
        return cls(
            integration=IntegrationConfig.from_env(),
            hydrostatics=HydrostaticsConfig.from_env(),
            stability=StabilityConfig.from_env(),
            trim=TrimConfig.from_env(),
            execution=ExecutionConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "HydroConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "HydroConfig":
        """Create config from dictionary, overriding environment values."""
        config = cls.from_env()

        for section in fields(cls):
            if section.name not in data:
                continue
            target = getattr(config, section.name)
            for key, value in data[section.name].items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Unknown config key: {section.name}.{key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            section.name: {
                f.name: getattr(getattr(self, section.name), f.name)
                for f in fields(getattr(self, section.name))
            }
            for section in fields(self)
        }


# Global config instance
_config: Optional[HydroConfig] = None


def load_config(filepath: str = None) -> HydroConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        HydroConfig instance
    """
    global _config

    if filepath:
        _config = HydroConfig.from_file(filepath)
    else:
        default_paths = [
            "./hydrocalc.json",
            "./config/hydrocalc.json",
            os.path.expanduser("~/.hydrocalc/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = HydroConfig.from_file(path)
                return _config

        _config = HydroConfig.from_env()

    return _config


def get_config() -> HydroConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
