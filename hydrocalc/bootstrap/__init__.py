"""
bootstrap/ - Configuration and logging setup
"""

from .config import (
    HydroConfig,
    IntegrationConfig,
    HydrostaticsConfig,
    StabilityConfig,
    TrimConfig,
    ExecutionConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)
from .logging_setup import (
    JSONFormatter,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "HydroConfig",
    "IntegrationConfig",
    "HydrostaticsConfig",
    "StabilityConfig",
    "TrimConfig",
    "ExecutionConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    "JSONFormatter",
    "setup_logging",
    "setup_logging_from_config",
]
