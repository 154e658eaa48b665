"""
services/ - Identifier-based facade over the calculation components
"""

from .vessel_service import HydrostaticsService

__all__ = ["HydrostaticsService"]
