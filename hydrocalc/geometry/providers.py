"""
geometry/providers.py - Geometry and loading collaborators

The calculators only see HullGeometry and LoadingCondition snapshots. The
service facade resolves vessel and loadcase identifiers through these
protocols; persistence lives behind them.
"""

from __future__ import annotations
from typing import Dict, Hashable, List, Optional, Protocol, runtime_checkable
import logging
import threading

from .models import HullGeometry, LoadingCondition

logger = logging.getLogger(__name__)


@runtime_checkable
class GeometryProvider(Protocol):
    """Returns the hull geometry for a vessel, or None when absent."""

    def get_geometry(self, vessel_id: Hashable) -> Optional[HullGeometry]:
        ...


@runtime_checkable
class LoadingProvider(Protocol):
    """Returns the loading condition for a loadcase, or None when absent."""

    def get_loading(self, loadcase_id: Hashable) -> Optional[LoadingCondition]:
        ...


class InMemoryVesselRepository:
    """
    Dictionary-backed provider for both geometry and loadcases.

    Stored models are frozen, so handing out the same instance to
    concurrent calculations is safe.
    """

    def __init__(self):
        self._geometries: Dict[Hashable, HullGeometry] = {}
        self._loadings: Dict[Hashable, LoadingCondition] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Vessels
    # -------------------------------------------------------------------------

    def add_geometry(self, vessel_id: Hashable, geometry: HullGeometry) -> None:
        with self._lock:
            self._geometries[vessel_id] = geometry
        logger.debug(f"Registered geometry for vessel {vessel_id!r}")

    def get_geometry(self, vessel_id: Hashable) -> Optional[HullGeometry]:
        return self._geometries.get(vessel_id)

    def remove_geometry(self, vessel_id: Hashable) -> bool:
        with self._lock:
            return self._geometries.pop(vessel_id, None) is not None

    def list_vessels(self) -> List[Hashable]:
        return list(self._geometries.keys())

    # -------------------------------------------------------------------------
    # Loadcases
    # -------------------------------------------------------------------------

    def add_loading(self, loadcase_id: Hashable, loading: LoadingCondition) -> None:
        with self._lock:
            self._loadings[loadcase_id] = loading
        logger.debug(f"Registered loadcase {loadcase_id!r}")

    def get_loading(self, loadcase_id: Hashable) -> Optional[LoadingCondition]:
        return self._loadings.get(loadcase_id)

    def remove_loading(self, loadcase_id: Hashable) -> bool:
        with self._lock:
            return self._loadings.pop(loadcase_id, None) is not None

    def list_loadcases(self) -> List[Hashable]:
        return list(self._loadings.keys())
