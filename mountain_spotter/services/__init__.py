"""Collaborators around the visibility engine.

- PeakCatalog: Injected peak cache with sample-peak fallback
- Location/orientation sources and compass smoothing
- SpotterSession: Session state machine tying sensors, catalog and core together
"""

from mountain_spotter.services.peak_catalog import (
    BoundingBox,
    JsonFilePeakSource,
    PeakCatalog,
    PeakSource,
    PeakSourceError,
    load_sample_peaks,
)
from mountain_spotter.services.sensors import (
    CompassSmoother,
    FixedLocationSource,
    FixedOrientationSource,
    LocationSource,
    OrientationSource,
    SmoothedOrientationSource,
)
from mountain_spotter.services.spotter_session import SessionContext, SessionStateMachine, SpotterSession

__all__ = [
    "BoundingBox",
    "JsonFilePeakSource",
    "PeakCatalog",
    "PeakSource",
    "PeakSourceError",
    "load_sample_peaks",
    "CompassSmoother",
    "FixedLocationSource",
    "FixedOrientationSource",
    "LocationSource",
    "OrientationSource",
    "SmoothedOrientationSource",
    "SessionContext",
    "SessionStateMachine",
    "SpotterSession",
]
