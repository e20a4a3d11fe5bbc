"""Geometric visibility engine.

Pure, deterministic calculations from (observer, orientation, peaks) to
a ranked, filtered, screen-projectable list of visible peaks:
- GeoCalculator: Geodesic calculations (distances, bearings, elevation angles)
- VisibilityEngine: Range and horizon test per peak
- HorizonFilter: Field of view, mutual obstruction and display cap
- ScreenProjector: Viewport coordinates for overlay drawing
"""

from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.core.horizon_filter import HorizonFilter
from mountain_spotter.core.screen_projector import ScreenProjector
from mountain_spotter.core.visibility_engine import VisibilityEngine

__all__ = [
    "GeoCalculator",
    "VisibilityEngine",
    "HorizonFilter",
    "ScreenProjector",
]
