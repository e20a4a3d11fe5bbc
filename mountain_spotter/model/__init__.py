"""Data model classes for peak visibility.

Value types only; nothing here depends on the calculation core:
- GeoPoint: Geometry atom (lat, lon, optional altitude)
- Peak: Catalog summit (wraps GeoPoint, has ID)
- Orientation: Latest device heading, pitch and roll
- VisiblePeak: Peak annotated with observer-relative geometry
- ScreenPoint / OverlayMarker: Projected overlay positions
"""

from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.peak import Peak
from mountain_spotter.model.screen_point import OverlayMarker, ScreenPoint
from mountain_spotter.model.visible_peak import VisiblePeak

__all__ = [
    "GeoPoint",
    "Peak",
    "Orientation",
    "VisiblePeak",
    "ScreenPoint",
    "OverlayMarker",
]
