"""ScreenPoint and OverlayMarker - Projected overlay positions.

Coordinates are viewport pixels with the origin at the top-left corner,
x growing to the right and y growing downward.
"""

from dataclasses import dataclass

from mountain_spotter.model.visible_peak import VisiblePeak


@dataclass(frozen=True)
class ScreenPoint:
    """A position inside the viewport."""

    x: float
    y: float

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class OverlayMarker:
    """A peak ready to draw: the peak and where it lands on screen."""

    peak: VisiblePeak
    position: ScreenPoint

    @property
    def label(self) -> str:
        """Three-line marker label: name, elevation, distance."""
        return f"{self.peak.name}<br>{self.peak.elevation_m:.0f}m<br>{self.peak.distance_km:.1f}km"
