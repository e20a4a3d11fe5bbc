"""VisiblePeak - A peak annotated with its geometry as seen by the observer.

Derived on every observer-position or peak-set change and never persisted.
Fully determined by (observer, peak): it has no identity beyond its source Peak.
"""

from dataclasses import dataclass

from mountain_spotter.model.peak import Peak


@dataclass(frozen=True)
class VisiblePeak:
    """Peak plus observer-relative distance, direction and elevation angle.

    Attributes:
        peak: Source catalog peak
        distance_km: Great-circle distance from the observer (>= 0)
        bearing_deg: Initial bearing from the observer [0, 360)
        elevation_angle_deg: Angle above the observer's horizontal plane
        is_visible: Within range and above the refraction-adjusted horizon
    """

    peak: Peak
    distance_km: float
    bearing_deg: float
    elevation_angle_deg: float
    is_visible: bool

    @property
    def id(self) -> str:
        """Peak id delegated from peak."""
        return self.peak.id

    @property
    def name(self) -> str:
        """Peak name delegated from peak."""
        return self.peak.name

    @property
    def elevation_m(self) -> float:
        """Peak elevation delegated from peak."""
        return self.peak.elevation_m

    def __repr__(self) -> str:
        return (
            f"VisiblePeak({self.peak.name!r}, {self.distance_km:.1f}km, "
            f"brg={self.bearing_deg:.1f}°, elev={self.elevation_angle_deg:.2f}°, visible={self.is_visible})"
        )
