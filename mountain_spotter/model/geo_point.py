"""GeoPoint - The fundamental geometry atom for peak visibility.

A GeoPoint represents a single GPS coordinate with an optional altitude.
It is the single source of truth for location throughout the system.

Used by:
- Peak (summit location)
- VisibilityEngine (observer position)
- BoundingBox (catalog query corners)
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    """A geographic position with optional altitude.

    Immutable value type created from a sensor fix or a peak dataset.

    Attributes:
        latitude: Latitude in decimal degrees [-90, 90]
        longitude: Longitude in decimal degrees [-180, 180]
        altitude_m: Altitude above sea level in meters, None when unknown

    Example:
        observer = GeoPoint(latitude=45.8, longitude=6.85, altitude_m=1000.0)
    """

    latitude: float
    longitude: float
    altitude_m: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.latitude) or np.isnan(self.longitude):
            raise ValueError(f"GeoPoint cannot have NaN coordinates ({self.latitude}, {self.longitude})")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} outside [-180, 180]")
        if self.altitude_m is not None and np.isnan(self.altitude_m):
            raise ValueError(f"GeoPoint cannot have NaN altitude at ({self.latitude}, {self.longitude})")

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.latitude, self.longitude)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON order."""
        return (self.longitude, self.latitude)

    def with_altitude(self, altitude_m: Optional[float]) -> "GeoPoint":
        """Copy of this point at a different altitude."""
        return GeoPoint(latitude=self.latitude, longitude=self.longitude, altitude_m=altitude_m)

    def to_dict(self) -> dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude, "altitude_m": self.altitude_m}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeoPoint":
        """Create GeoPoint from dictionary."""
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            altitude_m=None if data.get("altitude_m") is None else float(data["altitude_m"]),
        )

    def __repr__(self) -> str:
        alt = "?" if self.altitude_m is None else f"{self.altitude_m:.0f}m"
        return f"GeoPoint(lat={self.latitude:.5f}, lon={self.longitude:.5f}, alt={alt})"
