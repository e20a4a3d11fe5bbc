"""Peak - A mountain summit from the peak catalog.

Peaks are sourced from a static or fetched catalog and never mutated by the
visibility engine. An elevation of 0 means the catalog had no elevation for
the summit; such peaks survive range checks but are never drawn.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from mountain_spotter.model.geo_point import GeoPoint


@dataclass(frozen=True)
class Peak:
    """A named mountain summit.

    Attributes:
        id: Unique identifier (e.g., "mont_blanc")
        name: Display name
        location: Summit position
        elevation_m: Summit height above sea level in meters (0 = unknown)
        prominence_m: Topographic prominence in meters, if known
        country: Country (or countries) the summit belongs to
        region: Mountain range or region
        image_url: Picture of the summit for list display

    Example:
        peak = Peak(
            id="mont_blanc",
            name="Mont Blanc",
            location=GeoPoint(latitude=45.8326, longitude=6.8652, altitude_m=4809.0),
            elevation_m=4809.0,
        )
    """

    id: str
    name: str
    location: GeoPoint
    elevation_m: float
    prominence_m: Optional[float] = None
    country: Optional[str] = None
    region: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not self.id:
            raise ValueError(f"Peak '{self.name}' must have a non-empty id")
        if np.isnan(self.elevation_m):
            raise ValueError(f"Peak {self.id} cannot have NaN elevation")

    @property
    def has_known_elevation(self) -> bool:
        """True if the catalog supplied a positive elevation."""
        return self.elevation_m > 0

    def matches(self, query: str) -> bool:
        """Case-insensitive match against name, region and country."""
        needle = query.strip().casefold()
        if not needle:
            return False
        fields = (self.name, self.region, self.country)
        return any(value is not None and needle in value.casefold() for value in fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location.to_dict(),
            "elevation_m": self.elevation_m,
            "prominence_m": self.prominence_m,
            "country": self.country,
            "region": self.region,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Peak":
        """Create Peak from dictionary."""
        prominence = data.get("prominence_m")
        return cls(
            id=data["id"],
            name=data["name"],
            location=GeoPoint.from_dict(data["location"]),
            elevation_m=float(data["elevation_m"]),
            prominence_m=None if prominence is None else float(prominence),
            country=data.get("country"),
            region=data.get("region"),
            image_url=data.get("image_url"),
        )

    def __repr__(self) -> str:
        return f"Peak({self.id}, {self.name!r}, {self.elevation_m:.0f}m)"
