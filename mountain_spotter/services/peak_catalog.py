"""Peak catalog - supplies candidate peaks to the visibility engine.

Provides:
- PeakSource: pluggable origin of peaks for a bounding box
- JsonFilePeakSource: peaks from a local JSON dataset
- PeakCatalog: explicit, injectable cache with fallback to bundled sample peaks

The visibility engine treats the returned list as opaque and immutable; all
caching, refreshing and fallback handling lives here.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mountain_spotter.constants import CatalogConfig
from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.peak import Peak

logger = logging.getLogger(__name__)


class PeakSourceError(Exception):
    """A peak source could not deliver peaks."""


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude box for catalog queries.

    west > east means the box crosses the antimeridian.

    Attributes:
        south: Southern edge latitude
        west: Western edge longitude
        north: Northern edge latitude
        east: Eastern edge longitude
    """

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, location: GeoPoint, radius_km: float) -> "BoundingBox":
        """Box reaching radius_km from location in the four cardinal directions."""
        north = GeoCalculator.destination(origin=location, bearing_deg=0.0, distance_km=radius_km)
        south = GeoCalculator.destination(origin=location, bearing_deg=180.0, distance_km=radius_km)
        east = GeoCalculator.destination(origin=location, bearing_deg=90.0, distance_km=radius_km)
        west = GeoCalculator.destination(origin=location, bearing_deg=270.0, distance_km=radius_km)
        return cls(
            south=south.latitude,
            west=west.longitude,
            north=north.latitude,
            east=east.longitude,
        )

    def contains(self, point: GeoPoint) -> bool:
        """Check if a point lies inside the box (edges inclusive)."""
        if not self.south <= point.latitude <= self.north:
            return False
        if self.west <= self.east:
            return self.west <= point.longitude <= self.east
        return point.longitude >= self.west or point.longitude <= self.east


def load_peaks_json(path: Path) -> list[Peak]:
    """Load a list of peaks from a JSON file.

    Args:
        path: JSON file holding a list of Peak dictionaries

    Returns:
        Peaks in file order.

    Raises:
        PeakSourceError: If the file is missing, unreadable or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return [Peak.from_dict(entry) for entry in data]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise PeakSourceError(f"Cannot load peaks from {path}: {e}") from e


def load_sample_peaks(path: Path = CatalogConfig.SAMPLE_PEAKS_PATH) -> list[Peak]:
    """Load the bundled fallback peaks shipped with the package."""
    peaks = load_peaks_json(path)
    logger.info(f"Loaded {len(peaks)} sample peaks from {path.name}")
    return peaks


class PeakSource(ABC):
    """Origin of catalog peaks.

    Implementations raise PeakSourceError on failure; an empty list means the
    query succeeded but found nothing. Network-backed sources may also let
    OSError subclasses (ConnectionError, TimeoutError) escape; PeakCatalog
    treats both as a failed fetch. Any other exception is a bug and propagates.
    """

    @abstractmethod
    def fetch(self, bbox: BoundingBox) -> list[Peak]:
        """Return the peaks inside the bounding box.

        Raises:
            PeakSourceError: If the peaks cannot be delivered.
        """


class JsonFilePeakSource(PeakSource):
    """Peaks from a local JSON dataset, read once on first fetch.

    Example:
        source = JsonFilePeakSource(path=Path("data/alps_peaks.json"))
        catalog = PeakCatalog(source=source)
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._peaks: Optional[list[Peak]] = None

    def fetch(self, bbox: BoundingBox) -> list[Peak]:
        if self._peaks is None:
            self._peaks = load_peaks_json(self._path)
        return [peak for peak in self._peaks if bbox.contains(peak.location)]


class PeakCatalog:
    """Explicit peak cache owned by the caller and injected where needed.

    Queries are answered from the cache while the observer stays close to the
    last query location; otherwise the source is asked again. A failing or
    empty source yields the bundled sample peaks. An empty answer caches the
    sample peaks; a failure caches nothing, so the next query retries.

    Example:
        catalog = PeakCatalog(source=JsonFilePeakSource(path=dataset))
        peaks = catalog.peaks_near(location=observer)
        catalog.invalidate()  # force refetch on next query
    """

    def __init__(
        self,
        source: Optional[PeakSource] = None,
        sample_peaks: Optional[list[Peak]] = None,
    ) -> None:
        """Initialize catalog.

        Args:
            source: Where fresh peaks come from (None = sample peaks only)
            sample_peaks: Fallback peaks (loads the bundled dataset if not provided)
        """
        self._source = source
        self._sample_peaks = list(sample_peaks) if sample_peaks is not None else load_sample_peaks()
        self._lock = threading.Lock()
        self._cached_peaks: list[Peak] = []
        self._last_location: Optional[GeoPoint] = None
        self._last_radius_km = 0.0

    @property
    def cached_peaks(self) -> list[Peak]:
        """Peaks from the last query (empty after invalidate)."""
        return list(self._cached_peaks)

    def should_use_cached(self, location: GeoPoint, radius_km: float) -> bool:
        """Check if the last answer still covers this query."""
        if self._last_location is None or not self._cached_peaks:
            return False
        moved_km = GeoCalculator.distance_km(self._last_location, location)
        return (
            moved_km < CatalogConfig.CACHE_REUSE_DISTANCE_KM
            and abs(self._last_radius_km - radius_km) < CatalogConfig.CACHE_REUSE_RADIUS_DELTA_KM
        )

    def peaks_near(
        self,
        location: GeoPoint,
        radius_km: float = CatalogConfig.DEFAULT_RADIUS_KM,
    ) -> list[Peak]:
        """Get peaks around a location.

        Args:
            location: Query center (usually the observer)
            radius_km: Search radius

        Returns:
            Cached, fetched, or sample peaks. Never raises for source failures.
        """
        with self._lock:
            if self.should_use_cached(location=location, radius_km=radius_km):
                return list(self._cached_peaks)

            try:
                peaks = self._fetch(location=location, radius_km=radius_km)
            except (PeakSourceError, OSError) as e:
                # Not cached: the next query asks the source again
                logger.warning(f"Peak source failed, using sample peaks: {e}")
                return list(self._sample_peaks)

            self._cached_peaks = peaks
            self._last_location = location
            self._last_radius_km = radius_km
            return list(peaks)

    def _fetch(self, location: GeoPoint, radius_km: float) -> list[Peak]:
        if self._source is None:
            return list(self._sample_peaks)

        bbox = BoundingBox.around(location=location, radius_km=radius_km)
        peaks = self._source.fetch(bbox)

        if not peaks:
            logger.info(f"No peaks within {radius_km:.0f}km of {location}, using sample peaks")
            return list(self._sample_peaks)

        logger.info(f"Fetched {len(peaks)} peaks within {radius_km:.0f}km of {location}")
        return list(peaks)

    def all_peaks(self) -> list[Peak]:
        """All bundled sample peaks."""
        return list(self._sample_peaks)

    def search(self, query: str) -> list[Peak]:
        """Search peaks by name, region or country.

        Cached peaks are searched first; the sample peaks only when the cache
        has no match.
        """
        cached = [peak for peak in self._cached_peaks if peak.matches(query)]
        if cached:
            return cached
        return [peak for peak in self._sample_peaks if peak.matches(query)]

    def invalidate(self) -> None:
        """Clear the cache so the next query goes to the source."""
        with self._lock:
            self._cached_peaks = []
            self._last_location = None
            self._last_radius_km = 0.0
        logger.info("Peak catalog cache cleared")
