"""Sensor collaborators - location and orientation readings for the session.

Platform-specific acquisition sits behind two abstract sources so that the
session (and the calculation core behind it) never depends on a platform:
- LocationSource: permission-gated position fixes
- OrientationSource: compass heading, pitch and roll

Also provides azimuth conditioning (CompassSmoother), which belongs to the
orientation side and never to the calculation core.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from mountain_spotter.constants import CompassConfig
from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.orientation import Orientation

logger = logging.getLogger(__name__)


class LocationSource(ABC):
    """Supplier of observer position fixes."""

    @abstractmethod
    def is_permission_granted(self) -> bool:
        """True if the platform allows reading the location."""

    @abstractmethod
    def latest_location(self) -> Optional[GeoPoint]:
        """Most recent fix, or None if none is available yet."""


class OrientationSource(ABC):
    """Supplier of device orientation readings."""

    @abstractmethod
    def is_available(self) -> bool:
        """True if the device can report a heading."""

    @abstractmethod
    def latest_orientation(self) -> Optional[Orientation]:
        """Most recent reading, or None if none is available yet."""


class FixedLocationSource(LocationSource):
    """Location set by hand (manual position entry, replays, tests).

    Example:
        source = FixedLocationSource(location=GeoPoint(latitude=45.8, longitude=6.85, altitude_m=1000.0))
    """

    def __init__(self, location: Optional[GeoPoint] = None, permission_granted: bool = True) -> None:
        self._location = location
        self._permission_granted = permission_granted

    def set_location(self, location: Optional[GeoPoint]) -> None:
        self._location = location

    def set_permission(self, granted: bool) -> None:
        self._permission_granted = granted

    def is_permission_granted(self) -> bool:
        return self._permission_granted

    def latest_location(self) -> Optional[GeoPoint]:
        if not self._permission_granted:
            return None
        return self._location


class FixedOrientationSource(OrientationSource):
    """Orientation set by hand (manual heading entry, replays, tests)."""

    def __init__(self, orientation: Optional[Orientation] = None, available: bool = True) -> None:
        self._orientation = orientation
        self._available = available

    def set_orientation(self, orientation: Optional[Orientation]) -> None:
        self._orientation = orientation

    def is_available(self) -> bool:
        return self._available

    def latest_orientation(self) -> Optional[Orientation]:
        if not self._available:
            return None
        return self._orientation


class CompassSmoother:
    """Exponential smoothing of a noisy compass azimuth.

    Each accepted reading moves the heading a fraction of the way toward the
    new value along the shorter arc, so 359° -> 1° steps through 0° and never
    sweeps back through 180°. Readings closer together than the minimum
    interval are ignored and the last emitted orientation is returned.

    Example:
        smoother = CompassSmoother()
        smoothed = smoother.update(raw_orientation)
    """

    def __init__(
        self,
        smoothing_factor: float = CompassConfig.SMOOTHING_FACTOR,
        min_update_interval_s: float = CompassConfig.MIN_UPDATE_INTERVAL_S,
    ) -> None:
        """Initialize smoother.

        Args:
            smoothing_factor: Weight of each new reading, in (0, 1] (1 = no smoothing)
            min_update_interval_s: Minimum time between accepted readings
        """
        if not 0 < smoothing_factor <= 1:
            raise ValueError(f"smoothing_factor must be in (0, 1], got {smoothing_factor}")
        self.smoothing_factor = smoothing_factor
        self.min_update_interval_s = min_update_interval_s
        self._last: Optional[Orientation] = None
        self._last_update_s: Optional[float] = None

    @property
    def last(self) -> Optional[Orientation]:
        """Last emitted orientation."""
        return self._last

    @staticmethod
    def smooth_azimuth(last_deg: float, new_deg: float, factor: float) -> float:
        """Move last_deg toward new_deg by factor along the shorter arc.

        Returns:
            Smoothed azimuth in [0, 360).
        """
        diff = new_deg - last_deg
        if diff > 180:
            diff -= 360
        elif diff < -180:
            diff += 360
        smoothed = (last_deg + factor * diff) % 360
        return 0.0 if smoothed >= 360 else smoothed

    def update(self, reading: Orientation, timestamp_s: Optional[float] = None) -> Orientation:
        """Feed a raw reading and get the orientation to publish.

        Args:
            reading: Raw sensor orientation
            timestamp_s: Reading time in seconds (monotonic clock if omitted)

        Returns:
            Smoothed orientation (the previous one if the reading was throttled).
        """
        now = time.monotonic() if timestamp_s is None else timestamp_s

        if self._last is None or self._last_update_s is None:
            self._last = reading
            self._last_update_s = now
            return reading

        if now - self._last_update_s < self.min_update_interval_s:
            return self._last

        azimuth = self.smooth_azimuth(
            last_deg=self._last.azimuth_deg,
            new_deg=reading.azimuth_deg,
            factor=self.smoothing_factor,
        )
        self._last = Orientation(azimuth_deg=azimuth, pitch_deg=reading.pitch_deg, roll_deg=reading.roll_deg)
        self._last_update_s = now
        return self._last

    def reset(self) -> None:
        """Forget history; the next reading passes through unsmoothed."""
        self._last = None
        self._last_update_s = None
        logger.debug("Compass smoother reset")


class SmoothedOrientationSource(OrientationSource):
    """Wraps a raw orientation source with a CompassSmoother.

    Example:
        source = SmoothedOrientationSource(raw=platform_compass)
        orientation = source.latest_orientation()
    """

    def __init__(self, raw: OrientationSource, smoother: Optional[CompassSmoother] = None) -> None:
        self._raw = raw
        self._smoother = smoother or CompassSmoother()

    @property
    def smoother(self) -> CompassSmoother:
        return self._smoother

    def is_available(self) -> bool:
        return self._raw.is_available()

    def latest_orientation(self, timestamp_s: Optional[float] = None) -> Optional[Orientation]:
        if not self._raw.is_available():
            return None
        reading = self._raw.latest_orientation()
        if reading is None:
            return self._smoother.last
        return self._smoother.update(reading, timestamp_s=timestamp_s)
