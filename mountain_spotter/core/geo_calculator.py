"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for peak visibility:
- Distance calculation (Haversine formula)
- Bearing calculation (initial heading between points)
- Elevation angle with Earth-curvature drop
- Destination calculation (endpoint from start, bearing, distance)
- Angle normalization and circular bearing differences

All calculations use a spherical Earth approximation (R = 6,371 km).
"""

from math import asin, atan, atan2, cos, degrees, radians, sin, sqrt
from typing import Optional

from mountain_spotter.constants import EarthConfig, NameConfig, VisibilityConfig
from mountain_spotter.model.geo_point import GeoPoint


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use a spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Bearings are in degrees clockwise from North (0-360).
    Distances are in kilometers unless the name says otherwise.
    """

    EARTH_RADIUS_KM = EarthConfig.RADIUS_KM

    @staticmethod
    def distance_km(a: GeoPoint, b: GeoPoint) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Symmetric in its arguments, and zero for identical points.

        Args:
            a: First point
            b: Second point

        Returns:
            Distance in kilometers.
        """
        lat1, lat2 = radians(a.latitude), radians(b.latitude)
        dlat = radians(b.latitude - a.latitude)
        dlon = radians(b.longitude - a.longitude)
        h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
        h = min(h, 1.0)
        return EarthConfig.RADIUS_KM * 2 * atan2(sqrt(h), sqrt(1 - h))

    @staticmethod
    def initial_bearing_deg(origin: GeoPoint, target: GeoPoint) -> float:
        """Calculate initial bearing from origin to target.

        The bearing is the compass direction to travel along the great circle,
        measured clockwise from true North. The value for identical points is
        unspecified (no direction exists) but is always in range.

        Args:
            origin: Start point
            target: End point

        Returns:
            Bearing in degrees [0, 360).
        """
        lat1, lat2 = radians(origin.latitude), radians(target.latitude)
        dlon = radians(target.longitude - origin.longitude)
        y = sin(dlon) * cos(lat2)
        x = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
        return GeoCalculator.normalize_azimuth_deg((degrees(atan2(y, x)) + 360) % 360)

    @staticmethod
    def elevation_angle_deg(
        observer: GeoPoint,
        target: GeoPoint,
        target_elevation_m: float,
        distance_km: Optional[float] = None,
    ) -> float:
        """Calculate the angle above the observer's horizontal plane toward a target.

        The height difference is reduced by the Earth-curvature drop
        d² / (2R) before taking the arctangent. A missing observer altitude
        counts as sea level.

        Args:
            observer: Observer position (altitude_m used when known)
            target: Target position
            target_elevation_m: Target height above sea level in meters
            distance_km: Precomputed observer-target distance (computed if omitted)

        Returns:
            Elevation angle in degrees, +90 when the observer stands on the target.
        """
        if distance_km is None:
            distance_km = GeoCalculator.distance_km(observer, target)
        if distance_km <= 0:
            return VisibilityConfig.ZENITH_ANGLE_DEG

        distance_m = distance_km * 1000
        height_diff_m = target_elevation_m - (observer.altitude_m or 0.0)
        curvature_drop_m = distance_m**2 / (2 * EarthConfig.RADIUS_M)
        return degrees(atan((height_diff_m - curvature_drop_m) / distance_m))

    @staticmethod
    def destination(origin: GeoPoint, bearing_deg: float, distance_km: float) -> GeoPoint:
        """Calculate destination point given start, bearing, and distance.

        Args:
            origin: Start point
            bearing_deg: Bearing in degrees (clockwise from North)
            distance_km: Distance to travel in kilometers

        Returns:
            Destination point (longitude wrapped into [-180, 180], no altitude).
        """
        brng = radians(bearing_deg)
        lat1 = radians(origin.latitude)
        lon1 = radians(origin.longitude)
        d_R = distance_km / EarthConfig.RADIUS_KM

        lat2 = asin(sin(lat1) * cos(d_R) + cos(lat1) * sin(d_R) * cos(brng))
        lon2 = lon1 + atan2(
            sin(brng) * sin(d_R) * cos(lat1),
            cos(d_R) - sin(lat1) * sin(lat2),
        )
        lon2_deg = (degrees(lon2) + 540) % 360 - 180
        return GeoPoint(latitude=degrees(lat2), longitude=lon2_deg)

    @staticmethod
    def normalize_azimuth_deg(angle_deg: float) -> float:
        """Wrap any angle into [0, 360)."""
        wrapped = angle_deg % 360
        # Tiny negative inputs round up to exactly 360.0
        return 0.0 if wrapped >= 360 else wrapped

    @staticmethod
    def normalize_signed_deg(angle_deg: float) -> float:
        """Wrap any angle into (-180, 180].

        The result is congruent to the input modulo 360, so it can stand in
        for a bearing difference in comparisons and display.
        """
        wrapped = GeoCalculator.normalize_azimuth_deg(angle_deg)
        return wrapped - 360 if wrapped > 180 else wrapped

    @staticmethod
    def circular_difference_deg(bearing_a: float, bearing_b: float) -> float:
        """Smallest angle between two bearings, in [0, 180].

        Handles the wraparound at 0°/360° (e.g. 359° and 1° are 2° apart).
        """
        diff = abs(GeoCalculator.normalize_azimuth_deg(bearing_a) - GeoCalculator.normalize_azimuth_deg(bearing_b))
        return min(diff, 360 - diff)

    @staticmethod
    def compass_direction(bearing_deg: float) -> str:
        """16-point compass label for a bearing (e.g. 15° -> "NNE")."""
        return NameConfig.get_compass_direction(bearing_deg=bearing_deg)
