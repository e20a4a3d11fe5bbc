"""Coarse visibility of catalog peaks from an observer position.

For every candidate peak computes distance, bearing and elevation angle
and flags whether the summit is within range and above the horizon:
- Peaks beyond the range limit are dropped, not flagged
- The horizon test allows -0.1° for atmospheric refraction
- No terrain line-of-sight is modeled here (see HorizonFilter for obstruction)

Output is sorted by distance and fully determined by (observer, peaks).
"""

import logging
from collections.abc import Iterable

from mountain_spotter.constants import VisibilityConfig
from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.peak import Peak
from mountain_spotter.model.visible_peak import VisiblePeak

logger = logging.getLogger(__name__)


class VisibilityEngine:
    """Annotates peaks with observer-relative geometry.

    Example:
        observer = GeoPoint(latitude=45.8, longitude=6.85, altitude_m=1000.0)
        visible = VisibilityEngine.compute_visible_peaks(observer=observer, peaks=catalog.all_peaks())
        for vp in visible:
            print(f"{vp.name}: {vp.distance_km:.1f}km at {vp.bearing_deg:.0f}°")
    """

    @staticmethod
    def is_peak_visible(
        distance_km: float,
        elevation_angle_deg: float,
        max_distance_km: float = VisibilityConfig.MAX_DISTANCE_KM,
    ) -> bool:
        """Range and horizon test.

        Args:
            distance_km: Observer-peak distance
            elevation_angle_deg: Curvature-corrected elevation angle
            max_distance_km: Range limit

        Returns:
            True if in range and not below the refraction-adjusted horizon.
        """
        return distance_km <= max_distance_km and elevation_angle_deg >= VisibilityConfig.HORIZON_TOLERANCE_DEG

    @staticmethod
    def annotate(
        observer: GeoPoint,
        peak: Peak,
        max_distance_km: float = VisibilityConfig.MAX_DISTANCE_KM,
        distance_km: float | None = None,
    ) -> VisiblePeak:
        """Compute the VisiblePeak for a single peak, without range exclusion.

        Args:
            observer: Observer position
            peak: Catalog peak
            max_distance_km: Range limit used for the is_visible flag
            distance_km: Precomputed distance (computed if omitted)

        Returns:
            VisiblePeak with fresh distance, bearing and elevation angle.
        """
        if distance_km is None:
            distance_km = GeoCalculator.distance_km(observer, peak.location)

        if distance_km == 0:
            # Observer on the summit: no direction, looking straight up
            bearing = 0.0
            elevation_angle = VisibilityConfig.ZENITH_ANGLE_DEG
        else:
            bearing = GeoCalculator.initial_bearing_deg(observer, peak.location)
            elevation_angle = GeoCalculator.elevation_angle_deg(
                observer=observer,
                target=peak.location,
                target_elevation_m=peak.elevation_m,
                distance_km=distance_km,
            )

        return VisiblePeak(
            peak=peak,
            distance_km=distance_km,
            bearing_deg=bearing,
            elevation_angle_deg=elevation_angle,
            is_visible=VisibilityEngine.is_peak_visible(
                distance_km=distance_km,
                elevation_angle_deg=elevation_angle,
                max_distance_km=max_distance_km,
            ),
        )

    @staticmethod
    def compute_visible_peaks(
        observer: GeoPoint,
        peaks: Iterable[Peak],
        max_distance_km: float = VisibilityConfig.MAX_DISTANCE_KM,
    ) -> list[VisiblePeak]:
        """Annotate all peaks within range of the observer.

        Peaks farther than max_distance_km are excluded entirely. The result
        is sorted ascending by distance; ties keep catalog order.

        Args:
            observer: Observer position (altitude_m used when known)
            peaks: Candidate peaks, never mutated
            max_distance_km: Range limit

        Returns:
            Distance-sorted list of VisiblePeak (may be empty).
        """
        annotated: list[VisiblePeak] = []
        skipped = 0
        for peak in peaks:
            distance = GeoCalculator.distance_km(observer, peak.location)
            if distance > max_distance_km:
                skipped += 1
                continue
            annotated.append(
                VisibilityEngine.annotate(
                    observer=observer,
                    peak=peak,
                    max_distance_km=max_distance_km,
                    distance_km=distance,
                )
            )

        annotated.sort(key=lambda vp: vp.distance_km)
        logger.debug(
            f"Visibility from {observer}: {len(annotated)} in range, {skipped} beyond {max_distance_km:.0f}km, "
            f"{sum(vp.is_visible for vp in annotated)} above horizon"
        )
        return annotated
