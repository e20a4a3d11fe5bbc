"""Display filtering of visible peaks for the camera overlay.

Narrows the distance-sorted VisiblePeak list to the markers worth drawing
for the current compass heading. Four gates, strictly in order, each
working on the previous one's output:

1. Elevation gate: drop peaks with unknown (<= 0) elevation
2. Field-of-view gate: keep peaks within the view cone around the heading
   (skipped while no heading is available)
3. Mutual obstruction: a nearer peak in nearly the same direction, standing
   as tall or taller on the horizon, hides the farther one
4. Cap: keep at most max_displayed peaks, closest first

All bearing differences go through GeoCalculator normalization so the
0°/360° wrap never produces false gaps.
"""

import logging
from typing import Optional

from mountain_spotter.constants import FilterConfig
from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.model.visible_peak import VisiblePeak

logger = logging.getLogger(__name__)


class HorizonFilter:
    """Reduces annotated peaks to the overlay subset.

    Example:
        shown = HorizonFilter.filter_for_display(peaks=visible, current_azimuth=orientation.azimuth_deg)
    """

    @staticmethod
    def signed_offset_deg(bearing_deg: float, azimuth_deg: float) -> float:
        """Signed angle from the heading to a bearing, in (-180, 180].

        Negative means left of the heading, positive right of it.
        """
        heading = GeoCalculator.normalize_azimuth_deg(azimuth_deg)
        return GeoCalculator.normalize_signed_deg(bearing_deg - heading)

    @staticmethod
    def is_in_field_of_view(
        peak: VisiblePeak,
        azimuth_deg: float,
        field_of_view_deg: float = FilterConfig.FIELD_OF_VIEW_DEG,
    ) -> bool:
        """True if the peak lies within field_of_view_deg of the heading on either side."""
        return abs(HorizonFilter.signed_offset_deg(peak.bearing_deg, azimuth_deg)) <= field_of_view_deg

    @staticmethod
    def is_obstructed_by(
        far_peak: VisiblePeak,
        closer_peak: VisiblePeak,
        bearing_tolerance_deg: float = FilterConfig.OBSTRUCTION_BEARING_TOLERANCE_DEG,
        elevation_tolerance_deg: float = FilterConfig.OBSTRUCTION_ELEVATION_TOLERANCE_DEG,
    ) -> bool:
        """Check if a closer peak hides a farther one.

        Two conditions must hold:
        1. Similar direction: circular bearing difference below bearing_tolerance_deg
        2. The closer peak stands at least as high on the horizon, give or take
           elevation_tolerance_deg

        Args:
            far_peak: Candidate that may be hidden
            closer_peak: Already accepted nearer peak
            bearing_tolerance_deg: Direction similarity threshold
            elevation_tolerance_deg: Allowed elevation-angle shortfall of the closer peak

        Returns:
            True if far_peak is obstructed by closer_peak.
        """
        bearing_diff = GeoCalculator.circular_difference_deg(far_peak.bearing_deg, closer_peak.bearing_deg)
        in_similar_direction = bearing_diff < bearing_tolerance_deg
        blocks_elevation = closer_peak.elevation_angle_deg >= far_peak.elevation_angle_deg - elevation_tolerance_deg
        return in_similar_direction and blocks_elevation

    @staticmethod
    def remove_obstructed(
        peaks: list[VisiblePeak],
        bearing_tolerance_deg: float = FilterConfig.OBSTRUCTION_BEARING_TOLERANCE_DEG,
        elevation_tolerance_deg: float = FilterConfig.OBSTRUCTION_ELEVATION_TOLERANCE_DEG,
    ) -> list[VisiblePeak]:
        """Drop peaks hidden behind nearer accepted peaks.

        Peaks are processed closest first; only accepted (unobstructed) peaks
        can obstruct later ones.

        Returns:
            Unobstructed peaks in ascending distance order.
        """
        unobstructed: list[VisiblePeak] = []
        for candidate in sorted(peaks, key=lambda vp: vp.distance_km):
            blocker = next(
                (
                    closer
                    for closer in unobstructed
                    if HorizonFilter.is_obstructed_by(
                        far_peak=candidate,
                        closer_peak=closer,
                        bearing_tolerance_deg=bearing_tolerance_deg,
                        elevation_tolerance_deg=elevation_tolerance_deg,
                    )
                ),
                None,
            )
            if blocker is None:
                unobstructed.append(candidate)
            else:
                logger.debug(f"{candidate.name} obstructed by {blocker.name}")
        return unobstructed

    @staticmethod
    def filter_for_display(
        peaks: list[VisiblePeak],
        current_azimuth: Optional[float],
        field_of_view_deg: float = FilterConfig.FIELD_OF_VIEW_DEG,
        obstruction_bearing_tolerance_deg: float = FilterConfig.OBSTRUCTION_BEARING_TOLERANCE_DEG,
        obstruction_elevation_tolerance_deg: float = FilterConfig.OBSTRUCTION_ELEVATION_TOLERANCE_DEG,
        max_displayed: int = FilterConfig.MAX_DISPLAYED,
    ) -> list[VisiblePeak]:
        """Select the peaks to draw for the current heading.

        Args:
            peaks: VisibilityEngine output
            current_azimuth: Compass heading in degrees, None if not yet available
            field_of_view_deg: Half-width of the view cone
            obstruction_bearing_tolerance_deg: Direction similarity for obstruction
            obstruction_elevation_tolerance_deg: Elevation-angle slack for obstruction
            max_displayed: Maximum number of peaks returned

        Returns:
            Filtered peaks in ascending distance order, at most max_displayed.
        """
        # 1. Unknown elevation
        with_elevation = [vp for vp in peaks if vp.peak.elevation_m > 0]

        # 2. Field of view (no heading yet: keep everything)
        if current_azimuth is None:
            in_view = with_elevation
        else:
            in_view = [
                vp
                for vp in with_elevation
                if HorizonFilter.is_in_field_of_view(
                    peak=vp,
                    azimuth_deg=current_azimuth,
                    field_of_view_deg=field_of_view_deg,
                )
            ]

        # 3. Mutual obstruction
        unobstructed = HorizonFilter.remove_obstructed(
            peaks=in_view,
            bearing_tolerance_deg=obstruction_bearing_tolerance_deg,
            elevation_tolerance_deg=obstruction_elevation_tolerance_deg,
        )

        # 4. Cap
        shown = unobstructed[: max(max_displayed, 0)]

        logger.debug(
            f"HorizonFilter: {len(peaks)} in -> {len(with_elevation)} with elevation -> "
            f"{len(in_view)} in view -> {len(unobstructed)} unobstructed -> {len(shown)} shown"
        )
        return shown
