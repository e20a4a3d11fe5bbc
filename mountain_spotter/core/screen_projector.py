"""Screen-space projection of filtered peaks.

Maps a peak's (bearing, elevation angle) and the device's (azimuth, pitch)
to viewport pixels for overlay drawing:
- Horizontal: signed offset from the heading, scaled so ±FOV spans the width
- Vertical: horizon row shifted by pitch, peak raised by its elevation angle

Pure and stateless; called once per peak per redraw, so it stays free of
logging and allocation beyond the result.
"""

from typing import Optional

from mountain_spotter.constants import FilterConfig, ProjectionConfig
from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.screen_point import OverlayMarker, ScreenPoint
from mountain_spotter.model.visible_peak import VisiblePeak


class ScreenProjector:
    """Projects peaks onto the camera viewport.

    Example:
        point = ScreenProjector.project(
            peak=vp, orientation=orientation, viewport_width=1080, viewport_height=720,
            field_of_view_deg=45.0,
        )
        if point is not None:
            draw_marker(point.x, point.y)
    """

    @staticmethod
    def horizon_row(
        orientation: Orientation,
        viewport_height: float,
        pitch_scale: float = ProjectionConfig.PITCH_SCALE_PX_PER_DEG,
    ) -> float:
        """Viewport row of the flat horizon for the current pitch."""
        return viewport_height / 2 + orientation.pitch_deg * pitch_scale

    @staticmethod
    def project(
        peak: VisiblePeak,
        orientation: Orientation,
        viewport_width: float,
        viewport_height: float,
        field_of_view_deg: float = FilterConfig.FIELD_OF_VIEW_DEG,
        pitch_scale: float = ProjectionConfig.PITCH_SCALE_PX_PER_DEG,
        elevation_scale: float = ProjectionConfig.ELEVATION_SCALE_PX_PER_DEG,
        clamp_vertical: bool = True,
    ) -> Optional[ScreenPoint]:
        """Project one peak into viewport coordinates.

        Args:
            peak: Filtered peak
            orientation: Latest device orientation
            viewport_width: Viewport width in pixels
            viewport_height: Viewport height in pixels
            field_of_view_deg: Half-width of the view cone (maps to half the width)
            pitch_scale: Pixels of horizon shift per degree of pitch
            elevation_scale: Pixels of rise per degree of elevation angle
            clamp_vertical: Clamp rows outside the viewport to its edge;
                if False such peaks return None instead

        Returns:
            ScreenPoint inside [0, width] x [0, height], or None if the peak
            is outside the field of view (or vertically off-screen when not clamping).

        Raises:
            ValueError: If field_of_view_deg is not positive.
        """
        if field_of_view_deg <= 0:
            raise ValueError(f"field_of_view_deg must be positive, got {field_of_view_deg}")
        signed_angle = GeoCalculator.normalize_signed_deg(
            peak.bearing_deg - GeoCalculator.normalize_azimuth_deg(orientation.azimuth_deg)
        )
        if abs(signed_angle) > field_of_view_deg:
            return None

        half_width = viewport_width / 2
        x = half_width + (signed_angle / field_of_view_deg) * half_width
        x = min(max(x, 0.0), viewport_width)

        baseline = ScreenProjector.horizon_row(
            orientation=orientation,
            viewport_height=viewport_height,
            pitch_scale=pitch_scale,
        )
        y = baseline - peak.elevation_angle_deg * elevation_scale
        if not 0.0 <= y <= viewport_height:
            if not clamp_vertical:
                return None
            y = min(max(y, 0.0), viewport_height)

        return ScreenPoint(x=x, y=y)

    @staticmethod
    def project_all(
        peaks: list[VisiblePeak],
        orientation: Orientation,
        viewport_width: float,
        viewport_height: float,
        field_of_view_deg: float = FilterConfig.FIELD_OF_VIEW_DEG,
        clamp_vertical: bool = True,
    ) -> list[OverlayMarker]:
        """Project every peak, keeping only those that land on screen.

        Returns:
            OverlayMarkers in the input order.
        """
        markers: list[OverlayMarker] = []
        for peak in peaks:
            point = ScreenProjector.project(
                peak=peak,
                orientation=orientation,
                viewport_width=viewport_width,
                viewport_height=viewport_height,
                field_of_view_deg=field_of_view_deg,
                clamp_vertical=clamp_vertical,
            )
            if point is not None:
                markers.append(OverlayMarker(peak=peak, position=point))
        return markers
