"""Configuration constants for Mountain Spotter.

All configurable parameters are centralized here for easy tuning.

Classes:
    EarthConfig: Spherical Earth model
    VisibilityConfig: Range and horizon thresholds for coarse visibility
    FilterConfig: Field of view, obstruction tolerances and display cap
    ProjectionConfig: Screen-space scaling of bearings and elevation angles
    CatalogConfig: Peak catalog search radius and cache reuse thresholds
    CompassConfig: Azimuth smoothing and throttling
    HorizonProfileConfig: Silhouette sampling
    ChartConfig: Overlay chart dimensions
    StyleConfig: Overlay colors and styling
    NameConfig: Compass direction labels
"""

from pathlib import Path

# Package root directory (where mountain_spotter/ lives)
PACKAGE_DIR = Path(__file__).parent

# Bundled data shipped with the package
DATA_DIR = PACKAGE_DIR / "data"

# Project root directory (parent of mountain_spotter/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Output directory for rendered overlays
OUTPUT_DIR = PROJECT_ROOT / "output"


class EarthConfig:
    """Spherical Earth model (WGS84 mean radius)."""

    RADIUS_KM = 6371.0
    RADIUS_M = 6_371_000.0


class VisibilityConfig:
    """Coarse visibility thresholds."""

    # Peaks farther than this are excluded entirely, not marked invisible
    MAX_DISTANCE_KM = 100.0

    # Minimum elevation angle still counted as above the horizon.
    # Negative to allow for atmospheric refraction (~0.1°).
    HORIZON_TOLERANCE_DEG = -0.1

    # Elevation angle reported when the observer stands on the peak itself
    ZENITH_ANGLE_DEG = 90.0


class FilterConfig:
    """Display filtering of visible peaks."""

    # Half-width of the view cone, each side of the heading
    FIELD_OF_VIEW_DEG = 45.0

    # A nearer peak blocks a farther one when both are within this bearing...
    OBSTRUCTION_BEARING_TOLERANCE_DEG = 2.0
    # ...and the nearer one stands at most this much lower on the horizon
    OBSTRUCTION_ELEVATION_TOLERANCE_DEG = 0.5

    # Cap on drawn markers to avoid clutter
    MAX_DISPLAYED = 40


assert 0 < FilterConfig.FIELD_OF_VIEW_DEG <= 180
assert FilterConfig.OBSTRUCTION_BEARING_TOLERANCE_DEG >= 0
assert FilterConfig.MAX_DISPLAYED > 0


class ProjectionConfig:
    """Screen projection scaling (pixels per degree)."""

    # Horizon row moves down this much per degree of device pitch
    PITCH_SCALE_PX_PER_DEG = 10.0

    # Peak marker rises this much above the horizon row per degree of elevation angle
    ELEVATION_SCALE_PX_PER_DEG = 15.0


class CatalogConfig:
    """Peak catalog query and cache parameters."""

    # Default search radius around the observer
    DEFAULT_RADIUS_KM = 50.0

    # Cached peaks are reused while the observer stays this close to the last query...
    CACHE_REUSE_DISTANCE_KM = 5.0
    # ...and the requested radius differs by less than this
    CACHE_REUSE_RADIUS_DELTA_KM = 10.0

    # Fallback dataset used when the source fails or returns nothing
    SAMPLE_PEAKS_PATH = DATA_DIR / "sample_peaks.json"


class CompassConfig:
    """Azimuth conditioning in the orientation collaborator."""

    # Exponential smoothing weight of each new reading (lower = smoother)
    SMOOTHING_FACTOR = 0.1

    # Readings arriving faster than this are ignored
    MIN_UPDATE_INTERVAL_S = 0.1


assert 0 < CompassConfig.SMOOTHING_FACTOR <= 1


class HorizonProfileConfig:
    """Horizon silhouette sampling."""

    # Number of evenly spaced columns across the viewport (every 1% of width)
    SAMPLE_COUNT = 101


class ChartConfig:
    """Overlay chart dimensions and settings."""

    DEFAULT_WIDTH = 1080
    DEFAULT_HEIGHT = 720

    TABLE_HEIGHT = 400


class StyleConfig:
    """Overlay colors and styling."""

    HORIZON_COLOR = "#22C55E"  # Green-500 flat horizon
    PROFILE_COLOR = "#FFFFFF"
    PROFILE_FILL = "rgba(0, 0, 0, 0.3)"
    MARKER_COLOR = "#EF4444"  # Red-500
    MARKER_SIZE = 10
    LABEL_COLOR = "#FFFFFF"
    BACKGROUND_COLOR = "#1F2937"  # Gray-800 stands in for the camera feed
    TABLE_HEADER_COLOR = "#374151"


class NameConfig:
    """Display names for bearings."""

    # 16-point compass rose, each sector 22.5° wide centered on its direction
    COMPASS_POINTS = [
        "N",
        "NNE",
        "NE",
        "ENE",
        "E",
        "ESE",
        "SE",
        "SSE",
        "S",
        "SSW",
        "SW",
        "WSW",
        "W",
        "WNW",
        "NW",
        "NNW",
    ]
    assert len(COMPASS_POINTS) == 16

    @staticmethod
    def get_compass_direction(bearing_deg: float) -> str:
        """Get compass direction name from bearing.

        Args:
            bearing_deg: Bearing in degrees (any value, wrapped into 0-360)

        Returns:
            Compass direction string (N, NNE, NE, ..., NNW)
        """
        sector = 360.0 / len(NameConfig.COMPASS_POINTS)
        index = int(((bearing_deg % 360) + sector / 2) // sector) % len(NameConfig.COMPASS_POINTS)
        return NameConfig.COMPASS_POINTS[index]
