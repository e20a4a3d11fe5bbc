"""Render the peak overlay for a fixed observer and heading to HTML.

Developer utility: replays one position fix and one compass reading through a
SpotterSession backed by the bundled sample peaks, then writes the overlay
frame and the peak list as standalone Plotly HTML files.

To render a different view:
1. Update OBSERVER and HEADING below
2. Run: python scripts/render_overlay.py
"""

import logging

from mountain_spotter.constants import OUTPUT_DIR, ChartConfig
from mountain_spotter.model import GeoPoint, Orientation
from mountain_spotter.services import (
    FixedLocationSource,
    FixedOrientationSource,
    PeakCatalog,
    SpotterSession,
)
from mountain_spotter.ui import HorizonProfile, OverlayChart

logger = logging.getLogger(__name__)

# Chamonix valley floor, looking south toward the Mont Blanc massif
OBSERVER = GeoPoint(latitude=45.9237, longitude=6.8694, altitude_m=1035.0)
HEADING = Orientation(azimuth_deg=170.0, pitch_deg=0.0)

OVERLAY_FILE = OUTPUT_DIR / "overlay.html"
TABLE_FILE = OUTPUT_DIR / "peak_table.html"


def render_overlay() -> None:
    """Run one session update and write overlay and table HTML files."""
    session = SpotterSession(catalog=PeakCatalog())
    session.poll(
        location_source=FixedLocationSource(location=OBSERVER),
        orientation_source=FixedOrientationSource(orientation=HEADING),
    )
    logger.info(f"Session state: {session.state_name}, {len(session.visible_peaks)} peaks in range")

    width = ChartConfig.DEFAULT_WIDTH
    height = ChartConfig.DEFAULT_HEIGHT
    markers = session.overlay(viewport_width=width, viewport_height=height)
    profile = HorizonProfile.build(
        markers=markers,
        orientation=HEADING,
        viewport_width=width,
        viewport_height=height,
    )

    chart = OverlayChart(width=width, height=height)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    chart.render_overlay(markers=markers, orientation=HEADING, profile=profile).write_html(OVERLAY_FILE)
    chart.render_peak_table(visible_peaks=session.visible_peaks).write_html(TABLE_FILE)

    for marker in markers:
        logger.info(f"  {marker.peak} at ({marker.position.x:.0f}, {marker.position.y:.0f})")
    logger.info(f"Saved overlay to {OVERLAY_FILE} and peak table to {TABLE_FILE}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    render_overlay()
