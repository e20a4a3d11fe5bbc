"""Mountain Spotter - Identify the peaks on your horizon.

Works out which mountain peaks are theoretically visible from the observer's
position and projects them onto the camera viewport for the current heading:
- Haversine distances, initial bearings and curvature-corrected elevation angles
- Field of view, mutual obstruction and display cap filtering
- Screen projection of peak markers and a horizon silhouette
- State machine-based session tying sensors, peak catalog and core together

Modules:
    core: Pure geometric calculations (GeoCalculator, VisibilityEngine, HorizonFilter, ScreenProjector)
    model: Value types (GeoPoint, Peak, Orientation, VisiblePeak, ScreenPoint)
    services: Collaborators (PeakCatalog, sensor sources, SpotterSession)
    ui: Plotly rendering (OverlayChart, HorizonProfile)

Example:
    from mountain_spotter.model import GeoPoint, Orientation
    from mountain_spotter.services import PeakCatalog, SpotterSession

    session = SpotterSession(catalog=PeakCatalog())
    session.update_location(GeoPoint(latitude=45.92, longitude=6.87, altitude_m=1035.0))
    session.update_orientation(Orientation(azimuth_deg=180.0))
    markers = session.overlay(viewport_width=1080, viewport_height=720)
"""
