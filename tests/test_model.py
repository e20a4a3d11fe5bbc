"""Tests for mountain_spotter data model.

Tests: GeoPoint, Peak, Orientation, VisiblePeak, OverlayMarker
Focus: Validation at construction, serialization, convenience accessors.
"""

import math

import pytest

from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.peak import Peak
from mountain_spotter.model.screen_point import OverlayMarker, ScreenPoint

from conftest import make_peak, make_visible_peak


class TestGeoPoint:
    """GeoPoint - validated coordinate value type."""

    def test_valid_point(self) -> None:
        """Plain construction keeps values and tuple accessors agree."""
        point = GeoPoint(latitude=45.8, longitude=6.85, altitude_m=1000.0)
        assert point.lat_lon == (45.8, 6.85)
        assert point.lon_lat == (6.85, 45.8)

    @pytest.mark.parametrize("latitude, longitude", [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_out_of_range_rejected(self, latitude: float, longitude: float) -> None:
        """Coordinates outside the globe raise ValueError."""
        with pytest.raises(ValueError):
            GeoPoint(latitude=latitude, longitude=longitude)

    def test_nan_rejected(self) -> None:
        """NaN coordinates and altitude raise ValueError."""
        with pytest.raises(ValueError, match="NaN"):
            GeoPoint(latitude=math.nan, longitude=6.0)
        with pytest.raises(ValueError, match="NaN"):
            GeoPoint(latitude=45.0, longitude=6.0, altitude_m=math.nan)

    def test_dict_roundtrip_without_altitude(self) -> None:
        """Unknown altitude survives serialization as None."""
        point = GeoPoint(latitude=-12.5, longitude=130.0)
        assert GeoPoint.from_dict(point.to_dict()) == point
        assert point.to_dict()["altitude_m"] is None

    def test_with_altitude(self) -> None:
        """with_altitude returns a new point, leaving the original untouched."""
        point = GeoPoint(latitude=45.0, longitude=7.0)
        raised = point.with_altitude(2500.0)
        assert raised.altitude_m == 2500.0
        assert point.altitude_m is None


class TestPeak:
    """Peak - catalog summit."""

    def test_empty_id_rejected(self) -> None:
        """Every peak needs an id."""
        with pytest.raises(ValueError):
            Peak(id="", name="Nameless", location=GeoPoint(45.0, 7.0), elevation_m=1000.0)

    def test_nan_elevation_rejected(self) -> None:
        """NaN elevation raises ValueError."""
        with pytest.raises(ValueError, match="NaN"):
            make_peak("broken", elevation_m=math.nan)

    def test_zero_elevation_means_unknown(self) -> None:
        """Elevation 0 is accepted and flagged as unknown."""
        peak = make_peak("unnamed_hill", elevation_m=0.0)
        assert not peak.has_known_elevation
        assert make_peak("known").has_known_elevation

    def test_matches_case_insensitive(self, mont_blanc: Peak) -> None:
        """Search hits name, region and country regardless of case."""
        assert mont_blanc.matches("mont")
        assert mont_blanc.matches("ALPS")
        assert mont_blanc.matches("italy")
        assert not mont_blanc.matches("denali")

    def test_matches_blank_query(self, mont_blanc: Peak) -> None:
        """Blank queries match nothing."""
        assert not mont_blanc.matches("   ")

    def test_dict_roundtrip(self, mont_blanc: Peak) -> None:
        """to_dict/from_dict preserve every field."""
        assert Peak.from_dict(mont_blanc.to_dict()) == mont_blanc

    def test_from_dict_optional_fields(self) -> None:
        """Only id, name, location and elevation are required."""
        peak = Peak.from_dict(
            {"id": "x", "name": "X", "location": {"latitude": 1.0, "longitude": 2.0}, "elevation_m": 1200}
        )
        assert peak.prominence_m is None
        assert peak.image_url is None
        assert peak.elevation_m == 1200.0


class TestOrientation:
    """Orientation - latest heading snapshot."""

    @pytest.mark.parametrize("raw, expected", [(0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0)])
    def test_azimuth_normalized(self, raw: float, expected: float) -> None:
        """Azimuth is wrapped into [0, 360) on construction."""
        assert Orientation(azimuth_deg=raw).azimuth_deg == pytest.approx(expected)

    def test_pitch_and_roll_default_zero(self) -> None:
        """Heading-only readings have a level device."""
        orientation = Orientation(azimuth_deg=45.0)
        assert orientation.pitch_deg == 0.0
        assert orientation.roll_deg == 0.0


class TestVisiblePeak:
    """VisiblePeak - derived observer-relative geometry."""

    def test_delegated_accessors(self) -> None:
        """id, name and elevation come from the wrapped peak."""
        vp = make_visible_peak("grand_combin", distance_km=40.0, bearing_deg=80.0, elevation_angle_deg=3.0, elevation_m=4314.0)
        assert vp.id == "grand_combin"
        assert vp.name == "Grand Combin"
        assert vp.elevation_m == 4314.0


class TestOverlayMarker:
    """OverlayMarker - projected peak with label."""

    def test_label(self) -> None:
        """Label has name, elevation and distance on separate lines."""
        vp = make_visible_peak("aiguille_verte", distance_km=7.94, bearing_deg=80.0, elevation_angle_deg=20.0, elevation_m=4122.0)
        marker = OverlayMarker(peak=vp, position=ScreenPoint(x=10.0, y=20.0))
        assert marker.label == "Aiguille Verte<br>4122m<br>7.9km"
