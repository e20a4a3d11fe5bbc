"""Shared pytest fixtures for mountain_spotter tests.

Provides peak builders, mock peak sources and reusable observer positions.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Most scenarios sit in the Mont Blanc massif, where the bundled sample
    peaks give realistic distances (a few km) and steep elevation angles.
    Synthetic VisiblePeaks skip geodesy entirely: their bearing, distance and
    elevation angle are set directly so filter and projector tests do not
    depend on GeoCalculator (which would be testing with tested code).
"""

from typing import Optional

import pytest

from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.peak import Peak
from mountain_spotter.model.visible_peak import VisiblePeak
from mountain_spotter.services.peak_catalog import (
    BoundingBox,
    PeakCatalog,
    PeakSource,
    PeakSourceError,
    load_sample_peaks,
)
from mountain_spotter.services.spotter_session import SpotterSession


# =============================================================================
# BUILDERS
# =============================================================================


def make_peak(
    peak_id: str,
    latitude: float = 45.0,
    longitude: float = 7.0,
    elevation_m: float = 3000.0,
    name: Optional[str] = None,
) -> Peak:
    """Build a Peak with its location altitude equal to its elevation."""
    return Peak(
        id=peak_id,
        name=name or peak_id.replace("_", " ").title(),
        location=GeoPoint(latitude=latitude, longitude=longitude, altitude_m=elevation_m),
        elevation_m=elevation_m,
    )


def make_visible_peak(
    peak_id: str,
    distance_km: float,
    bearing_deg: float,
    elevation_angle_deg: float,
    elevation_m: float = 3000.0,
) -> VisiblePeak:
    """Build a VisiblePeak with geometry set directly (no geodesy involved)."""
    return VisiblePeak(
        peak=make_peak(peak_id=peak_id, elevation_m=elevation_m),
        distance_km=distance_km,
        bearing_deg=bearing_deg,
        elevation_angle_deg=elevation_angle_deg,
        is_visible=elevation_angle_deg >= -0.1,
    )


# =============================================================================
# MOCK PEAK SOURCES
# =============================================================================


class MockPeakSource(PeakSource):
    """Returns a fixed peak list and records every bounding box it is asked for."""

    def __init__(self, peaks: list[Peak]) -> None:
        self.peaks = peaks
        self.calls: list[BoundingBox] = []

    def fetch(self, bbox: BoundingBox) -> list[Peak]:
        self.calls.append(bbox)
        return [peak for peak in self.peaks if bbox.contains(peak.location)]


class FailingPeakSource(PeakSource):
    """Always fails, like an unreachable remote catalog."""

    def __init__(self) -> None:
        self.calls = 0

    def fetch(self, bbox: BoundingBox) -> list[Peak]:
        self.calls += 1
        raise PeakSourceError("catalog unreachable")


class FlakyPeakSource(MockPeakSource):
    """Raises the given errors on the first fetches, then answers like MockPeakSource."""

    def __init__(self, peaks: list[Peak], errors: list[Exception]) -> None:
        super().__init__(peaks=peaks)
        self.errors = list(errors)

    def fetch(self, bbox: BoundingBox) -> list[Peak]:
        if self.errors:
            self.calls.append(bbox)
            raise self.errors.pop(0)
        return super().fetch(bbox)


# =============================================================================
# OBSERVERS
# =============================================================================


@pytest.fixture
def observer_near_mont_blanc() -> GeoPoint:
    """Observer at 1000m, about 3.8km south-southwest of the Mont Blanc summit."""
    return GeoPoint(latitude=45.8, longitude=6.85, altitude_m=1000.0)


@pytest.fixture
def observer_chamonix() -> GeoPoint:
    """Chamonix valley floor (1035m); Mont Blanc massif lies to the south.

    From here the Aiguille du Midi, Mont Blanc du Tacul and Mont Blanc are
    between 160° and 185°, the Aiguille Verte and Matterhorn to the east.
    """
    return GeoPoint(latitude=45.9237, longitude=6.8694, altitude_m=1035.0)


# =============================================================================
# PEAKS AND CATALOGS
# =============================================================================


@pytest.fixture
def sample_peaks() -> list[Peak]:
    """Bundled sample peaks (5 Alpine, 3 North American, Matterhorn)."""
    return load_sample_peaks()


@pytest.fixture
def mont_blanc(sample_peaks: list[Peak]) -> Peak:
    """Mont Blanc: 45.8326, 6.8652, 4809m."""
    return next(peak for peak in sample_peaks if peak.id == "mont_blanc")


@pytest.fixture
def alps_source() -> MockPeakSource:
    """Mock source with three synthetic peaks around Chamonix."""
    return MockPeakSource(
        peaks=[
            make_peak("brevent", latitude=45.9342, longitude=6.8388, elevation_m=2525.0),
            make_peak("aiguillette", latitude=45.9550, longitude=6.8700, elevation_m=2311.0),
            make_peak("far_away", latitude=47.0, longitude=9.0, elevation_m=3000.0),
        ]
    )


@pytest.fixture
def sample_catalog(sample_peaks: list[Peak]) -> PeakCatalog:
    """Catalog without a source: always answers with the sample peaks."""
    return PeakCatalog(source=None, sample_peaks=sample_peaks)


@pytest.fixture
def session(sample_catalog: PeakCatalog) -> SpotterSession:
    """Fresh session over the sample catalog with default thresholds."""
    return SpotterSession(catalog=sample_catalog)
