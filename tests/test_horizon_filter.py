"""Tests for HorizonFilter display filtering.

Tests: elevation gate, field-of-view gate (with 0°/360° wrap), mutual
obstruction, display cap, and the ordering of the four gates.

Synthetic VisiblePeaks come from conftest.make_visible_peak so that bearing,
distance and elevation angle are exact.
"""

import random

from mountain_spotter.core.horizon_filter import HorizonFilter

from conftest import make_visible_peak


class TestElevationGate:
    """Peaks with unknown elevation are never displayed."""

    def test_zero_elevation_dropped(self) -> None:
        """elevation_m == 0 means unknown and is filtered first."""
        unknown = make_visible_peak("unknown", distance_km=5.0, bearing_deg=0.0, elevation_angle_deg=5.0, elevation_m=0.0)
        known = make_visible_peak("known", distance_km=6.0, bearing_deg=20.0, elevation_angle_deg=5.0)

        shown = HorizonFilter.filter_for_display(peaks=[unknown, known], current_azimuth=0.0)

        assert [vp.id for vp in shown] == ["known"]

    def test_unknown_elevation_cannot_obstruct(self) -> None:
        """The elevation gate runs before obstruction, so a dropped peak hides nothing."""
        unknown = make_visible_peak("unknown", distance_km=2.0, bearing_deg=10.0, elevation_angle_deg=30.0, elevation_m=0.0)
        behind = make_visible_peak("behind", distance_km=8.0, bearing_deg=10.5, elevation_angle_deg=10.0)

        shown = HorizonFilter.filter_for_display(peaks=[unknown, behind], current_azimuth=10.0)

        assert [vp.id for vp in shown] == ["behind"]


class TestFieldOfViewGate:
    """Peaks outside the view cone are removed."""

    def test_inside_and_outside(self) -> None:
        """Bearing within ±45° of the heading is kept, beyond is dropped."""
        inside = make_visible_peak("inside", distance_km=5.0, bearing_deg=130.0, elevation_angle_deg=2.0)
        edge = make_visible_peak("edge", distance_km=6.0, bearing_deg=145.0, elevation_angle_deg=2.0)
        outside = make_visible_peak("outside", distance_km=7.0, bearing_deg=146.0, elevation_angle_deg=2.0)

        shown = HorizonFilter.filter_for_display(peaks=[inside, edge, outside], current_azimuth=100.0)

        assert [vp.id for vp in shown] == ["inside", "edge"]

    def test_wraps_around_north(self) -> None:
        """Heading 350° sees a peak at 10° (20° to the right), not 340° away."""
        peak = make_visible_peak("north_east", distance_km=5.0, bearing_deg=10.0, elevation_angle_deg=2.0)

        assert HorizonFilter.is_in_field_of_view(peak=peak, azimuth_deg=350.0, field_of_view_deg=45.0)
        assert HorizonFilter.signed_offset_deg(bearing_deg=10.0, azimuth_deg=350.0) == 20.0

    def test_unnormalized_azimuth(self) -> None:
        """Raw compass values outside [0, 360) are normalized first."""
        peak = make_visible_peak("p", distance_km=5.0, bearing_deg=5.0, elevation_angle_deg=2.0)

        assert HorizonFilter.is_in_field_of_view(peak=peak, azimuth_deg=-10.0, field_of_view_deg=45.0)
        assert HorizonFilter.is_in_field_of_view(peak=peak, azimuth_deg=725.0, field_of_view_deg=45.0)

    def test_no_heading_skips_gate(self) -> None:
        """Without a heading every peak passes the field-of-view gate."""
        peaks = [
            make_visible_peak(f"p{i}", distance_km=1.0 + i, bearing_deg=90.0 * i, elevation_angle_deg=2.0)
            for i in range(4)
        ]

        shown = HorizonFilter.filter_for_display(peaks=peaks, current_azimuth=None)

        assert len(shown) == 4


class TestObstruction:
    """A nearer peak in nearly the same direction hides a lower-looking farther peak."""

    def test_far_peak_hidden_behind_taller_closer_peak(self) -> None:
        """Same bearing, closer peak higher on the horizon: far peak dropped."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=100.0, elevation_angle_deg=10.0)
        far = make_visible_peak("far", distance_km=20.0, bearing_deg=101.0, elevation_angle_deg=5.0)

        shown = HorizonFilter.filter_for_display(peaks=[far, close], current_azimuth=100.0)

        assert [vp.id for vp in shown] == ["close"]

    def test_far_peak_rising_above_is_kept(self) -> None:
        """Far peak more than 0.5° higher than the closer one is not obstructed."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=100.0, elevation_angle_deg=3.0)
        far = make_visible_peak("far", distance_km=20.0, bearing_deg=100.5, elevation_angle_deg=3.6)

        shown = HorizonFilter.filter_for_display(peaks=[close, far], current_azimuth=100.0)

        assert [vp.id for vp in shown] == ["close", "far"]

    def test_elevation_tolerance_boundary(self) -> None:
        """Closer peak up to 0.5° lower still obstructs."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=100.0, elevation_angle_deg=3.0)
        far = make_visible_peak("far", distance_km=20.0, bearing_deg=100.0, elevation_angle_deg=3.5)

        assert HorizonFilter.is_obstructed_by(far_peak=far, closer_peak=close)

    def test_different_direction_not_obstructed(self) -> None:
        """Bearing difference of 2° or more never obstructs."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=100.0, elevation_angle_deg=20.0)
        far = make_visible_peak("far", distance_km=20.0, bearing_deg=102.0, elevation_angle_deg=1.0)

        assert not HorizonFilter.is_obstructed_by(far_peak=far, closer_peak=close)

    def test_obstruction_across_north(self) -> None:
        """Bearings 359.5° and 0.5° are 1° apart."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=359.5, elevation_angle_deg=8.0)
        far = make_visible_peak("far", distance_km=30.0, bearing_deg=0.5, elevation_angle_deg=2.0)

        shown = HorizonFilter.filter_for_display(peaks=[close, far], current_azimuth=0.0)

        assert [vp.id for vp in shown] == ["close"]

    def test_only_accepted_peaks_obstruct(self) -> None:
        """A hidden peak does not hide peaks behind it in turn."""
        a = make_visible_peak("a", distance_km=5.0, bearing_deg=100.0, elevation_angle_deg=10.0)
        b = make_visible_peak("b", distance_km=10.0, bearing_deg=101.5, elevation_angle_deg=9.9)
        c = make_visible_peak("c", distance_km=15.0, bearing_deg=103.0, elevation_angle_deg=9.0)

        shown = HorizonFilter.filter_for_display(peaks=[a, b, c], current_azimuth=100.0)

        # b is hidden by a; c is 3° from a and only 1.5° from the discarded b
        assert [vp.id for vp in shown] == ["a", "c"]

    def test_obstruction_applies_without_heading(self) -> None:
        """Missing heading skips the view cone but not obstruction."""
        close = make_visible_peak("close", distance_km=5.0, bearing_deg=200.0, elevation_angle_deg=10.0)
        far = make_visible_peak("far", distance_km=20.0, bearing_deg=200.0, elevation_angle_deg=5.0)

        shown = HorizonFilter.filter_for_display(peaks=[close, far], current_azimuth=None)

        assert [vp.id for vp in shown] == ["close"]


class TestCap:
    """At most max_displayed peaks, closest first."""

    def test_cap_keeps_forty_closest(self) -> None:
        """100 unobstructed in-view peaks, cap 40: exactly the 40 closest."""
        # Each farther peak is 1° higher, so no peak hides another
        peaks = [
            make_visible_peak(f"p{i:03d}", distance_km=1.0 + i, bearing_deg=180.0, elevation_angle_deg=float(i))
            for i in range(100)
        ]
        shuffled = list(peaks)
        random.Random(42).shuffle(shuffled)

        shown = HorizonFilter.filter_for_display(peaks=shuffled, current_azimuth=180.0, max_displayed=40)

        assert len(shown) == 40
        assert [vp.id for vp in shown] == [vp.id for vp in peaks[:40]]

    def test_fewer_than_cap(self) -> None:
        """Cap larger than the input returns everything."""
        peaks = [make_visible_peak("only", distance_km=3.0, bearing_deg=0.0, elevation_angle_deg=1.0)]

        assert len(HorizonFilter.filter_for_display(peaks=peaks, current_azimuth=0.0, max_displayed=40)) == 1

    def test_empty_input(self) -> None:
        """No peaks, no markers."""
        assert HorizonFilter.filter_for_display(peaks=[], current_azimuth=90.0) == []
