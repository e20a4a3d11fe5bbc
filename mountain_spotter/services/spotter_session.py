"""Spotter session - the seam between sensor/catalog collaborators and the core.

Uses python-statemachine for the session lifecycle:

States:
    AWAITING_FIX: No position yet, nothing to compute
    LIST_ONLY: Position known, no heading; distance-sorted list only
    OVERLAY: Position and heading known; peaks can be projected on screen

Transitions:
    AWAITING_FIX -> OVERLAY: location_fixed (a heading arrived earlier)
    AWAITING_FIX -> LIST_ONLY: location_fixed (no heading yet)
    LIST_ONLY -> OVERLAY: heading_acquired
    OVERLAY -> LIST_ONLY: heading_lost

Recompute contract:
    VisibilityEngine runs only on a new position or a refreshed peak set.
    HorizonFilter and ScreenProjector run on every orientation update and reuse
    the last VisibilityEngine output.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from mountain_spotter.constants import CatalogConfig, FilterConfig, VisibilityConfig
from mountain_spotter.core.horizon_filter import HorizonFilter
from mountain_spotter.core.screen_projector import ScreenProjector
from mountain_spotter.core.visibility_engine import VisibilityEngine
from mountain_spotter.model.geo_point import GeoPoint
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.screen_point import OverlayMarker
from mountain_spotter.model.visible_peak import VisiblePeak
from mountain_spotter.services.peak_catalog import PeakCatalog
from mountain_spotter.services.sensors import LocationSource, OrientationSource

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """Shared context/model for the session state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    location: GeoPoint | None = None
    orientation: Orientation | None = None
    visible_peaks: list[VisiblePeak] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"SessionContext(state={self.state}, location={self.location}, "
            f"orientation={self.orientation}, peaks={len(self.visible_peaks)})"
        )


class SessionStateMachine(StateMachine):
    """Lifecycle of a spotting session. See module docstring for transitions."""

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    awaiting_fix = State("AwaitingFix", initial=True)
    list_only = State("ListOnly")
    overlay = State("Overlay")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    # New position (first fix or movement)
    location_fixed = (
        awaiting_fix.to(overlay, cond="has_heading")
        | awaiting_fix.to(list_only, unless="has_heading")
        | list_only.to(list_only)
        | overlay.to(overlay)
    )
    # Orientation reading available; before the first fix it is only stored
    heading_acquired = awaiting_fix.to(awaiting_fix) | list_only.to(overlay) | overlay.to(overlay)
    # Orientation source stopped reporting
    heading_lost = awaiting_fix.to(awaiting_fix) | list_only.to(list_only) | overlay.to(list_only)

    # ==========================================================================
    # Guards
    # ==========================================================================

    def has_heading(self) -> bool:
        """Guard: Check if an orientation snapshot is stored."""
        return self.context.orientation is not None

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_awaiting_fix(self) -> bool:
        return self.awaiting_fix.is_active

    @property
    def is_list_only(self) -> bool:
        return self.list_only.is_active

    @property
    def is_overlay(self) -> bool:
        return self.overlay.is_active

    # ==========================================================================
    # Hooks
    # ==========================================================================

    def on_enter_overlay(self) -> None:
        """Hook: Entering overlay state."""
        logger.debug(f"Overlay active with heading {self.context.orientation}")

    def after_transition(self, event: str, source: State, target: State) -> None:
        if source is None or source == target:
            return
        logger.info(f"[SESSION] {source.name} --({event})--> {target.name}")

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: SessionContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or SessionContext()
        super().__init__(model=model, start_value=start_value)

    @property
    def context(self) -> SessionContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def __repr__(self) -> str:
        return f"SessionStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure."""
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False


class SpotterSession:
    """Owns the latest position/orientation and the derived peak lists.

    Example:
        session = SpotterSession(catalog=PeakCatalog())
        session.update_location(GeoPoint(latitude=45.92, longitude=6.87, altitude_m=1035.0))
        session.update_orientation(Orientation(azimuth_deg=180.0))
        markers = session.overlay(viewport_width=1080, viewport_height=720)
    """

    def __init__(
        self,
        catalog: PeakCatalog,
        max_distance_km: float = VisibilityConfig.MAX_DISTANCE_KM,
        search_radius_km: float = CatalogConfig.DEFAULT_RADIUS_KM,
        field_of_view_deg: float = FilterConfig.FIELD_OF_VIEW_DEG,
        max_displayed: int = FilterConfig.MAX_DISPLAYED,
    ) -> None:
        """Initialize session.

        Args:
            catalog: Injected peak catalog (owns caching and fallback)
            max_distance_km: Visibility range limit
            search_radius_km: Radius of catalog queries
            field_of_view_deg: Half-width of the view cone
            max_displayed: Maximum number of overlay markers
        """
        self._catalog = catalog
        self.max_distance_km = max_distance_km
        self.search_radius_km = search_radius_km
        self.field_of_view_deg = field_of_view_deg
        self.max_displayed = max_displayed
        self._lock = threading.Lock()
        self._machine = SessionStateMachine(context=SessionContext())

    # ==========================================================================
    # Read access
    # ==========================================================================

    @property
    def machine(self) -> SessionStateMachine:
        return self._machine

    @property
    def state_name(self) -> str:
        return self._machine.get_state_name()

    @property
    def location(self) -> Optional[GeoPoint]:
        return self._machine.context.location

    @property
    def orientation(self) -> Optional[Orientation]:
        return self._machine.context.orientation

    @property
    def visible_peaks(self) -> list[VisiblePeak]:
        """Distance-sorted VisibilityEngine output for list display."""
        with self._lock:
            return list(self._machine.context.visible_peaks)

    # ==========================================================================
    # Sensor updates
    # ==========================================================================

    def update_location(self, location: Optional[GeoPoint]) -> list[VisiblePeak]:
        """Accept a new position fix and recompute the visible peaks.

        A missing reading is no update: the previous results are kept.

        Returns:
            The current distance-sorted visible peaks.
        """
        if location is None:
            logger.debug("No location reading, keeping previous results")
            return self.visible_peaks

        with self._lock:
            context = self._machine.context
            context.location = location
            context.visible_peaks = self._compute(location=location)
            self._machine.try_transition("location_fixed")
            return list(context.visible_peaks)

    def update_orientation(self, orientation: Optional[Orientation]) -> None:
        """Store the latest orientation snapshot (None drops the heading)."""
        with self._lock:
            self._machine.context.orientation = orientation
            event = "heading_lost" if orientation is None else "heading_acquired"
            self._machine.try_transition(event)

    def refresh(self) -> list[VisiblePeak]:
        """Re-query the catalog for the last position and recompute."""
        self._catalog.invalidate()
        with self._lock:
            context = self._machine.context
            if context.location is None:
                logger.info("Refresh requested before the first location fix")
                return []
            context.visible_peaks = self._compute(location=context.location)
            return list(context.visible_peaks)

    def poll(
        self,
        location_source: LocationSource,
        orientation_source: Optional[OrientationSource] = None,
    ) -> None:
        """Pull the latest readings from the sensor collaborators."""
        if location_source.is_permission_granted():
            self.update_location(location_source.latest_location())
        else:
            logger.debug("Location permission not granted")

        if orientation_source is None:
            return
        if orientation_source.is_available():
            self.update_orientation(orientation_source.latest_orientation())
        else:
            self.update_orientation(None)

    # ==========================================================================
    # Derived views
    # ==========================================================================

    def displayed_peaks(self) -> list[VisiblePeak]:
        """HorizonFilter output for the current heading (FOV gate skipped without one)."""
        with self._lock:
            context = self._machine.context
            azimuth = context.orientation.azimuth_deg if context.orientation is not None else None
            return HorizonFilter.filter_for_display(
                peaks=context.visible_peaks,
                current_azimuth=azimuth,
                field_of_view_deg=self.field_of_view_deg,
                max_displayed=self.max_displayed,
            )

    def overlay(self, viewport_width: float, viewport_height: float) -> list[OverlayMarker]:
        """Markers to draw on the camera view; empty unless a heading and position are known."""
        with self._lock:
            if not self._machine.is_overlay:
                return []
            context = self._machine.context
            orientation = context.orientation
            assert orientation is not None, "Overlay state requires an orientation"
            shown = HorizonFilter.filter_for_display(
                peaks=context.visible_peaks,
                current_azimuth=orientation.azimuth_deg,
                field_of_view_deg=self.field_of_view_deg,
                max_displayed=self.max_displayed,
            )
            return ScreenProjector.project_all(
                peaks=shown,
                orientation=orientation,
                viewport_width=viewport_width,
                viewport_height=viewport_height,
                field_of_view_deg=self.field_of_view_deg,
            )

    def _compute(self, location: GeoPoint) -> list[VisiblePeak]:
        peaks = self._catalog.peaks_near(location=location, radius_km=self.search_radius_km)
        return VisibilityEngine.compute_visible_peaks(
            observer=location,
            peaks=peaks,
            max_distance_km=self.max_distance_km,
        )

    def __repr__(self) -> str:
        return f"SpotterSession(state={self.state_name}, location={self.location}, orientation={self.orientation})"
