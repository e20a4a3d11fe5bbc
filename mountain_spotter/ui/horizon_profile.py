"""HorizonProfile - Approximate mountain silhouette across the viewport.

Connects the projected peak markers into a skyline: the horizon row is the
anchor on both viewport edges, the markers are the summits in between, and
the polyline is resampled at evenly spaced columns for drawing.
"""

from dataclasses import dataclass

import numpy as np

from mountain_spotter.constants import HorizonProfileConfig
from mountain_spotter.core.screen_projector import ScreenProjector
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.screen_point import OverlayMarker


@dataclass(frozen=True)
class HorizonProfile:
    """Sampled silhouette polyline in viewport pixels.

    Attributes:
        xs: Sample columns from 0 to the viewport width
        ys: Silhouette row per column
        horizon_y: Flat horizon row for the current pitch (clamped to the viewport)
    """

    xs: np.ndarray
    ys: np.ndarray
    horizon_y: float

    @property
    def is_flat(self) -> bool:
        """True if no peak raises the silhouette above the horizon row."""
        return bool(np.all(self.ys == self.horizon_y))

    @classmethod
    def build(
        cls,
        markers: list[OverlayMarker],
        orientation: Orientation,
        viewport_width: float,
        viewport_height: float,
        sample_count: int = HorizonProfileConfig.SAMPLE_COUNT,
    ) -> "HorizonProfile":
        """Build the silhouette from projected markers.

        Args:
            markers: ScreenProjector output for the displayed peaks
            orientation: Latest device orientation (pitch moves the horizon)
            viewport_width: Viewport width in pixels
            viewport_height: Viewport height in pixels
            sample_count: Number of evenly spaced columns

        Returns:
            HorizonProfile; a flat line at the horizon row when there are no markers.
        """
        if sample_count < 2:
            raise ValueError(f"sample_count must be at least 2, got {sample_count}")

        horizon_y = ScreenProjector.horizon_row(orientation=orientation, viewport_height=viewport_height)
        horizon_y = float(min(max(horizon_y, 0.0), viewport_height))

        xs = np.linspace(0.0, viewport_width, sample_count)
        if not markers:
            return cls(xs=xs, ys=np.full(sample_count, horizon_y), horizon_y=horizon_y)

        # Anchors on both edges, summits in between
        anchors = [(0.0, horizon_y)]
        anchors += [(m.position.x, m.position.y) for m in markers]
        anchors.append((float(viewport_width), horizon_y))
        anchors.sort(key=lambda p: p[0])

        ys = np.interp(xs, [p[0] for p in anchors], [p[1] for p in anchors])
        return cls(xs=xs, ys=ys, horizon_y=horizon_y)
