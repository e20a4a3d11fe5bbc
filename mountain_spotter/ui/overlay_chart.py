"""OverlayChart - Plotly rendering of the camera overlay and the peak list.

Renders:
- Flat horizon line or the sampled horizon silhouette
- Peak markers with name / elevation / distance labels
- Heading annotation
- Distance-sorted peak table for list display (no heading needed)

The figure uses viewport pixel coordinates with the origin at the top-left,
so the y axis is reversed.
"""

import logging
from typing import Optional

import plotly.graph_objects as go

from mountain_spotter.constants import ChartConfig, StyleConfig
from mountain_spotter.core.geo_calculator import GeoCalculator
from mountain_spotter.model.orientation import Orientation
from mountain_spotter.model.screen_point import OverlayMarker
from mountain_spotter.model.visible_peak import VisiblePeak
from mountain_spotter.ui.horizon_profile import HorizonProfile

logger = logging.getLogger(__name__)


class OverlayChart:
    """Renders overlay frames and peak tables using Plotly.

    Example:
        chart = OverlayChart(width=1080, height=720)
        fig = chart.render_overlay(markers=session.overlay(1080, 720), orientation=orientation)
        fig.write_html("overlay.html")
    """

    def __init__(
        self,
        width: int = ChartConfig.DEFAULT_WIDTH,
        height: int = ChartConfig.DEFAULT_HEIGHT,
    ) -> None:
        """Initialize overlay chart renderer.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
        """
        self.width = width
        self.height = height

    def render_overlay(
        self,
        markers: list[OverlayMarker],
        orientation: Orientation,
        profile: Optional[HorizonProfile] = None,
    ) -> go.Figure:
        """Render one overlay frame.

        Args:
            markers: Projected peaks (ScreenProjector output)
            orientation: Orientation the markers were projected with
            profile: Optional silhouette; a flat horizon line is drawn if omitted

        Returns:
            Plotly Figure object.
        """
        fig = go.Figure()

        if profile is None:
            horizon_y = HorizonProfile.build(
                markers=[],
                orientation=orientation,
                viewport_width=self.width,
                viewport_height=self.height,
            ).horizon_y
            fig.add_trace(
                go.Scatter(
                    x=[0, self.width],
                    y=[horizon_y, horizon_y],
                    mode="lines",
                    line=dict(color=StyleConfig.HORIZON_COLOR, width=2, dash="dash"),
                    name="Horizon",
                    hoverinfo="skip",
                )
            )
        else:
            self._add_profile(fig=fig, profile=profile)

        if markers:
            fig.add_trace(
                go.Scatter(
                    x=[m.position.x for m in markers],
                    y=[m.position.y for m in markers],
                    mode="markers+text",
                    marker=dict(
                        symbol="triangle-up",
                        size=StyleConfig.MARKER_SIZE,
                        color=StyleConfig.MARKER_COLOR,
                    ),
                    text=[m.label for m in markers],
                    textposition="top center",
                    textfont=dict(color=StyleConfig.LABEL_COLOR, size=11),
                    customdata=[
                        [m.peak.bearing_deg, m.peak.elevation_angle_deg] for m in markers
                    ],
                    hovertemplate=(
                        "%{text}<br>Bearing: %{customdata[0]:.1f}°"
                        "<br>Elevation angle: %{customdata[1]:.2f}°<extra></extra>"
                    ),
                    name="Peaks",
                )
            )

        direction = GeoCalculator.compass_direction(orientation.azimuth_deg)
        fig.add_annotation(
            xref="paper",
            yref="paper",
            x=0.5,
            y=1.0,
            yanchor="bottom",
            text=f"Heading {orientation.azimuth_deg:.0f}° {direction} | {len(markers)} peaks",
            showarrow=False,
            font=dict(color=StyleConfig.LABEL_COLOR, size=13),
        )

        fig.update_layout(
            xaxis=dict(range=[0, self.width], visible=False),
            yaxis=dict(range=[self.height, 0], visible=False),
            showlegend=False,
            width=self.width,
            height=self.height,
            margin=dict(l=0, r=0, t=30, b=0),
            plot_bgcolor=StyleConfig.BACKGROUND_COLOR,
            paper_bgcolor=StyleConfig.BACKGROUND_COLOR,
        )

        logger.debug(f"Rendered overlay with {len(markers)} markers at {orientation}")
        return fig

    def _add_profile(self, fig: go.Figure, profile: HorizonProfile) -> None:
        """Add the filled silhouette closed along the bottom edge."""
        xs = [0.0] + [float(x) for x in profile.xs] + [float(self.width)]
        ys = [float(self.height)] + [float(y) for y in profile.ys] + [float(self.height)]
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                fill="toself",
                fillcolor=StyleConfig.PROFILE_FILL,
                line=dict(color=StyleConfig.PROFILE_COLOR, width=3),
                mode="lines",
                name="Horizon",
                hoverinfo="skip",
            )
        )

    def render_peak_table(self, visible_peaks: list[VisiblePeak]) -> go.Figure:
        """Render the distance-sorted peak list.

        Args:
            visible_peaks: VisibilityEngine output (already distance-sorted)

        Returns:
            Plotly Figure with a single table.
        """
        names = [vp.name for vp in visible_peaks]
        elevations = [f"{vp.elevation_m:.0f} m" if vp.peak.has_known_elevation else "?" for vp in visible_peaks]
        distances = [f"{vp.distance_km:.1f} km" for vp in visible_peaks]
        bearings = [
            f"{vp.bearing_deg:.0f}° {GeoCalculator.compass_direction(vp.bearing_deg)}" for vp in visible_peaks
        ]
        angles = [f"{vp.elevation_angle_deg:+.2f}°" for vp in visible_peaks]
        visible = ["yes" if vp.is_visible else "no" for vp in visible_peaks]

        fig = go.Figure(
            data=[
                go.Table(
                    header=dict(
                        values=["Peak", "Elevation", "Distance", "Bearing", "Angle", "Visible"],
                        fill_color=StyleConfig.TABLE_HEADER_COLOR,
                        font=dict(color="white"),
                        align="left",
                    ),
                    cells=dict(
                        values=[names, elevations, distances, bearings, angles, visible],
                        align="left",
                    ),
                )
            ]
        )
        fig.update_layout(
            title=dict(text=f"{len(visible_peaks)} peaks in range", x=0.5),
            width=self.width,
            height=ChartConfig.TABLE_HEIGHT,
            margin=dict(l=10, r=10, t=40, b=10),
        )
        return fig
