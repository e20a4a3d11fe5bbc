"""Rendering components for the peak overlay.

- horizon_profile.py: HorizonProfile silhouette sampled across the viewport
- overlay_chart.py: Plotly overlay frames and peak list tables
"""

from mountain_spotter.ui.horizon_profile import HorizonProfile
from mountain_spotter.ui.overlay_chart import OverlayChart

__all__ = [
    "HorizonProfile",
    "OverlayChart",
]
