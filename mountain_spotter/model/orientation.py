"""Orientation - Latest device attitude reported by the orientation collaborator.

Only the most recent snapshot matters; no history is kept.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Orientation:
    """Device orientation snapshot.

    The azimuth is wrapped into [0, 360) on construction so that every
    bearing difference downstream starts from a normalized heading.

    Attributes:
        azimuth_deg: Compass heading, degrees clockwise from North [0, 360)
        pitch_deg: Tilt up/down in degrees
        roll_deg: Side-to-side tilt in degrees
    """

    azimuth_deg: float
    pitch_deg: float = 0.0
    roll_deg: float = 0.0

    def __post_init__(self) -> None:
        wrapped = self.azimuth_deg % 360
        object.__setattr__(self, "azimuth_deg", 0.0 if wrapped >= 360 else wrapped)

    def __repr__(self) -> str:
        return f"Orientation(az={self.azimuth_deg:.1f}°, pitch={self.pitch_deg:.1f}°, roll={self.roll_deg:.1f}°)"
