"""Flight metrics read off the body state for displays and logs."""

import numpy as np
from dataclasses import dataclass
from typing import Sequence

from .frames import Transform, normalize_or_zero


@dataclass
class FlightMetrics:
    """Airspeed along the nose, vertical speed and height (SI units)."""

    airspeed: float = 0.0
    vertical_speed: float = 0.0
    height: float = 0.0

    @classmethod
    def from_body(cls, pose: Transform, linear_velocity: Sequence[float]) -> 'FlightMetrics':
        v = np.asarray(linear_velocity, dtype=np.float64)
        speed = float(np.linalg.norm(v))
        airspeed = speed * float(normalize_or_zero(v) @ pose.forward)
        return cls(
            airspeed=airspeed,
            vertical_speed=float(v[1]),
            height=float(pose.translation[1])
        )
