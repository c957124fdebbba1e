"""
Pitch Trim Solver

Finds the pitch control-axis value that cancels the net pitching torque of an
airframe flying at a given airspeed and body angle of attack. A quick check
that tail sizing and control sensitivity are sensible: if the airframe can't
be trimmed inside the axis range, the configuration is wrong.
"""

import logging
import numpy as np
from dataclasses import dataclass
from scipy.optimize import least_squares

from .airframe import AirframeConfig
from .controls import ControlAxes
from .frames import Transform
from .surface_set import ForcesAndMoments
from .system import AeroBody, BodyState

logger = logging.getLogger(__name__)


@dataclass
class TrimCondition:
    """Steady flight condition to trim for."""

    # True airspeed (m/s)
    airspeed: float = 27.7

    # Body angle of attack (rad), positive nose up relative to the flight path
    alpha: float = 0.0

    # Largest pitching torque (N·m) accepted as trimmed
    tolerance: float = 1.0


@dataclass
class TrimResult:
    """Result of a trim solution."""

    success: bool
    pitch: float
    residual: float
    forces_moments: ForcesAndMoments
    iterations: int
    message: str


def trim_state(condition: TrimCondition) -> BodyState:
    """
    Body at the origin with identity attitude, moving so the airflow meets
    the nose at condition.alpha.
    """
    V = condition.airspeed
    a = condition.alpha
    return BodyState(
        pose=Transform(),
        linear_velocity=np.array([0.0, V * np.sin(a), -V * np.cos(a)]),
        angular_velocity=np.zeros(3)
    )


def pitching_torque(fm: ForcesAndMoments, pose: Transform) -> float:
    """Torque component about the body right axis (positive nose up)."""
    return float(fm.torque @ pose.right)


def compute_pitch_trim(airframe: AirframeConfig, condition: TrimCondition) -> TrimResult:
    """
    Solve for the pitch axis value in [-1, 1] that zeroes the pitching torque.

    Args:
        airframe: Airframe configuration (not modified)
        condition: Airspeed and angle of attack to trim at

    Returns:
        TrimResult with the solution or failure info
    """
    if condition.airspeed <= 0:
        raise ValueError(f"airspeed must be positive, got {condition.airspeed}")

    body = AeroBody.from_airframe(airframe)
    state = trim_state(condition)

    def residuals(x):
        body.update_controls(ControlAxes(pitch=float(x[0])))
        fm = body.compute_forces(state)
        return np.array([pitching_torque(fm, state.pose)])

    result = least_squares(residuals, np.array([0.0]), bounds=([-1.0], [1.0]),
                           method='trf', ftol=1e-10, xtol=1e-10)

    pitch = float(result.x[0])
    body.update_controls(ControlAxes(pitch=pitch))
    fm = body.compute_forces(state)
    residual = pitching_torque(fm, state.pose)
    success = abs(residual) <= condition.tolerance

    if success:
        message = f"Trimmed at pitch axis {pitch:+.3f}"
    else:
        message = (f"Could not trim: residual pitching torque {residual:.1f} N·m "
                   f"at pitch axis {pitch:+.3f}")
        logger.warning("%s (%s)", message, airframe.name)

    return TrimResult(
        success=success,
        pitch=pitch,
        residual=residual,
        forces_moments=fm,
        iterations=int(result.nfev),
        message=message
    )
