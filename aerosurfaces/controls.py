"""
Control Binding

Maps normalized control-axis values from the input layer onto flap
deflections. Must run before the force computation of the same step.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Union

from .surface import AeroSurface, ControlInputType
from .surface_set import SurfaceMount, SurfaceSet


@dataclass
class ControlAxes:
    """
    Control-axis values, each normalized to [-1, 1].

    Sign conventions follow the input layer; each surface's
    input_sensitivity (which may be negative) turns an axis value into a
    flap deflection.
    """

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    flap: float = 0.0

    def clip(self) -> 'ControlAxes':
        """Return axes clipped to [-1, 1]."""
        return ControlAxes(
            roll=float(np.clip(self.roll, -1.0, 1.0)),
            pitch=float(np.clip(self.pitch, -1.0, 1.0)),
            yaw=float(np.clip(self.yaw, -1.0, 1.0)),
            flap=float(np.clip(self.flap, -1.0, 1.0))
        )

    def value(self, input_type: ControlInputType) -> float:
        """Clipped value of the axis a channel follows; NONE is always 0."""
        if input_type is ControlInputType.NONE:
            return 0.0
        return float(np.clip(getattr(self, input_type.value), -1.0, 1.0))


def control_surface_angle(surface: AeroSurface, axes: ControlAxes) -> float:
    """Flap deflection (rad) a surface should take for the given axes."""
    return surface.input_sensitivity * axes.value(surface.input_type)


def update_control_surface_angles(
    surfaces: Union[SurfaceSet, Iterable[SurfaceMount]],
    axes: ControlAxes
) -> None:
    """
    Write each surface's flap deflection from the current control axes.

    This is the only writer of AeroSurface.control_surface_angle.
    """
    for mount in surfaces:
        mount.surface.control_surface_angle = control_surface_angle(mount.surface, axes)
