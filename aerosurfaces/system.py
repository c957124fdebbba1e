"""
Per-Step Aerodynamics System

Runs the two phases of an aerodynamics step for every body, in order:

1. update_controls: control axes -> flap deflections
2. compute_forces: body state -> net force and torque

The rigid-body integrator that consumes the forces lives outside this
package; it calls step() (or the two phases) once per fixed timestep.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional

from .airframe import AirframeConfig
from .controls import ControlAxes, update_control_surface_angles
from .frames import Transform
from .metrics import FlightMetrics
from .surface_set import ForcesAndMoments, SurfaceSet

logger = logging.getLogger(__name__)


@dataclass
class BodyState:
    """
    Motion state of a rigid body as reported by the integrator.

    All values are in the world frame, SI units (m, m/s, rad/s).
    """

    pose: Transform = field(default_factory=Transform)
    linear_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        self.linear_velocity = np.asarray(self.linear_velocity, dtype=np.float64)
        self.angular_velocity = np.asarray(self.angular_velocity, dtype=np.float64)

    @property
    def metrics(self) -> FlightMetrics:
        return FlightMetrics.from_body(self.pose, self.linear_velocity)


class AeroBody:
    """A rigid body's surfaces and centre of mass (body frame)."""

    def __init__(
        self,
        name: str,
        surface_set: SurfaceSet,
        center_of_mass: Optional[np.ndarray] = None
    ):
        self.name = name
        self.surface_set = surface_set
        self.center_of_mass = (np.zeros(3) if center_of_mass is None
                               else np.asarray(center_of_mass, dtype=np.float64))

    @classmethod
    def from_airframe(cls, airframe: AirframeConfig, name: Optional[str] = None) -> 'AeroBody':
        return cls(name or airframe.name, airframe.build_surface_set(), airframe.center_of_mass)

    def world_center_of_mass(self, pose: Transform) -> np.ndarray:
        return pose.transform_point(self.center_of_mass)

    def update_controls(self, axes: ControlAxes):
        update_control_surface_angles(self.surface_set, axes)

    def compute_forces(self, state: BodyState) -> ForcesAndMoments:
        return self.surface_set.compute_forces(
            state.pose,
            state.linear_velocity,
            state.angular_velocity,
            self.world_center_of_mass(state.pose)
        )


class AerodynamicsSystem:
    """
    Aerodynamics for a group of independent bodies.

    Bodies share nothing, so the order they are processed in does not
    matter.
    """

    def __init__(self, bodies: Optional[List[AeroBody]] = None):
        self._bodies: Dict[str, AeroBody] = {}
        for body in bodies or []:
            self.add_body(body)

    def add_body(self, body: AeroBody) -> AeroBody:
        if body.name in self._bodies:
            raise ValueError(f"Duplicate body name: {body.name!r}")
        self._bodies[body.name] = body
        return body

    def __iter__(self) -> Iterator[AeroBody]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def __getitem__(self, name: str) -> AeroBody:
        return self._bodies[name]

    def update_controls(self, axes: ControlAxes):
        """Phase 1: write flap deflections on every body."""
        for body in self._bodies.values():
            body.update_controls(axes)

    def compute_forces(self, states: Mapping[str, BodyState]) -> Dict[str, ForcesAndMoments]:
        """
        Phase 2: net force and torque for every body with a state.

        Bodies missing from states are skipped.
        """
        results = {}
        for name, body in self._bodies.items():
            state = states.get(name)
            if state is None:
                continue

            fm = body.compute_forces(state)
            if not fm.is_finite:
                logger.warning(
                    "Non-finite aerodynamic load on %s: force %s torque %s",
                    name, fm.force, fm.torque
                )
            results[name] = fm
        return results

    def step(
        self,
        axes: ControlAxes,
        states: Mapping[str, BodyState]
    ) -> Dict[str, ForcesAndMoments]:
        """Run both phases in order for one simulation step."""
        self.update_controls(axes)
        return self.compute_forces(states)
