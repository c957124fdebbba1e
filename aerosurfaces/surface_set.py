"""
Surface Set Aggregation

Sums the contributions of every lifting surface attached to one rigid body
into a single force and torque in the world frame, about the body's centre
of mass.

Each call recomputes everything from the body state passed in; nothing is
carried over between steps.
"""

import copy
import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .frames import Transform, normalize_or_zero
from .surface import AeroSurface

logger = logging.getLogger(__name__)

# Sea level air density used by the force computation (kg/m³)
AIR_DENSITY = 1.2

# Propulsion placeholder: constant thrust along the body forward axis (N)
DEFAULT_THRUST = 10000.0


@dataclass
class SurfaceMount:
    """A surface and where it sits on the body (body-local transform)."""

    surface: AeroSurface
    transform: Transform = field(default_factory=Transform)
    name: str = ""


@dataclass
class SurfaceForceSample:
    """One surface's contribution to the last force computation (world frame)."""

    name: str
    position: np.ndarray
    air_velocity: np.ndarray
    lift: np.ndarray
    drag: np.ndarray
    torque: np.ndarray

    @property
    def force(self) -> np.ndarray:
        return self.lift + self.drag


@dataclass
class ForcesAndMoments:
    """
    Net load on the body, world frame, SI units (N, N·m).

    Torque is about the centre of mass.
    """

    force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    torque: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Individual components for debugging
    aero_force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    aero_torque: np.ndarray = field(default_factory=lambda: np.zeros(3))
    thrust_force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    samples: List[SurfaceForceSample] = field(default_factory=list)

    def __post_init__(self):
        self.force = np.asarray(self.force, dtype=np.float64)
        self.torque = np.asarray(self.torque, dtype=np.float64)
        self.aero_force = np.asarray(self.aero_force, dtype=np.float64)
        self.aero_torque = np.asarray(self.aero_torque, dtype=np.float64)
        self.thrust_force = np.asarray(self.thrust_force, dtype=np.float64)

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.force)) and np.all(np.isfinite(self.torque)))


class SurfaceSet:
    """
    Ordered collection of surfaces owned by one body.

    Mounts are copied on the way in; the set never shares surface state
    with its caller or another set. Surfaces are fixed once the body is
    built. Order does not affect the result.
    """

    def __init__(
        self,
        mounts: Optional[Sequence[SurfaceMount]] = None,
        thrust: float = DEFAULT_THRUST,
        air_density: float = AIR_DENSITY
    ):
        if air_density < 0:
            raise ValueError(f"air_density must be non-negative, got {air_density}")
        self._mounts: List[SurfaceMount] = [copy.deepcopy(m) for m in mounts or []]
        self.thrust = thrust
        self.air_density = air_density

    def add(
        self,
        surface: AeroSurface,
        transform: Optional[Transform] = None,
        name: str = ""
    ) -> SurfaceMount:
        """Attach a copy of a surface; used while building the body."""
        mount = SurfaceMount(
            copy.deepcopy(surface),
            copy.deepcopy(transform) if transform is not None else Transform(),
            name
        )
        self._mounts.append(mount)
        return mount

    def __len__(self) -> int:
        return len(self._mounts)

    def __iter__(self) -> Iterator[SurfaceMount]:
        return iter(self._mounts)

    def __getitem__(self, index: int) -> SurfaceMount:
        return self._mounts[index]

    @property
    def surfaces(self) -> List[AeroSurface]:
        return [mount.surface for mount in self._mounts]

    def compute_forces(
        self,
        body_pose: Transform,
        linear_velocity: Sequence[float],
        angular_velocity: Sequence[float],
        center_of_mass: Sequence[float]
    ) -> ForcesAndMoments:
        """
        Net aerodynamic and thrust load on the body.

        Args:
            body_pose: Body transform in the world
            linear_velocity: Velocity of the centre of mass, world frame (m/s)
            angular_velocity: Angular velocity, world frame (rad/s)
            center_of_mass: Centre of mass, world frame (m)

        Returns:
            ForcesAndMoments with world-frame force and torque about the
            centre of mass
        """
        linear_velocity = np.asarray(linear_velocity, dtype=np.float64)
        angular_velocity = np.asarray(angular_velocity, dtype=np.float64)
        center_of_mass = np.asarray(center_of_mass, dtype=np.float64)

        aero_force = np.zeros(3)
        aero_torque = np.zeros(3)
        samples = []

        for index, mount in enumerate(self._mounts):
            surface_transform = body_pose.mul_transform(mount.transform)

            world_position = surface_transform.translation
            relative_position = world_position - center_of_mass

            # Air moves opposite to the surface point's velocity
            air_velocity = -(linear_velocity + np.cross(angular_velocity, relative_position))
            local_air_velocity = surface_transform.rotation.inverse_rotate_vector(air_velocity)

            lift, drag, torque = mount.surface.compute_forces(
                local_air_velocity, self.air_density)

            drag_direction = normalize_or_zero(air_velocity)
            lift_direction = normalize_or_zero(np.cross(drag_direction, surface_transform.right))

            lift_vector = lift * lift_direction
            drag_vector = drag * drag_direction
            torque_vector = torque * surface_transform.back

            total_force = lift_vector + drag_vector
            aero_force += total_force
            aero_torque += np.cross(relative_position, total_force) + torque_vector

            name = mount.name or f"surface{index}"
            logger.debug(
                "%s: air velocity %s, lift %.3f N, drag %.3f N, torque %.3f N·m",
                name, air_velocity, lift, drag, torque
            )
            samples.append(SurfaceForceSample(
                name=name,
                position=world_position,
                air_velocity=air_velocity,
                lift=lift_vector,
                drag=drag_vector,
                torque=torque_vector
            ))

        thrust_force = body_pose.forward * self.thrust

        return ForcesAndMoments(
            force=aero_force + thrust_force,
            torque=aero_torque.copy(),
            aero_force=aero_force,
            aero_torque=aero_torque,
            thrust_force=thrust_force,
            samples=samples
        )
