"""
Lifting Surface Definition

A lifting surface is a flat panel (wing, stabilizer, fuselage side) with an
optional trailing-edge flap. Its static parameters live in SurfaceConfig;
the only runtime state is the flap deflection written by the control
binding once per step.
"""

import numpy as np
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Sequence

from .aerodynamics import (
    SurfaceForces,
    angle_of_attack,
    compute_lift_curve,
    classify_region,
    region_coefficients,
    LiftCurve,
    Region,
)


class ConfigurationError(ValueError):
    """Invalid static configuration of a surface or airframe."""


class ControlInputType(Enum):
    """Control channel a surface's flap follows."""
    NONE = "none"
    ROLL = "roll"
    PITCH = "pitch"
    YAW = "yaw"
    FLAP = "flap"

    @classmethod
    def parse(cls, value: Any) -> 'ControlInputType':
        """Accept an enum member or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown control input type {value!r}; "
                f"expected one of {[m.value for m in cls]}"
            ) from None


@dataclass(frozen=True)
class SurfaceConfig:
    """
    Static aerodynamic parameters of one lifting surface.

    Defaults describe a rectangular panel of aspect ratio 2 with a
    thin-airfoil lift slope and ±15° stall.
    """

    lift_slope: float = 6.28               # per rad
    skin_friction: float = 0.02
    zero_lift_aoa: float = 0.0             # rad
    stall_angle_high: float = 0.26         # rad (~15°)
    stall_angle_low: float = -0.26         # rad (~-15°)
    chord: float = 1.0                     # m
    span: float = 2.0                      # m
    control_surface_fraction: float = 0.0  # flap chord / chord, [0, 1)

    def __post_init__(self):
        if not self.chord > 0:
            raise ConfigurationError(f"chord must be positive, got {self.chord}")
        if not self.span > 0:
            raise ConfigurationError(f"span must be positive, got {self.span}")
        if not self.stall_angle_high > self.zero_lift_aoa > self.stall_angle_low:
            raise ConfigurationError(
                "stall angles must satisfy stall_angle_high > zero_lift_aoa > "
                f"stall_angle_low, got {self.stall_angle_high} > "
                f"{self.zero_lift_aoa} > {self.stall_angle_low}"
            )
        if not 0.0 <= self.control_surface_fraction < 1.0:
            raise ConfigurationError(
                "control_surface_fraction must be in [0, 1), "
                f"got {self.control_surface_fraction}"
            )
        if not self.lift_slope > 0:
            raise ConfigurationError(f"lift_slope must be positive, got {self.lift_slope}")

    @property
    def aspect_ratio(self) -> float:
        return self.span / self.chord

    @property
    def area(self) -> float:
        return self.chord * self.span

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SurfaceConfig':
        """Create config from a mapping, rejecting unknown keys."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown surface parameters: {sorted(unknown)}")
        try:
            values = {k: float(v) for k, v in data.items()}
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid surface parameters {data!r}: {e}") from e
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class AeroSurface:
    """
    A lifting surface with its control state.

    control_surface_angle is written by the control binding and only read
    by the force computation.
    """

    config: SurfaceConfig = field(default_factory=SurfaceConfig)
    input_type: ControlInputType = ControlInputType.NONE
    input_sensitivity: float = 0.0   # rad of deflection per unit axis value
    control_surface_angle: float = 0.0  # rad

    def __post_init__(self):
        self.input_type = ControlInputType.parse(self.input_type)

    def lift_curve(self) -> LiftCurve:
        """Lift curve at the current flap deflection."""
        return compute_lift_curve(self.config, self.control_surface_angle)

    def classify(self, alpha: float) -> Region:
        """Flow region for an angle of attack at the current deflection."""
        return classify_region(alpha, self.control_surface_angle, self.lift_curve())

    def compute_forces(
        self,
        local_air_velocity: Sequence[float],
        air_density: float
    ) -> SurfaceForces:
        """
        Compute lift, drag and torque magnitudes for the local airflow.

        The span component of the airflow is ignored (2D section model
        extruded along the span).

        Args:
            local_air_velocity: Airflow in the surface frame (m/s)
            air_density: Air density (kg/m³), non-negative

        Returns:
            SurfaceForces(lift, drag, torque) in N and N·m
        """
        v = np.array(local_air_velocity, dtype=np.float64)
        v[0] = 0.0

        curve = self.lift_curve()
        alpha = angle_of_attack(v)
        region = classify_region(alpha, self.control_surface_angle, curve)
        coefficients = region_coefficients(
            region, curve, self.config.skin_friction, self.control_surface_angle
        )

        dynamic_pressure = 0.5 * air_density * float(v @ v)
        area = self.config.area

        return SurfaceForces(
            lift=coefficients.lift * dynamic_pressure * area,
            drag=coefficients.drag * dynamic_pressure * area,
            torque=coefficients.torque * dynamic_pressure * area * self.config.chord
        )
