"""
Aerodynamics Module

Coefficient model of a single lifting surface:
- Finite-wing lift slope correction from aspect ratio
- Flap influence on zero-lift angle and stall angles
- Low angle of attack model (thin airfoil + induced angle)
- Post-stall model (flat plate normal force)
- Linear blending between the two past each stall angle

All angles are in radians. Coefficients are nondimensional; the caller
scales them by dynamic pressure, area and chord.
"""

import numpy as np
from dataclasses import dataclass
from typing import NamedTuple, Sequence, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .surface import SurfaceConfig


class AeroCoefficients(NamedTuple):
    """Lift, drag and torque (pitching moment) coefficients."""

    lift: float
    drag: float
    torque: float

    def lerp(self, other: 'AeroCoefficients', t: float) -> 'AeroCoefficients':
        """Componentwise linear interpolation towards other."""
        return AeroCoefficients(
            lerp(self.lift, other.lift, t),
            lerp(self.drag, other.drag, t),
            lerp(self.torque, other.torque, t)
        )


class SurfaceForces(NamedTuple):
    """Dimensional surface output: lift (N), drag (N), torque (N·m)."""

    lift: float
    drag: float
    torque: float


@dataclass(frozen=True)
class LiftCurve:
    """Lift curve of a surface at its current flap deflection."""

    aspect_ratio: float
    corrected_lift_slope: float
    zero_lift_aoa: float
    stall_angle_high: float
    stall_angle_low: float


@dataclass(frozen=True)
class LowAoARegion:
    """Attached flow: stall_angle_low < alpha < stall_angle_high."""
    angle_of_attack: float


@dataclass(frozen=True)
class StallRegion:
    """Separated flow beyond the padded stall angles."""
    angle_of_attack: float


@dataclass(frozen=True)
class TransitionRegion:
    """
    Band between a stall angle and its padded angle.

    Coefficients blend from the low-AoA model at stall_angle to the
    stall model at padded_stall_angle with parameter blend in [0, 1].
    """
    angle_of_attack: float
    stall_angle: float
    padded_stall_angle: float
    blend: float


Region = Union[LowAoARegion, TransitionRegion, StallRegion]


def lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def lerp_clamped(a: float, b: float, t: float) -> float:
    return lerp(a, b, float(np.clip(t, 0.0, 1.0)))


def control_surface_effectiveness_correction(control_surface_angle: float) -> float:
    """Flap effectiveness drops from 0.8 to 0.4 between 10° and 60° deflection."""
    return lerp_clamped(
        0.8, 0.4, (np.degrees(abs(control_surface_angle)) - 10.0) / 50.0
    )


def lift_coefficient_max_fraction(control_surface_fraction: float) -> float:
    """Share of the flap lift increment that also raises the maximum lift."""
    return float(np.clip(1.0 - 0.5 * (control_surface_fraction - 0.1) / 0.3, 0.0, 1.0))


def friction_at_90_degrees(control_surface_angle: float) -> float:
    """Normal force coefficient of the surface broadside to the flow."""
    return (1.98
            - 4.26e-2 * control_surface_angle**2
            + 2.1e-1 * control_surface_angle)


def torque_coefficient_proportion(effective_angle: float) -> float:
    """Centre of pressure as a chord fraction: 0.075 at 0°, 0.25 at 90°."""
    return 0.25 - 0.175 * (1.0 - 2.0 * abs(effective_angle) / np.pi)


def angle_of_attack(local_air_velocity: Sequence[float]) -> float:
    """Angle between the chord (+Z) and the local airflow, positive nose up."""
    return float(np.arctan2(-local_air_velocity[1], local_air_velocity[2]))


def compute_lift_curve(config: 'SurfaceConfig', control_surface_angle: float) -> LiftCurve:
    """
    Lift curve of a surface with its flap deflected.

    Args:
        config: Static surface parameters
        control_surface_angle: Flap deflection (rad)

    Returns:
        LiftCurve with flap-shifted zero-lift and stall angles
    """
    aspect_ratio = config.span / config.chord

    # Finite wing correction
    corrected_lift_slope = config.lift_slope * aspect_ratio / (
        aspect_ratio + 2.0 * (aspect_ratio + 4.0) / (aspect_ratio + 2.0)
    )

    # Flap deflection shifts the lift curve
    theta = np.arccos(np.clip(2.0 * config.control_surface_fraction - 1.0, -1.0, 1.0))
    flap_effectiveness = 1.0 - (theta - np.sin(theta)) / np.pi
    delta_lift = (corrected_lift_slope
                  * flap_effectiveness
                  * control_surface_effectiveness_correction(control_surface_angle)
                  * control_surface_angle)

    zero_lift_aoa = config.zero_lift_aoa - delta_lift / corrected_lift_slope

    max_fraction = lift_coefficient_max_fraction(config.control_surface_fraction)
    cl_max_high = (corrected_lift_slope * (config.stall_angle_high - zero_lift_aoa)
                   + delta_lift * max_fraction)
    cl_max_low = (corrected_lift_slope * (config.stall_angle_low - zero_lift_aoa)
                  + delta_lift * max_fraction)

    return LiftCurve(
        aspect_ratio=float(aspect_ratio),
        corrected_lift_slope=float(corrected_lift_slope),
        zero_lift_aoa=float(zero_lift_aoa),
        stall_angle_high=float(zero_lift_aoa + cl_max_high / corrected_lift_slope),
        stall_angle_low=float(zero_lift_aoa + cl_max_low / corrected_lift_slope)
    )


def padded_stall_angles(curve: LiftCurve, control_surface_angle: float):
    """
    Angles where the transition bands end.

    The padding narrows from 15° to 5° on the side the flap deflects towards.

    Returns:
        (padded_stall_angle_high, padded_stall_angle_low)
    """
    deflection_deg = np.degrees(control_surface_angle)
    padding_high = np.radians(lerp_clamped(15.0, 5.0, (deflection_deg + 50.0) / 100.0))
    padding_low = np.radians(lerp_clamped(15.0, 5.0, (-deflection_deg + 50.0) / 100.0))
    return (curve.stall_angle_high + padding_high,
            curve.stall_angle_low - padding_low)


def classify_region(
    alpha: float,
    control_surface_angle: float,
    curve: LiftCurve
) -> Region:
    """
    Classify an angle of attack into the flow region that governs it.

    Pure function of its inputs; nothing is remembered between calls.
    """
    padded_high, padded_low = padded_stall_angles(curve, control_surface_angle)

    if curve.stall_angle_low < alpha < curve.stall_angle_high:
        return LowAoARegion(alpha)

    if alpha > padded_high or alpha < padded_low:
        return StallRegion(alpha)

    if alpha >= curve.stall_angle_high:
        stall_angle, padded = curve.stall_angle_high, padded_high
    else:
        stall_angle, padded = curve.stall_angle_low, padded_low

    blend = float(np.clip((alpha - stall_angle) / (padded - stall_angle), 0.0, 1.0))
    return TransitionRegion(alpha, stall_angle, padded, blend)


def low_aoa_coefficients(
    curve: LiftCurve,
    alpha: float,
    skin_friction: float
) -> AeroCoefficients:
    """
    Attached-flow coefficients.

    Diverges as the effective angle approaches ±90°; only valid inside the
    low-AoA region and at the stall angles.
    """
    lift_coefficient = curve.corrected_lift_slope * (alpha - curve.zero_lift_aoa)
    induced_angle = lift_coefficient / (np.pi * curve.aspect_ratio)
    effective_angle = alpha - curve.zero_lift_aoa - induced_angle

    tangential_coefficient = skin_friction * np.cos(effective_angle)

    normal_coefficient = (
        lift_coefficient + np.sin(effective_angle) * tangential_coefficient
    ) / np.cos(effective_angle)
    drag_coefficient = (normal_coefficient * np.sin(effective_angle)
                        + tangential_coefficient * np.cos(effective_angle))
    torque_coefficient = -normal_coefficient * torque_coefficient_proportion(effective_angle)

    return AeroCoefficients(
        float(lift_coefficient), float(drag_coefficient), float(torque_coefficient)
    )


def stall_coefficients(
    curve: LiftCurve,
    alpha: float,
    skin_friction: float,
    control_surface_angle: float
) -> AeroCoefficients:
    """Separated-flow coefficients; the induced angle fades out towards ±90°."""
    half_pi = np.pi / 2.0
    clamped_alpha = np.clip(alpha, -half_pi, half_pi)

    if alpha > curve.stall_angle_high:
        lift_coefficient_low_aoa = curve.corrected_lift_slope * (
            curve.stall_angle_high - curve.zero_lift_aoa)
        lerp_param = (half_pi - clamped_alpha) / (half_pi - curve.stall_angle_high)
    else:
        lift_coefficient_low_aoa = curve.corrected_lift_slope * (
            curve.stall_angle_low - curve.zero_lift_aoa)
        lerp_param = (-half_pi - clamped_alpha) / (-half_pi - curve.stall_angle_low)

    induced_angle_low_aoa = lift_coefficient_low_aoa / (np.pi * curve.aspect_ratio)
    induced_angle = lerp_clamped(0.0, induced_angle_low_aoa, lerp_param)
    effective_angle = alpha - curve.zero_lift_aoa - induced_angle

    sin_eff = np.sin(effective_angle)
    cos_eff = np.cos(effective_angle)

    normal_coefficient = (
        friction_at_90_degrees(control_surface_angle)
        * sin_eff
        * (1.0 / (0.56 + 0.44 * abs(sin_eff))
           - 0.41 * (1.0 - np.exp(-17.0 / curve.aspect_ratio)))
    )
    tangential_coefficient = 0.5 * skin_friction * cos_eff

    lift_coefficient = normal_coefficient * cos_eff - tangential_coefficient * sin_eff
    drag_coefficient = normal_coefficient * sin_eff + tangential_coefficient * cos_eff
    torque_coefficient = -normal_coefficient * torque_coefficient_proportion(effective_angle)

    return AeroCoefficients(
        float(lift_coefficient), float(drag_coefficient), float(torque_coefficient)
    )


def region_coefficients(
    region: Region,
    curve: LiftCurve,
    skin_friction: float,
    control_surface_angle: float
) -> AeroCoefficients:
    """Evaluate the model (or blend of models) a region calls for."""
    if isinstance(region, LowAoARegion):
        return low_aoa_coefficients(curve, region.angle_of_attack, skin_friction)

    if isinstance(region, StallRegion):
        return stall_coefficients(
            curve, region.angle_of_attack, skin_friction, control_surface_angle)

    if isinstance(region, TransitionRegion):
        at_stall = low_aoa_coefficients(curve, region.stall_angle, skin_friction)
        at_padded = stall_coefficients(
            curve, region.padded_stall_angle, skin_friction, control_surface_angle)
        return at_stall.lerp(at_padded, region.blend)

    raise TypeError(f"Unknown flow region: {region!r}")


def compute_coefficients(
    config: 'SurfaceConfig',
    control_surface_angle: float,
    alpha: float
) -> AeroCoefficients:
    """Coefficients of a surface at a given angle of attack and flap deflection."""
    curve = compute_lift_curve(config, control_surface_angle)
    region = classify_region(alpha, control_surface_angle, curve)
    return region_coefficients(region, curve, config.skin_friction, control_surface_angle)
