"""
Debug Geometry

Derives line segments a debug renderer can draw for an airframe: surface
outlines with the deflected flap, per-surface force vectors, and the body
axes. Pure reads of surface configuration, control state and transforms;
nothing here feeds back into the force computation.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .frames import Transform
from .surface import AeroSurface
from .surface_set import SurfaceForceSample, SurfaceSet

# Force vectors are drawn at this many metres per newton
FORCE_LINE_SCALE = 0.01


@dataclass
class DebugLine:
    """Colored segment in world coordinates."""
    start: np.ndarray
    end: np.ndarray
    color: str


@dataclass
class SurfaceOutline:
    """Planform of a surface in world coordinates."""

    leading_edge: np.ndarray
    hinge: np.ndarray
    trailing_edge: np.ndarray

    # Corners: leading edge (0, 1), hinge (2, 3), trailing edge (4, 5);
    # even indices on the left tip, odd on the right
    corners: List[np.ndarray]

    def lines(self, fixed_color: str = "blue", flap_color: str = "red") -> List[DebugLine]:
        p0, p1, p2, p3, p4, p5 = self.corners
        return [
            DebugLine(p0, p1, fixed_color),
            DebugLine(p2, p3, fixed_color),
            DebugLine(p4, p5, flap_color),
            DebugLine(p0, p2, fixed_color),
            DebugLine(p1, p3, fixed_color),
            DebugLine(p2, p4, flap_color),
            DebugLine(p3, p5, flap_color),
        ]


def surface_outline(surface: AeroSurface, surface_transform: Transform) -> SurfaceOutline:
    """
    Outline of a surface placed at a world transform.

    The surface origin is the mid-chord point of the centre section; the flap
    occupies the aft control_surface_fraction of the chord and is rotated by
    the current deflection (positive = trailing edge down).
    """
    config = surface.config
    back = surface_transform.back
    right = surface_transform.right
    up = surface_transform.up
    half_chord = config.chord * 0.5
    half_span = config.span * 0.5
    angle = surface.control_surface_angle

    leading_edge = surface_transform.translation - back * half_chord
    hinge = leading_edge + back * config.chord * (1.0 - config.control_surface_fraction)
    trailing_edge = hinge + (
        up * -np.sin(angle) + back * np.cos(angle)
    ) * config.chord * config.control_surface_fraction

    corners = [
        leading_edge - right * half_span,
        leading_edge + right * half_span,
        hinge - right * half_span,
        hinge + right * half_span,
        trailing_edge - right * half_span,
        trailing_edge + right * half_span,
    ]
    return SurfaceOutline(leading_edge, hinge, trailing_edge, corners)


def surface_set_lines(surface_set: SurfaceSet, body_pose: Transform) -> List[DebugLine]:
    """Body forward axis plus the outline of every surface."""
    origin = body_pose.translation
    lines = [DebugLine(origin, origin + body_pose.forward, "orange")]
    for mount in surface_set:
        outline = surface_outline(mount.surface, body_pose.mul_transform(mount.transform))
        lines.extend(outline.lines())
    return lines


def force_lines(
    samples: Iterable[SurfaceForceSample],
    scale: float = FORCE_LINE_SCALE
) -> List[DebugLine]:
    """Point velocity (black), lift (green) and drag (pink) of each surface."""
    lines = []
    for sample in samples:
        p = sample.position
        lines.append(DebugLine(p, p - sample.air_velocity, "black"))
        lines.append(DebugLine(p, p + sample.lift * scale, "green"))
        lines.append(DebugLine(p, p + sample.drag * scale, "pink"))
    return lines


def velocity_line(center_of_mass: Sequence[float], linear_velocity: Sequence[float]) -> DebugLine:
    """Velocity of the centre of mass (yellow)."""
    com = np.asarray(center_of_mass, dtype=np.float64)
    return DebugLine(com, com + np.asarray(linear_velocity, dtype=np.float64), "yellow")
