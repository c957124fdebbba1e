"""
Lifting-Surface Aerodynamics

Aerodynamic force and torque model for rigid bodies carrying a set of
lifting surfaces. Produces the net load a rigid-body integrator applies
each simulation step.
"""

__version__ = "0.1.0"

# Core model
from .surface import AeroSurface, SurfaceConfig, ControlInputType, ConfigurationError
from .aerodynamics import (
    AeroCoefficients,
    SurfaceForces,
    LiftCurve,
    LowAoARegion,
    TransitionRegion,
    StallRegion,
    classify_region,
    compute_coefficients,
    compute_lift_curve,
)
from .surface_set import SurfaceSet, SurfaceMount, ForcesAndMoments, SurfaceForceSample
from .controls import ControlAxes, update_control_surface_angles
from .frames import Quaternion, Transform, normalize_or_zero

# Airframes and per-step orchestration
from .airframe import AirframeConfig, SurfaceSpec, create_default_airframe
from .system import AeroBody, AerodynamicsSystem, BodyState
from .metrics import FlightMetrics
from .geometry import DebugLine, SurfaceOutline, surface_outline

# Analysis
from .polar import compute_polar, export_polar_csv, max_lift_to_drag
from .trim import TrimCondition, TrimResult, compute_pitch_trim
