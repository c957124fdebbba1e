#!/usr/bin/env python3
"""
Glider Step Example

Drives the two aerodynamics phases by hand for a few steps of a pull-up,
the way a physics loop would: set control axes, then compute the load
for the body's current state.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from aerosurfaces import (
    AirframeConfig,
    AeroBody,
    AerodynamicsSystem,
    BodyState,
    ControlAxes,
    Transform,
    compute_polar,
    max_lift_to_drag,
)


def main():
    print("="*70)
    print("GLIDER STEP EXAMPLE")
    print("="*70)

    airframe = AirframeConfig.from_yaml(str(Path(__file__).parent / "ask21.yaml"))
    system = AerodynamicsSystem([AeroBody.from_airframe(airframe, name="glider")])

    state = BodyState(
        pose=Transform.from_xyz(0.0, 200.0, 0.0),
        linear_velocity=np.array([0.0, 0.0, -27.7])
    )

    print(f"\n[1/2] Stepping {airframe.name} with increasing pitch input")
    for pitch in np.linspace(0.0, 1.0, 5):
        loads = system.step(ControlAxes(pitch=pitch), {"glider": state})
        fm = loads["glider"]
        print(f"  pitch {pitch:+.2f}: force {np.array2string(fm.force, precision=0)} N, "
              f"torque {np.array2string(fm.torque, precision=0)} N·m")

    print(f"  airspeed {state.metrics.airspeed:.1f} m/s, height {state.metrics.height:.0f} m")

    print("\n[2/2] Wing polar")
    wing = airframe.surface("left wing")
    best = max_lift_to_drag(compute_polar(wing.config))
    print(f"  max L/D {best['LD']:.1f} at {best['alpha_deg']:.0f}°")


if __name__ == "__main__":
    main()
