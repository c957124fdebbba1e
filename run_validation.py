#!/usr/bin/env python3
"""
Quick sanity check of the lifting-surface force model.

Run this to verify the model behaves before wiring it into a simulation.
"""

import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from aerosurfaces.airframe import create_default_airframe
from aerosurfaces.main import run_sanity_checks


if __name__ == "__main__":
    print("Lifting-Surface Aerodynamics")
    print("Force Model Sanity Checks")
    print()

    airframe = create_default_airframe()
    sys.exit(0 if run_sanity_checks(airframe, verbose=True) else 1)
