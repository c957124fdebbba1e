"""
Coefficient Polars

Sweeps a surface's coefficient model over a range of angles of attack and
exports the result in a plain CSV format with a commented header.
"""

import logging
import numpy as np
import pandas as pd
from datetime import datetime
from typing import Dict, Optional, Sequence

from .aerodynamics import (
    LowAoARegion,
    StallRegion,
    TransitionRegion,
    classify_region,
    compute_lift_curve,
    region_coefficients,
)
from .surface import SurfaceConfig

logger = logging.getLogger(__name__)

REGION_NAMES = {
    LowAoARegion: 'low_aoa',
    TransitionRegion: 'transition',
    StallRegion: 'stall',
}


def compute_polar(
    config: SurfaceConfig,
    alpha_deg: Optional[Sequence[float]] = None,
    control_surface_angle: float = 0.0
) -> pd.DataFrame:
    """
    Coefficients over a range of angles of attack.

    Args:
        config: Surface parameters
        alpha_deg: Angles of attack (degrees); defaults to -90..90 in 1° steps
        control_surface_angle: Flap deflection (rad)

    Returns:
        DataFrame with columns alpha_deg, CL, CD, Cm, region
    """
    if alpha_deg is None:
        alpha_deg = np.arange(-90.0, 90.5, 1.0)
    alpha_deg = np.asarray(alpha_deg, dtype=np.float64)

    curve = compute_lift_curve(config, control_surface_angle)

    rows = []
    for a in alpha_deg:
        region = classify_region(np.radians(a), control_surface_angle, curve)
        c = region_coefficients(region, curve, config.skin_friction, control_surface_angle)
        rows.append((a, c.lift, c.drag, c.torque, REGION_NAMES[type(region)]))

    return pd.DataFrame(rows, columns=['alpha_deg', 'CL', 'CD', 'Cm', 'region'])


def max_lift_to_drag(polar: pd.DataFrame) -> Dict[str, float]:
    """
    Best lift-to-drag point of a polar.

    Returns:
        Dict with alpha_deg, CL, CD and LD at maximum L/D
    """
    valid = polar[polar['CD'] > 1e-6]
    if valid.empty:
        raise ValueError("Polar has no points with positive drag")

    ld = valid['CL'] / valid['CD']
    idx = ld.idxmax()
    return {
        'alpha_deg': float(valid.loc[idx, 'alpha_deg']),
        'CL': float(valid.loc[idx, 'CL']),
        'CD': float(valid.loc[idx, 'CD']),
        'LD': float(ld.loc[idx]),
    }


def export_polar_csv(
    polar: pd.DataFrame,
    filename: str,
    surface_name: str = "Unknown",
    metadata: Optional[Dict] = None
) -> None:
    """
    Export a coefficient polar.

    Args:
        polar: Output of compute_polar
        filename: Output filename
        surface_name: Surface name for header
        metadata: Additional header entries
    """
    with open(filename, 'w') as f:
        f.write("# Surface Coefficient Polar Data\n")
        f.write(f"# Surface: {surface_name}\n")
        f.write(f"# Generated: {datetime.now().isoformat()}\n")

        if metadata:
            for key, value in metadata.items():
                f.write(f"# {key}: {value}\n")

        f.write("#\n")
        f.write("# Columns:\n")
        f.write("#   alpha_deg: Angle of attack (degrees)\n")
        f.write("#   CL: Lift coefficient (dimensionless)\n")
        f.write("#   CD: Drag coefficient (dimensionless)\n")
        f.write("#   Cm: Torque coefficient (dimensionless)\n")
        f.write("#   region: low_aoa, transition or stall\n")
        f.write("#\n")

        polar.to_csv(f, index=False)

    logger.info("Exported polar data (%d points) to %s", len(polar), filename)


def load_polar_csv(filename: str) -> pd.DataFrame:
    """Read a polar written by export_polar_csv."""
    return pd.read_csv(filename, comment='#')
