"""
Plotting Module

Standard coefficient plots for a surface polar:
- CL, CD, Cm vs alpha with the flow regions shaded
- Drag polar (CL vs CD) with the best L/D point marked
- Debug geometry of an airframe (3D line plot)

Uses matplotlib with aerospace-standard formatting.
"""

import matplotlib.pyplot as plt
import pandas as pd
from typing import List, Optional, Sequence

from .geometry import DebugLine
from .polar import max_lift_to_drag


PLOT_STYLE = {
    'figure.figsize': (10, 6),
    'figure.dpi': 100,
    'font.size': 10,
    'axes.labelsize': 11,
    'axes.titlesize': 12,
    'legend.fontsize': 9,
    'lines.linewidth': 1.5,
    'grid.alpha': 0.3
}

REGION_COLORS = {
    'low_aoa': None,
    'transition': 'orange',
    'stall': 'gray',
}

COEFFICIENT_LABELS = {
    'CL': r'$C_L$',
    'CD': r'$C_D$',
    'Cm': r'$C_m$',
}


def setup_plot_style():
    plt.rcParams.update(PLOT_STYLE)


def _shade_regions(ax: plt.Axes, polar: pd.DataFrame):
    """Shade contiguous runs of transition and stall points."""
    alpha = polar['alpha_deg'].values
    regions = polar['region'].values
    start = 0
    for i in range(1, len(regions) + 1):
        if i == len(regions) or regions[i] != regions[start]:
            color = REGION_COLORS.get(regions[start])
            if color is not None:
                ax.axvspan(alpha[start], alpha[i - 1], color=color, alpha=0.1, lw=0)
            start = i


def plot_coefficients(
    polar: pd.DataFrame,
    coefficients: Sequence[str] = ('CL', 'CD', 'Cm'),
    title: str = "Surface coefficients",
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Plot coefficients vs alpha, one subplot each.

    Args:
        polar: Output of compute_polar
        coefficients: Columns to plot
        title: Figure title
        save_path: Optional save path

    Returns:
        Figure
    """
    setup_plot_style()

    fig, axes = plt.subplots(len(coefficients), 1, sharex=True,
                             figsize=(8, 3 * len(coefficients)), squeeze=False)

    for ax, name in zip(axes[:, 0], coefficients):
        if name not in COEFFICIENT_LABELS:
            raise ValueError(f"Unknown coefficient: {name}")
        ax.plot(polar['alpha_deg'].values, polar[name].values, '-', color='navy')
        _shade_regions(ax, polar)
        ax.axhline(0, color='gray', linestyle=':', linewidth=1)
        ax.set_ylabel(COEFFICIENT_LABELS[name])
        ax.grid(True, alpha=0.3)

    axes[-1, 0].set_xlabel(r'$\alpha$ (deg)')
    fig.suptitle(title)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_drag_polar(
    polar: pd.DataFrame,
    title: str = "Drag polar",
    save_path: Optional[str] = None
) -> plt.Figure:
    """Plot CL vs CD with the maximum L/D point annotated."""
    setup_plot_style()

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(polar['CD'].values, polar['CL'].values, '-', color='red')

    best = max_lift_to_drag(polar)
    ax.plot(best['CD'], best['CL'], '*', color='black', markersize=12)
    ax.annotate(f"L/D={best['LD']:.1f} at {best['alpha_deg']:.0f}°",
                xy=(best['CD'], best['CL']),
                xytext=(10, 10), textcoords='offset points',
                fontsize=9,
                arrowprops=dict(arrowstyle='->', lw=1))

    ax.set_xlabel(r'$C_D$')
    ax.set_ylabel(r'$C_L$')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_debug_lines(
    lines: List[DebugLine],
    title: str = "Airframe",
    save_path: Optional[str] = None
) -> plt.Figure:
    """Draw debug geometry in 3D (world Y is drawn as the vertical axis)."""
    setup_plot_style()

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(projection='3d')
    for line in lines:
        # Swap Y and Z so matplotlib's vertical axis is world up
        xs = [line.start[0], line.end[0]]
        ys = [line.start[2], line.end[2]]
        zs = [line.start[1], line.end[1]]
        ax.plot(xs, ys, zs, color=line.color, linewidth=1)

    ax.set_xlabel('x (m)')
    ax.set_ylabel('z (m)')
    ax.set_zlabel('y (m)')
    ax.set_title(title)

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
