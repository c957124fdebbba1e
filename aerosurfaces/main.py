"""
Main Entry Point

Inspect an airframe from the command line: net loads at a flight condition,
model sanity checks, surface polars and pitch trim.
"""

import argparse
import logging
import numpy as np
from pathlib import Path

from .airframe import AirframeConfig, create_default_airframe
from .frames import Transform
from .geometry import force_lines, surface_set_lines, velocity_line
from .polar import compute_polar, export_polar_csv, max_lift_to_drag
from .surface import AeroSurface, SurfaceConfig
from .surface_set import SurfaceSet
from .system import AeroBody
from .trim import TrimCondition, compute_pitch_trim, trim_state


def run_sanity_checks(airframe: AirframeConfig, verbose: bool = True) -> bool:
    """
    Check basic properties of the force model.

    Returns:
        True if every check passed
    """
    if verbose:
        print("\n" + "="*60)
        print("AERODYNAMIC MODEL SANITY CHECKS")
        print("="*60)

    results = []

    def report(name: str, passed: bool, detail: str):
        results.append(passed)
        if verbose:
            print(f"\n[{len(results)}] {name}")
            print(f"  {detail}")
            print(f"  Result: {'PASS' if passed else 'FAIL'}")

    surface = AeroSurface(SurfaceConfig())

    # Still air
    f = surface.compute_forces(np.zeros(3), 1.2)
    report("Still air", f == (0.0, 0.0, 0.0), f"forces = {tuple(f)}")

    # Symmetric surface: lift odd, drag even in alpha
    worst = 0.0
    for a in np.radians([5.0, 14.0, 20.0, 35.0, 60.0, 85.0]):
        up = surface.compute_forces([0.0, -np.sin(a), np.cos(a)], 1.2)
        down = surface.compute_forces([0.0, np.sin(a), np.cos(a)], 1.2)
        worst = max(worst, abs(up.lift + down.lift), abs(up.drag - down.drag))
    report("Symmetry", worst < 1e-9, f"largest asymmetry = {worst:.2e} N")

    # Dynamic pressure scaling
    slow = surface.compute_forces([0.0, -1.0, 25.0], 1.2)
    fast = surface.compute_forces([0.0, -2.0, 50.0], 1.2)
    ratio = fast.lift / slow.lift
    report("Quadratic in airspeed", abs(ratio - 4.0) < 1e-9, f"lift ratio = {ratio:.6f}")

    # Surfaces off: thrust only
    empty = SurfaceSet(thrust=airframe.thrust)
    fm = empty.compute_forces(Transform(), [0.0, 0.0, -30.0], np.zeros(3), np.zeros(3))
    passed = (np.allclose(fm.force, [0.0, 0.0, -airframe.thrust])
              and np.allclose(fm.torque, 0.0))
    report("Thrust only", passed, f"force = {fm.force}, torque = {fm.torque}")

    if verbose:
        print("\n" + "="*60)
        print(f"{sum(results)}/{len(results)} CHECKS PASSED")
        print("="*60 + "\n")

    return all(results)


def run_force_report(
    airframe: AirframeConfig,
    airspeed: float,
    alpha_deg: float,
    geometry_file: str = None
):
    """Print per-surface and net loads at a flight condition."""
    body = AeroBody.from_airframe(airframe)
    state = trim_state(TrimCondition(airspeed=airspeed, alpha=np.radians(alpha_deg)))
    fm = body.compute_forces(state)

    print(f"\n{airframe.name}: V = {airspeed:.1f} m/s, alpha = {alpha_deg:.1f}°")
    print(f"{'surface':<24}{'lift (N)':>12}{'drag (N)':>12}{'torque (N·m)':>16}")
    for sample in fm.samples:
        print(f"{sample.name:<24}"
              f"{np.linalg.norm(sample.lift):>12.1f}"
              f"{np.linalg.norm(sample.drag):>12.1f}"
              f"{np.linalg.norm(sample.torque):>16.1f}")
    print(f"\nNet force (world):  {np.array2string(fm.force, precision=1)} N")
    print(f"  of which thrust:  {np.array2string(fm.thrust_force, precision=1)} N")
    print(f"Net torque (world): {np.array2string(fm.torque, precision=1)} N·m")

    if geometry_file:
        from .plotting import plot_debug_lines
        com = body.world_center_of_mass(state.pose)
        lines = (surface_set_lines(body.surface_set, state.pose)
                 + force_lines(fm.samples)
                 + [velocity_line(com, state.linear_velocity)])
        plot_debug_lines(lines, title=airframe.name, save_path=geometry_file)
        print(f"Saved geometry plot to {geometry_file}")


def run_polar(
    airframe: AirframeConfig,
    surface_name: str,
    output_file: str = None,
    plot_file: str = None
):
    """Sweep one surface's coefficients and optionally export/plot them."""
    spec = airframe.surface(surface_name)
    if spec is None:
        names = ", ".join(s.name for s in airframe.surfaces)
        raise SystemExit(f"No surface named {surface_name!r}. Available: {names}")

    polar = compute_polar(spec.config)
    best = max_lift_to_drag(polar)
    print(f"\n{spec.name}: max L/D = {best['LD']:.1f} at alpha = {best['alpha_deg']:.0f}° "
          f"(CL = {best['CL']:.3f}, CD = {best['CD']:.4f})")
    print(f"CL max = {polar['CL'].max():.3f}, CL min = {polar['CL'].min():.3f}")

    if output_file:
        export_polar_csv(polar, output_file, surface_name=spec.name,
                         metadata={'airframe': airframe.name})
        print(f"Exported polar data ({len(polar)} points) to {output_file}")

    if plot_file:
        from .plotting import plot_coefficients, plot_drag_polar
        plot_coefficients(polar, title=f"{airframe.name}: {spec.name}", save_path=plot_file)

        path = Path(plot_file)
        drag_file = str(path.with_name(f"{path.stem}_drag{path.suffix}"))
        plot_drag_polar(polar, title=f"{airframe.name}: {spec.name}", save_path=drag_file)
        print(f"Saved plots to {plot_file} and {drag_file}")


def run_trim(airframe: AirframeConfig, airspeed: float, alpha_deg: float):
    result = compute_pitch_trim(
        airframe, TrimCondition(airspeed=airspeed, alpha=np.radians(alpha_deg)))
    print(f"\nPitch trim {'succeeded' if result.success else 'FAILED'}")
    print(f"  {result.message}")
    print(f"  Residual: {result.residual:.3f} N·m after {result.iterations} evaluations")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Lifting-surface aerodynamics model")

    parser.add_argument(
        '--airframe', '-a',
        type=str,
        help='Path to airframe configuration YAML'
    )
    parser.add_argument(
        '--check', '-c',
        action='store_true',
        help='Run model sanity checks'
    )
    parser.add_argument(
        '--airspeed',
        type=float,
        default=27.7,
        help='Airspeed for force report and trim (m/s)'
    )
    parser.add_argument(
        '--alpha',
        type=float,
        default=0.0,
        help='Body angle of attack for force report and trim (degrees)'
    )
    parser.add_argument(
        '--polar', '-p',
        type=str,
        metavar='SURFACE',
        help='Sweep the coefficients of the named surface'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='CSV file for --polar'
    )
    parser.add_argument(
        '--plot',
        type=str,
        help='Image file for a --polar plot'
    )
    parser.add_argument(
        '--geometry', '-g',
        type=str,
        metavar='FILE',
        help='Image file for a 3D plot of surfaces and force vectors'
    )
    parser.add_argument(
        '--trim', '-t',
        action='store_true',
        help='Solve pitch trim at --airspeed/--alpha'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log per-surface details'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.airframe:
        airframe = AirframeConfig.from_yaml(args.airframe)
        print(f"Loaded airframe: {airframe.name}")
    else:
        airframe = create_default_airframe()
        print(f"Using default airframe: {airframe.name}")

    if args.check:
        if not run_sanity_checks(airframe):
            raise SystemExit(1)
    elif args.polar:
        run_polar(airframe, args.polar, args.output, args.plot)
    elif args.trim:
        run_trim(airframe, args.airspeed, args.alpha)
    else:
        run_force_report(airframe, args.airspeed, args.alpha, args.geometry)


if __name__ == "__main__":
    main()
