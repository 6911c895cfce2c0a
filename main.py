#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  DRAG TRAJECTORY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the simulation pipeline:
    1. Parameter setup (command-line flags or interactive prompts)
    2. Trajectory with drag and its drag-free counterpart
    3. Drag-free run checked against the closed-form solution
    4. Comparison chart (with drag vs without drag)

  Usage:
    python main.py                          # Reference baseball launch
    python main.py --speed 60 --angle 30    # Override any input
    python main.py --prompt                 # Enter every input by hand
    python main.py --no-plot                # Skip the chart
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dragsim.config import DEFAULT_LAUNCH, DEFAULT_IMAGE_SIZE, DEFAULT_MAX_STEPS
from dragsim.errors import SimulationError
from dragsim.inputs import parse_number
from dragsim.integrator import simulate_pair
from dragsim.logging_config import setup_logging
from dragsim.parameters import Parameters
from dragsim.validation import validate_against_analytic
from dragsim.visualization import plot_comparison, ensure_output_dir

import matplotlib.pyplot as plt


# (parameter key, prompt text) in the order they are asked for
PROMPTS = (
    ('cross_area', 'Cross-sectional area (m^2)'),
    ('fluid_density', 'Fluid density (kg/m^3)'),
    ('drag_coefficient', 'Drag coefficient'),
    ('mass', 'Mass (kg)'),
    ('delta_time', 'Time step (s)'),
    ('x', 'Initial x position (m)'),
    ('y', 'Initial y position (m)'),
    ('speed', 'Initial velocity (m/s)'),
    ('angle_deg', 'Initial velocity angle (deg)'),
    ('ending_time', 'Ending time (s)'),
)


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║     DRAG TRAJECTORY SIMULATOR                                         ║
║     ─────────────────────────────────────────────────────             ║
║     Gravity · Quadratic drag · Semi-implicit Euler                    ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate a projectile with and without quadratic drag.")
    d = DEFAULT_LAUNCH
    parser.add_argument('--cross-area', type=float, default=d['cross_area'],
                        help="cross-sectional area (m^2)")
    parser.add_argument('--fluid-density', type=float, default=d['fluid_density'],
                        help="fluid density (kg/m^3)")
    parser.add_argument('--drag-coefficient', type=float,
                        default=d['drag_coefficient'], help="drag coefficient")
    parser.add_argument('--mass', type=float, default=d['mass'], help="mass (kg)")
    parser.add_argument('--delta-time', type=float, default=d['delta_time'],
                        help="time step (s)")
    parser.add_argument('--x', type=float, default=d['x'],
                        help="initial x position (m)")
    parser.add_argument('--y', type=float, default=d['y'],
                        help="initial y position (m)")
    parser.add_argument('--speed', type=float, default=d['speed'],
                        help="initial velocity (m/s)")
    parser.add_argument('--angle', dest='angle_deg', type=float,
                        default=d['angle_deg'], help="initial velocity angle (deg)")
    parser.add_argument('--ending-time', type=float, default=d['ending_time'],
                        help="ending time (s)")
    parser.add_argument('--prompt', action='store_true',
                        help="ask for every input interactively")
    parser.add_argument('--output', default=os.path.join('outputs', 'trajectory.png'),
                        help="path of the comparison chart")
    parser.add_argument('--width', type=int, default=DEFAULT_IMAGE_SIZE[0])
    parser.add_argument('--height', type=int, default=DEFAULT_IMAGE_SIZE[1])
    parser.add_argument('--max-steps', type=int, default=DEFAULT_MAX_STEPS,
                        help="most integration steps per trajectory")
    parser.add_argument('--no-plot', action='store_true', help="skip the chart")
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def prompt_values(read=None) -> dict:
    """Ask for every input until each one parses as a number."""
    if read is None:
        read = input
    values = {}
    for key, text in PROMPTS:
        while True:
            try:
                values[key] = parse_number(key, read(f"{text}: "))
                break
            except SimulationError as exc:
                print(f"  Please type a number ({exc})")
    return values


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))
    start_time = time.time()

    for name in ('width', 'height', 'max_steps'):
        if getattr(args, name) <= 0:
            print(f"  ✗ Invalid input: --{name.replace('_', '-')} must be positive, "
                  f"got {getattr(args, name)}", file=sys.stderr)
            return 2

    banner()

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Parameters
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Parameters")
    if args.prompt:
        try:
            values = prompt_values()
        except (EOFError, KeyboardInterrupt):
            print("\n  ✗ Input aborted", file=sys.stderr)
            return 130
    else:
        values = {key: getattr(args, key) for key, _ in PROMPTS}

    try:
        params = Parameters.from_launch(**values)
    except SimulationError as exc:
        print(f"  ✗ Invalid input: {exc}", file=sys.stderr)
        return 2

    for key, value in params.as_dict().items():
        if key != 'initial_conditions':
            print(f"  {key:<18s} {value:>12.6g}")
    init = params.initial_conditions
    print(f"  {'launch':<18s} p={init.position}  v={init.velocity} "
          f"(|v|={init.velocity.magnitude():.4g} m/s @ {init.velocity.angle():.4g}°)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Simulation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Simulation (with / without drag)")
    try:
        with_drag, without_drag = simulate_pair(params, max_steps=args.max_steps)
    except SimulationError as exc:
        print(f"  ✗ Simulation failed: {exc}", file=sys.stderr)
        return 1
    print(with_drag.summary('With drag'))
    print(without_drag.summary('Without drag'))

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Validation — Closed-Form Drag-Free Motion")
    if params.gravity > 0 and init.position.y >= 0:
        validate_against_analytic(params, verbose=True,
                                  trajectory=without_drag)
    else:
        print("  Skipped: needs positive gravity and a launch at or above ground")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Chart
    # ══════════════════════════════════════════════════════════════════════
    if not args.no_plot:
        section("PHASE 4: Comparison Chart")
        out_dir = os.path.dirname(args.output)
        if out_dir:
            ensure_output_dir(out_dir)
        fig = plot_comparison(with_drag, without_drag, save_path=args.output,
                              size=(args.width, args.height))
        plt.close(fig)
        print(f"  ✓ Saved: {args.output}")
    else:
        section("PHASE 4: Chart SKIPPED (--no-plot)")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"  Total runtime: {elapsed:.2f} seconds\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
