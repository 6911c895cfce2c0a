"""
Validation Against the Analytic Solution
========================================
Without drag the equations of motion have a closed form:

    x(τ) = x0 + vx0 τ
    y(τ) = y0 + vy0 τ - ½ g τ²          τ = t - t0

The integrator's position update is exact for constant acceleration, so
the drag-free run must reproduce this solution at every step up to
floating-point rounding. Range and flight time differ from the analytic
values only by the overshoot of the final (below-ground) step.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidParameter
from .integrator import simulate, Trajectory
from .parameters import Parameters
from .state import MotionState
from .vector import Vector2


# ══════════════════════════════════════════════════════════════════════════
#  Closed-form drag-free motion
# ══════════════════════════════════════════════════════════════════════════

def analytic_state(initial: MotionState, t: float, gravity: float) -> MotionState:
    """Exact drag-free state at absolute time `t`."""
    tau = t - initial.time
    p0, v0 = initial.position, initial.velocity
    return MotionState(
        position=Vector2(p0.x + v0.x * tau,
                         p0.y + v0.y * tau - 0.5 * gravity * tau * tau),
        velocity=Vector2(v0.x, v0.y - gravity * tau),
        acceleration=Vector2(0.0, -gravity),
        time=t,
    )


def analytic_peak_height(initial: MotionState, gravity: float) -> float:
    """Apex altitude (m); the launch height if the projectile never rises."""
    vy0 = initial.velocity.y
    if vy0 <= 0 or gravity <= 0:
        return initial.position.y
    return initial.position.y + vy0 ** 2 / (2 * gravity)


def analytic_flight_time(initial: MotionState, gravity: float) -> float:
    """Time from launch until the altitude returns to zero (s)."""
    if gravity <= 0:
        raise InvalidParameter('gravity', gravity,
                               "must be positive for the projectile to land")
    y0, vy0 = initial.position.y, initial.velocity.y
    if y0 < 0:
        raise InvalidParameter('initial_conditions', initial,
                               "must start at or above the ground")
    return (vy0 + np.sqrt(vy0 ** 2 + 2 * gravity * y0)) / gravity


def analytic_range(initial: MotionState, gravity: float) -> float:
    """Horizontal distance covered until landing (m)."""
    return initial.velocity.x * analytic_flight_time(initial, gravity)


# ══════════════════════════════════════════════════════════════════════════
#  Comparison
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class ValidationResult:
    """Drag-free simulation compared with the closed-form solution."""
    ref_range: float
    sim_range: float
    range_error_pct: float
    ref_peak: float
    sim_peak: float
    peak_error_pct: float
    ref_flight_time: float
    sim_flight_time: float
    flight_time_error_pct: float
    max_position_error: float   # m, worst step
    hit_ground: bool


def _pct_error(sim: float, ref: float) -> float:
    if ref == 0:
        return 0.0 if sim == 0 else float('inf')
    return 100.0 * (sim - ref) / ref


def max_position_error(trajectory: Trajectory) -> float:
    """Largest distance between a recorded state and the analytic one (m)."""
    initial = trajectory[0]
    gravity = trajectory.parameters.gravity
    worst = 0.0
    for state in trajectory:
        exact = analytic_state(initial, state.time, gravity)
        worst = max(worst, (state.position - exact.position).magnitude())
    return worst


def validate_against_analytic(parameters: Parameters,
                              verbose: bool = True,
                              max_steps: Optional[int] = None,
                              trajectory: Optional[Trajectory] = None) -> ValidationResult:
    """
    Simulate the drag-free variant of `parameters` and compare it with
    the closed-form solution.

    Parameters
    ----------
    parameters : Parameters
        Run inputs; drag inputs are ignored
    verbose : bool
        Print a comparison table
    max_steps : int, optional
        Safety bound forwarded to `simulate`
    trajectory : Trajectory, optional
        An already simulated drag-free run of `parameters` to reuse
    """
    no_drag = parameters.without_drag()
    if trajectory is None:
        traj = simulate(no_drag, max_steps=max_steps)
    elif trajectory.parameters != no_drag:
        raise InvalidParameter('trajectory', trajectory.parameters,
                               "must be the drag-free run of the given parameters")
    else:
        traj = trajectory
    initial = no_drag.initial_conditions
    g = no_drag.gravity

    ref_tof = analytic_flight_time(initial, g)
    ref_range = analytic_range(initial, g)
    ref_peak = analytic_peak_height(initial, g)

    result = ValidationResult(
        ref_range=ref_range,
        sim_range=traj.range_total,
        range_error_pct=_pct_error(traj.range_total, ref_range),
        ref_peak=ref_peak,
        sim_peak=traj.max_altitude,
        peak_error_pct=_pct_error(traj.max_altitude, ref_peak),
        ref_flight_time=ref_tof,
        sim_flight_time=traj.flight_time,
        flight_time_error_pct=_pct_error(traj.flight_time, ref_tof),
        max_position_error=max_position_error(traj),
        hit_ground=traj.hit_ground,
    )

    if verbose:
        print(f"\n{'='*60}")
        print(f"  VALIDATION: drag-free run vs closed form "
              f"(dt={no_drag.delta_time:g} s, g={g:g} m/s²)")
        print(f"{'='*60}")
        print(f"  {'Quantity':<16} {'Analytic':>12} {'Simulated':>12} {'Err %':>9}")
        print("  " + "-" * 52)
        print(f"  {'Range (m)':<16} {ref_range:>12.3f} "
              f"{result.sim_range:>12.3f} {result.range_error_pct:>+9.3f}")
        print(f"  {'Peak (m)':<16} {ref_peak:>12.3f} "
              f"{result.sim_peak:>12.3f} {result.peak_error_pct:>+9.3f}")
        print(f"  {'Flight time (s)':<16} {ref_tof:>12.3f} "
              f"{result.sim_flight_time:>12.3f} {result.flight_time_error_pct:>+9.3f}")
        print("  " + "-" * 52)
        print(f"  Max position error over all steps: "
              f"{result.max_position_error:.3e} m")
        if not result.hit_ground:
            print("  Note: run ended on ending_time before ground impact")
        print(f"{'='*60}\n")

    return result
