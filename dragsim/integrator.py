"""
Motion Integrator
=================
Fixed-step semi-implicit Euler integration of planar projectile motion
under gravity and quadratic drag:

    a  = -(k / m) |v| v  -  g ŷ
    v' = v + a dt
    p' = p + v dt + ½ a dt²
    t' = t + dt

The acceleration is evaluated once per step from the current velocity.
The stored velocity is the updated one, while the position update uses
the pre-update velocity together with the same-step acceleration.

Integration stops after the first state whose altitude is below zero
(ground impact) or once time reaches `ending_time`. The initial state is
never tested for ground impact.

Output: Trajectory, a read-only sequence of MotionState with numpy column
views and flight metrics.
"""

import logging
import numpy as np
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import NumericOverflow
from .parameters import Parameters
from .state import MotionState
from .vector import Vector2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trajectory(Sequence):
    """Time-ordered states of one run; index 0 is the initial condition."""
    parameters: Parameters
    states: Tuple[MotionState, ...]

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index):
        return self.states[index]

    def __iter__(self):
        return iter(self.states)

    # ── Column views ───────────────────────────────────────────────────────
    @property
    def time(self) -> np.ndarray:
        return np.array([s.time for s in self.states])

    @property
    def x(self) -> np.ndarray:
        return np.array([s.position.x for s in self.states])

    @property
    def y(self) -> np.ndarray:
        return np.array([s.position.y for s in self.states])

    @property
    def vx(self) -> np.ndarray:
        return np.array([s.velocity.x for s in self.states])

    @property
    def vy(self) -> np.ndarray:
        return np.array([s.velocity.y for s in self.states])

    @property
    def speed(self) -> np.ndarray:
        return np.hypot(self.vx, self.vy)

    # ── Flight metrics ─────────────────────────────────────────────────────
    @property
    def final_state(self) -> MotionState:
        return self.states[-1]

    @property
    def hit_ground(self) -> bool:
        """True when the run ended on ground impact rather than on time."""
        return len(self.states) > 1 and self.final_state.position.y < 0

    @property
    def range_total(self) -> float:
        """Horizontal distance covered from launch to the last state (m)."""
        return self.final_state.position.x - self.states[0].position.x

    @property
    def max_altitude(self) -> float:
        """Maximum altitude reached (m)."""
        return float(np.max(self.y))

    @property
    def flight_time(self) -> float:
        """Elapsed simulated time (s)."""
        return self.final_state.time - self.states[0].time

    @property
    def impact_velocity(self) -> float:
        """Speed at the last state (m/s)."""
        return self.final_state.velocity.magnitude()

    def summary(self, title: str = 'Trajectory') -> str:
        """Human-readable summary string."""
        p = self.parameters
        end = 'ground impact' if self.hit_ground else 'ending time'
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  {title.upper():<52s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Drag k       : {p.drag_proportion:<12.6g} kg/m{'':<20s} ║",
            f"║  Mass         : {p.mass:<12.6g} kg{'':<22s} ║",
            f"║  Timestep     : {p.delta_time:<12.6g} s{'':<23s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.range_total:>10.2f} m{'':<24s} ║",
            f"║  Max altitude : {self.max_altitude:>10.2f} m{'':<24s} ║",
            f"║  Flight time  : {self.flight_time:>10.3f} s{'':<24s} ║",
            f"║  Impact vel   : {self.impact_velocity:>10.2f} m/s{'':<22s} ║",
            f"║  Steps        : {len(self) - 1:>10d}{'':<26s} ║",
            f"║  Stopped by   : {end:<36s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def acceleration(parameters: Parameters, state: MotionState) -> Vector2:
    """Gravity plus quadratic drag, from the state's current velocity."""
    v = state.velocity
    drag_factor = parameters.drag_proportion / parameters.mass * v.magnitude()
    return Vector2(
        -drag_factor * v.x,
        -parameters.gravity - drag_factor * v.y,
    )


def step(parameters: Parameters, state: MotionState) -> MotionState:
    """Advance `state` by one `delta_time`."""
    dt = parameters.delta_time
    acc = acceleration(parameters, state)
    return MotionState(
        position=state.position + state.velocity * dt + acc * (0.5 * dt * dt),
        velocity=state.velocity + acc * dt,
        acceleration=acc,
        time=state.time + dt,
    )


def simulate(parameters: Parameters,
             max_steps: Optional[int] = None) -> Trajectory:
    """
    Integrate one trajectory.

    Parameters
    ----------
    parameters : Parameters
        Validated run inputs
    max_steps : int, optional
        Extra safety bound on the number of steps, for interactive callers.
        The run is truncated (with a warning) if it is reached.

    Returns
    -------
    Trajectory

    Raises
    ------
    NumericOverflow
        If a step produces a non-finite state.
    """
    # One spare step absorbs rounding in the accumulated time.
    limit = parameters.step_limit + 1
    if max_steps is not None:
        limit = min(limit, max(int(max_steps), 0))

    state = parameters.initial_conditions
    states: List[MotionState] = [state]

    while state.time < parameters.ending_time:
        if len(states) - 1 >= limit:
            logger.warning("Trajectory truncated after %d steps at t=%.6g s",
                           limit, state.time)
            break

        state = step(parameters, state)
        if not state.is_finite():
            raise NumericOverflow(len(states), state)
        states.append(state)

        if state.position.y < 0:
            break

    logger.debug("Simulated %d steps (k=%.6g, dt=%.6g, t_end=%.6g)",
                 len(states) - 1, parameters.drag_proportion,
                 parameters.delta_time, state.time)
    return Trajectory(parameters=parameters, states=tuple(states))


def simulate_pair(parameters: Parameters,
                  max_steps: Optional[int] = None) -> Tuple[Trajectory, Trajectory]:
    """Run `parameters` and its drag-free variant: (with_drag, without_drag)."""
    with_drag = simulate(parameters, max_steps=max_steps)
    without_drag = simulate(parameters.without_drag(), max_steps=max_steps)
    return with_drag, without_drag
