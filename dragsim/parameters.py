"""
Parameter Model
===============
Physical inputs for one simulation run and the drag coefficient derived
from them.

Quadratic drag acts on the projectile as

    F_drag = -k |v| v        with   k = ½ A ρ Cd

where k is the *drag proportion*. It is always computed from the three
drag inputs, so a drag-free run is obtained by zeroing those inputs
(`Parameters.without_drag`), never by overriding k.

All inputs are validated once, at construction.
"""

import math
import numpy as np
from dataclasses import dataclass, replace, fields

from .config import GRAVITY
from .errors import InvalidParameter
from .state import MotionState


def _require_finite(name: str, value) -> float:
    try:
        finite = bool(np.isfinite(value))
    except TypeError:
        raise InvalidParameter(name, value, "must be a real number") from None
    if not finite:
        raise InvalidParameter(name, value, "must be finite")
    return value


def _require_positive(name: str, value) -> float:
    _require_finite(name, value)
    if value <= 0:
        raise InvalidParameter(name, value, "must be positive")
    return value


def _require_non_negative(name: str, value) -> float:
    _require_finite(name, value)
    if value < 0:
        raise InvalidParameter(name, value, "must be non-negative")
    return value


@dataclass(frozen=True)
class Parameters:
    """
    Inputs of a single trajectory simulation.

    Parameters
    ----------
    cross_area : float
        Reference cross-sectional area A (m²), >= 0
    fluid_density : float
        Density ρ of the surrounding fluid (kg/m³), >= 0
    drag_coefficient : float
        Dimensionless Cd, >= 0
    mass : float
        Projectile mass (kg), > 0
    delta_time : float
        Fixed integration step (s), > 0
    initial_conditions : MotionState
        State at the start of the run
    ending_time : float
        Simulation stops once time reaches this value (s)
    gravity : float
        Downward gravitational acceleration (m/s²)

    Raises
    ------
    InvalidParameter
        If any value is non-finite or outside its allowed range.
    """
    cross_area: float
    fluid_density: float
    drag_coefficient: float
    mass: float
    delta_time: float
    initial_conditions: MotionState
    ending_time: float
    gravity: float = GRAVITY

    def __post_init__(self):
        _require_non_negative('cross_area', self.cross_area)
        _require_non_negative('fluid_density', self.fluid_density)
        _require_non_negative('drag_coefficient', self.drag_coefficient)
        _require_positive('mass', self.mass)
        _require_positive('delta_time', self.delta_time)
        _require_finite('ending_time', self.ending_time)
        _require_finite('gravity', self.gravity)

        if not isinstance(self.initial_conditions, MotionState):
            raise InvalidParameter('initial_conditions', self.initial_conditions,
                                   "must be a MotionState")
        if not self.initial_conditions.is_finite():
            raise InvalidParameter('initial_conditions', self.initial_conditions,
                                   "must be finite")
        span = self.ending_time - self.initial_conditions.time
        if not np.isfinite(span / self.delta_time):
            raise InvalidParameter('delta_time', self.delta_time,
                                   "is too small for the simulated time span")

    @classmethod
    def from_launch(cls, cross_area: float, fluid_density: float,
                    drag_coefficient: float, mass: float, delta_time: float,
                    x: float, y: float, speed: float, angle_deg: float,
                    ending_time: float, gravity: float = GRAVITY) -> 'Parameters':
        """Build parameters from primitive launch values, starting at t = 0."""
        for name, value in (('x', x), ('y', y), ('speed', speed),
                            ('angle_deg', angle_deg)):
            _require_finite(name, value)
        return cls(
            cross_area=cross_area,
            fluid_density=fluid_density,
            drag_coefficient=drag_coefficient,
            mass=mass,
            delta_time=delta_time,
            initial_conditions=MotionState.launch(x, y, speed, angle_deg),
            ending_time=ending_time,
            gravity=gravity,
        )

    @property
    def drag_proportion(self) -> float:
        """k = ½ A ρ Cd (kg/m)."""
        return self.cross_area * self.fluid_density * self.drag_coefficient / 2

    @property
    def has_drag(self) -> bool:
        return self.drag_proportion != 0

    @property
    def step_limit(self) -> int:
        """Number of steps needed to reach `ending_time` from the initial time."""
        span = self.ending_time - self.initial_conditions.time
        if span <= 0:
            return 0
        return math.ceil(span / self.delta_time)

    def without_drag(self) -> 'Parameters':
        """Same run with every drag input zeroed."""
        return replace(self, cross_area=0.0, fluid_density=0.0,
                       drag_coefficient=0.0)

    def as_dict(self) -> dict:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values['drag_proportion'] = self.drag_proportion
        return values
