"""
Drag Trajectory Simulator
=========================
Planar flight of a projectile under gravity and quadratic aerodynamic
drag, integrated with a fixed-step semi-implicit Euler scheme.

  - Parameter model with the derived drag proportion k = ½ A ρ Cd
  - Motion integrator stopping on ground impact or ending time
  - Closed-form drag-free reference for validation
  - Form input parsing and drag / drag-free comparison charts
"""

from .errors import SimulationError, InvalidParameter, NumericOverflow
from .vector import Vector2
from .state import MotionState
from .parameters import Parameters
from .integrator import Trajectory, acceleration, step, simulate, simulate_pair
from .validation import (
    analytic_state, analytic_peak_height, analytic_flight_time,
    analytic_range, validate_against_analytic, ValidationResult,
)
from .inputs import FORM_FIELDS, parse_parameters, delta_time_from_scale
from .visualization import plot_trajectory, plot_comparison, render_pixels
from .logging_config import setup_logging

__version__ = "1.0.0"
__all__ = [
    'SimulationError', 'InvalidParameter', 'NumericOverflow',
    'Vector2', 'MotionState', 'Parameters', 'Trajectory',
    'acceleration', 'step', 'simulate', 'simulate_pair',
    'analytic_state', 'analytic_peak_height', 'analytic_flight_time',
    'analytic_range', 'validate_against_analytic', 'ValidationResult',
    'FORM_FIELDS', 'parse_parameters', 'delta_time_from_scale',
    'plot_trajectory', 'plot_comparison', 'render_pixels',
    'setup_logging',
]
