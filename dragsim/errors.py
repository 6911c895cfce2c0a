"""
Simulation Errors
=================
Typed failures raised by the parameter model and the integrator.

  - InvalidParameter : a physical input is non-finite or out of range
  - NumericOverflow  : a step produced a non-finite state
"""


class SimulationError(Exception):
    """Base class for every error raised by dragsim."""


class InvalidParameter(SimulationError, ValueError):
    """A simulation input failed validation."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"{name} {reason}, got {value!r}")


class NumericOverflow(SimulationError, ArithmeticError):
    """The integrated state stopped being finite."""

    def __init__(self, step: int, state):
        self.step = step
        self.state = state
        super().__init__(
            f"non-finite state at step {step} (t={state.time!r}): "
            f"position={state.position}, velocity={state.velocity}"
        )
