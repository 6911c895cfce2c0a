"""
Kinematic State
===============
Snapshot of the projectile at one instant.
"""

import numpy as np
from dataclasses import dataclass, field

from .vector import Vector2


@dataclass(frozen=True)
class MotionState:
    """Position, velocity and acceleration of the projectile at `time`."""
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    acceleration: Vector2 = field(default_factory=Vector2)
    time: float = 0.0

    @classmethod
    def launch(cls, x: float, y: float, speed: float, angle_deg: float,
               time: float = 0.0) -> 'MotionState':
        """Initial condition from a launch point, muzzle speed and elevation."""
        return cls(
            position=Vector2(float(x), float(y)),
            velocity=Vector2.from_magnitude_angle(speed, angle_deg),
            acceleration=Vector2(0.0, 0.0),
            time=float(time),
        )

    def is_finite(self) -> bool:
        return (self.position.is_finite() and self.velocity.is_finite()
                and self.acceleration.is_finite()
                and bool(np.isfinite(self.time)))
