"""
Planar Vectors
==============
Immutable (x, y) value type used for position, velocity and acceleration.

Coordinate system:
  x = downrange (horizontal)
  y = altitude  (vertical, up positive)
"""

import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """An (x, y) pair of floats."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_magnitude_angle(cls, magnitude: float, angle_deg: float) -> 'Vector2':
        """Build a vector from its length and its angle above +x (degrees)."""
        theta = np.radians(angle_deg)
        return cls(float(magnitude * np.cos(theta)),
                   float(magnitude * np.sin(theta)))

    def magnitude(self) -> float:
        return float(np.hypot(self.x, self.y))

    def angle(self) -> float:
        """Direction in degrees, atan2 convention (-180, 180]."""
        return float(np.degrees(np.arctan2(self.y, self.x)))

    def is_finite(self) -> bool:
        return bool(np.isfinite(self.x) and np.isfinite(self.y))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y])

    def __add__(self, other: 'Vector2') -> 'Vector2':
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> 'Vector2':
        if isinstance(scalar, Vector2):
            return NotImplemented
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.x:.4g}, {self.y:.4g})"
