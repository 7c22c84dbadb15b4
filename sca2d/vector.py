"""
Simple 2D Vector class for the growth engine.
"""

import numpy as np


class Vector2D:
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vector2D':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.2f}, {self.y:.2f})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return bool(np.isclose(self.x, other.x) and np.isclose(self.y, other.y))

    @classmethod
    def zero(cls) -> 'Vector2D':
        return cls(0.0, 0.0)

    @property
    def magnitude(self) -> float:
        return float(np.sqrt(self.x ** 2 + self.y ** 2))

    @property
    def magnitude_squared(self) -> float:
        return self.x ** 2 + self.y ** 2

    @property
    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def normalize(self) -> 'Vector2D':
        """Unit vector in the same direction, or the zero vector if there is none."""
        mag = self.magnitude
        if mag == 0.0 or not np.isfinite(mag):
            return Vector2D(0, 0)
        return self / mag

    def distance_squared_to(self, other: 'Vector2D') -> float:
        return (self - other).magnitude_squared

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    @classmethod
    def coerce(cls, value) -> 'Vector2D':
        """Accept a Vector2D, a 2-tuple/list or a length-2 array."""
        if isinstance(value, Vector2D):
            return value
        return cls(value[0], value[1])

    def copy(self) -> 'Vector2D':
        return Vector2D(self.x, self.y)
