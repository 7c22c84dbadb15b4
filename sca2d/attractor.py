"""
Attractors - target points that pull the tree toward them and are consumed
once the tree gets close enough.

Generators take an explicit numpy Generator; nothing here touches global
random state.
"""

from typing import Iterable, Iterator, List, Optional
import numpy as np

from .types import NodeId
from .vector import Vector2D


class Attractor:
    __slots__ = ('position', 'alive', 'owner')

    def __init__(self, position: Vector2D):
        self.position = position
        self.alive = True
        self.owner: Optional[NodeId] = None

    def kill(self):
        self.alive = False

    def __repr__(self) -> str:
        status = "alive" if self.alive else "dead"
        return f"Attractor({self.position}, {status}, owner={self.owner})"


class AttractorSet:
    def __init__(self, points: Optional[List[Attractor]] = None):
        self.points: List[Attractor] = points if points is not None else []

    @classmethod
    def from_positions(cls, positions: Iterable[Vector2D]) -> 'AttractorSet':
        return cls([Attractor(Vector2D.coerce(pos)) for pos in positions])

    @classmethod
    def random_in_rect(
        cls,
        center: Vector2D,
        half_extents: Vector2D,
        count: int,
        rng: np.random.Generator
    ) -> 'AttractorSet':
        """Uniform samples inside an axis-aligned rectangle around center."""
        center = Vector2D.coerce(center)
        half_extents = Vector2D.coerce(half_extents)
        xs = rng.uniform(-half_extents.x, half_extents.x, size=count)
        ys = rng.uniform(-half_extents.y, half_extents.y, size=count)
        return cls.from_positions(
            Vector2D(center.x + x, center.y + y) for x, y in zip(xs, ys)
        )

    @classmethod
    def random_in_square(cls, count: int, half_range: float, rng: np.random.Generator) -> 'AttractorSet':
        return cls.random_in_rect(Vector2D(0, 0), Vector2D(half_range, half_range), count, rng)

    @classmethod
    def random_in_oval(
        cls,
        center: Vector2D,
        radii: Vector2D,
        count: int,
        rng: np.random.Generator
    ) -> 'AttractorSet':
        """
        Area-uniform samples inside an axis-aligned ellipse.

        The radius is sqrt(u) of a uniform u; sampling the radius itself
        uniformly would crowd points toward the center.
        """
        center = Vector2D.coerce(center)
        radii = Vector2D.coerce(radii)
        theta = rng.uniform(0.0, 2.0 * np.pi, size=count)
        r = np.sqrt(rng.uniform(0.0, 1.0, size=count))
        xs = center.x + np.cos(theta) * r * radii.x
        ys = center.y + np.sin(theta) * r * radii.y
        return cls.from_positions(Vector2D(x, y) for x, y in zip(xs, ys))

    def extend(self, other: 'AttractorSet'):
        self.points.extend(other.points)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Attractor]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Attractor:
        if not 0 <= index < len(self.points):
            raise IndexError(f"attractor index {index} out of range for {len(self.points)} attractors")
        return self.points[index]

    @property
    def living(self) -> List[Attractor]:
        return [a for a in self.points if a.alive]

    @property
    def alive_count(self) -> int:
        return sum(1 for a in self.points if a.alive)

    def positions(self, alive_only: bool = False) -> np.ndarray:
        points = self.living if alive_only else self.points
        if not points:
            return np.empty((0, 2))
        return np.array([[a.position.x, a.position.y] for a in points])

    def __repr__(self) -> str:
        return f"AttractorSet({len(self.points)} attractors, {self.alive_count} alive)"
