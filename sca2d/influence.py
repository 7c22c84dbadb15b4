"""
InfluenceBuffer - per-node accumulator of attractor pull.

For each node it stores the summed direction vectors and the number of
contributions, so the mean pull can be read back after the attraction phase.
Slot i belongs to NodeId(i); the buffer is always exactly as long as the tree
it describes and is rebuilt from scratch every step.

Pointwise summation makes merge_from associative and commutative, so
attractors can be split across partial buffers and combined afterwards.
Counts merge exactly; direction sums can differ from a single-buffer run by
floating-point rounding only.
"""

import operator
from typing import Iterator
import numpy as np

from .types import NodeId
from .vector import Vector2D


class InfluenceBuffer:
    __slots__ = ('_dir', '_count')

    def __init__(self, length: int = 0):
        self._dir = np.zeros((length, 2), dtype=np.float64)
        self._count = np.zeros(length, dtype=np.int64)

    @classmethod
    def with_len(cls, length: int) -> 'InfluenceBuffer':
        return cls(length)

    def __len__(self) -> int:
        return len(self._count)

    def _check(self, node_id: NodeId) -> int:
        index = operator.index(node_id)
        if not 0 <= index < len(self._count):
            raise IndexError(f"node index {index} out of range for buffer of length {len(self._count)}")
        return index

    def ensure_len(self, length: int):
        """Resize to length if needed; either way the buffer ends fully cleared."""
        if len(self._count) != length:
            self._dir = np.zeros((length, 2), dtype=np.float64)
            self._count = np.zeros(length, dtype=np.int64)
        else:
            self.clear()

    def clear(self):
        self._dir.fill(0.0)
        self._count.fill(0)

    def add(self, node_id: NodeId, direction: Vector2D):
        i = self._check(node_id)
        self._dir[i, 0] += direction.x
        self._dir[i, 1] += direction.y
        self._count[i] += 1

    def count(self, node_id: NodeId) -> int:
        return int(self._count[self._check(node_id)])

    def direction_sum(self, node_id: NodeId) -> Vector2D:
        i = self._check(node_id)
        return Vector2D(self._dir[i, 0], self._dir[i, 1])

    def avg_dir(self, node_id: NodeId) -> Vector2D:
        i = self._check(node_id)
        c = self._count[i]
        if c == 0:
            return Vector2D(0, 0)
        return Vector2D(self._dir[i, 0] / c, self._dir[i, 1] / c)

    def is_influenced(self, node_id: NodeId) -> bool:
        return bool(self._count[self._check(node_id)] > 0)

    def influenced_indices(self) -> Iterator[NodeId]:
        for i in np.flatnonzero(self._count):
            yield NodeId(i)

    def merge_from(self, other: 'InfluenceBuffer'):
        if len(self) != len(other):
            raise ValueError(
                f"cannot merge influence buffers of different lengths ({len(self)} != {len(other)})"
            )
        self._dir += other._dir
        self._count += other._count

    def __repr__(self) -> str:
        influenced = int(np.count_nonzero(self._count))
        return f"InfluenceBuffer(len={len(self)}, influenced={influenced})"
