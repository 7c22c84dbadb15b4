"""
Tree - append-only, index-addressed graph of growth nodes.

Every node lives in a single list owned by the Tree and is referred to by a
NodeId handle. Parent/child links are NodeIds, never object references, and
nodes are never removed or reordered, so ids stay valid for the tree's lifetime.

Positions are mirrored into a growable numpy array so neighbor queries are a
single vectorized linear scan.
"""

from typing import Iterator, List, Optional, Tuple
import numpy as np

from .types import NodeId
from .vector import Vector2D


class TreeNode:
    __slots__ = ('_position', 'radius', 'parent', '_children')

    def __init__(self, position: Vector2D, radius: float, parent: Optional[NodeId] = None):
        self._position = Vector2D.coerce(position).copy()
        self.radius = float(radius)
        self.parent = parent
        self._children: List[NodeId] = []

    @property
    def position(self) -> Vector2D:
        return self._position

    @property
    def children(self) -> List[NodeId]:
        return self._children

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_tip(self) -> bool:
        return len(self._children) == 0

    def __repr__(self) -> str:
        return f"TreeNode({self._position}, r={self.radius:.2f}, parent={self.parent})"


class Tree:
    _INITIAL_CAPACITY = 64

    def __init__(self, root_position: Vector2D, root_radius: float):
        self._init_storage()
        self._append(TreeNode(root_position, root_radius))

    @classmethod
    def empty(cls) -> 'Tree':
        """A tree with no nodes at all; every neighbor query on it returns None."""
        tree = cls.__new__(cls)
        tree._init_storage()
        return tree

    def _init_storage(self):
        self.nodes: List[TreeNode] = []
        self._positions = np.empty((self._INITIAL_CAPACITY, 2), dtype=np.float64)

    def _append(self, node: TreeNode) -> NodeId:
        n = len(self.nodes)
        if n == len(self._positions):
            grown = np.empty((2 * n, 2), dtype=np.float64)
            grown[:n] = self._positions
            self._positions = grown
        self._positions[n] = (node.position.x, node.position.y)
        self.nodes.append(node)
        return NodeId(n)

    def _check(self, node_id: NodeId) -> int:
        if not isinstance(node_id, NodeId):
            raise TypeError(f"expected NodeId, got {type(node_id).__name__}")
        if node_id.index >= len(self.nodes):
            raise IndexError(f"{node_id} out of range for tree with {len(self.nodes)} nodes")
        return node_id.index

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    def __contains__(self, node_id: NodeId) -> bool:
        return isinstance(node_id, NodeId) and node_id.index < len(self.nodes)

    def node(self, node_id: NodeId) -> TreeNode:
        return self.nodes[self._check(node_id)]

    def ids(self) -> Iterator[NodeId]:
        return (NodeId(i) for i in range(len(self.nodes)))

    @property
    def positions(self) -> np.ndarray:
        """(n, 2) read-only view of node positions, indexed by NodeId."""
        view = self._positions[:len(self.nodes)]
        view.flags.writeable = False
        return view

    # ==================== MUTATION ====================
    def add_free_node(self, position: Vector2D, radius: float) -> NodeId:
        return self._append(TreeNode(position, radius))

    def add_child(self, parent: NodeId, position: Vector2D, radius: float) -> NodeId:
        parent_node = self.node(parent)
        child_id = self._append(TreeNode(position, radius, parent=parent))
        parent_node.children.append(child_id)
        return child_id

    # ==================== QUERIES ====================
    def has_child_near(self, parent: NodeId, position: Vector2D, epsilon: float) -> bool:
        eps2 = epsilon * epsilon
        return any(
            self.nodes[child.index].position.distance_squared_to(position) < eps2
            for child in self.node(parent).children
        )

    def _squared_distances(self, position: Vector2D) -> np.ndarray:
        diff = self._positions[:len(self.nodes)] - (position.x, position.y)
        d2 = diff[:, 0] ** 2 + diff[:, 1] ** 2
        # NaN sorts after every real distance so it can never win a rank
        d2[np.isnan(d2)] = np.inf
        return d2

    def find_nearest_node(self, position: Vector2D) -> Optional[Tuple[NodeId, float]]:
        if not self.nodes:
            return None
        d2 = self._squared_distances(position)
        idx = int(np.argmin(d2))  # first occurrence wins ties
        return NodeId(idx), float(d2[idx])

    def find_kth_nearest_nodes(self, position: Vector2D, k: int) -> Optional[Tuple[NodeId, float]]:
        """
        Node at closeness rank k (0 = nearest) and its squared distance.

        Uses introselect (numpy.argpartition), linear in the node count. Only
        the element at rank k is guaranteed placed; order on either side is
        unspecified. A rank past the end is clamped to the farthest node.
        Returns None on an empty tree.
        """
        n = len(self.nodes)
        if n == 0:
            return None
        k = min(k, n - 1)
        d2 = self._squared_distances(position)
        idx = int(np.argpartition(d2, k)[k])
        return NodeId(idx), float(d2[idx])

    # ==================== STRUCTURE ====================
    def roots(self) -> List[NodeId]:
        return [NodeId(i) for i, node in enumerate(self.nodes) if node.is_root]

    def tips(self) -> List[NodeId]:
        return [NodeId(i) for i, node in enumerate(self.nodes) if node.is_tip]

    def depth(self, node_id: NodeId) -> int:
        depth = 0
        current = self.node(node_id)
        while current.parent is not None:
            depth += 1
            current = self.nodes[current.parent.index]
        return depth

    def segments(self) -> List[tuple]:
        """All parent->child segments as ((x1,y1), (x2,y2)) tuples for drawing."""
        return [
            (self.nodes[node.parent.index].position.to_tuple(), node.position.to_tuple())
            for node in self.nodes
            if node.parent is not None
        ]

    def __repr__(self) -> str:
        return f"Tree({len(self.nodes)} nodes, {len(self.roots())} roots)"
