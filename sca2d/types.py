"""
Shared handle types.
"""


class NodeId:
    """
    Handle for a node of a Tree.

    Wraps the node's index into the tree's append-only storage. Ids are only
    meaningful for the tree that produced them and stay valid for its lifetime.
    """
    __slots__ = ('_index',)

    def __init__(self, index: int):
        index = int(index)
        if index < 0:
            raise ValueError(f"NodeId index must be non-negative, got {index}")
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def __index__(self) -> int:
        return self._index

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self._index == other._index

    def __lt__(self, other: 'NodeId') -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self._index < other._index

    def __hash__(self) -> int:
        return hash(('NodeId', self._index))

    def __repr__(self) -> str:
        return f"NodeId({self._index})"
