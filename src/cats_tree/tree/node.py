"""Tree node for the action tree."""

from dataclasses import dataclass
from enum import Enum


class NodeRole(Enum):
    """What a node does during a descent."""
    LEAF = "leaf"
    INTERNAL = "internal"
    LEFT_ONLY = "left_only"
    RIGHT_ONLY = "right_only"


@dataclass(frozen=True)
class TreeNode:
    """One position in the action tree.

    Children of an internal node ``i`` are ``2i + 1`` and ``2i + 2``.
    Leaves keep ``left_id == right_id == 0`` and the root is its own parent.

    Attributes:
        id: Node id, doubles as the base learner offset
        left_id: Left child id (0 for leaves)
        right_id: Right child id (0 for leaves)
        parent_id: Parent id (0 for the root)
        depth: Distance from the root
        left_only: Bandwidth merge, every descent goes left untrained
        right_only: Bandwidth merge, every descent goes right untrained
        is_leaf: True iff the node stands for an action
    """
    id: int
    left_id: int
    right_id: int
    parent_id: int
    depth: int
    left_only: bool = False
    right_only: bool = False
    is_leaf: bool = False

    @property
    def role(self) -> NodeRole:
        if self.is_leaf:
            return NodeRole.LEAF
        if self.right_only:
            return NodeRole.RIGHT_ONLY
        if self.left_only:
            return NodeRole.LEFT_ONLY
        return NodeRole.INTERNAL

    @property
    def is_walkover(self) -> bool:
        """True if the node routes without consulting a classifier."""
        return not self.is_leaf and (self.left_only or self.right_only)

    def __str__(self) -> str:
        return (f"{{{self.id},{self.left_id},{self.right_id}, {self.parent_id}, "
                f"{self.depth}, {'true' if self.is_leaf else 'false'}}}")
