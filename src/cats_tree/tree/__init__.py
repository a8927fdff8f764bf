"""Tree module: minimum-depth binary tree over the action range.

Every internal node owns one binary classifier in the base learner,
addressed by its id. Leaves stand for actions 1..N.
"""

from .node import TreeNode, NodeRole
from .builder import Tree, build_tree

__all__ = [
    "TreeNode",
    "NodeRole",
    "Tree",
    "build_tree"
]
