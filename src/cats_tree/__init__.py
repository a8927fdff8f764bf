"""Continuous-action tournament tree for contextual bandits.

Reduces a bandit over an ordered action range 1..N to a cascade of binary
classifiers arranged in a minimum-depth binary tree:
- tree/ - Tree builder, node layout and bandwidth merge flags
- tournament/ - Root-to-leaf predict, leaf-to-root learn
- learners/ - A torch linear classifier bank usable as the base learner
"""

__version__ = "0.1.0"

from .tree import Tree, TreeNode, NodeRole, build_tree
from .tournament import BaseLearner, CBClass, CBLabel, CatsTree
from .learners import LinearNodeLearner
from .config import CatsTreeConfig

__all__ = [
    "Tree",
    "TreeNode",
    "NodeRole",
    "build_tree",
    "BaseLearner",
    "CBClass",
    "CBLabel",
    "CatsTree",
    "LinearNodeLearner",
    "CatsTreeConfig"
]
