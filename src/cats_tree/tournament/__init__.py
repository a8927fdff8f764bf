"""Tournament module: predict and learn through the action tree.

Prediction descends from the root, one base learner call per contested node.
Learning ascends from the observed actions, training each contested parent
towards the cheaper side and asking the updated classifier for the cost the
parent carries into the next match.
"""

from .label import CBClass, CBLabel
from .learner import BaseLearner
from .engine import CatsTree, NodeCost, LEFT, RIGHT, WEIGHT_THRESHOLD

__all__ = [
    "CBClass",
    "CBLabel",
    "BaseLearner",
    "CatsTree",
    "NodeCost",
    "LEFT",
    "RIGHT",
    "WEIGHT_THRESHOLD"
]
