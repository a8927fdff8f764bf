"""Concrete base learners for the tournament engine."""

from .linear import LinearNodeLearner

__all__ = [
    "LinearNodeLearner"
]
