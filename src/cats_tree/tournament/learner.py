"""Base learner capability consumed by the tournament engine."""

from abc import ABC, abstractmethod
from typing import Any


class BaseLearner(ABC):
    """Bank of binary classifiers addressed by integer offset.

    The engine uses the tree node id as the offset, so each internal node
    owns an independent classifier. Implementations need not subclass this;
    any object with matching ``predict`` and ``learn`` methods works.
    """

    @abstractmethod
    def predict(self, example: Any, offset: int) -> float:
        """Score ``example`` with classifier ``offset``. Negative means left."""
        raise NotImplementedError

    @abstractmethod
    def learn(self, example: Any, label: float, weight: float, offset: int) -> None:
        """Update classifier ``offset`` with label -1 (left) or +1 (right)."""
        raise NotImplementedError
