"""Contextual-bandit label: observed (cost, action, probability) triples."""

import math
import numbers
from dataclasses import dataclass, field
from typing import Iterable, Tuple


@dataclass(frozen=True)
class CBClass:
    """One observed action.

    Attributes:
        cost: Observed cost of the action
        action: Action id, 1-based
        probability: Probability the action was sampled with
    """
    cost: float
    action: int
    probability: float

    @property
    def importance_weight(self) -> float:
        """Inverse-propensity-scored cost (cost / probability)."""
        return self.cost / self.probability

    def validate(self, num_actions: int) -> None:
        """Raise ValueError if the triple cannot be learned from."""
        if isinstance(self.action, bool) or not isinstance(self.action, numbers.Integral):
            raise ValueError(f"Action {self.action!r} is not an integer")
        if not 1 <= self.action <= num_actions:
            raise ValueError(f"Action {self.action} outside [1, {num_actions}]")
        if not 0.0 < self.probability <= 1.0:
            raise ValueError(
                f"Probability {self.probability} for action {self.action} outside (0, 1]"
            )
        if not math.isfinite(self.cost):
            raise ValueError(f"Cost {self.cost} for action {self.action} is not finite")


@dataclass(frozen=True)
class CBLabel:
    """Ordered sequence of observed actions for one example."""
    costs: Tuple[CBClass, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "costs", tuple(self.costs))

    @classmethod
    def from_triples(cls, triples: Iterable[Tuple[float, int, float]]) -> "CBLabel":
        """Build a label from (cost, action, probability) tuples."""
        return cls(costs=tuple(CBClass(float(c), a, float(p)) for c, a, p in triples))

    def is_empty(self) -> bool:
        return len(self.costs) == 0

    def __len__(self) -> int:
        return len(self.costs)
