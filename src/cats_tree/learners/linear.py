"""Linear node learner: one logistic classifier per tree node.

Each offset owns a weight row and a bias. Updates are single importance
weighted SGD steps on the logistic loss

    L(s) = weight * log(1 + exp(-y * s)),   s = w[offset] . x + b[offset]

so training one node never moves another node's classifier.
"""

from typing import Any

import torch
import torch.nn as nn

from ..tournament.learner import BaseLearner
from ..tree import Tree

LINKS = ("glf1", "identity")


class LinearNodeLearner(nn.Module, BaseLearner):
    """Bank of independent linear classifiers addressed by offset.

    With the ``glf1`` link, scores lie in (-1, 1) so their magnitude can be
    read as the classifier's confidence by the tournament engine.
    """

    def __init__(
        self,
        num_features: int,
        num_offsets: int,
        learning_rate: float = 0.5,
        l2: float = 0.0,
        link: str = "glf1",
        device: str = "cpu"
    ):
        """Initialize the learner bank.

        Args:
            num_features: Dimension of the example feature vector
            num_offsets: Number of classifiers (tree nodes)
            learning_rate: SGD step size
            l2: L2 regularization strength
            link: Output link, "glf1" or "identity"
            device: Torch device
        """
        super().__init__()
        if num_features < 1:
            raise ValueError(f"num_features must be positive, got {num_features}")
        if num_offsets < 1:
            raise ValueError(f"num_offsets must be positive, got {num_offsets}")
        if link not in LINKS:
            raise ValueError(f"Unknown link: {link}")

        self.num_features = num_features
        self.num_offsets = num_offsets
        self.learning_rate = learning_rate
        self.l2 = l2
        self.link = link
        self.device = torch.device(device)

        self.weight = nn.Parameter(
            torch.zeros(num_offsets, num_features, device=self.device),
            requires_grad=False
        )
        self.bias = nn.Parameter(
            torch.zeros(num_offsets, device=self.device),
            requires_grad=False
        )

    @classmethod
    def for_tree(cls, tree: Tree, num_features: int, **kwargs) -> "LinearNodeLearner":
        """Create a learner with one classifier per node of ``tree``."""
        return cls(num_features=num_features, num_offsets=max(len(tree), 1), **kwargs)

    def _features(self, example: Any) -> torch.Tensor:
        x = torch.as_tensor(example, dtype=torch.float32, device=self.device).flatten()
        if x.numel() != self.num_features:
            raise ValueError(
                f"Expected {self.num_features} features, got {x.numel()}"
            )
        return x

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset < self.num_offsets:
            raise ValueError(f"Offset {offset} outside [0, {self.num_offsets})")

    def raw_score(self, example: Any, offset: int) -> float:
        """Linear score before the link."""
        self._check_offset(offset)
        x = self._features(example)
        return float(self.weight[offset] @ x + self.bias[offset])

    def predict(self, example: Any, offset: int) -> float:
        s = self.raw_score(example, offset)
        if self.link == "glf1":
            return float(2.0 * torch.sigmoid(torch.tensor(s)) - 1.0)
        return s

    @torch.no_grad()
    def learn(self, example: Any, label: float, weight: float, offset: int) -> None:
        if label not in (-1.0, 1.0):
            raise ValueError(f"Label must be -1 or +1, got {label}")
        if weight <= 0:
            return
        self._check_offset(offset)
        x = self._features(example)

        s = self.weight[offset] @ x + self.bias[offset]
        # dL/ds for the weighted logistic loss
        grad_s = -weight * label * torch.sigmoid(-label * s)

        self.weight[offset] -= self.learning_rate * (grad_s * x + self.l2 * self.weight[offset])
        self.bias[offset] -= self.learning_rate * grad_s

    def __repr__(self) -> str:
        return (f"LinearNodeLearner(num_features={self.num_features}, "
                f"num_offsets={self.num_offsets}, link={self.link})")
