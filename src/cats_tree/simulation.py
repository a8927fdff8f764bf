"""Synthetic continuous-action bandit for exercising the tournament tree.

Each round draws a context x, the best action is a smooth function of x,
and playing action a costs |a - a*| / N. The loop explores epsilon-uniformly
around the tree's greedy action and feeds the observed cost back through
``CatsTree.learn``. With a positive bandwidth the observation is widened to
the interval [a - h, a + h].
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from .config import CatsTreeConfig
from .learners import LinearNodeLearner
from .tournament import CatsTree, CBLabel

logger = logging.getLogger(__name__)


@dataclass
class SyntheticBandit:
    """Linear-sigmoid context to best-action map."""
    num_actions: int
    num_features: int
    seed: int = 0

    def __post_init__(self):
        if self.num_actions < 1:
            raise ValueError("SyntheticBandit needs at least one action")
        self._rng = np.random.default_rng(self.seed)
        self.theta = self._rng.normal(size=self.num_features)

    def sample(self) -> Tuple[np.ndarray, int]:
        """Draw a context and its best action."""
        x = self._rng.normal(size=self.num_features)
        p = 1.0 / (1.0 + np.exp(-x @ self.theta))
        best = int(np.clip(np.floor(p * self.num_actions) + 1, 1, self.num_actions))
        return x, best

    def cost(self, action: int, best: int) -> float:
        return abs(action - best) / self.num_actions

    def uniform_action(self) -> int:
        return int(self._rng.integers(1, self.num_actions + 1))

    def explore(self, epsilon: float) -> bool:
        return bool(self._rng.random() < epsilon)


def observation_label(action: int, cost: float, probability: float, num_actions: int, bandwidth: int) -> CBLabel:
    """Label for an observed action, widened to [a - h, a + h] when h > 0."""
    if bandwidth <= 0:
        return CBLabel.from_triples([(cost, action, probability)])
    low = max(1, action - bandwidth)
    high = min(num_actions, action + bandwidth)
    return CBLabel.from_triples([(cost, low, probability), (cost, high, probability)])


def run_simulation(config: CatsTreeConfig) -> Dict[str, Any]:
    """Train a cats tree online on the synthetic bandit.

    Returns:
        Dict with average cost overall and over the last logging window,
        plus the trained tree and learner
    """
    if config.num_actions < 1:
        raise ValueError("Simulation needs at least one action")

    tree = CatsTree(config.num_actions, config.bandwidth, seed=config.seed)
    learner = LinearNodeLearner.for_tree(
        tree.tree,
        num_features=config.num_features,
        learning_rate=config.learning_rate,
        l2=config.l2,
        link=config.link,
        device=config.device
    )
    env = SyntheticBandit(config.num_actions, config.num_features, seed=config.seed)

    total_cost = 0.0
    window_cost = 0.0
    baseline = 0.0
    for t in range(1, config.num_rounds + 1):
        x, best = env.sample()
        greedy = tree.predict(learner, x)

        action = env.uniform_action() if env.explore(config.epsilon) else greedy
        probability = config.epsilon / config.num_actions
        if action == greedy:
            probability += 1.0 - config.epsilon

        cost = env.cost(action, best)
        total_cost += cost
        window_cost += cost

        # Centre on the running mean so cheap actions pull the tree towards them
        label = observation_label(action, cost - baseline, probability, config.num_actions, config.bandwidth)
        tree.learn(learner, x, label)
        baseline += (cost - baseline) / t

        if t % config.log_every == 0:
            logger.info(
                f"Round {t}/{config.num_rounds} - "
                f"avg cost: {total_cost / t:.4f}, "
                f"window cost: {window_cost / config.log_every:.4f}"
            )
            window_cost = 0.0

    rounds = max(config.num_rounds, 1)
    return {
        "rounds": config.num_rounds,
        "average_cost": total_cost / rounds,
        "stats": tree.get_statistics(),
        "tree": tree,
        "learner": learner
    }
