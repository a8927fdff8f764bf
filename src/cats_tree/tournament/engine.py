"""Tournament engine: predict and learn over the action tree.

predict walks root to leaf, asking the base learner at every internal node
which side holds the better action.

learn replays the tournament bottom-up. The observed actions define an
interval of leaves with cost ``cost*`` (everything outside it costs 0).
At each level the subtree containing an interval endpoint plays its sibling
at their parent: the parent's classifier is trained towards the cheaper
side with weight equal to the cost gap, then queried once to estimate the
cost the parent passes up to the next match.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..tree import Tree, build_tree
from .label import CBLabel
from .learner import BaseLearner

logger = logging.getLogger(__name__)

LEFT = -1.0
RIGHT = 1.0

# Learn calls lighter than this are kept with probability weight / threshold
WEIGHT_THRESHOLD = 1e-5


@dataclass(frozen=True)
class NodeCost:
    """Frontier entry: a subtree root and the cost it carries upward."""
    node_id: int
    cost: float


class CatsTree:
    """Continuous-action tournament over a minimum-depth binary tree.

    Attributes:
        tree: Immutable action tree
        learn_counts: Number of base learner updates per node id
    """

    def __init__(self, num_actions: Optional[int] = None, bandwidth: int = 0, seed: int = 0):
        self._tree: Optional[Tree] = None
        self._rng = np.random.default_rng(seed)
        self.learn_counts = np.zeros(0, dtype=np.int64)
        if num_actions is not None:
            self.init(num_actions, bandwidth)

    def init(self, num_actions: int, bandwidth: int = 0) -> None:
        """Build the tree once. Repeated calls must agree on the action count."""
        if self._tree is not None:
            if num_actions != self._tree.num_leaves:
                raise ValueError(
                    f"Tree already initialized with {self._tree.num_leaves} leaves, "
                    f"cannot re-initialize with {num_actions}"
                )
            return
        self._tree = build_tree(num_actions, bandwidth)
        self.learn_counts = np.zeros(len(self._tree), dtype=np.int64)

    @property
    def tree(self) -> Tree:
        if self._tree is None:
            raise RuntimeError("CatsTree used before init()")
        return self._tree

    @property
    def num_actions(self) -> int:
        return self.tree.num_leaves

    def predict_from(self, base: BaseLearner, example: Any, node_id: int = 0) -> int:
        """Descend from ``node_id`` to a leaf and return the leaf id."""
        tree = self.tree
        node = tree[node_id]
        while not node.is_leaf:
            if node.right_only:
                node = tree[node.right_id]
            elif node.left_only:
                node = tree[node.left_id]
            elif base.predict(example, node.id) < 0:
                node = tree[node.left_id]
            else:
                node = tree[node.right_id]
        return node.id

    def predict(self, base: BaseLearner, example: Any) -> int:
        """Return the chosen action in [1, N], or 0 for an empty tree."""
        tree = self.tree
        if tree.num_leaves == 0:
            return 0
        return tree.action_for_leaf(self.predict_from(base, example, 0))

    def learn(self, base: BaseLearner, example: Any, label: CBLabel) -> None:
        """Train every contested node between the observed actions and the root.

        Args:
            base: Base learner holding one classifier per node id
            example: Opaque example forwarded to the base learner
            label: Observed (cost, action, probability) triples
        """
        tree = self.tree
        if tree.num_leaves == 0 or label.is_empty():
            return

        # Reject the whole example before touching the base learner
        for cb in label.costs:
            cb.validate(tree.num_leaves)

        cost_star = label.costs[0].importance_weight
        actions = [cb.action for cb in label.costs]
        span = (min(actions), max(actions))
        a = NodeCost(tree.leaf_for_action(span[0]), cost_star)
        b = NodeCost(tree.leaf_for_action(span[1]), cost_star)

        for depth in range(tree.depth, 0, -1):
            a_here = tree[a.node_id].depth == depth
            b_here = tree[b.node_id].depth == depth
            siblings = tree[a.node_id].parent_id == tree[b.node_id].parent_id

            next_a, next_b = a, b
            if a_here:
                next_a = NodeCost(
                    tree[a.node_id].parent_id,
                    self._play(base, example, a, a, b, span, cost_star)
                )
            if b_here and not (a_here and siblings):
                next_b = NodeCost(
                    tree[b.node_id].parent_id,
                    self._play(base, example, b, a, b, span, cost_star)
                )
            elif b_here:
                next_b = next_a
            a, b = next_a, next_b

    def _return_cost(
        self,
        node_id: int,
        a: NodeCost,
        b: NodeCost,
        span: Tuple[int, int],
        cost_star: float
    ) -> float:
        """Cost carried by the subtree at ``node_id`` relative to the interval ``span``.

        Frontier nodes carry their played cost. Any other subtree holds neither
        endpoint, so its contiguous action range lies wholly inside or wholly
        outside the interval.
        """
        if node_id == a.node_id:
            return a.cost
        if node_id == b.node_id:
            return b.cost
        low, high = self.tree.action_range(node_id)
        if span[0] <= low and high <= span[1]:
            return cost_star
        return 0.0

    def _play(
        self,
        base: BaseLearner,
        example: Any,
        entry: NodeCost,
        a: NodeCost,
        b: NodeCost,
        span: Tuple[int, int],
        cost_star: float
    ) -> float:
        """Play ``entry`` against its sibling and return the parent's cost."""
        tree = self.tree
        v = tree[entry.node_id]
        parent = tree[v.parent_id]

        if parent.is_walkover:
            logger.debug(f"Node {parent.id}: walkover, no training")
            return entry.cost

        w_id = parent.right_id if parent.left_id == v.id else parent.left_id
        cost_v = entry.cost
        cost_w = self._return_cost(w_id, a, b, span, cost_star)
        if cost_v == cost_w:
            return cost_v

        cheaper = v.id if cost_v < cost_w else w_id
        local_action = LEFT if cheaper == parent.left_id else RIGHT

        weight = self._filter_weight(abs(cost_v - cost_w))
        if weight is not None:
            base.learn(example, local_action, weight, parent.id)
            self.learn_counts[parent.id] += 1
        else:
            logger.debug(f"Node {parent.id}: update filtered, weight below {WEIGHT_THRESHOLD}")

        score = base.predict(example, parent.id)
        trained_action = LEFT if score < 0 else RIGHT
        confidence = min(abs(score), 1.0)
        low, high = min(cost_v, cost_w), max(cost_v, cost_w)
        if trained_action == local_action:
            return low * confidence + high * (1 - confidence)
        return high * confidence + low * (1 - confidence)

    def _filter_weight(self, weight: float) -> Optional[float]:
        if weight >= WEIGHT_THRESHOLD:
            return weight
        draw = self._rng.random() * WEIGHT_THRESHOLD
        if draw < weight:
            return WEIGHT_THRESHOLD
        return None

    def get_statistics(self) -> Dict[str, Any]:
        """Get tree and training statistics."""
        tree = self.tree
        return {
            "num_actions": tree.num_leaves,
            "bandwidth": tree.bandwidth,
            "depth": tree.depth,
            "total_nodes": len(tree),
            "total_learn_calls": int(self.learn_counts.sum()),
        }

    def tree_stats_to_string(self) -> str:
        parts = [
            f"id={node.id}, #l={int(self.learn_counts[node.id])}"
            for node in self.tree if not node.is_leaf
        ]
        return "Learn() count per node: " + "; ".join(parts)
