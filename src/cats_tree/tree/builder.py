"""Minimum-depth binary tree over an ordered action range.

The tree uses the heap layout: node ``i`` has children ``2i + 1`` and
``2i + 2``, the ``N - 1`` internal nodes come first and the ``N`` leaves
occupy ids ``N - 1 .. 2N - 2``. Leaf depths differ by at most one.

Actions are numbered by in-order leaf position, so action 1 is the leftmost
leaf and every subtree covers a contiguous action range. When N is a power
of two this coincides with leaf id order.

A positive bandwidth marks up to two internal nodes as merge points.
A ``right_only`` / ``left_only`` node always routes to one child, so the
actions under the other child are only reachable as its smoothed neighbours
and the node's classifier is never trained.
"""

import logging
from dataclasses import replace
from typing import Iterator, List, Tuple

import networkx as nx

from .node import TreeNode

logger = logging.getLogger(__name__)


class Tree:
    """Immutable action tree, indexed by node id."""

    def __init__(self, nodes: Tuple[TreeNode, ...], num_leaves: int, bandwidth: int, depth: int):
        self._nodes = tuple(nodes)
        self.num_leaves = num_leaves
        self.bandwidth = bandwidth
        self.depth = depth
        self._leaf_ids, self._action_ranges = self._number_actions()
        self._actions = {leaf_id: action for action, leaf_id in enumerate(self._leaf_ids, start=1)}

    def _number_actions(self) -> Tuple[Tuple[int, ...], Tuple[Tuple[int, int], ...]]:
        """Number leaves 1..N left to right and record each subtree's action range."""
        if not self._nodes:
            return (), ()
        leaf_ids: List[int] = []
        ranges: List[Tuple[int, int]] = [(0, 0)] * len(self._nodes)

        stack = [(0, False)]
        while stack:
            node_id, expanded = stack.pop()
            node = self._nodes[node_id]
            if node.is_leaf:
                leaf_ids.append(node_id)
                ranges[node_id] = (len(leaf_ids), len(leaf_ids))
            elif expanded:
                ranges[node_id] = (ranges[node.left_id][0], ranges[node.right_id][1])
            else:
                stack.append((node_id, True))
                stack.append((node.right_id, False))
                stack.append((node.left_id, False))
        return tuple(leaf_ids), tuple(ranges)

    @property
    def nodes(self) -> Tuple[TreeNode, ...]:
        return self._nodes

    @property
    def root(self) -> TreeNode:
        if not self._nodes:
            raise IndexError("Empty tree has no root")
        return self._nodes[0]

    def internal_node_count(self) -> int:
        return max(self.num_leaves - 1, 0)

    def leaf_node_count(self) -> int:
        return self.num_leaves

    def leaf_for_action(self, action: int) -> int:
        """Node id of the leaf standing for ``action`` (1-based)."""
        if not 1 <= action <= self.num_leaves:
            raise ValueError(
                f"Action {action} outside [1, {self.num_leaves}]"
            )
        return self._leaf_ids[action - 1]

    def action_for_leaf(self, node_id: int) -> int:
        """Action (1-based) represented by leaf ``node_id``."""
        if not self._nodes[node_id].is_leaf:
            raise ValueError(f"Node {node_id} is not a leaf")
        return self._actions[node_id]

    def action_range(self, node_id: int) -> Tuple[int, int]:
        """Lowest and highest action under ``node_id``."""
        return self._action_ranges[node_id]

    def children(self, node_id: int) -> Tuple[int, ...]:
        node = self._nodes[node_id]
        if node.is_leaf:
            return ()
        return (node.left_id, node.right_id)

    def to_networkx(self) -> nx.DiGraph:
        """Directed parent -> child graph with node fields as attributes."""
        graph = nx.DiGraph()
        for node in self._nodes:
            graph.add_node(
                node.id,
                depth=node.depth,
                is_leaf=node.is_leaf,
                left_only=node.left_only,
                right_only=node.right_only,
            )
        for node in self._nodes:
            for child_id in self.children(node.id):
                graph.add_edge(node.id, child_id)
        return graph

    def tree_stats_to_string(self) -> str:
        lines = [f"Tree(num_leaves={self.num_leaves}, bandwidth={self.bandwidth}, depth={self.depth})"]
        lines.extend(str(node) for node in self._nodes)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> TreeNode:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return (self._nodes == other._nodes
                and self.num_leaves == other.num_leaves
                and self.bandwidth == other.bandwidth
                and self.depth == other.depth)

    def __hash__(self) -> int:
        return hash((self._nodes, self.num_leaves, self.bandwidth, self.depth))

    def __repr__(self) -> str:
        return f"Tree(num_leaves={self.num_leaves}, bandwidth={self.bandwidth}, nodes={len(self._nodes)})"


def _merge_flags(node_id: int, num_leaves: int, bandwidth: int) -> Tuple[bool, bool]:
    """Return (left_only, right_only) for a freshly created child."""
    if not bandwidth:
        return False, False
    right_only = node_id == num_leaves // (2 * bandwidth) - 1
    left_only = node_id == num_leaves // bandwidth - 2
    return left_only, right_only


def build_tree(num_leaves: int, bandwidth: int = 0) -> Tree:
    """Build the minimum-depth binary tree over ``num_leaves`` actions.

    Args:
        num_leaves: Number of actions (leaves), >= 0
        bandwidth: Smoothing bandwidth in actions, >= 0 (0 disables merging)

    Returns:
        Tree with ``2 * num_leaves - 1`` nodes (empty for 0 leaves)
    """
    if num_leaves < 0:
        raise ValueError(f"num_leaves must be non-negative, got {num_leaves}")
    if bandwidth < 0:
        raise ValueError(f"bandwidth must be non-negative, got {bandwidth}")

    if num_leaves == 0:
        return Tree((), num_leaves=0, bandwidth=bandwidth, depth=0)

    # Root starts as a leaf and is its own parent
    nodes: List[TreeNode] = [TreeNode(0, 0, 0, 0, 0, False, False, True)]

    depth = 0
    level_end = 1  # first id of the next level
    for i in range(num_leaves - 1):
        left_id, right_id = 2 * i + 1, 2 * i + 2
        nodes[i] = replace(nodes[i], left_id=left_id, right_id=right_id, is_leaf=False)
        if left_id >= level_end:
            depth += 1
            level_end = (1 << (depth + 1)) - 1

        for child_id in (left_id, right_id):
            left_only, right_only = _merge_flags(child_id, num_leaves, bandwidth)
            nodes.append(TreeNode(child_id, 0, 0, i, depth, left_only, right_only, True))

    logger.debug(
        f"Built tree: {num_leaves} leaves, bandwidth {bandwidth}, "
        f"{len(nodes)} nodes, depth {depth}"
    )
    return Tree(tuple(nodes), num_leaves=num_leaves, bandwidth=bandwidth, depth=depth)
