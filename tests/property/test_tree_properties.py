"""Test structural invariants of the action tree across sizes and bandwidths."""

import math

import pytest
import networkx as nx

from cats_tree.tree import build_tree

SIZES = [1, 2, 3, 5, 8, 13, 16, 31, 64, 100]
BANDWIDTHS = [0, 1, 2, 3, 7, 50, 200]


@pytest.mark.parametrize("num_leaves", SIZES)
@pytest.mark.parametrize("bandwidth", BANDWIDTHS)
def test_well_formed(num_leaves, bandwidth):
    """Test node count, links and leaf depths for every configuration."""
    tree = build_tree(num_leaves, bandwidth)
    assert len(tree) == 2 * num_leaves - 1
    assert [node.id for node in tree] == list(range(len(tree)))
    assert sum(node.is_leaf for node in tree) == num_leaves

    graph = tree.to_networkx()
    assert nx.is_arborescence(graph)

    for node in tree:
        if node.id != 0:
            parent = tree[node.parent_id]
            assert node.id in (parent.left_id, parent.right_id)
            assert node.depth == parent.depth + 1

    leaf_depths = {node.depth for node in tree if node.is_leaf}
    assert max(leaf_depths) == tree.depth
    assert max(leaf_depths) - min(leaf_depths) <= 1
    if num_leaves > 1:
        assert tree.depth == math.ceil(math.log2(num_leaves))


@pytest.mark.parametrize("num_leaves", SIZES)
@pytest.mark.parametrize("bandwidth", BANDWIDTHS)
def test_flags_only_on_non_root_internal_nodes(num_leaves, bandwidth):
    """Test that merge flags never land on the root or a leaf."""
    tree = build_tree(num_leaves, bandwidth)
    for node in tree:
        if node.left_only or node.right_only:
            assert bandwidth > 0
            assert node.id != 0
            assert not node.is_leaf
            assert not (node.left_only and node.right_only)


@pytest.mark.parametrize("num_leaves", SIZES)
def test_every_action_has_one_leaf(num_leaves):
    """Test the action <-> leaf bijection."""
    tree = build_tree(num_leaves, 0)
    leaves = [tree.leaf_for_action(a) for a in range(1, num_leaves + 1)]
    assert len(set(leaves)) == num_leaves
    assert all(tree[leaf].is_leaf for leaf in leaves)
    assert [tree.action_for_leaf(leaf) for leaf in leaves] == list(range(1, num_leaves + 1))


def test_rebuild_leaks_no_state():
    """Test that building other trees in between does not change a rebuild."""
    reference = build_tree(16, 2)
    for n in SIZES:
        build_tree(n, 1)
    assert build_tree(16, 2) == reference


@pytest.mark.parametrize("num_leaves", SIZES)
def test_actions_increase_left_to_right(num_leaves):
    """Test that a left-first walk meets the leaves in action order."""
    tree = build_tree(num_leaves, 0)
    graph = tree.to_networkx()
    leaves = [n for n in nx.dfs_preorder_nodes(graph, 0) if tree[n].is_leaf]
    assert [tree.action_for_leaf(leaf) for leaf in leaves] == list(range(1, num_leaves + 1))


@pytest.mark.parametrize("num_leaves", SIZES)
def test_subtree_action_ranges_are_contiguous(num_leaves):
    """Test that each subtree covers a contiguous block split between its children."""
    tree = build_tree(num_leaves, 0)
    assert tree.action_range(0) == (1, num_leaves)
    for node in tree:
        if node.is_leaf:
            action = tree.action_for_leaf(node.id)
            assert tree.action_range(node.id) == (action, action)
        else:
            left, right = tree.action_range(node.left_id), tree.action_range(node.right_id)
            assert left[1] + 1 == right[0]
            assert tree.action_range(node.id) == (left[0], right[1])
