"""Test root-to-leaf prediction."""

import pytest

from cats_tree.tournament import CatsTree


@pytest.mark.parametrize("scores,expected_action,num_leaves,bandwidth", [
    # 0 node tree
    ([], 0, 0, 0),
    # 2 node trees
    ([-1], 1, 2, 0),
    ([1], 2, 2, 0),
    # 4 node tree
    ([-1, 1], 2, 4, 0),
    ([1, 1], 4, 4, 0),
    # 4 node tree with bandwidth 1
    ([-1], 2, 4, 1),
    ([1], 3, 4, 1),
    # 8 node tree with bandwidth 1
    ([-1, -1], 2, 8, 1),
    ([-1, 1, -1], 3, 8, 1),
    # 8 node tree with bandwidth 2
    ([-1, -1], 3, 8, 2),
    ([1, 1], 6, 8, 2),
])
def test_predict(recording_learner, scores, expected_action, num_leaves, bandwidth):
    """Test predicted action for scripted scores."""
    base = recording_learner(scores)
    tree = CatsTree(num_leaves, bandwidth)
    assert tree.predict(base, example=None) == expected_action
    assert base.num_predictions == len(scores)


def test_predict_single_leaf(recording_learner):
    """Test that a single-action tree needs no classifier."""
    base = recording_learner()
    assert CatsTree(1, 0).predict(base, None) == 1
    assert base.num_predictions == 0


def test_predict_visits_node_ids(recording_learner):
    """Test that predict addresses each classifier by node id."""
    base = recording_learner([1, -1, 1])
    tree = CatsTree(8, 0)
    assert tree.predict(base, None) == 6
    assert base.predict_offsets == [0, 2, 5]


def test_zero_score_routes_right(recording_learner):
    """Test that a score of exactly 0 goes right."""
    base = recording_learner([0.0])
    assert CatsTree(2, 0).predict(base, None) == 2


def test_predict_from_subtree(recording_learner):
    """Test descent starting below the root."""
    base = recording_learner([-1, 1])
    tree = CatsTree(8, 0)
    leaf = tree.predict_from(base, None, node_id=2)
    assert base.predict_offsets == [2, 5]
    assert leaf == 12


def test_predict_does_not_train(recording_learner):
    """Test that predict never calls learn."""
    base = recording_learner([1, 1, 1])
    tree = CatsTree(8, 0)
    tree.predict(base, None)
    assert base.learner_offsets == []
    assert tree.learn_counts.sum() == 0


def test_uninitialized_tree_raises(recording_learner):
    """Test that using the engine before init fails."""
    with pytest.raises(RuntimeError):
        CatsTree().predict(recording_learner(), None)


def test_base_learner_errors_propagate():
    """Test that base learner failures reach the caller unchanged."""
    class FailingLearner:
        def predict(self, example, offset):
            raise KeyError(offset)

        def learn(self, example, label, weight, offset):
            raise KeyError(offset)

    with pytest.raises(KeyError):
        CatsTree(4, 0).predict(FailingLearner(), None)


@pytest.mark.parametrize("num_leaves", [3, 5, 6, 7, 12])
def test_predict_extremes_on_uneven_tree(recording_learner, num_leaves):
    """Test that always-left reaches action 1 and always-right reaches action N."""
    tree = CatsTree(num_leaves, 0)
    assert tree.predict(recording_learner([-1] * 4), None) == 1
    assert tree.predict(recording_learner([1] * 4), None) == num_leaves
