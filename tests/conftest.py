"""Pytest fixtures for testing."""

import sys
from pathlib import Path
from typing import Any, List, Sequence

import pytest
import numpy as np
import torch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cats_tree.tournament import BaseLearner, CBLabel


class RecordingLearner(BaseLearner):
    """Base learner that replays scripted scores and records every call.

    predict() pops the next scripted score (IndexError once exhausted, so a
    test fails loudly on an unexpected prediction). learn() records the
    offset, label and weight it was called with.
    """

    def __init__(self, scores: Sequence[float] = ()):
        self.scores = list(scores)
        self.curr_idx = 0
        self.predict_offsets: List[int] = []
        self.learner_offsets: List[int] = []
        self.labels: List[float] = []
        self.weights: List[float] = []

    def predict(self, example: Any, offset: int) -> float:
        score = self.scores[self.curr_idx]
        self.curr_idx += 1
        self.predict_offsets.append(offset)
        return score

    def learn(self, example: Any, label: float, weight: float, offset: int) -> None:
        self.labels.append(label)
        self.weights.append(weight)
        self.learner_offsets.append(offset)

    @property
    def num_predictions(self) -> int:
        return self.curr_idx


@pytest.fixture
def seed():
    """Set random seed for reproducibility."""
    seed_value = 42
    torch.manual_seed(seed_value)
    np.random.seed(seed_value)
    return seed_value


@pytest.fixture
def recording_learner():
    """Factory for scripted recording learners."""
    def make(scores: Sequence[float] = ()) -> RecordingLearner:
        return RecordingLearner(scores)
    return make


@pytest.fixture
def make_label():
    """Factory for labels from (cost, action, probability) tuples."""
    def make(*triples) -> CBLabel:
        return CBLabel.from_triples(triples)
    return make
