"""Configuration for the cats tree reduction and its experiments."""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .learners.linear import LINKS


@dataclass
class CatsTreeConfig:
    """Configuration for a cats tree learner."""
    num_actions: int = 32
    bandwidth: int = 0
    seed: int = 0
    # Base learner
    num_features: int = 8
    learning_rate: float = 0.5
    l2: float = 0.0
    link: str = "glf1"
    device: str = "cpu"
    # Synthetic bandit experiment
    num_rounds: int = 5000
    epsilon: float = 0.1
    log_every: int = 500

    def __post_init__(self):
        """Validate configuration."""
        if self.num_actions < 0:
            raise ValueError(f"num_actions must be non-negative, got {self.num_actions}")
        if self.bandwidth < 0:
            raise ValueError(f"bandwidth must be non-negative, got {self.bandwidth}")
        if self.num_features < 1:
            raise ValueError(f"num_features must be positive, got {self.num_features}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.link not in LINKS:
            raise ValueError(f"Unknown link: {self.link}")
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {self.epsilon}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be positive, got {self.log_every}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatsTreeConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CatsTreeConfig":
        """Load configuration from a YAML file.

        The file may hold the fields at top level or under a ``cats_tree`` key.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if "cats_tree" in data:
            data = data["cats_tree"]
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
