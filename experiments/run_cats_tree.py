#!/usr/bin/env python3
"""Train a cats tree on a synthetic continuous-action bandit.

Usage:
    python experiments/run_cats_tree.py \
        --config configs/cats_tree/base.yaml \
        --num_rounds 10000 \
        --checkpoint checkpoints/cats_tree.pt
"""

import argparse
import logging
from dataclasses import replace
from pathlib import Path
import sys

import torch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cats_tree.config import CatsTreeConfig
from cats_tree.simulation import run_simulation
from cats_tree.utils import setup_logging, set_seed

logger = logging.getLogger("cats_tree.experiments.run")


def main():
    parser = argparse.ArgumentParser(description="Train a cats tree on a synthetic bandit")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config file")
    parser.add_argument("--num_rounds", type=int, default=None,
                        help="Override number of rounds")
    parser.add_argument("--num_actions", type=int, default=None,
                        help="Override number of actions")
    parser.add_argument("--bandwidth", type=int, default=None,
                        help="Override tree bandwidth")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--checkpoint", type=str, default=None,
                        help="Where to save the trained learner")
    parser.add_argument("--log_file", type=str, default=None, help="Optional log file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    config = CatsTreeConfig.from_yaml(args.config) if args.config else CatsTreeConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("num_rounds", "num_actions", "bandwidth", "seed")
        if getattr(args, name) is not None
    }
    if overrides:
        config = replace(config, **overrides)

    set_seed(config.seed)
    logger.info(f"Config: {config.to_dict()}")

    result = run_simulation(config)
    tree = result["tree"]
    logger.info(f"Average cost over {result['rounds']} rounds: {result['average_cost']:.4f}")
    logger.info(f"Tree: {result['stats']}")
    logger.debug(tree.tree_stats_to_string())

    if args.checkpoint:
        checkpoint_path = Path(args.checkpoint)
        checkpoint_path.parent.mkdir(parents=True, exist_ok=True)
        torch.save({
            'learner_state_dict': result["learner"].state_dict(),
            'learn_counts': tree.learn_counts,
            'config': config.to_dict()
        }, checkpoint_path)
        logger.info(f"Saved checkpoint to {checkpoint_path}")


if __name__ == "__main__":
    main()
