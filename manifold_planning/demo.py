#!/usr/bin/env python3
"""
Constrained sampling and traversal demo.

Builds a constrained space from configuration, draws valid states on the
manifold and tries to connect consecutive samples by manifold traversal.

Usage:
    # Default: unit sphere in R^3
    python -m manifold_planning.demo

    # Smaller steps
    python -m manifold_planning.demo space.delta=0.02

    # Plane instead of sphere, with obstacles
    python -m manifold_planning.demo constraint.name=plane \
        demo.validity=spheres 'demo.obstacle_centers=[[0.5,0.5,0.0]]'

    # Save a plot of the traversals
    python -m manifold_planning.demo demo.plot=true
"""

import logging
from typing import Any, Dict, Tuple

import hydra
import numpy as np
from omegaconf import DictConfig, OmegaConf
from tqdm import tqdm

from manifold_planning.base.validity import FunctionStateValidityChecker, StateValidityChecker
from manifold_planning.config import Config, load_config
from manifold_planning.constraints.base import Constraint
from manifold_planning.registry import (
    CONSTRAINT_REGISTRY,
    SPACE_REGISTRY,
    VALIDITY_REGISTRY,
    list_all,
)
from manifold_planning.spaces.constrained import ConstrainedStateSpace
from manifold_planning.spaces.space_information import ConstrainedSpaceInformation

logger = logging.getLogger(__name__)


def build_constraint(cfg: Config) -> Constraint:
    """
    Build the configured constraint from CONSTRAINT_REGISTRY.

    Params the chosen constraint does not take are ignored, so switching
    ``constraint.name`` leaves the other constraints' settings harmless.
    """
    params = dict(cfg.constraint.params)
    params.setdefault("ambient_dim", cfg.space.dim)

    return CONSTRAINT_REGISTRY.build_from_params(
        cfg.constraint.name,
        params,
        tolerance=cfg.projection.tolerance,
        max_iterations=cfg.projection.max_iterations,
    )


def build_validity_checker(cfg: Config) -> StateValidityChecker:
    """Build the configured checker; only checkers buildable from config are allowed."""
    if VALIDITY_REGISTRY.get(cfg.demo.validity) is FunctionStateValidityChecker:
        raise ValueError(
            f"Validity checker '{cfg.demo.validity}' wraps a Python callable and "
            "cannot be built from config; use it through SpaceInformation directly"
        )

    return VALIDITY_REGISTRY.build_from_params(
        cfg.demo.validity,
        {"centers": cfg.demo.obstacle_centers, "radius": cfg.demo.obstacle_radius},
    )


def build_space_information(cfg: Config) -> Tuple[ConstrainedSpaceInformation, ConstrainedStateSpace]:
    """Ambient space + constraint + validity checker -> constrained space information."""
    constraint = build_constraint(cfg)
    ambient = SPACE_REGISTRY.build_from_params(
        cfg.space.ambient,
        {"dim": constraint.ambient_dim, "low": cfg.space.low, "high": cfg.space.high},
        seed=cfg.space.seed,
    )
    space = SPACE_REGISTRY.build(
        cfg.space.name, ambient_space=ambient, constraint=constraint, delta=cfg.space.delta
    )

    checker = build_validity_checker(cfg)
    si = ConstrainedSpaceInformation(space, checker)
    checker.si = si
    return si, space


def run_demo(cfg: Any = None, show_progress: bool = False) -> Dict[str, Any]:
    """
    Sample valid states and traverse between consecutive ones.

    Returns:
        Dict with samples, paths, per-pair success flags, success_rate and
        mean_path_length (in accepted states).
    """
    cfg = load_config(cfg)
    si, space = build_space_information(cfg)
    sampler = si.alloc_valid_state_sampler(cfg.demo.attempts)

    samples = []
    for _ in range(cfg.demo.num_samples):
        state = space.alloc_state()
        if sampler.sample(state):
            samples.append(state)
        else:
            space.free_state(state)

    pairs = list(zip(samples[:-1], samples[1:]))
    successes = []
    paths = []
    for a, b in tqdm(pairs, desc="Traversing", disable=not show_progress):
        success, path = space.traverse_manifold(a, b, collect_path=True)
        successes.append(success)
        paths.append(path)

    success_rate = float(np.mean(successes)) if successes else 0.0
    mean_length = float(np.mean([len(p) for p in paths])) if paths else 0.0
    logger.info(
        f"{len(samples)} samples, {sum(successes)}/{len(pairs)} traversals succeeded"
    )

    return {
        'samples': samples,
        'paths': paths,
        'successes': successes,
        'success_rate': success_rate,
        'mean_path_length': mean_length,
    }


@hydra.main(version_base=None, config_path="configs", config_name="config")
def main(cfg: DictConfig):
    """Demo entry point."""
    print("\nConfiguration:")
    print("=" * 60)
    print(OmegaConf.to_yaml(cfg))
    print("=" * 60)
    print(f"Available components: {list_all()}")

    config = load_config(cfg)
    results = run_demo(config, show_progress=True)

    print("\nResults:")
    print(f"  Samples drawn:     {len(results['samples'])}")
    print(f"  Success rate:      {results['success_rate']:.2%}")
    print(f"  Mean path length:  {results['mean_path_length']:.1f} states")

    if config.demo.plot:
        from manifold_planning.utils.visualization import plot_paths
        plot_paths(results['paths'], results['samples'], save_path=config.demo.plot_path)
        print(f"  Plot saved to:     {config.demo.plot_path}")


if __name__ == "__main__":
    main()
