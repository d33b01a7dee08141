"""
Configuration dataclasses for constrained sampling and manifold traversal.

The demo entry point fills these from Hydra/OmegaConf; library users can
build them directly or from plain dicts.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig, OmegaConf


# Projection and traversal defaults
CONSTRAINT_PROJECTION_TOLERANCE = 1e-4
CONSTRAINT_PROJECTION_MAX_ITERATIONS = 50
DELTA = 0.05
DEVIATION_FACTOR = 2.0
VALID_SAMPLING_ATTEMPTS = 100


def _from_dict(cls, d: Dict[str, Any]):
    valid_keys = {f.name for f in fields(cls)}
    filtered = {k: v for k, v in d.items() if k in valid_keys}
    return cls(**filtered)


@dataclass
class ProjectionConfig:
    tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE
    max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ProjectionConfig":
        """Create config from dict, ignoring unknown keys."""
        return _from_dict(cls, d)


@dataclass
class SpaceConfig:
    name: str = "projected"  # constrained space, from SPACE_REGISTRY
    ambient: str = "real_vector"
    dim: int = 3
    low: float = -2.0
    high: float = 2.0
    delta: float = DELTA  # step size and traversal tolerance
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SpaceConfig":
        """Create config from dict, ignoring unknown keys."""
        return _from_dict(cls, d)


@dataclass
class ConstraintConfig:
    name: str = "sphere"
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ConstraintConfig":
        """Create config from dict; keys other than ``name`` become params."""
        d = dict(d)
        name = d.pop("name", cls.name)
        params = dict(d.pop("params", {}) or {})
        params.update(d)
        return cls(name=name, params=params)


@dataclass
class DemoConfig:
    num_samples: int = 20
    attempts: int = VALID_SAMPLING_ATTEMPTS
    validity: str = "all_valid"
    plot: bool = False
    plot_path: str = "paths.png"
    obstacle_centers: List[List[float]] = field(default_factory=list)
    obstacle_radius: float = 0.3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DemoConfig":
        """Create config from dict, ignoring unknown keys."""
        return _from_dict(cls, d)


@dataclass
class Config:
    space: SpaceConfig = field(default_factory=SpaceConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    constraint: ConstraintConfig = field(default_factory=ConstraintConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)


def load_config(cfg: Any = None) -> Config:
    """
    Build a :class:`Config` from a dict, an OmegaConf node, or nothing.

    Missing sections fall back to their defaults; unknown keys are ignored.
    """
    if cfg is None:
        return Config()
    if isinstance(cfg, Config):
        return cfg
    if isinstance(cfg, DictConfig):
        cfg = OmegaConf.to_container(cfg, resolve=True)

    return Config(
        space=SpaceConfig.from_dict(cfg.get("space", {}) or {}),
        projection=ProjectionConfig.from_dict(cfg.get("projection", {}) or {}),
        constraint=ConstraintConfig.from_dict(cfg.get("constraint", {}) or {}),
        demo=DemoConfig.from_dict(cfg.get("demo", {}) or {}),
    )
