"""Registries and configuration loading."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

import manifold_planning
from manifold_planning.config import (
    Config,
    ConstraintConfig,
    SpaceConfig,
    load_config,
)
from manifold_planning.registry import (
    CONSTRAINT_REGISTRY,
    SPACE_REGISTRY,
    VALIDITY_REGISTRY,
    Registry,
    list_all,
)
from manifold_planning.spaces.projected import ProjectedStateSpace


class TestRegistry:

    def test_register_build_and_alias(self):
        registry = Registry("widget")

        @registry.register("box", aliases=["crate"])
        class Box:
            def __init__(self, size=1):
                self.size = size

        assert registry.list() == ["box"]
        assert registry.get("crate") is Box
        assert registry.build("crate", size=3).size == 3

    def test_unknown_name_lists_available(self):
        registry = Registry("widget")
        registry.register("box")(dict)

        with pytest.raises(KeyError, match="box"):
            registry.build("ball")
        with pytest.raises(KeyError, match="box"):
            registry.build_from_params("ball", {})
        assert registry.get("ball") is None

    def test_build_from_params_drops_foreign_keys(self):
        registry = Registry("widget")

        @registry.register("box")
        class Box:
            def __init__(self, size=1, colour="red"):
                self.size = size
                self.colour = colour

        box = registry.build_from_params(
            "box", {"size": 2, "radius": 1.0, "colour": "blue"}, colour="green"
        )
        assert box.size == 2
        assert box.colour == "green"

    def test_class_name_is_default_key(self):
        registry = Registry("widget")

        @registry.register()
        class Gadget:
            pass

        assert registry.list() == ["Gadget"]


def test_builtin_components_are_registered():
    components = list_all()
    assert {"sphere", "plane", "function"} <= set(components["constraints"])
    assert {"real_vector", "projected"} <= set(components["state_spaces"])
    assert {"all_valid", "function", "spheres"} <= set(components["validity_checkers"])
    assert VALIDITY_REGISTRY.get("obstacles") is VALIDITY_REGISTRY.get("spheres")


def test_build_projected_space_from_registries():
    ambient = SPACE_REGISTRY.build("rn", dim=3)
    constraint = CONSTRAINT_REGISTRY.build("sphere", ambient_dim=3, radius=0.5)
    space = SPACE_REGISTRY.build("projected", ambient_space=ambient, constraint=constraint)

    assert isinstance(space, ProjectedStateSpace)
    assert space.get_manifold_dimension() == 2
    assert constraint.radius == 0.5


def test_load_config_defaults():
    cfg = load_config()
    assert isinstance(cfg, Config)
    assert cfg.space.delta == 0.05
    assert cfg.projection.tolerance == 1e-4
    assert cfg.projection.max_iterations == 50
    assert load_config(cfg) is cfg


def test_load_config_from_dict_ignores_unknown_keys():
    cfg = load_config({
        "space": {"dim": 2, "delta": 0.1, "colour": "red"},
        "constraint": {"name": "plane", "normal": [0.0, 1.0]},
        "unused_section": {"x": 1},
    })

    assert cfg.space.dim == 2
    assert cfg.space.delta == 0.1
    assert cfg.constraint.name == "plane"
    assert cfg.constraint.params == {"normal": [0.0, 1.0]}
    assert cfg.demo.num_samples == 20


def test_constraint_config_merges_params():
    cfg = ConstraintConfig.from_dict({"name": "sphere", "params": {"radius": 2.0}, "center": [0, 0, 1]})
    assert cfg.params == {"radius": 2.0, "center": [0, 0, 1]}
    assert SpaceConfig.from_dict({}) == SpaceConfig()


def test_packaged_yaml_loads():
    path = Path(manifold_planning.__file__).parent / "configs" / "config.yaml"
    cfg = load_config(OmegaConf.load(path))

    assert cfg.constraint.name == "sphere"
    assert cfg.constraint.params == {"radius": 1.0}
    assert cfg.space.seed == 0
    assert cfg.space.name == "projected"
    assert cfg.space.ambient == "real_vector"
    assert cfg.demo.validity == "all_valid"
