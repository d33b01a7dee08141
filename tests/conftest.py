"""Shared fixtures."""

import pytest

from manifold_planning.base.state_space import RealVectorStateSpace
from manifold_planning.constraints.library import SphereConstraint
from manifold_planning.spaces.projected import ProjectedStateSpace
from manifold_planning.spaces.space_information import ConstrainedSpaceInformation


@pytest.fixture
def sphere_space():
    ambient = RealVectorStateSpace(3, -2.0, 2.0, seed=0)
    return ProjectedStateSpace(ambient, SphereConstraint(3), delta=0.05)


@pytest.fixture
def sphere_si(sphere_space):
    return ConstrainedSpaceInformation(sphere_space)
