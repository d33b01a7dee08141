"""Constrained space wiring: space information, motion validation, geodesics."""

import numpy as np
import pytest

from manifold_planning.base.space_information import DiscreteMotionValidator, SpaceInformation
from manifold_planning.base.state_space import RealVectorStateSpace
from manifold_planning.constraints.library import FunctionConstraint, SphereConstraint
from manifold_planning.exceptions import ConstrainedSpaceError
from manifold_planning.spaces.constrained import ConstrainedMotionValidator
from manifold_planning.spaces.projected import ProjectedStateSpace
from manifold_planning.spaces.space_information import ConstrainedSpaceInformation

from doubles import ScriptedConstraint, line_space


# =============================================================================
# Setup checks
# =============================================================================

def test_constrained_si_installs_motion_validator(sphere_si, sphere_space):
    assert sphere_space.si is sphere_si
    assert isinstance(sphere_si.get_motion_validator(), ConstrainedMotionValidator)


def test_plain_space_information_is_rejected(sphere_space):
    plain = SpaceInformation(RealVectorStateSpace(3))

    with pytest.raises(ConstrainedSpaceError, match="ProjectedStateSpace"):
        ProjectedStateSpace.check_space(plain)
    with pytest.raises(ConstrainedSpaceError):
        sphere_space.set_space_information(plain)
    with pytest.raises(ConstrainedSpaceError):
        ConstrainedMotionValidator(plain)
    with pytest.raises(ConstrainedSpaceError):
        ConstrainedSpaceInformation(RealVectorStateSpace(3))


def test_space_construction_errors():
    with pytest.raises(ConstrainedSpaceError):
        ProjectedStateSpace(RealVectorStateSpace(3), SphereConstraint(3), delta=0.0)
    with pytest.raises(ConstrainedSpaceError):
        ProjectedStateSpace(RealVectorStateSpace(2), SphereConstraint(3))


def test_sanity_checks(sphere_space):
    sphere_space.sanity_checks(n_samples=5)

    space = ProjectedStateSpace(RealVectorStateSpace(1), ScriptedConstraint(satisfied=False))
    with pytest.raises(ConstrainedSpaceError, match="does not satisfy"):
        space.sanity_checks(n_samples=2)

    wrong_jacobian = FunctionConstraint(
        3, 1, fun=lambda x: x @ x - 1.0, jac=lambda x: np.zeros((1, 3))
    )
    space = ProjectedStateSpace(RealVectorStateSpace(3, seed=1), wrong_jacobian)
    with pytest.raises(ConstrainedSpaceError, match="Jacobian"):
        space.sanity_checks(n_samples=2, check_samplers=False)


# =============================================================================
# Motion validation
# =============================================================================

def test_check_motion(sphere_si):
    a = np.array([1.0, 0.0, 0.0])
    assert sphere_si.check_motion(a, np.array([0.0, 1.0, 0.0]))
    assert not sphere_si.check_motion(a, np.array([0.0, 2.0, 0.0]))
    assert not sphere_si.check_motion(a, np.array([-1.0, 0.0, 0.0]))


def test_check_motion_last_valid_reached(sphere_si):
    validator = sphere_si.get_motion_validator()
    s2 = np.array([0.0, 1.0, 0.0])

    valid, last, fraction = validator.check_motion_last_valid(np.array([1.0, 0.0, 0.0]), s2)

    assert valid
    assert fraction == 1.0
    assert np.linalg.norm(last - s2) <= sphere_si.space.delta


def test_check_motion_last_valid_blocked(sphere_space):
    si = ConstrainedSpaceInformation(sphere_space, lambda s: s[1] <= 0.5)
    validator = si.get_motion_validator()

    valid, last, fraction = validator.check_motion_last_valid(
        np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0])
    )

    assert not valid
    assert 0.0 < fraction < 1.0
    assert last[1] <= 0.5
    assert sphere_space.constraint.is_satisfied(last)


def test_check_motion_last_valid_fraction_is_arc_over_chord(sphere_space):
    """A long blocked arc can cover more length than the straight-line distance."""
    limit = np.radians(130.0)
    si = ConstrainedSpaceInformation(sphere_space, lambda s: np.arctan2(s[1], s[0]) <= limit)
    target = np.radians(170.0)
    s1 = np.array([1.0, 0.0, 0.0])
    s2 = np.array([np.cos(target), np.sin(target), 0.0])

    valid, last, fraction = si.get_motion_validator().check_motion_last_valid(s1, s2)

    assert not valid
    assert np.arctan2(last[1], last[0]) <= limit
    assert fraction > 1.0


def test_check_motion_last_valid_off_manifold_start(sphere_si):
    validator = sphere_si.get_motion_validator()
    s1 = np.array([2.0, 0.0, 0.0])

    valid, last, fraction = validator.check_motion_last_valid(s1, np.array([0.0, 1.0, 0.0]))

    assert not valid
    assert fraction == 0.0
    np.testing.assert_array_equal(last, s1)
    assert last is not s1


def test_discrete_motion_validator_on_plain_space():
    si = SpaceInformation(
        RealVectorStateSpace(2, -1.0, 1.0), lambda s: np.linalg.norm(s) > 0.2
    )
    assert isinstance(si.get_motion_validator(), DiscreteMotionValidator)

    assert not si.check_motion(np.array([-0.5, 0.0]), np.array([0.5, 0.0]))
    assert si.check_motion(np.array([-0.5, 0.5]), np.array([0.5, 0.5]))

    valid, last, fraction = si.get_motion_validator().check_motion_last_valid(
        np.array([-0.5, 0.0]), np.array([0.5, 0.0])
    )
    assert not valid
    assert last[0] < -0.2 + 1e-9
    assert 0.0 < fraction < 0.5


def test_uniform_valid_state_sampler_on_plain_space():
    si = SpaceInformation(RealVectorStateSpace(2, -1.0, 1.0, seed=3), lambda s: s[0] > 0.5)
    sampler = si.alloc_valid_state_sampler()
    state = si.alloc_state()

    assert sampler.sample(state)
    assert state[0] > 0.5


# =============================================================================
# Geodesics
# =============================================================================

def test_geodesic_interpolate_picks_closest_arc_length():
    space, _ = line_space(ScriptedConstraint())
    geodesic = [np.array([float(i)]) for i in range(4)]

    assert space.geodesic_interpolate(geodesic, 0.0) is geodesic[0]
    assert space.geodesic_interpolate(geodesic, 0.4) is geodesic[1]
    assert space.geodesic_interpolate(geodesic, 0.6) is geodesic[2]
    assert space.geodesic_interpolate(geodesic, 1.0) is geodesic[3]


def test_geodesic_interpolate_zero_length():
    space, _ = line_space(ScriptedConstraint())
    geodesic = [np.array([0.5]), np.array([0.5])]

    assert space.geodesic_interpolate(geodesic, 0.7) is geodesic[0]


def test_interpolate_follows_manifold(sphere_space):
    a = np.array([1.0, 0.0, 0.0])
    b = np.array([0.0, 1.0, 0.0])
    out = sphere_space.alloc_state()

    sphere_space.interpolate(a, b, 0.0, out)
    np.testing.assert_array_equal(out, a)

    sphere_space.interpolate(a, b, 0.5, out)
    assert sphere_space.constraint.is_satisfied(out)
    assert abs(np.linalg.norm(out - a) - np.linalg.norm(out - b)) < 4 * sphere_space.delta

    sphere_space.interpolate(a, b, 1.0, out)
    assert sphere_space.constraint.is_satisfied(out)
    assert np.linalg.norm(out - b) <= sphere_space.delta


def test_interpolate_falls_back_to_start(sphere_space):
    a = np.array([2.0, 0.0, 0.0])
    out = sphere_space.alloc_state()

    sphere_space.interpolate(a, np.array([0.0, 1.0, 0.0]), 0.5, out)
    np.testing.assert_array_equal(out, a)
