"""Constraint functions, Jacobians and Newton projection."""

import numpy as np
import pytest

from manifold_planning.constraints import (
    ConstraintIntersection,
    FunctionConstraint,
    PlaneConstraint,
    SphereConstraint,
)


def test_sphere_projection():
    sphere = SphereConstraint(3, radius=1.0)
    x = np.array([2.0, 0.0, 0.0])

    assert not sphere.is_satisfied(x)
    assert sphere.project(x)
    np.testing.assert_allclose(x, [1.0, 0.0, 0.0], atol=1e-8)
    assert sphere.is_satisfied(x)
    assert sphere.manifold_dim == 2


def test_sphere_with_center_and_radius():
    sphere = SphereConstraint(2, radius=0.5, center=[1.0, 1.0])
    x = np.array([1.0, 3.0])

    assert sphere.project(x)
    np.testing.assert_allclose(x, [1.0, 1.5], atol=1e-8)
    assert sphere.distance(x) < 1e-8


def test_plane_projection_normalizes_normal():
    plane = PlaneConstraint(normal=[0.0, 0.0, 2.0], offset=2.0)
    x = np.array([0.3, 0.4, 5.0])

    assert plane.project(x)
    np.testing.assert_allclose(x, [0.3, 0.4, 1.0], atol=1e-8)
    assert plane.ambient_dim == 3


def test_function_constraint_uses_finite_differences():
    circle = FunctionConstraint(2, 1, fun=lambda x: x @ x - 1.0)
    x = np.array([2.0, 0.0])

    assert circle.project(x)
    assert abs(np.linalg.norm(x) - 1.0) < 1e-4
    np.testing.assert_allclose(circle.jacobian(x), [[2 * x[0], 2 * x[1]]], atol=1e-5)


def test_check_jacobian():
    sphere = SphereConstraint(3)
    x = np.array([0.3, -0.2, 0.9])
    assert sphere.check_jacobian(x)

    wrong = FunctionConstraint(
        3, 1, fun=lambda x: np.array([x @ x - 1.0]), jac=lambda x: np.zeros((1, 3))
    )
    assert not wrong.check_jacobian(x)


def test_intersection_of_sphere_and_plane():
    circle = ConstraintIntersection(
        3, [SphereConstraint(3), PlaneConstraint([0.0, 0.0, 1.0])]
    )
    assert circle.co_dim == 2
    assert circle.manifold_dim == 1

    x = np.array([2.0, 1.0, 0.5])
    assert circle.project(x)
    assert circle.is_satisfied(x)
    assert abs(x[2]) < 1e-4
    assert abs(np.linalg.norm(x) - 1.0) < 1e-4
    assert circle.jacobian(x).shape == (2, 3)


def test_non_finite_residual_never_satisfied():
    bad = FunctionConstraint(2, 1, fun=lambda x: np.array([np.nan]))
    x = np.array([0.5, 0.5])

    assert not bad.is_satisfied(x)
    assert not bad.project(x)


def test_iteration_budget_zero_leaves_state_alone():
    sphere = SphereConstraint(3, max_iterations=0)
    x = np.array([2.0, 0.0, 0.0])

    assert not sphere.project(x)
    np.testing.assert_array_equal(x, [2.0, 0.0, 0.0])


@pytest.mark.parametrize("kwargs", [
    dict(ambient_dim=2, co_dim=3),
    dict(ambient_dim=2, co_dim=0),
])
def test_bad_dimensions(kwargs):
    with pytest.raises(ValueError):
        FunctionConstraint(fun=lambda x: x, **kwargs)


def test_bad_geometry():
    with pytest.raises(ValueError):
        SphereConstraint(3, radius=0.0)
    with pytest.raises(ValueError):
        PlaneConstraint([0.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        ConstraintIntersection(3, [SphereConstraint(2)])
