"""
Concrete constraints.

- sphere:   F(x) = ||x - c|| - r                  (co-dimension 1)
- plane:    F(x) = n . x - b, with ||n|| = 1       (co-dimension 1)
- function: user-supplied F and optional Jacobian (any co-dimension)
"""

from typing import Callable, Optional, Sequence
import numpy as np

from manifold_planning.constraints.base import Constraint
from manifold_planning.config import (
    CONSTRAINT_PROJECTION_TOLERANCE,
    CONSTRAINT_PROJECTION_MAX_ITERATIONS,
)
from manifold_planning.registry import CONSTRAINT_REGISTRY


@CONSTRAINT_REGISTRY.register("sphere")
class SphereConstraint(Constraint):
    """Hypersphere of a given radius around a center."""

    def __init__(
        self,
        ambient_dim: int = 3,
        radius: float = 1.0,
        center: Optional[Sequence[float]] = None,
        tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE,
        max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS,
    ):
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}")
        super().__init__(ambient_dim, 1, tolerance, max_iterations)
        self.radius = float(radius)
        self.center = (
            np.zeros(ambient_dim) if center is None else np.asarray(center, dtype=float)
        )

    def function(self, x: np.ndarray) -> np.ndarray:
        return np.array([np.linalg.norm(x - self.center) - self.radius])

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        diff = x - self.center
        d = max(np.linalg.norm(diff), 1e-8)
        return (diff / d)[np.newaxis, :]


@CONSTRAINT_REGISTRY.register("plane", aliases=["hyperplane"])
class PlaneConstraint(Constraint):
    """Hyperplane {x : n . x = offset}; the normal is normalized on construction."""

    def __init__(
        self,
        normal: Sequence[float] = (0.0, 0.0, 1.0),
        offset: float = 0.0,
        tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE,
        max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS,
    ):
        normal = np.asarray(normal, dtype=float)
        norm = np.linalg.norm(normal)
        if norm == 0:
            raise ValueError("Plane normal must be non-zero")
        super().__init__(len(normal), 1, tolerance, max_iterations)
        self.normal = normal / norm
        self.offset = float(offset) / norm

    def function(self, x: np.ndarray) -> np.ndarray:
        return np.array([self.normal @ x - self.offset])

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        return self.normal[np.newaxis, :]


@CONSTRAINT_REGISTRY.register("function", aliases=["custom"])
class FunctionConstraint(Constraint):
    """
    Constraint from plain callables.

    Args:
        ambient_dim: Dimension of x.
        co_dim: Length of fun(x).
        fun: F(x) -> (co_dim,)
        jac: Optional J(x) -> (co_dim, ambient_dim). Finite differences if None.
    """

    def __init__(
        self,
        ambient_dim: int,
        co_dim: int,
        fun: Callable[[np.ndarray], np.ndarray],
        jac: Optional[Callable[[np.ndarray], np.ndarray]] = None,
        tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE,
        max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS,
    ):
        super().__init__(ambient_dim, co_dim, tolerance, max_iterations)
        self.fun_origin = fun
        self.jac_fun = jac

    def function(self, x: np.ndarray) -> np.ndarray:
        return np.atleast_1d(self.fun_origin(x))

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        if self.jac_fun is None:
            return self.numerical_jacobian(x)
        return np.atleast_2d(self.jac_fun(x))
