"""
Implicit equality constraints F(x) = 0 and their projection.

A constraint of co-dimension k on an ambient space of dimension n defines a
manifold of dimension n - k. States are "on" the manifold when
||F(x)|| <= tolerance. Projection runs Newton iterations with the
least-squares solution of J(x) dx = F(x):

    x <- x - J(x)^+ F(x)

until the residual is within tolerance or the iteration budget runs out.
"""

from abc import ABC, abstractmethod
from typing import List
import numpy as np
from scipy.linalg import lstsq

from manifold_planning.config import (
    CONSTRAINT_PROJECTION_TOLERANCE,
    CONSTRAINT_PROJECTION_MAX_ITERATIONS,
)

JACOBIAN_STEP = 1e-6


class Constraint(ABC):
    """
    Equality constraint F: R^n -> R^k.

    Subclasses must implement function(); jacobian() falls back to central
    finite differences.

    Args:
        ambient_dim: Dimension n of the ambient space.
        co_dim: Number k of constraint equations.
        tolerance: Residual norm under which a state counts as satisfied.
        max_iterations: Newton iteration budget for project().
    """

    def __init__(
        self,
        ambient_dim: int,
        co_dim: int,
        tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE,
        max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS,
    ):
        if not 0 < co_dim <= ambient_dim:
            raise ValueError(
                f"Co-dimension must be in (0, {ambient_dim}], got {co_dim}"
            )
        if tolerance <= 0:
            raise ValueError(f"Tolerance must be positive, got {tolerance}")

        self.ambient_dim = ambient_dim
        self.co_dim = co_dim
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    @property
    def manifold_dim(self) -> int:
        return self.ambient_dim - self.co_dim

    @abstractmethod
    def function(self, x: np.ndarray) -> np.ndarray:
        """Evaluate F(x). Returns (co_dim,)."""
        pass

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        """Jacobian of F w.r.t. x. Returns (co_dim, ambient_dim)."""
        return self.numerical_jacobian(x)

    def numerical_jacobian(self, x: np.ndarray) -> np.ndarray:
        """Central-difference Jacobian."""
        x = np.asarray(x, dtype=float)
        jac = np.zeros((self.co_dim, self.ambient_dim))
        for i in range(self.ambient_dim):
            e = np.zeros(self.ambient_dim)
            e[i] = JACOBIAN_STEP
            jac[:, i] = (
                np.atleast_1d(self.function(x + e)) - np.atleast_1d(self.function(x - e))
            ) / (2 * JACOBIAN_STEP)
        return jac

    def distance(self, x: np.ndarray) -> float:
        """Residual norm ||F(x)||."""
        return float(np.linalg.norm(np.atleast_1d(self.function(x))))

    def is_satisfied(self, x: np.ndarray) -> bool:
        f = np.atleast_1d(self.function(x))
        return bool(np.all(np.isfinite(f)) and f @ f <= self.tolerance ** 2)

    def project(self, x: np.ndarray) -> bool:
        """
        Newton-project x onto the manifold in place.

        Returns:
            True if the residual converged within tolerance.
        """
        squared_tolerance = self.tolerance ** 2
        f = np.atleast_1d(self.function(x))

        for _ in range(self.max_iterations):
            if not np.all(np.isfinite(f)) or f @ f <= squared_tolerance:
                break
            jac = np.atleast_2d(self.jacobian(x))
            if not np.all(np.isfinite(jac)):
                return False
            step, *_ = lstsq(jac, f)
            x -= step
            f = np.atleast_1d(self.function(x))

        return bool(np.all(np.isfinite(f)) and f @ f <= squared_tolerance)

    def check_jacobian(self, x: np.ndarray, atol: float = 1e-4) -> bool:
        """Compare the analytic Jacobian against finite differences at x."""
        return bool(np.allclose(
            np.atleast_2d(self.jacobian(x)), self.numerical_jacobian(x), atol=atol
        ))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(ambient_dim={self.ambient_dim}, "
            f"co_dim={self.co_dim})"
        )


class ConstraintIntersection(Constraint):
    """Aggregates multiple constraints. Stacks functions and Jacobians."""

    def __init__(
        self,
        ambient_dim: int,
        constraints: List[Constraint],
        tolerance: float = CONSTRAINT_PROJECTION_TOLERANCE,
        max_iterations: int = CONSTRAINT_PROJECTION_MAX_ITERATIONS,
    ):
        for c in constraints:
            if c.ambient_dim != ambient_dim:
                raise ValueError(
                    f"Constraint {c} has ambient dimension {c.ambient_dim}, "
                    f"expected {ambient_dim}"
                )
        co_dim = sum(c.co_dim for c in constraints)
        super().__init__(ambient_dim, co_dim, tolerance, max_iterations)
        self.constraints_list = list(constraints)

    def function(self, x: np.ndarray) -> np.ndarray:
        ret = [np.atleast_1d(c_i.function(x)) for c_i in self.constraints_list]
        return np.concatenate(ret)

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        ret = [np.atleast_2d(c_i.jacobian(x)) for c_i in self.constraints_list]
        return np.vstack(ret)
