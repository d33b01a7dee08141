"""
State validity checkers.

A validity checker is the external feasibility oracle (collision-free,
joint limits, ...). The constrained core only ever asks it a yes/no question.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence
import numpy as np

from manifold_planning.registry import VALIDITY_REGISTRY


class StateValidityChecker(ABC):
    """Abstract yes/no feasibility predicate over states."""

    def __init__(self, si=None):
        self.si = si

    @abstractmethod
    def is_valid(self, state: np.ndarray) -> bool:
        pass

    def clearance(self, state: np.ndarray) -> float:
        """Distance to the nearest invalid state, if known."""
        return float('inf')


@VALIDITY_REGISTRY.register("all_valid", aliases=["none", "passthrough"])
class AllValidStateValidityChecker(StateValidityChecker):
    """Accepts every state."""

    def is_valid(self, state: np.ndarray) -> bool:
        return True


@VALIDITY_REGISTRY.register("function")
class FunctionStateValidityChecker(StateValidityChecker):
    """Wraps a plain callable ``fn(state) -> bool``."""

    def __init__(self, fn: Callable[[np.ndarray], bool], si=None):
        super().__init__(si)
        self.fn = fn

    def is_valid(self, state: np.ndarray) -> bool:
        return bool(self.fn(state))


@VALIDITY_REGISTRY.register("spheres", aliases=["obstacles"])
class SphereObstacleValidityChecker(StateValidityChecker):
    """
    Rejects states inside any of a set of spherical obstacles.

    Args:
        centers: Obstacle centers, shape (K, dim).
        radius: Common obstacle radius.
    """

    def __init__(
        self,
        centers: Optional[Sequence[Sequence[float]]] = None,
        radius: float = 0.3,
        si=None,
    ):
        super().__init__(si)
        self.centers: List[np.ndarray] = [np.asarray(c, dtype=float) for c in (centers or [])]
        self.radius = radius

    def clearance(self, state: np.ndarray) -> float:
        if not self.centers:
            return float('inf')
        return min(float(np.linalg.norm(state - c)) for c in self.centers) - self.radius

    def is_valid(self, state: np.ndarray) -> bool:
        return self.clearance(state) > 0
