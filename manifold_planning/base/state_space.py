"""
Ambient state spaces.

States are mutable 1-D numpy arrays. Operations that produce a state write
into a caller-allocated output array in place, so buffers can be reused
across the iterations of a planning loop.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Optional, Union
import numpy as np

from manifold_planning.registry import SPACE_REGISTRY
from manifold_planning.base.samplers import RealVectorStateSampler


class StateSpace(ABC):
    """
    Abstract ambient space.

    Subclasses must implement:
    - get_dimension(): Dimension of the state vectors
    - distance(): Metric between two states
    - interpolate(): Straight-line point between two states, written in place
    - allocate_default_state_sampler(): Sampler for this space
    """

    @abstractmethod
    def get_dimension(self) -> int:
        pass

    @abstractmethod
    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        pass

    @abstractmethod
    def interpolate(self, a: np.ndarray, b: np.ndarray, t: float, out: np.ndarray):
        """Write the point at parameter t in [0, 1] between a and b into out."""
        pass

    @abstractmethod
    def allocate_default_state_sampler(self):
        pass

    # =========================================================================
    # State lifecycle
    # =========================================================================

    def alloc_state(self) -> np.ndarray:
        return np.zeros(self.get_dimension())

    def free_state(self, state: np.ndarray):
        """Release a state. Arrays are garbage collected; subclasses may track."""
        pass

    def clone_state(self, source: np.ndarray) -> np.ndarray:
        state = self.alloc_state()
        self.copy_state(state, source)
        return state

    def copy_state(self, destination: np.ndarray, source: np.ndarray):
        destination[:] = source

    def equal_states(self, a: np.ndarray, b: np.ndarray) -> bool:
        return bool(np.array_equal(a, b))

    @contextmanager
    def scoped_state(self, source: Optional[np.ndarray] = None):
        """
        Allocate a state (or a clone of ``source``) for the duration of a block.

        The state is freed when the block exits, whether it returns early,
        breaks out of a loop or raises.
        """
        state = self.alloc_state() if source is None else self.clone_state(source)
        try:
            yield state
        finally:
            self.free_state(state)

    # =========================================================================
    # Bounds (optional)
    # =========================================================================

    def enforce_bounds(self, state: np.ndarray):
        pass

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return True


@SPACE_REGISTRY.register("real_vector", aliases=["rn", "euclidean"])
class RealVectorStateSpace(StateSpace):
    """
    Bounded Euclidean space R^n.

    Distance is the Euclidean norm; interpolation is linear.
    """

    def __init__(
        self,
        dim: int,
        low: Union[float, np.ndarray] = -1.0,
        high: Union[float, np.ndarray] = 1.0,
        seed: Optional[int] = None,
    ):
        if dim <= 0:
            raise ValueError(f"Dimension must be positive, got {dim}")

        self.dim = int(dim)
        self.seed = seed
        self.low = np.broadcast_to(np.asarray(low, dtype=float), (self.dim,)).copy()
        self.high = np.broadcast_to(np.asarray(high, dtype=float), (self.dim,)).copy()

        if np.any(self.low > self.high):
            raise ValueError(f"Lower bounds {self.low} exceed upper bounds {self.high}")

    def get_dimension(self) -> int:
        return self.dim

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.linalg.norm(b - a))

    def interpolate(self, a: np.ndarray, b: np.ndarray, t: float, out: np.ndarray):
        out[:] = a + t * (b - a)

    def enforce_bounds(self, state: np.ndarray):
        np.clip(state, self.low, self.high, out=state)

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return bool(np.all(state >= self.low) and np.all(state <= self.high))

    def allocate_default_state_sampler(self):
        return RealVectorStateSampler(self, seed=self.seed)

    def __repr__(self) -> str:
        return f"RealVectorStateSpace(dim={self.dim})"
