"""
Constrained state spaces.

A constrained space wraps an ambient space and an implicit constraint. States
are still ambient vectors, but planners only keep those that satisfy the
constraint, and motions between them follow the manifold instead of the
ambient straight line.

Subclasses decide how to move along the manifold by implementing
traverse_manifold(). Everything else (geodesics, interpolation, motion
validation, valid-state sampling) is built on top of it here.
"""

from abc import abstractmethod
from typing import List, Optional, Tuple
import logging
import numpy as np

from manifold_planning.base.state_space import StateSpace
from manifold_planning.base.samplers import ValidStateSampler
from manifold_planning.base.space_information import MotionValidator
from manifold_planning.config import DELTA, DEVIATION_FACTOR, VALID_SAMPLING_ATTEMPTS
from manifold_planning.constraints.base import Constraint
from manifold_planning.exceptions import ConstrainedSpaceError

logger = logging.getLogger(__name__)


class ConstrainedStateSpace(StateSpace):
    """
    Ambient space restricted to the manifold of a constraint.

    Args:
        ambient_space: Space the states are represented in.
        constraint: Constraint whose zero set is the feasible manifold.
        delta: Step size along the manifold; also the tolerance for having
            reached a target. Fixed for the lifetime of the space.
    """

    def __init__(self, ambient_space: StateSpace, constraint: Constraint, delta: float = DELTA):
        if delta <= 0:
            raise ConstrainedSpaceError(f"delta must be positive, got {delta}")
        if constraint.ambient_dim != ambient_space.get_dimension():
            raise ConstrainedSpaceError(
                f"Constraint ambient dimension {constraint.ambient_dim} does not match "
                f"space dimension {ambient_space.get_dimension()}"
            )

        self.ambient_space = ambient_space
        self.constraint = constraint
        self._delta = float(delta)
        self.si = None

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def lambda_(self) -> float:
        """Largest displacement a single projected step may make."""
        return DEVIATION_FACTOR * self._delta

    def get_dimension(self) -> int:
        return self.ambient_space.get_dimension()

    def get_manifold_dimension(self) -> int:
        return self.constraint.manifold_dim

    # =========================================================================
    # Ambient delegation
    # =========================================================================

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return self.ambient_space.distance(a, b)

    def alloc_state(self) -> np.ndarray:
        return self.ambient_space.alloc_state()

    def free_state(self, state: np.ndarray):
        self.ambient_space.free_state(state)

    def copy_state(self, destination: np.ndarray, source: np.ndarray):
        self.ambient_space.copy_state(destination, source)

    def enforce_bounds(self, state: np.ndarray):
        self.ambient_space.enforce_bounds(state)

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return self.ambient_space.satisfies_bounds(state)

    def allocate_default_state_sampler(self):
        return self.ambient_space.allocate_default_state_sampler()

    # =========================================================================
    # Space information
    # =========================================================================

    @classmethod
    def check_space(cls, si):
        """Raise if si is not built on a space of this class."""
        if not isinstance(si.space, cls):
            raise ConstrainedSpaceError(
                f"{cls.__name__}(): si needs to use a {cls.__name__}! "
                f"Got {type(si.space).__name__}."
            )

    def set_space_information(self, si):
        self.check_space(si)
        self.si = si
        si.set_motion_validator(ConstrainedMotionValidator(si))

    def _validity_checker(self):
        if self.si is None:
            raise ConstrainedSpaceError(
                f"{type(self).__name__}: no space information attached; "
                "validity cannot be checked"
            )
        return self.si.get_state_validity_checker()

    # =========================================================================
    # Manifold traversal
    # =========================================================================

    @abstractmethod
    def traverse_manifold(
        self,
        from_state: np.ndarray,
        to_state: np.ndarray,
        interpolate_only: bool = False,
        collect_path: bool = False,
        include_endpoints: bool = True,
    ) -> Tuple[bool, Optional[List[np.ndarray]]]:
        """
        Walk along the manifold from from_state toward to_state.

        Returns:
            (success, path) where path is None unless collect_path is set.
        """
        pass

    def discrete_geodesic(
        self,
        from_state: np.ndarray,
        to_state: np.ndarray,
        interpolate_only: bool = False,
        collect_path: bool = False,
    ) -> Tuple[bool, Optional[List[np.ndarray]]]:
        """Traverse the manifold, reporting the start state in the path."""
        return self.traverse_manifold(
            from_state, to_state, interpolate_only, collect_path, include_endpoints=True
        )

    def geodesic_interpolate(self, geodesic: List[np.ndarray], t: float) -> np.ndarray:
        """
        Pick the geodesic state whose normalized arc length is closest to t.

        Ties go to the earlier state. A geodesic of zero length returns its
        first state.
        """
        n = len(geodesic)
        d = np.zeros(n)
        for i in range(1, n):
            d[i] = d[i - 1] + self.distance(geodesic[i - 1], geodesic[i])

        last = d[-1]
        if last <= np.finfo(float).eps:
            return geodesic[0]

        return geodesic[int(np.argmin(np.abs(d / last - t)))]

    def interpolate(self, from_state: np.ndarray, to_state: np.ndarray, t: float, out: np.ndarray):
        """Geodesic interpolation; falls back to from_state if traversal fails."""
        success, geodesic = self.discrete_geodesic(
            from_state, to_state, interpolate_only=True, collect_path=True
        )

        source = from_state
        if success:
            source = self.geodesic_interpolate(geodesic, t)
        self.copy_state(out, source)

        for state in geodesic or []:
            self.free_state(state)

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def sanity_checks(
        self,
        n_samples: int = 10,
        check_samplers: bool = True,
        check_jacobian: bool = True,
    ):
        """
        Sample states and verify the sampler and constraint Jacobian.

        Raises:
            ConstrainedSpaceError: If a sampled state is off the manifold or
                the analytic Jacobian disagrees with finite differences.
        """
        sampler = self.allocate_default_state_sampler()
        with self.scoped_state() as state:
            for i in range(n_samples):
                sampler.sample_uniform(state)

                if check_samplers and not self.constraint.is_satisfied(state):
                    raise ConstrainedSpaceError(
                        f"Sample {i} does not satisfy the constraint "
                        f"(residual {self.constraint.distance(state):.3g})"
                    )

                if check_jacobian and not self.constraint.check_jacobian(state):
                    raise ConstrainedSpaceError(
                        f"Constraint Jacobian deviates from numerical approximation at {state}"
                    )

        logger.debug(f"{type(self).__name__}: {n_samples} sanity samples passed")


class ConstrainedMotionValidator(MotionValidator):
    """Motion validation by manifold traversal instead of ambient interpolation."""

    def __init__(self, si):
        ConstrainedStateSpace.check_space(si)
        super().__init__(si)
        self.space: ConstrainedStateSpace = si.space

    def check_motion(self, s1: np.ndarray, s2: np.ndarray) -> bool:
        if not self.space.constraint.is_satisfied(s2):
            return False
        reached, _ = self.space.discrete_geodesic(s1, s2, interpolate_only=False)
        return reached

    def check_motion_last_valid(self, s1, s2):
        """
        Traverse from s1 toward s2 and report the last accepted state.

        The fraction is the arc length walked along the manifold divided by
        the ambient distance from s1 to s2. Arcs are longer than chords, so
        a blocked motion can still report a fraction above 1.
        """
        space = self.space
        reached, path = space.discrete_geodesic(
            s1, s2, interpolate_only=False, collect_path=True
        )

        # s1 off the manifold
        if not path:
            return False, space.clone_state(s1), 0.0

        last_valid = path[-1]
        if reached:
            fraction = 1.0
        else:
            traveled = sum(space.distance(a, b) for a, b in zip(path[:-1], path[1:]))
            fraction = traveled / space.distance(s1, s2)

        for state in path[:-1]:
            space.free_state(state)

        return reached, last_valid, fraction


class ConstrainedValidStateSampler(ValidStateSampler):
    """
    Valid-state sampler for constrained spaces.

    Draws through the space's default (projecting) sampler and keeps the
    first state that satisfies the constraint and the validity checker.
    """

    def __init__(self, si, attempts: int = VALID_SAMPLING_ATTEMPTS):
        super().__init__(si, attempts)
        self.constraint = si.space.constraint
        self.sampler = si.space.allocate_default_state_sampler()

    def _accept(self, state: np.ndarray) -> bool:
        return self.constraint.is_satisfied(state) and self.si.is_valid(state)

    def sample(self, state: np.ndarray) -> bool:
        for _ in range(self.attempts):
            self.sampler.sample_uniform(state)
            if self._accept(state):
                return True
        logger.warning(f"No valid constrained sample after {self.attempts} attempts")
        return False

    def sample_near(self, state: np.ndarray, near: np.ndarray, distance: float) -> bool:
        for _ in range(self.attempts):
            self.sampler.sample_uniform_near(state, near, distance)
            if self._accept(state):
                return True
        logger.warning(
            f"No valid constrained sample within {distance} after {self.attempts} attempts"
        )
        return False
