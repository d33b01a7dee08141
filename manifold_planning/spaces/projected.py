"""
Projection-based constrained state space.

Sampling: draw from the ambient sampler, then project onto the manifold.

Traversal: step a fixed distance delta along the ambient straight line toward
the target, project the step back onto the manifold, and accept it only if

- projection converged,
- the validity checker accepts it (unless only interpolating),
- projection moved it no further than lambda = 2 * delta from the previous
  accepted state,
- it is strictly closer to the target than the previous accepted state.

The walk stops at the first rejected step. It succeeds if the last accepted
state is within delta of the target, whichever way the loop ended.
"""

from typing import List, Optional, Tuple
import logging
import numpy as np

from manifold_planning.base.samplers import StateSampler, WrapperStateSampler
from manifold_planning.registry import SPACE_REGISTRY
from manifold_planning.spaces.constrained import ConstrainedStateSpace

logger = logging.getLogger(__name__)


class ProjectedStateSampler(WrapperStateSampler):
    """
    Ambient sampler followed by constraint projection.

    Whether projection converged is not checked: callers that need a state on
    the manifold test constraint.is_satisfied() themselves.
    """

    def __init__(self, space: "ProjectedStateSpace", sampler: StateSampler):
        super().__init__(space, sampler)
        self.constraint = space.constraint

    def sample_uniform(self, state: np.ndarray):
        super().sample_uniform(state)
        self.constraint.project(state)

    def sample_uniform_near(self, state: np.ndarray, near: np.ndarray, distance: float):
        super().sample_uniform_near(state, near, distance)
        self.constraint.project(state)

    def sample_gaussian(self, state: np.ndarray, mean: np.ndarray, std_dev: float):
        super().sample_gaussian(state, mean, std_dev)
        self.constraint.project(state)


@SPACE_REGISTRY.register("projected")
class ProjectedStateSpace(ConstrainedStateSpace):
    """Constrained space that moves along the manifold by repeated projection."""

    def allocate_default_state_sampler(self) -> ProjectedStateSampler:
        return ProjectedStateSampler(self, self.ambient_space.allocate_default_state_sampler())

    def traverse_manifold(
        self,
        from_state: np.ndarray,
        to_state: np.ndarray,
        interpolate_only: bool = False,
        collect_path: bool = False,
        include_endpoints: bool = True,
    ) -> Tuple[bool, Optional[List[np.ndarray]]]:
        """
        Step from from_state toward to_state along the manifold.

        Args:
            from_state: Start; must satisfy the constraint.
            to_state: Target.
            interpolate_only: Skip the validity checker.
            collect_path: Return the accepted states.
            include_endpoints: Put a copy of from_state first in the path.

        Returns:
            (success, path). success means the last accepted state is within
            delta of to_state. path holds copies owned by the caller, also
            when the walk failed part way; it is None if collect_path is
            False or from_state is off the manifold.
        """
        # Can't move along the manifold without starting on it
        if not self.constraint.is_satisfied(from_state):
            logger.debug("Traversal rejected: start state does not satisfy the constraint")
            return False, None

        path = [] if collect_path else None
        if collect_path and include_endpoints:
            path.append(self.clone_state(from_state))

        tolerance = self.delta
        dist = self.distance(from_state, to_state)
        if dist <= tolerance:
            return True, path

        checker = None if interpolate_only else self._validity_checker()

        with self.scoped_state(from_state) as previous, self.scoped_state() as scratch:
            while dist >= tolerance:
                self.ambient_space.interpolate(previous, to_state, self.delta / dist, scratch)

                on_manifold = self.constraint.project(scratch)
                valid = interpolate_only or checker.is_valid(scratch)
                deviated = self.distance(previous, scratch) > self.lambda_
                if not on_manifold or not valid or deviated:
                    logger.debug(
                        f"Traversal stopped at {dist:.4g} from target "
                        f"(on_manifold={on_manifold}, valid={valid}, deviated={deviated})"
                    )
                    break

                new_dist = self.distance(scratch, to_state)
                if new_dist >= dist:
                    logger.debug(f"Traversal stalled at {dist:.4g} from target")
                    break

                dist = new_dist
                self.copy_state(previous, scratch)

                if path is not None:
                    path.append(self.clone_state(scratch))

        return dist <= tolerance, path
