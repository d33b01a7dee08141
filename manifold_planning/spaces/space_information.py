"""
Space information for constrained spaces.

Attaching itself to the constrained space installs the manifold-traversing
motion validator and gives traversal access to the validity checker.
"""

from typing import Callable, Optional, Union

from manifold_planning.base.space_information import SpaceInformation
from manifold_planning.base.validity import StateValidityChecker
from manifold_planning.config import VALID_SAMPLING_ATTEMPTS
from manifold_planning.exceptions import ConstrainedSpaceError
from manifold_planning.spaces.constrained import (
    ConstrainedStateSpace,
    ConstrainedValidStateSampler,
)


class ConstrainedSpaceInformation(SpaceInformation):
    """
    SpaceInformation bound to a ConstrainedStateSpace.

    Raises:
        ConstrainedSpaceError: If space is not a constrained space.
    """

    def __init__(
        self,
        space: ConstrainedStateSpace,
        validity_checker: Optional[Union[StateValidityChecker, Callable]] = None,
        resolution: float = 0.01,
    ):
        if not isinstance(space, ConstrainedStateSpace):
            raise ConstrainedSpaceError(
                f"ConstrainedSpaceInformation requires a ConstrainedStateSpace, "
                f"got {type(space).__name__}"
            )
        super().__init__(space, validity_checker, resolution)
        space.set_space_information(self)

    def alloc_valid_state_sampler(self, attempts: int = VALID_SAMPLING_ATTEMPTS):
        return ConstrainedValidStateSampler(self, attempts)
