"""
Constrained state spaces.

- ConstrainedStateSpace: geodesics, interpolation, motion validation
- ProjectedStateSpace: traversal by step-and-project
- ProjectedStateSampler: ambient sampling followed by projection
- ConstrainedSpaceInformation: wires a validity checker to a constrained space
"""

from manifold_planning.spaces.constrained import (
    ConstrainedStateSpace,
    ConstrainedMotionValidator,
    ConstrainedValidStateSampler,
)
from manifold_planning.spaces.projected import ProjectedStateSpace, ProjectedStateSampler
from manifold_planning.spaces.space_information import ConstrainedSpaceInformation

__all__ = [
    "ConstrainedStateSpace",
    "ConstrainedMotionValidator",
    "ConstrainedValidStateSampler",
    "ProjectedStateSpace",
    "ProjectedStateSampler",
    "ConstrainedSpaceInformation",
]
