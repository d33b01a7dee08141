"""
Planning primitives the constrained core builds on.

- StateSpace / RealVectorStateSpace: ambient spaces
- StateSampler / WrapperStateSampler: ambient sampling
- StateValidityChecker: feasibility oracle
- SpaceInformation: space + validity checker + motion validator
"""

from manifold_planning.base.state_space import StateSpace, RealVectorStateSpace
from manifold_planning.base.samplers import (
    StateSampler,
    RealVectorStateSampler,
    WrapperStateSampler,
    ValidStateSampler,
    UniformValidStateSampler,
)
from manifold_planning.base.validity import (
    StateValidityChecker,
    AllValidStateValidityChecker,
    FunctionStateValidityChecker,
    SphereObstacleValidityChecker,
)
from manifold_planning.base.space_information import (
    SpaceInformation,
    MotionValidator,
    DiscreteMotionValidator,
)

__all__ = [
    "StateSpace",
    "RealVectorStateSpace",
    "StateSampler",
    "RealVectorStateSampler",
    "WrapperStateSampler",
    "ValidStateSampler",
    "UniformValidStateSampler",
    "StateValidityChecker",
    "AllValidStateValidityChecker",
    "FunctionStateValidityChecker",
    "SphereObstacleValidityChecker",
    "SpaceInformation",
    "MotionValidator",
    "DiscreteMotionValidator",
]
