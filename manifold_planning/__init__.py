"""
Manifold planning: sampling and motion on implicit constraint manifolds.

Provides:
- Implicit constraints F(x) = 0 with Newton projection
- A projecting sampler that turns any ambient sampler into a manifold sampler
- Manifold traversal (step, project, validate, accept) for local planning
- Registry/config plumbing and a Hydra demo

Usage:
    python -m manifold_planning.demo space.delta=0.02
"""

from manifold_planning.registry import SPACE_REGISTRY, CONSTRAINT_REGISTRY, VALIDITY_REGISTRY
from manifold_planning.exceptions import ManifoldPlanningError, ConstrainedSpaceError
from manifold_planning.base import (
    RealVectorStateSpace,
    SpaceInformation,
    StateValidityChecker,
)
from manifold_planning.constraints import (
    Constraint,
    ConstraintIntersection,
    SphereConstraint,
    PlaneConstraint,
    FunctionConstraint,
)
from manifold_planning.spaces import (
    ConstrainedStateSpace,
    ProjectedStateSpace,
    ProjectedStateSampler,
    ConstrainedSpaceInformation,
)

__version__ = "0.1.0"
__all__ = [
    "SPACE_REGISTRY",
    "CONSTRAINT_REGISTRY",
    "VALIDITY_REGISTRY",
    "ManifoldPlanningError",
    "ConstrainedSpaceError",
    "RealVectorStateSpace",
    "SpaceInformation",
    "StateValidityChecker",
    "Constraint",
    "ConstraintIntersection",
    "SphereConstraint",
    "PlaneConstraint",
    "FunctionConstraint",
    "ConstrainedStateSpace",
    "ProjectedStateSpace",
    "ProjectedStateSampler",
    "ConstrainedSpaceInformation",
]
