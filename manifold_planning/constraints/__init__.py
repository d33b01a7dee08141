"""Implicit manifold constraints and Newton projection."""

from manifold_planning.constraints.base import Constraint, ConstraintIntersection
from manifold_planning.constraints.library import (
    SphereConstraint,
    PlaneConstraint,
    FunctionConstraint,
)

__all__ = [
    "Constraint",
    "ConstraintIntersection",
    "SphereConstraint",
    "PlaneConstraint",
    "FunctionConstraint",
]
