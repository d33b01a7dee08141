"""Custom exception types for constrained planning."""


class ManifoldPlanningError(Exception):
    """Base class for domain-specific errors."""


class ConstrainedSpaceError(ManifoldPlanningError, TypeError):
    """Raised when a constrained state space is misconfigured or misused.

    Covers attaching space information built on a different kind of space,
    traversing with validity checks before any space information is set,
    a non-positive step size, and constraint/space dimension mismatches.
    """


__all__ = ["ManifoldPlanningError", "ConstrainedSpaceError"]
