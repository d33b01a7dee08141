"""
Space information: a state space bundled with its validity checker and
motion validator. This is the object planners are handed.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, Union
import math
import logging
import numpy as np

from manifold_planning.base.state_space import StateSpace
from manifold_planning.base.validity import (
    StateValidityChecker,
    AllValidStateValidityChecker,
    FunctionStateValidityChecker,
)
from manifold_planning.base.samplers import UniformValidStateSampler

logger = logging.getLogger(__name__)


class MotionValidator(ABC):
    """Checks whether the motion between two states is feasible."""

    def __init__(self, si: "SpaceInformation"):
        self.si = si

    @abstractmethod
    def check_motion(self, s1: np.ndarray, s2: np.ndarray) -> bool:
        pass

    @abstractmethod
    def check_motion_last_valid(
        self, s1: np.ndarray, s2: np.ndarray
    ) -> Tuple[bool, np.ndarray, float]:
        """
        Check a motion and report how far along it stayed valid.

        Returns:
            (valid, last_valid_state, fraction) where fraction measures how
            far the motion got before the last valid state. It is 1.0 for a
            valid motion. Validators that follow a curve rather than the
            straight line may report more than 1.0 (see
            ConstrainedMotionValidator).
        """
        pass


class DiscreteMotionValidator(MotionValidator):
    """Checks evenly spaced interpolated states at the space information's resolution."""

    def _steps(self, s1, s2) -> int:
        d = self.si.distance(s1, s2)
        return max(1, int(math.ceil(d / self.si.resolution)))

    def check_motion(self, s1: np.ndarray, s2: np.ndarray) -> bool:
        if not self.si.is_valid(s2):
            return False

        n = self._steps(s1, s2)
        space = self.si.space
        with space.scoped_state() as test:
            for i in range(1, n):
                space.interpolate(s1, s2, i / n, test)
                if not self.si.is_valid(test):
                    return False
        return True

    def check_motion_last_valid(self, s1, s2):
        n = self._steps(s1, s2)
        space = self.si.space
        last_valid = space.clone_state(s1)
        with space.scoped_state() as test:
            for i in range(1, n + 1):
                space.interpolate(s1, s2, i / n, test)
                if not self.si.is_valid(test):
                    return False, last_valid, (i - 1) / n
                space.copy_state(last_valid, test)
        return True, last_valid, 1.0


class SpaceInformation:
    """
    State space + validity checker + motion validator.

    Args:
        space: The state space planners operate in.
        validity_checker: StateValidityChecker or plain callable. Defaults
            to accepting every state.
        resolution: Step length used by the discrete motion validator.
    """

    def __init__(
        self,
        space: StateSpace,
        validity_checker: Optional[Union[StateValidityChecker, Callable]] = None,
        resolution: float = 0.01,
    ):
        self.space = space
        self.resolution = resolution
        self.validity_checker: StateValidityChecker = AllValidStateValidityChecker(self)
        self.motion_validator: MotionValidator = DiscreteMotionValidator(self)

        if validity_checker is not None:
            self.set_state_validity_checker(validity_checker)

    def set_state_validity_checker(self, checker: Union[StateValidityChecker, Callable]):
        if not isinstance(checker, StateValidityChecker):
            checker = FunctionStateValidityChecker(checker, si=self)
        self.validity_checker = checker

    def get_state_validity_checker(self) -> StateValidityChecker:
        return self.validity_checker

    def set_motion_validator(self, validator: MotionValidator):
        self.motion_validator = validator

    def get_motion_validator(self) -> MotionValidator:
        return self.motion_validator

    def is_valid(self, state: np.ndarray) -> bool:
        return self.validity_checker.is_valid(state)

    def check_motion(self, s1: np.ndarray, s2: np.ndarray) -> bool:
        return self.motion_validator.check_motion(s1, s2)

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return self.space.distance(a, b)

    def alloc_state(self) -> np.ndarray:
        return self.space.alloc_state()

    def free_state(self, state: np.ndarray):
        self.space.free_state(state)

    def alloc_state_sampler(self):
        return self.space.allocate_default_state_sampler()

    def alloc_valid_state_sampler(self, attempts: int = 100):
        return UniformValidStateSampler(self, attempts)
