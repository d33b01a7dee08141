"""
State samplers.

A StateSampler fills a caller-allocated state in place. Samplers make no
feasibility promise; valid-state samplers built on top of them retry until
a state passes the validity checks.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class StateSampler(ABC):
    """Abstract sampler bound to a state space."""

    def __init__(self, space, seed: Optional[int] = None):
        self.space = space
        self.rng = np.random.default_rng(seed)

    @abstractmethod
    def sample_uniform(self, state: np.ndarray):
        """Fill state with a uniform sample of the space."""
        pass

    @abstractmethod
    def sample_uniform_near(self, state: np.ndarray, near: np.ndarray, distance: float):
        """Fill state with a uniform sample within distance of near."""
        pass

    @abstractmethod
    def sample_gaussian(self, state: np.ndarray, mean: np.ndarray, std_dev: float):
        """Fill state with a Gaussian sample around mean."""
        pass


class RealVectorStateSampler(StateSampler):
    """Uniform and Gaussian sampling inside the bounds of a RealVectorStateSpace."""

    def sample_uniform(self, state: np.ndarray):
        state[:] = self.rng.uniform(self.space.low, self.space.high)

    def sample_uniform_near(self, state: np.ndarray, near: np.ndarray, distance: float):
        state[:] = self.rng.uniform(near - distance, near + distance)
        self.space.enforce_bounds(state)

    def sample_gaussian(self, state: np.ndarray, mean: np.ndarray, std_dev: float):
        state[:] = self.rng.normal(mean, std_dev)
        self.space.enforce_bounds(state)


class WrapperStateSampler(StateSampler):
    """
    Sampler that forwards every call to another sampler.

    Subclasses post-process the wrapped sampler's output, e.g. by projecting
    it onto a constraint manifold.
    """

    def __init__(self, space, sampler: StateSampler):
        self.space = space
        self.sampler = sampler
        self.rng = sampler.rng

    def sample_uniform(self, state: np.ndarray):
        self.sampler.sample_uniform(state)

    def sample_uniform_near(self, state: np.ndarray, near: np.ndarray, distance: float):
        self.sampler.sample_uniform_near(state, near, distance)

    def sample_gaussian(self, state: np.ndarray, mean: np.ndarray, std_dev: float):
        self.sampler.sample_gaussian(state, mean, std_dev)


class ValidStateSampler(ABC):
    """
    Sampler that only reports states accepted by a space information object.

    ``sample`` and ``sample_near`` return True when ``state`` holds a valid
    sample and False when every attempt was rejected.
    """

    def __init__(self, si, attempts: int = 100):
        self.si = si
        self.attempts = attempts

    @abstractmethod
    def sample(self, state: np.ndarray) -> bool:
        pass

    @abstractmethod
    def sample_near(self, state: np.ndarray, near: np.ndarray, distance: float) -> bool:
        pass


class UniformValidStateSampler(ValidStateSampler):
    """Rejection sampling with the space's default sampler."""

    def __init__(self, si, attempts: int = 100):
        super().__init__(si, attempts)
        self.sampler = si.space.allocate_default_state_sampler()

    def sample(self, state: np.ndarray) -> bool:
        for _ in range(self.attempts):
            self.sampler.sample_uniform(state)
            if self.si.is_valid(state):
                return True
        return False

    def sample_near(self, state: np.ndarray, near: np.ndarray, distance: float) -> bool:
        for _ in range(self.attempts):
            self.sampler.sample_uniform_near(state, near, distance)
            if self.si.is_valid(state):
                return True
        return False
