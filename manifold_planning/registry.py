"""
Name-based registries for the pieces of a constrained planning problem.

Ambient spaces, constrained spaces, constraints and validity checkers
register themselves under short names so that a configuration file can
assemble a problem without importing concrete classes.

Example:
    >>> from manifold_planning.registry import CONSTRAINT_REGISTRY
    >>>
    >>> @CONSTRAINT_REGISTRY.register("torus")
    >>> class TorusConstraint(Constraint):
    >>>     pass
    >>>
    >>> constraint = CONSTRAINT_REGISTRY.build_from_params(
    >>>     "torus", {"ambient_dim": 3, "radius": 1.0, "unused": 0}
    >>> )
"""

from typing import Dict, Type, Any, Optional, List
import inspect
import logging

logger = logging.getLogger(__name__)


class Registry:
    """
    Maps names and aliases to component classes.

    Components are registered with the ``register`` decorator and built
    either from explicit keyword arguments (``build``) or from a loose
    config section (``build_from_params``).
    """

    def __init__(self, name: str):
        """
        Args:
            name: Component kind, used in messages (e.g. "constraint").
        """
        self.name = name
        self._registry: Dict[str, Type] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: Optional[str] = None,
        aliases: Optional[List[str]] = None,
        replace: bool = False
    ):
        """
        Decorator to register a class.

        Args:
            name: Registration name. If None, uses class name.
            aliases: Optional list of alternative names.
            replace: If True, silently replace an existing registration.
        """
        def decorator(cls: Type) -> Type:
            key = name if name is not None else cls.__name__

            if key in self._registry and not replace:
                logger.warning(
                    f"Overwriting {self.name} '{key}' "
                    f"(was {self._registry[key]}, now {cls})"
                )

            self._registry[key] = cls
            logger.debug(f"Registered {self.name}: {key} -> {cls.__name__}")

            for alias in aliases or []:
                self._aliases[alias] = key

            return cls

        return decorator

    def _resolve(self, name: str) -> Type:
        key = self._aliases.get(name, name)
        if key not in self._registry:
            raise KeyError(
                f"Unknown {self.name}: '{name}'. "
                f"Available: {self.list()}"
            )
        return self._registry[key]

    def build(self, name: str, **kwargs) -> Any:
        """
        Build an instance by name.

        Raises:
            KeyError: If name is not registered.
        """
        cls = self._resolve(name)
        logger.debug(f"Building {self.name} '{name}' with kwargs: {list(kwargs.keys())}")
        return cls(**kwargs)

    def build_from_params(
        self,
        name: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> Any:
        """
        Build by name from a config section.

        Keys of ``params`` that the constructor does not take are dropped,
        so one section can hold settings for several interchangeable
        components (e.g. ``radius`` stays in the config when switching from
        a sphere to a plane). ``kwargs`` are always passed and win over
        ``params``.

        Raises:
            KeyError: If name is not registered.
        """
        cls = self._resolve(name)
        accepted = inspect.signature(cls).parameters

        kept = {}
        dropped = []
        for key, value in (params or {}).items():
            if key in accepted:
                kept[key] = value
            else:
                dropped.append(key)
        if dropped:
            logger.debug(f"{self.name} '{name}' ignores params: {dropped}")

        kept.update(kwargs)
        return self.build(name, **kept)

    def get(self, name: str) -> Optional[Type]:
        """Registered class for a name or alias, or None."""
        return self._registry.get(self._aliases.get(name, name))

    def list(self) -> List[str]:
        """List all registered component names."""
        return list(self._registry.keys())

    def __repr__(self) -> str:
        return f"Registry(name={self.name}, components={self.list()})"


# =============================================================================
# Global Registries
# =============================================================================

SPACE_REGISTRY = Registry("state_space")
"""Ambient and constrained state spaces."""

CONSTRAINT_REGISTRY = Registry("constraint")
"""Manifold constraints."""

VALIDITY_REGISTRY = Registry("validity_checker")
"""State validity checkers."""


def list_all() -> Dict[str, List[str]]:
    """Names registered in every registry."""
    return {
        "state_spaces": SPACE_REGISTRY.list(),
        "constraints": CONSTRAINT_REGISTRY.list(),
        "validity_checkers": VALIDITY_REGISTRY.list(),
    }
