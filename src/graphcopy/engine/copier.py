"""Deep copy entry points.

Usage:
    from graphcopy import deep_copy

    clone = deep_copy(graph)

    # Or with explicit configuration
    copier = DeepCopier(CopySettings(allow_bare_allocation=False))
    clone = copier.copy(graph)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from graphcopy.config import CopySettings
from graphcopy.core.classify import ImmutableRegistry, get_registry
from graphcopy.core.types import Copy
from graphcopy.engine.traversal import Traversal
from graphcopy.strategies import get_shape_cache

if TYPE_CHECKING:
    from graphcopy.tracing.protocol import CopyObserver


class DeepCopier:
    """Configured deep copy service.

    Holds configuration and the type registries only; every call to copy()
    gets its own traversal and copy context, so one copier can be shared freely,
    including between threads.

    Args:
        settings: Copier configuration (loaded from the environment if None).
        registry: Registry to extend with the configured immutable types
            (the global registry if None).
    """

    def __init__(
        self,
        settings: CopySettings | None = None,
        registry: ImmutableRegistry | None = None,
    ) -> None:
        """Initialize copier and resolve configured immutable types."""
        self.settings = settings if settings is not None else CopySettings()
        self.registry = ImmutableRegistry(parent=registry if registry is not None else get_registry())
        for cls in self.settings.resolve_immutable_types():
            self.registry.register(cls)

    def copy[T](self, value: T, observer: CopyObserver | None = None) -> Copy[T]:
        """Deep copy a value.

        Args:
            value: Root of the graph to copy. May be None.
            observer: Optional observer notified for every visited node.

        Returns:
            An independent copy sharing no mutable storage with `value`, or
            `value` itself when it is pass-through.

        Raises:
            ReconstructionError: If any node of the graph cannot be rebuilt.
        """
        shapes = get_shape_cache() if self.settings.cache_type_shapes else None
        traversal = Traversal(self.settings, self.registry, shapes, observer)
        return traversal.run(value)


_default_copier: DeepCopier | None = None


def get_default_copier() -> DeepCopier:
    """Access the copier used by deep_copy() when no settings are given.

    Created on first use so environment configuration is read lazily.

    Returns:
        The process-local default DeepCopier.
    """
    global _default_copier
    if _default_copier is None:
        _default_copier = DeepCopier()
    return _default_copier


def deep_copy[T](
    value: T,
    *,
    settings: CopySettings | None = None,
    observer: CopyObserver | None = None,
) -> Copy[T]:
    """Deep copy an arbitrary, possibly cyclic, object graph.

    Args:
        value: Root of the graph to copy. May be None.
        settings: Configuration for this call (default copier if None).
        observer: Optional observer notified for every visited node.

    Returns:
        An independent copy of `value`; shared and cyclic references in the
        source are shared and cyclic in the copy.

    Raises:
        ReconstructionError: If any node of the graph cannot be rebuilt.
    """
    copier = DeepCopier(settings) if settings is not None else get_default_copier()
    return copier.copy(value, observer=observer)
