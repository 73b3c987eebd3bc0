"""Value classification and the registry of pass-through types.

Usage:
    @immutable
    class Money:
        ...

    classify(Money(...)).kind   # CopyKind.PASS_THROUGH
    classify([1, 2]).kind       # CopyKind.COLLECTION
"""

from __future__ import annotations

import array
import datetime
import numbers
import pathlib
import re
import types
import uuid
import weakref
from collections.abc import MutableMapping, MutableSequence, MutableSet
from enum import Enum

from graphcopy.core.classify.models import Classification, CopyKind, MapEntry

_ATOMIC_TYPES: tuple[type, ...] = (
    type(None),
    types.EllipsisType,
    types.NotImplementedType,
    numbers.Number,
    str,
    bytes,
    range,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ModuleType,
    types.CodeType,
    property,
    weakref.ref,
    re.Pattern,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    pathlib.PurePath,
    Enum,
)

_ARRAY_TYPES: tuple[type, ...] = (tuple, array.array, bytearray)


class ImmutableRegistry:
    """Registry of types whose instances are copied by reference.

    Built-in atoms are always pass-through. Registered types add to them,
    including subclasses. A registry may extend a parent registry; lookups
    consult the parent but registrations never touch it.

    Args:
        parent: Registry to fall back to (None for a root registry).
    """

    def __init__(self, parent: ImmutableRegistry | None = None) -> None:
        """Initialize an empty registry on top of an optional parent."""
        self._parent = parent
        self._types: set[type] = set()
        self._verdicts: dict[type, bool] = {}

    def register(self, cls: type) -> type:
        """Mark a type as immutable.

        Args:
            cls: Type to register.

        Returns:
            The same type, so the method can be used as a decorator.

        Raises:
            TypeError: If cls is not a class.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered as immutable, got {cls!r}")
        self._types.add(cls)
        self._verdicts.clear()
        return cls

    def is_immutable_type(self, cls: type) -> bool:
        """Check whether instances of a type are pass-through.

        Args:
            cls: Type to check.

        Returns:
            True for built-in atoms and registered types (or their subclasses).
        """
        verdict = self._verdicts.get(cls)
        if verdict is None:
            verdict = issubclass(cls, _ATOMIC_TYPES) or any(
                issubclass(cls, registered) for registered in self._types
            )
            self._verdicts[cls] = verdict
        if verdict:
            return True
        # Parent verdicts are not cached here so later parent registrations show through
        return self._parent is not None and self._parent.is_immutable_type(cls)

    @property
    def registered(self) -> frozenset[type]:
        """Types registered on this registry (parents excluded)."""
        return frozenset(self._types)


# Module-level registry instance
_registry = ImmutableRegistry()


def get_registry() -> ImmutableRegistry:
    """Access the global immutable-type registry.

    Returns:
        The process-local ImmutableRegistry instance.
    """
    return _registry


def immutable[C: type](cls: C) -> C:
    """Register a class as immutable in the global registry.

    Instances are returned by reference from every copy, including containers
    that would otherwise be rebuilt.

    >>> @immutable
    ... class Currency:
    ...     def __init__(self, code: str) -> None:
    ...         self.code = code
    """
    _registry.register(cls)
    return cls


def classify(value: object, registry: ImmutableRegistry | None = None) -> Classification:
    """Decide how a value is copied from its runtime shape.

    Args:
        value: Any value, including None.
        registry: Pass-through registry to consult (global registry if None).

    Returns:
        Classification naming the strategy and, for containers, the concrete type.
    """
    registry = registry if registry is not None else _registry
    cls = type(value)

    if registry.is_immutable_type(cls):
        return Classification(CopyKind.PASS_THROUGH)
    if isinstance(value, _ARRAY_TYPES):
        return Classification(CopyKind.ARRAY, cls, immutable=isinstance(value, tuple))
    if isinstance(value, MapEntry):
        return Classification(CopyKind.MAP_ENTRY, cls)
    if isinstance(value, types.MappingProxyType):
        return Classification(CopyKind.MAP, cls, immutable=True)
    if isinstance(value, MutableMapping):
        return Classification(CopyKind.MAP, cls)
    if isinstance(value, frozenset):
        return Classification(CopyKind.COLLECTION, cls, immutable=True)
    if isinstance(value, (MutableSequence, MutableSet)):
        return Classification(CopyKind.COLLECTION, cls)
    return Classification(CopyKind.GENERIC)
