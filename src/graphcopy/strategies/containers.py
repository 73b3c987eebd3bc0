"""Copy strategies for arrays, map entries, maps, and collections.

Mutable containers are allocated empty (or at their final length), recorded in
the copy context right away, and filled by a deferred step. A cycle that loops
back through a container therefore resolves to the container already recorded.

Built-in immutable families (tuple, frozenset, mappingproxy) cannot be filled
after creation. Their elements are copied first; when every element copied to
itself the original is returned, otherwise a new instance of the same type is
built from the copies.
"""

from __future__ import annotations

import array
import types
from collections import defaultdict, deque
from collections.abc import Callable, MutableSet
from typing import TYPE_CHECKING, Any

from graphcopy.core.classify.models import Classification, MapEntry
from graphcopy.core.errors import UnsupportedShapeError, reconstruction_step
from graphcopy.strategies.reconstruct import populate_fields

if TYPE_CHECKING:
    from graphcopy.engine.traversal import Traversal


def copy_array(value: Any, classification: Classification, traversal: Traversal) -> Any:
    """Copy a tuple, array.array or bytearray, keeping its exact type."""
    if classification.immutable:
        originals = list(value)
        items = [traversal.copy(item) for item in originals]
        return _rebuild_immutable(value, items, originals, lambda: _same_type(value, items), traversal)

    cls = type(value)
    with reconstruction_step(cls, "allocating"):
        if isinstance(value, array.array):
            # Same typecode and length; every slot is overwritten below
            new = cls(value.typecode, value)
        else:
            new = cls(len(value))
    traversal.context.record(value, new)

    def populate() -> None:
        with reconstruction_step(cls, "filling"):
            for index, item in enumerate(value):
                new[index] = traversal.copy(item)
        _copy_container_attributes(value, new, traversal)

    traversal.defer(new, populate)
    return new


def copy_map_entry(value: MapEntry, classification: Classification, traversal: Traversal) -> MapEntry:
    """Copy a key/value pair into a new standalone MapEntry. Never memoized."""
    return MapEntry(traversal.copy_now(value.key), traversal.copy(value.value))


def copy_map(value: Any, classification: Classification, traversal: Traversal) -> Any:
    """Copy a mapping into a new mapping of the same concrete type."""
    if classification.immutable:
        originals = list(value.items())
        entries = [(traversal.copy_now(key), traversal.copy(item)) for key, item in originals]
        return _rebuild_immutable(
            value,
            [part for entry in entries for part in entry],
            [part for entry in originals for part in entry],
            lambda: types.MappingProxyType(dict(entries)),
            traversal,
        )

    cls = type(value)
    new = _empty_like(value, traversal)
    traversal.context.record(value, new)

    def populate() -> None:
        for key, item in list(value.items()):
            entry = traversal.copy(MapEntry(key, item))
            with reconstruction_step(cls, "inserting into"):
                new[entry.key] = entry.value
        _copy_container_attributes(value, new, traversal)

    traversal.defer(new, populate)
    return new


def copy_collection(value: Any, classification: Classification, traversal: Traversal) -> Any:
    """Copy a list-like or set-like collection, keeping its concrete type."""
    if classification.immutable:
        originals = list(value)
        items = [traversal.copy_now(item) for item in originals]
        return _rebuild_immutable(value, items, originals, lambda: _same_type(value, items), traversal)

    cls = type(value)
    new = _empty_like(value, traversal)
    traversal.context.record(value, new)

    def populate() -> None:
        if isinstance(new, MutableSet):
            # Members are hashed on insertion and must be complete
            for item in list(value):
                copied = traversal.copy_now(item)
                with reconstruction_step(cls, "adding to"):
                    new.add(copied)
        else:
            for item in list(value):
                copied = traversal.copy(item)
                with reconstruction_step(cls, "appending to"):
                    new.append(copied)
        _copy_container_attributes(value, new, traversal)

    traversal.defer(new, populate)
    return new


def _empty_like(value: Any, traversal: Traversal) -> Any:
    """New empty container of the same concrete type through its no-argument path."""
    cls = type(value)
    try:
        if isinstance(value, defaultdict):
            return cls(traversal.copy(value.default_factory))
        if isinstance(value, deque):
            return cls(maxlen=value.maxlen)
        return cls()
    except UnsupportedShapeError:
        raise
    except Exception as exc:
        raise UnsupportedShapeError(
            f"{cls.__module__}.{cls.__qualname__} has no no-argument construction path", cls
        ) from exc


def _rebuild_immutable(
    value: Any,
    copies: list[Any],
    originals: list[Any],
    build: Callable[[], Any],
    traversal: Traversal,
) -> Any:
    if all(copied is original for copied, original in zip(copies, originals, strict=True)):
        return value
    # An element may have led back here and produced the copy already
    existing = traversal.context.lookup(value)
    if existing is not None:
        return existing

    with reconstruction_step(type(value), "rebuilding"):
        new = build()
    traversal.context.record(value, new)
    return new


def _same_type(value: Any, items: list[Any]) -> Any:
    cls = type(value)
    return cls._make(items) if hasattr(cls, "_make") else cls(items)


def _copy_container_attributes(value: Any, new: Any, traversal: Traversal) -> None:
    # Subclasses of builtin containers may carry their own slots and attributes
    cls = type(value)
    if cls.__module__ != "builtins":
        populate_fields(value, new, traversal.shape_of(cls), traversal)
