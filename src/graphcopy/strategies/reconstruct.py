"""Generic reconstruction of values no container strategy handles.

A blank instance is produced through the first usable construction path,
recorded in the copy context, and only then populated with copies of every
field of the source. Recording before populating is what lets an object that
refers back to itself (directly or through other objects) be copied.
"""

from __future__ import annotations

import inspect
import types
from typing import TYPE_CHECKING, Any

from graphcopy.core.classify.models import Classification
from graphcopy.core.errors import ReconstructionError, reconstruction_step
from graphcopy.strategies.arguments import synthesize_arguments
from graphcopy.strategies.models import (
    ConstructionCandidate,
    ConstructionPath,
    ParameterShape,
    SlotField,
    TypeShape,
)

if TYPE_CHECKING:
    from graphcopy.engine.traversal import Traversal

_SKIPPED_SLOTS = frozenset({"__dict__", "__weakref__"})
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class ShapeCache:
    """Process-local cache of type shapes.

    Shapes never change for a given class, so entries are never invalidated.
    """

    def __init__(self) -> None:
        """Initialize empty shape cache."""
        self._shapes: dict[type, TypeShape] = {}

    def shape_of(self, cls: type) -> TypeShape:
        """Get the shape of a class, introspecting it on first use.

        Args:
            cls: Class to describe.

        Returns:
            The class's TypeShape.
        """
        shape = self._shapes.get(cls)
        if shape is None:
            shape = build_shape(cls)
            self._shapes[cls] = shape
        return shape

    def clear(self) -> None:
        """Forget every cached shape."""
        self._shapes.clear()

    def __len__(self) -> int:
        return len(self._shapes)


# Module-level cache instance
_shape_cache = ShapeCache()


def get_shape_cache() -> ShapeCache:
    """Access the global shape cache.

    Returns:
        The process-local ShapeCache instance.
    """
    return _shape_cache


def build_shape(cls: type) -> TypeShape:
    """Introspect a class.

    Args:
        cls: Class to describe.

    Returns:
        TypeShape with slot fields, `__dict__` presence and construction candidates.
    """
    candidates: list[ConstructionCandidate] = []
    if callable(getattr(cls, "__reconstruct__", None)):
        candidates.append(
            ConstructionCandidate(ConstructionPath.HOOK, (), lambda source: source.__reconstruct__())
        )
    parameters = _init_parameters(cls)
    if parameters is not None:
        candidates.append(
            ConstructionCandidate(
                ConstructionPath.INIT, parameters, lambda source, *a, **kw: cls(*a, **kw)
            )
        )
    candidates.append(
        ConstructionCandidate(ConstructionPath.BARE, (), lambda source: cls.__new__(cls))
    )
    return TypeShape(
        cls=cls,
        slots=_slot_fields(cls),
        has_dict=any("__dict__" in vars(klass) for klass in cls.__mro__ if klass is not object),
        candidates=tuple(candidates),
    )


def _slot_fields(cls: type) -> tuple[SlotField, ...]:
    fields: list[SlotField] = []
    for klass in cls.__mro__:
        declared = vars(klass).get("__slots__", ())
        if isinstance(declared, str):
            declared = (declared,)
        for name in declared:
            if name in _SKIPPED_SLOTS:
                continue
            stored = _mangle(klass, name)
            descriptor = vars(klass).get(stored)
            if isinstance(descriptor, types.MemberDescriptorType):
                fields.append(SlotField(stored, descriptor))
    return tuple(fields)


def _mangle(klass: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


def _init_parameters(cls: type) -> tuple[ParameterShape, ...] | None:
    signature = _signature(cls)
    if signature is None:
        return None
    return tuple(
        ParameterShape(
            name=parameter.name,
            annotation=parameter.annotation,
            kind=parameter.kind,
            required=parameter.default is inspect.Parameter.empty and parameter.kind not in _VARIADIC,
        )
        for parameter in signature.parameters.values()
    )


def _signature(cls: type) -> inspect.Signature | None:
    """Signature of calling the class, with string annotations resolved.

    If any annotation cannot be resolved, the raw annotations are kept; the
    strings left in them are treated as unknown types.
    """
    try:
        return inspect.signature(cls, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError, ValueError):
        pass
    try:
        return inspect.signature(cls)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return None


def reconstruct(value: Any, classification: Classification, traversal: Traversal) -> Any:
    """Copy a value by rebuilding it through introspection.

    Args:
        value: Source value.
        classification: Its classification (GENERIC).
        traversal: Traversal in progress.

    Returns:
        The new instance, recorded in the context; its fields are filled once
        the traversal reaches the deferred population step.

    Raises:
        ReconstructionError: If no construction path is usable or construction fails.
    """
    if isinstance(value, types.MethodType):
        return copy_method(value, traversal)

    cls = type(value)
    shape = traversal.shape_of(cls)
    new = _construct(value, shape, traversal)
    traversal.context.record(value, new)
    traversal.defer(new, lambda: populate_fields(value, new, shape, traversal))
    return new


def copy_method(value: types.MethodType, traversal: Traversal) -> types.MethodType:
    """Rebind a bound method's function to the copy of the instance it is bound to."""
    instance = traversal.copy(value.__self__)
    # Completing the instance may have led back here and copied the method already
    existing = traversal.context.lookup(value)
    if existing is not None:
        return existing
    new = type(value)(value.__func__, instance)
    traversal.context.record(value, new)
    return new


def _construct(value: Any, shape: TypeShape, traversal: Traversal) -> Any:
    for candidate in shape.candidates:
        if candidate.path is ConstructionPath.BARE and not traversal.settings.allow_bare_allocation:
            continue
        arguments = synthesize_arguments(candidate.parameters, traversal)
        if arguments is None:
            continue
        args, kwargs = arguments
        with reconstruction_step(shape.cls, f"constructing (via {candidate.path.name})"):
            return candidate.build(value, *args, **kwargs)
    raise ReconstructionError(
        f"No usable construction path for {shape.cls.__module__}.{shape.cls.__qualname__}",
        shape.cls,
    )


def populate_fields(source: Any, target: Any, shape: TypeShape, traversal: Traversal) -> None:
    """Overwrite every field of `target` with a copy of the same field on `source`.

    Writes go through slot descriptors and the instance `__dict__` directly, so
    frozen dataclasses, custom `__setattr__` and read-only properties do not
    get in the way.

    Args:
        source: Original instance.
        target: New instance produced by a construction path.
        shape: Shape of the instances' class.
        traversal: Traversal in progress.
    """
    with reconstruction_step(shape.cls, "populating"):
        for slot in shape.slots:
            try:
                value = slot.descriptor.__get__(source, shape.cls)
            except AttributeError:
                # Unset on the source, so unset on the copy too
                if _slot_is_set(slot, target, shape.cls):
                    slot.descriptor.__delete__(target)
                continue
            slot.descriptor.__set__(target, traversal.copy(value))
        if shape.has_dict:
            copy_attributes(source, target, traversal)


def _slot_is_set(slot: SlotField, instance: Any, cls: type) -> bool:
    try:
        slot.descriptor.__get__(instance, cls)
    except AttributeError:
        return False
    return True


def copy_attributes(source: Any, target: Any, traversal: Traversal) -> None:
    """Make `target.__dict__` hold copies of exactly the entries of `source.__dict__`.

    Args:
        source: Original instance.
        target: Instance being populated.
        traversal: Traversal in progress.
    """
    source_attributes = vars(source)
    target_attributes = vars(target)
    for name in [name for name in target_attributes if name not in source_attributes]:
        del target_attributes[name]
    for name, value in list(source_attributes.items()):
        target_attributes[name] = traversal.copy(value)
