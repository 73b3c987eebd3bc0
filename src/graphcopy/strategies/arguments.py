"""Placeholder arguments for constructors that require parameters.

Placeholders only have to get a constructor call through. The real field values
are written onto the new instance afterwards, so a placeholder never needs to be
meaningful, just acceptable to the constructor.
"""

from __future__ import annotations

import collections.abc as abc
import inspect
import types
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    ForwardRef,
    Literal,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from graphcopy.strategies.models import UNAVAILABLE, ParameterShape

if TYPE_CHECKING:
    from graphcopy.engine.traversal import Traversal

_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

# Abstract collection annotations are satisfied by their usual concrete type
_CONCRETE_COLLECTIONS: dict[Any, type] = {
    abc.Mapping: dict,
    abc.MutableMapping: dict,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Set: frozenset,
    abc.MutableSet: set,
    abc.Collection: list,
    abc.Iterable: list,
}


def synthesize(annotation: Any, traversal: Traversal) -> Any:
    """Produce a placeholder for a parameter annotated with `annotation`.

    Args:
        annotation: Resolved annotation of the parameter.
        traversal: Traversal in progress, used to copy freshly built instances.

    Returns:
        A placeholder value, or UNAVAILABLE if none can be produced.
    """
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]

    if annotation is inspect.Parameter.empty or isinstance(annotation, str | ForwardRef | TypeVar):
        return UNAVAILABLE
    if annotation is Any or annotation is None or annotation is type(None):
        return None

    origin = get_origin(annotation)
    if origin is Literal:
        return get_args(annotation)[0]
    if origin is Union or origin is types.UnionType:
        members = get_args(annotation)
        if type(None) in members:
            return None
        for member in members:
            placeholder = synthesize(member, traversal)
            if placeholder is not UNAVAILABLE:
                return placeholder
        return UNAVAILABLE
    if origin is type:
        args = get_args(annotation)
        return args[0] if args and isinstance(args[0], type) else UNAVAILABLE
    if origin is not None:
        annotation = origin

    annotation = _CONCRETE_COLLECTIONS.get(annotation, annotation)
    if not isinstance(annotation, type):
        return UNAVAILABLE
    return _placeholder_for(annotation, traversal)


def _placeholder_for(cls: type, traversal: Traversal) -> Any:
    if cls in _ZERO_VALUES:
        return _ZERO_VALUES[cls]
    if issubclass(cls, Enum):
        return next(iter(cls), UNAVAILABLE)
    if traversal.registry.is_immutable_type(cls):
        try:
            return cls()
        except Exception:
            return UNAVAILABLE

    if cls in traversal.synthesizing:
        return UNAVAILABLE
    traversal.synthesizing.add(cls)
    try:
        # Routed through the traversal so the placeholder shares nothing with cls()
        return traversal.copy_now(cls())
    except Exception:
        return UNAVAILABLE
    finally:
        traversal.synthesizing.discard(cls)


def synthesize_arguments(
    parameters: tuple[ParameterShape, ...], traversal: Traversal
) -> tuple[list[Any], dict[str, Any]] | None:
    """Build a call for a constructor from its required parameters.

    Args:
        parameters: Parameters of the construction candidate.
        traversal: Traversal in progress.

    Returns:
        (args, kwargs) for the call, or None if any required parameter has no
        placeholder, meaning the candidate is unusable.
    """
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for parameter in parameters:
        if not parameter.required:
            continue
        placeholder = synthesize(parameter.annotation, traversal)
        if placeholder is UNAVAILABLE:
            return None
        if parameter.positional_only:
            args.append(placeholder)
        else:
            kwargs[parameter.name] = placeholder
    return args, kwargs
