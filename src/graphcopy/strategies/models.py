"""Strategy models: type shapes, construction candidates, and protocols.

A TypeShape is everything the generic reconstructor needs to know about a class:
which slots its instances carry, whether they have a `__dict__`, and which
construction paths can produce a blank instance.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, Self, runtime_checkable


class Unavailable(Enum):
    """Failure signal of the argument synthesizer.

    None cannot play this role since it is a perfectly good Python argument.
    """

    TOKEN = auto()

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable.TOKEN


class ConstructionPath(Enum):
    """Ways of producing a blank instance, in the order they are tried."""

    HOOK = auto()  # source.__reconstruct__()
    INIT = auto()  # cls(*placeholders)
    BARE = auto()  # cls.__new__(cls), skips __init__


@runtime_checkable
class Reconstructible(Protocol):
    """Instance → blank instance of the same type, ready to receive copied fields.

    Implement when neither calling the class nor bare allocation yields a usable
    instance. Fields are copied onto the returned object afterwards.
    """

    def __reconstruct__(self) -> Self: ...


@dataclass(slots=True, frozen=True)
class ParameterShape:
    """One constructor parameter.

    Attributes:
        name: Parameter name.
        annotation: Resolved annotation, a string if it could not be resolved,
            or inspect.Parameter.empty if there is none.
        kind: inspect.Parameter kind.
        required: False when the parameter has a default or is variadic.
    """

    name: str
    annotation: Any
    kind: inspect._ParameterKind
    required: bool

    @property
    def positional_only(self) -> bool:
        return self.kind is inspect.Parameter.POSITIONAL_ONLY


@dataclass(slots=True, frozen=True)
class ConstructionCandidate:
    """A construction path together with the parameters it needs.

    Attributes:
        path: Which construction path this is.
        parameters: Parameters that need placeholders (empty for HOOK and BARE).
        build: Callable taking (source, *args, **kwargs) and returning a new instance.
    """

    path: ConstructionPath
    parameters: tuple[ParameterShape, ...]
    build: Callable[..., Any]


@dataclass(slots=True, frozen=True)
class SlotField:
    """A `__slots__` entry and the member descriptor that stores it."""

    name: str
    descriptor: Any


@dataclass(slots=True, frozen=True)
class TypeShape:
    """Introspected shape of a class. Immutable for the lifetime of the process.

    Attributes:
        cls: The class described.
        slots: Slot fields declared along the MRO, most derived first.
        has_dict: Whether instances carry a `__dict__`.
        candidates: Construction paths in the order they are tried.
    """

    cls: type
    slots: tuple[SlotField, ...]
    has_dict: bool
    candidates: tuple[ConstructionCandidate, ...]
