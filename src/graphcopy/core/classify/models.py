"""Classification models: copy kinds and the pair type used by map copies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class CopyKind(Enum):
    """How a value is copied. Computed per value, not per declared type."""

    PASS_THROUGH = auto()  # Immutable atom, returned by reference
    ARRAY = auto()  # Fixed-length indexed sequence
    MAP_ENTRY = auto()  # Standalone key/value pair
    MAP = auto()  # Associative container
    COLLECTION = auto()  # List-like or set-like container
    GENERIC = auto()  # Anything else, rebuilt by introspection


@dataclass(slots=True, frozen=True)
class Classification:
    """Result of classifying one value.

    Attributes:
        kind: Strategy to use.
        container_type: Concrete type of the value for container kinds, None otherwise.
        immutable: True when the container belongs to a built-in immutable family
            (tuple, frozenset, mappingproxy) that must be rebuilt rather than filled.
    """

    kind: CopyKind
    container_type: type | None = None
    immutable: bool = False


@dataclass(slots=True, frozen=True)
class MapEntry:
    """Standalone key/value pair.

    Map copies route every entry through this type. Entries are transient and
    are never memoized.
    """

    key: Any
    value: Any
