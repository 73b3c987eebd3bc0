"""graphcopy: deep copies of arbitrary object graphs through runtime introspection.

Usage:
    from graphcopy import deep_copy

    class Person:
        def __init__(self, name: str, age: int) -> None:
            self.name = name
            self.age = age
            self.friends: dict[str, Person] = {}

    sam = Person("Sam", 40)
    sam.friends["Sam"] = sam

    clone = deep_copy(sam)
    assert clone is not sam
    assert clone.friends["Sam"] is clone
"""

__version__ = "0.1.0"

# Configuration
from graphcopy.config import CopySettings

# Core primitives
from graphcopy.core import (
    Classification,
    Copy,
    CopyContext,
    CopyKind,
    ImmutableRegistry,
    MapEntry,
    ReconstructionError,
    UnsupportedShapeError,
    classify,
    immutable,
)

# Engine
from graphcopy.engine import DeepCopier, deep_copy

# Strategies
from graphcopy.strategies import UNAVAILABLE, Reconstructible

# Tracing
from graphcopy.tracing import CopyEvent, CopyObserver, CopyStats

__all__ = [
    # Version
    "__version__",
    # Engine
    "deep_copy",
    "DeepCopier",
    # Core
    "Copy",
    "CopyContext",
    "CopyKind",
    "Classification",
    "MapEntry",
    "classify",
    "immutable",
    "ImmutableRegistry",
    "ReconstructionError",
    "UnsupportedShapeError",
    # Strategies
    "Reconstructible",
    "UNAVAILABLE",
    # Config
    "CopySettings",
    # Tracing
    "CopyObserver",
    "CopyEvent",
    "CopyStats",
]
