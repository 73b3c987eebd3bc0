"""Core functionalities: copy context, value classification, errors, and types.

Architecture Note:
    core/ holds the building blocks with no traversal logic of their own.
    Copy strategies live in strategies/, the traversal driver in engine/.
"""

from graphcopy.core.classify import (
    Classification,
    CopyKind,
    ImmutableRegistry,
    MapEntry,
    classify,
    get_registry,
    immutable,
)
from graphcopy.core.context import CopyContext
from graphcopy.core.errors import ReconstructionError, UnsupportedShapeError
from graphcopy.core.types import Copy

__all__ = [
    # Types
    "Copy",
    # Context
    "CopyContext",
    # Classification
    "CopyKind",
    "Classification",
    "MapEntry",
    "classify",
    "immutable",
    "get_registry",
    "ImmutableRegistry",
    # Errors
    "ReconstructionError",
    "UnsupportedShapeError",
]
