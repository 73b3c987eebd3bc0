"""Value classification: copy kinds, pass-through registry, and classify()."""

from graphcopy.core.classify.core import (
    ImmutableRegistry,
    classify,
    get_registry,
    immutable,
)
from graphcopy.core.classify.models import Classification, CopyKind, MapEntry

__all__ = [
    # Models
    "CopyKind",
    "Classification",
    "MapEntry",
    # Core
    "classify",
    "immutable",
    "get_registry",
    "ImmutableRegistry",
]
