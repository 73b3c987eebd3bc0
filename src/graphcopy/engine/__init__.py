"""Copy engine: the per-call traversal and the public entry points."""

from graphcopy.engine.copier import DeepCopier, deep_copy, get_default_copier
from graphcopy.engine.traversal import Traversal

__all__ = [
    "DeepCopier",
    "Traversal",
    "deep_copy",
    "get_default_copier",
]
