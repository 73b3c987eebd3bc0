"""Copy strategies: containers, generic reconstruction, and argument synthesis.

Each strategy is a plain function `(value, classification, traversal) -> copy`,
selected by the value's CopyKind through STRATEGIES.
"""

from collections.abc import Callable
from typing import Any

from graphcopy.core.classify.models import CopyKind
from graphcopy.strategies.arguments import synthesize, synthesize_arguments
from graphcopy.strategies.containers import (
    copy_array,
    copy_collection,
    copy_map,
    copy_map_entry,
)
from graphcopy.strategies.models import (
    UNAVAILABLE,
    ConstructionCandidate,
    ConstructionPath,
    ParameterShape,
    Reconstructible,
    SlotField,
    TypeShape,
)
from graphcopy.strategies.reconstruct import (
    ShapeCache,
    build_shape,
    copy_method,
    get_shape_cache,
    populate_fields,
    reconstruct,
)

STRATEGIES: dict[CopyKind, Callable[..., Any]] = {
    CopyKind.ARRAY: copy_array,
    CopyKind.MAP_ENTRY: copy_map_entry,
    CopyKind.MAP: copy_map,
    CopyKind.COLLECTION: copy_collection,
    CopyKind.GENERIC: reconstruct,
}

__all__ = [
    "STRATEGIES",
    # Models
    "UNAVAILABLE",
    "ConstructionCandidate",
    "ConstructionPath",
    "ParameterShape",
    "Reconstructible",
    "SlotField",
    "TypeShape",
    # Containers
    "copy_array",
    "copy_map_entry",
    "copy_map",
    "copy_collection",
    # Reconstruction
    "reconstruct",
    "copy_method",
    "populate_fields",
    "build_shape",
    "ShapeCache",
    "get_shape_cache",
    # Arguments
    "synthesize",
    "synthesize_arguments",
]
