"""Data models for copy tracing.

These models are storage-agnostic and serialize to plain JSON-compatible dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from graphcopy.core.classify.models import CopyKind


@dataclass(slots=True, frozen=True)
class CopyEvent:
    """One node visited by a copy.

    Attributes:
        kind: How the node was classified.
        type_name: Fully qualified name of the node's type.
        shared: True when the node had already been copied in this call and the
            existing copy was reused.

    Example:
        event = CopyEvent(kind=CopyKind.MAP, type_name="builtins.dict", shared=False)
    """

    kind: CopyKind
    type_name: str
    shared: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"kind": self.kind.name, "type_name": self.type_name, "shared": self.shared}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CopyEvent:
        """Create from dictionary (for deserialization)."""
        return cls(
            kind=CopyKind[data["kind"]],
            type_name=data["type_name"],
            shared=data.get("shared", False),
        )


@dataclass(slots=True)
class CopyStats:
    """Observer that tallies the events of one or more copies.

    Attributes:
        copied: Number of new copies produced, per kind.
        shared: Number of reused copies, per kind.
        types: Number of new copies produced, per type name.
    """

    copied: dict[CopyKind, int] = field(default_factory=dict)
    shared: dict[CopyKind, int] = field(default_factory=dict)
    types: dict[str, int] = field(default_factory=dict)

    def on_copy(self, event: CopyEvent) -> None:
        """Count one event."""
        if event.shared:
            self.shared[event.kind] = self.shared.get(event.kind, 0) + 1
            return
        self.copied[event.kind] = self.copied.get(event.kind, 0) + 1
        self.types[event.type_name] = self.types.get(event.type_name, 0) + 1

    @property
    def total(self) -> int:
        """Number of events counted, shared ones included."""
        return sum(self.copied.values()) + sum(self.shared.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "copied": {kind.name: count for kind, count in self.copied.items()},
            "shared": {kind.name: count for kind, count in self.shared.items()},
            "types": dict(self.types),
        }
