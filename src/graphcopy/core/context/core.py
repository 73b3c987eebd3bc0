"""Identity-keyed memo for a single copy invocation.

Usage:
    context = CopyContext()
    if (existing := context.lookup(node)) is not None:
        return existing
    context.record(node, new_node)
"""

from __future__ import annotations

from typing import Any


class CopyContext:
    """Maps source identities to the copies produced for them.

    One context lives for exactly one top-level copy call. Keys are `id()`
    values, never equality, so two equal but distinct objects get two copies.
    Recorded sources are kept alive until the context is dropped so their ids
    cannot be reused by temporaries created during the call.
    """

    __slots__ = ("_copies", "_keep_alive")

    def __init__(self) -> None:
        """Initialize an empty context."""
        self._copies: dict[int, Any] = {}
        self._keep_alive: list[Any] = []

    def lookup(self, node: Any) -> Any | None:
        """Get the copy already produced for a node.

        Args:
            node: Source value to look up.

        Returns:
            The copy if one was recorded, None otherwise. A copy is never None
            since None itself is never recorded.
        """
        return self._copies.get(id(node))

    def record(self, node: Any, copy: Any) -> None:
        """Remember the copy of a node.

        Args:
            node: Source value.
            copy: Its copy (possibly not yet populated).

        Raises:
            RuntimeError: If the node already maps to a different copy.
        """
        key = id(node)
        existing = self._copies.get(key)
        if existing is not None:
            if existing is not copy:
                raise RuntimeError(
                    f"{type(node).__name__} at {key:#x} was already copied to another instance"
                )
            return
        self._copies[key] = copy
        self._keep_alive.append(node)

    def __contains__(self, node: Any) -> bool:
        return id(node) in self._copies

    def __len__(self) -> int:
        return len(self._copies)
