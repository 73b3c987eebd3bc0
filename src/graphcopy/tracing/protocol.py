"""Protocols for copy tracing.

Observers receive one event per node a copy visits, which makes it possible to
audit what a copy touched without the engine logging anything itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from graphcopy.tracing.models import CopyEvent


@runtime_checkable
class CopyObserver(Protocol):
    """Receives the events of a copy as they happen.

    Usage:
        stats = CopyStats()
        deep_copy(graph, observer=stats)
        stats.copied[CopyKind.GENERIC]

    Thread Safety:
        A copy notifies its observer from the calling thread only. Sharing one
        observer between concurrent copies requires it to be thread-safe.
    """

    def on_copy(self, event: CopyEvent) -> None:
        """Handle one visited node.

        Args:
            event: What was visited and whether an existing copy was reused.
        """
        ...
