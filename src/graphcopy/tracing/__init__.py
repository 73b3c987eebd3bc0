"""Tracing for copies: observer protocol and event records.

Usage:
    from graphcopy.tracing import CopyStats

    stats = CopyStats()
    deep_copy(graph, observer=stats)
    print(stats.to_dict())
"""

from graphcopy.tracing.models import CopyEvent, CopyStats
from graphcopy.tracing.protocol import CopyObserver

__all__ = [
    "CopyObserver",
    "CopyEvent",
    "CopyStats",
]
