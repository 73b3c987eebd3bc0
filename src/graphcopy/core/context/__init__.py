"""Copy context: per-invocation identity memo."""

from graphcopy.core.context.core import CopyContext

__all__ = [
    "CopyContext",
]
