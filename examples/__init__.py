"""Example graphs for graphcopy.

This package demonstrates library usage but is not part of the core API.
"""

from .friends_graph import Person, build_graph

__all__ = [
    "Person",
    "build_graph",
]
