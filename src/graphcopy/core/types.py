"""Core type definitions for graphcopy."""

type Copy[T] = T
"""Type alias indicating a value is a deep copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
storage with its source. Pass-through values (strings, numbers, other immutable
atoms) are the exception: they are returned by reference.
"""
