"""Errors raised while copying an object graph."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class ReconstructionError(Exception):
    """Raised when a node of the graph cannot be rebuilt.

    Aborts the whole copy. The offending type is available as `source_type`
    and the underlying failure, if any, as `__cause__`.
    """

    def __init__(self, message: str, source_type: type | None = None) -> None:
        super().__init__(message)
        self.source_type = source_type


class UnsupportedShapeError(ReconstructionError):
    """Raised when a container type has no no-argument construction path."""

    pass


@contextmanager
def reconstruction_step(source_type: type, action: str) -> Iterator[None]:
    """Wrap one local rebuild step so its failures surface as ReconstructionError.

    ReconstructionErrors raised by nested copies pass through unchanged.

    Args:
        source_type: Type being rebuilt, attached to the error.
        action: Short description used in the message ("constructing", ...).

    Raises:
        ReconstructionError: Wrapping any other exception raised in the block.
    """
    try:
        yield
    except ReconstructionError:
        raise
    except Exception as exc:
        raise ReconstructionError(
            f"{action} {source_type.__qualname__} failed: {exc}", source_type
        ) from exc
