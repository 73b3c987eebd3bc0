"""Per-call traversal state and the explicit work stack.

Copying a node allocates its copy and records it immediately, but populating
the copy is pushed onto a work stack instead of recursing. Stack usage therefore
stays flat no matter how deep the source graph is.

Usage:
    traversal = Traversal(settings, registry, shapes)
    result = traversal.run(root)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from graphcopy.core.classify import ImmutableRegistry, classify
from graphcopy.core.classify.models import Classification, CopyKind
from graphcopy.core.context import CopyContext
from graphcopy.strategies import STRATEGIES, build_shape
from graphcopy.strategies.models import TypeShape
from graphcopy.tracing.models import CopyEvent

if TYPE_CHECKING:
    from graphcopy.config import CopySettings
    from graphcopy.strategies.reconstruct import ShapeCache
    from graphcopy.tracing.protocol import CopyObserver


class Traversal:
    """State of one top-level copy. Never reused across calls.

    Args:
        settings: Copier configuration.
        registry: Pass-through registry.
        shapes: Shape cache, or None to introspect types on every use.
        observer: Optional observer notified for every visited node.
    """

    def __init__(
        self,
        settings: CopySettings,
        registry: ImmutableRegistry,
        shapes: ShapeCache | None = None,
        observer: CopyObserver | None = None,
    ) -> None:
        """Initialize traversal with a fresh copy context."""
        self.settings = settings
        self.registry = registry
        self.context = CopyContext()
        self.synthesizing: set[type] = set()
        self._shapes = shapes
        self._observer = observer
        self._pending: list[Any] = []
        self._tasks: dict[int, Callable[[], None]] = {}
        # While positive, every copy reached is completed before it is returned
        self._eager = 0

    def run(self, value: Any) -> Any:
        """Copy a root value and everything reachable from it.

        Args:
            value: Root of the source graph.

        Returns:
            The fully populated copy.
        """
        result = self.copy(value)
        self._drain(0)
        return result

    def copy(self, value: Any) -> Any:
        """Get the copy of a value, allocating it if needed.

        The returned copy may still be waiting for its contents; they are filled
        before the top-level call returns.

        Args:
            value: Any value.

        Returns:
            The copy (or the value itself when it is pass-through).
        """
        if value is None:
            return None

        existing = self.context.lookup(value)
        if existing is not None:
            if self._observer is not None:
                self._notify(classify(value, self.registry), value, shared=True)
            if self._eager:
                # Reused copy may still be waiting below the current copy_now mark
                self._complete(existing)
            return existing

        classification = classify(value, self.registry)
        if classification.kind is CopyKind.PASS_THROUGH:
            result = value
        else:
            result = STRATEGIES[classification.kind](value, classification, self)

        if self._observer is not None:
            self._notify(classification, value, shared=False)
        return result

    def copy_now(self, value: Any) -> Any:
        """Get the copy of a value with its contents already filled.

        Used where the copy is needed whole right away: dictionary keys and set
        members (hashed on insertion) and synthesized constructor arguments.
        Everything reachable from the copy is completed too, including copies
        made earlier in the traversal whose population is still pending. Only a
        copy whose population is already running (a cycle back to an enclosing
        node) can be returned incomplete.

        Args:
            value: Any value.

        Returns:
            The populated copy.
        """
        mark = len(self._pending)
        self._eager += 1
        try:
            result = self.copy(value)
            self._complete(result)
            self._drain(mark)
        finally:
            self._eager -= 1
        return result

    def defer(self, copy: Any, populate: Callable[[], None]) -> None:
        """Schedule the population of a freshly allocated copy.

        Args:
            copy: The allocated copy.
            populate: Fills the copy; runs at most once.
        """
        self._tasks[id(copy)] = populate
        self._pending.append(copy)

    def shape_of(self, cls: type) -> TypeShape:
        """Get the shape of a class, from the cache when one is configured."""
        if self._shapes is None:
            return build_shape(cls)
        return self._shapes.shape_of(cls)

    @property
    def pending(self) -> int:
        """Number of copies still waiting to be populated."""
        return len(self._tasks)

    def _complete(self, copy: Any) -> None:
        task = self._tasks.pop(id(copy), None)
        if task is not None:
            task()

    def _drain(self, mark: int) -> None:
        while len(self._pending) > mark:
            copy = self._pending.pop()
            task = self._tasks.pop(id(copy), None)
            if task is not None:
                task()

    def _notify(self, classification: Classification, value: Any, shared: bool) -> None:
        cls = type(value)
        event = CopyEvent(
            kind=classification.kind,
            type_name=f"{cls.__module__}.{cls.__qualname__}",
            shared=shared,
        )
        self._observer.on_copy(event)  # type: ignore[union-attr]
