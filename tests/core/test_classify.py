"""Tests for value classification and the immutable registry."""

import array
import datetime
import types
import uuid
from collections import Counter, OrderedDict, defaultdict, deque, namedtuple
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path

import pytest

from graphcopy import CopyKind, ImmutableRegistry, MapEntry, classify, immutable
from graphcopy.core.classify import get_registry


class Color(Enum):
    RED = 1


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


def test_scalars_are_pass_through():
    values = [
        None,
        True,
        0,
        3.5,
        2j,
        Decimal("1.5"),
        Fraction(1, 3),
        "text",
        b"bytes",
        range(3),
        Color.RED,
        int,
        len,
        classify,
        types,
        datetime.date(2024, 1, 1),
        uuid.uuid4(),
        Path("/tmp"),
        ...,
    ]
    for value in values:
        assert classify(value).kind is CopyKind.PASS_THROUGH, value


def test_arrays():
    """Tuples are arrays of an immutable family, array.array and bytearray are not."""
    assert classify((1, 2)) == classify((3,))
    assert classify((1, 2)).kind is CopyKind.ARRAY
    assert classify((1, 2)).immutable

    typed = classify(array.array("i", [1, 2]))
    assert typed.kind is CopyKind.ARRAY
    assert typed.container_type is array.array
    assert not typed.immutable

    assert classify(bytearray(b"ab")).kind is CopyKind.ARRAY


def test_named_tuple_keeps_concrete_type():
    Pair = namedtuple("Pair", "left right")
    result = classify(Pair(1, 2))
    assert result.kind is CopyKind.ARRAY
    assert result.container_type is Pair
    assert result.immutable


def test_map_entry():
    assert classify(MapEntry("k", "v")).kind is CopyKind.MAP_ENTRY


def test_maps():
    for value in ({}, OrderedDict(), defaultdict(list), Counter()):
        result = classify(value)
        assert result.kind is CopyKind.MAP
        assert result.container_type is type(value)
        assert not result.immutable

    proxy = classify(types.MappingProxyType({"a": 1}))
    assert proxy.kind is CopyKind.MAP
    assert proxy.immutable


def test_collections():
    for value in ([], set(), deque()):
        result = classify(value)
        assert result.kind is CopyKind.COLLECTION
        assert not result.immutable

    frozen = classify(frozenset({1}))
    assert frozen.kind is CopyKind.COLLECTION
    assert frozen.immutable


def test_everything_else_is_generic():
    assert classify(Point(1, 2)).kind is CopyKind.GENERIC
    assert classify(object()).kind is CopyKind.GENERIC


def test_classification_is_by_runtime_value_not_declared_type():
    """A value declared as object is classified by what it is at runtime."""
    value: object = ["a"]
    assert classify(value).kind is CopyKind.COLLECTION


def test_registered_type_and_subclasses_become_pass_through():
    registry = ImmutableRegistry()

    class Money:
        pass

    class Euro(Money):
        pass

    assert classify(Euro(), registry).kind is CopyKind.GENERIC

    registry.register(Money)

    assert classify(Money(), registry).kind is CopyKind.PASS_THROUGH
    assert classify(Euro(), registry).kind is CopyKind.PASS_THROUGH
    assert registry.registered == frozenset({Money})


def test_registered_container_is_pass_through():
    """Registering marks a container family as unmodifiable."""
    registry = ImmutableRegistry()

    class FrozenList(list):
        pass

    registry.register(FrozenList)

    assert classify(FrozenList([1]), registry).kind is CopyKind.PASS_THROUGH


def test_child_registry_sees_later_parent_registrations():
    parent = ImmutableRegistry()
    child = ImmutableRegistry(parent=parent)

    class Token:
        pass

    assert not child.is_immutable_type(Token)

    parent.register(Token)

    assert child.is_immutable_type(Token)


def test_child_registrations_do_not_leak_to_parent():
    parent = ImmutableRegistry()
    child = ImmutableRegistry(parent=parent)

    class Token:
        pass

    child.register(Token)

    assert child.is_immutable_type(Token)
    assert not parent.is_immutable_type(Token)


def test_register_requires_class():
    with pytest.raises(TypeError, match="Only classes"):
        ImmutableRegistry().register("not a class")  # type: ignore[arg-type]


def test_immutable_decorator_uses_global_registry():
    @immutable
    class Currency:
        def __init__(self, code: str) -> None:
            self.code = code

    assert get_registry().is_immutable_type(Currency)
    assert classify(Currency("EUR")).kind is CopyKind.PASS_THROUGH
