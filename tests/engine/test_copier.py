"""Tests for the deep copy entry points and the properties every copy must have."""

from collections import OrderedDict

import pytest

from graphcopy import CopyKind, CopySettings, CopyStats, DeepCopier, ImmutableRegistry, deep_copy
from graphcopy.core.classify import get_registry
from graphcopy.engine import Traversal


class Node:
    __slots__ = ("value", "next")

    def __init__(self, value: int = 0) -> None:
        self.value = value
        self.next = None


def test_none_copies_to_none():
    assert deep_copy(None) is None


def test_immutable_values_pass_through():
    """Immutable values come back as the very same reference."""
    text = "".join(["not", " ", "interned"])
    number = 10**30

    assert deep_copy(text) is text
    assert deep_copy(number) is number
    assert deep_copy(3.14) == 3.14


def test_cycle_terminates_and_resolves_to_result(person_cls):
    """CRITICAL: A self-referential graph copies to a self-referential graph.

    Why: Without recording the copy before populating it, this recurses forever.
    """
    sam = person_cls()
    sam.add_friend("Sam", sam)

    copy = deep_copy(sam)

    assert copy is not sam
    assert copy.friends["Sam"] is copy


def test_shared_references_stay_shared(person_cls):
    books = ["Dune"]
    reader = person_cls("Reader", 30, [])
    reader.favorite_books = books
    reader.wishlist = books

    copy = deep_copy(reader)

    assert copy.favorite_books is copy.wishlist
    assert copy.favorite_books is not books


def test_copy_and_source_are_independent(person_cls):
    source = person_cls("Jason", 35, ["Nebula Raging"])

    copy = deep_copy(source)
    copy.favorite_books[0] = "Changed"
    source.favorite_books.append("Added")

    assert source.favorite_books == ["Nebula Raging", "Added"]
    assert copy.favorite_books == ["Changed"]


def test_scalar_fields_round_trip(person_cls):
    books = ["Nebula Raging", "The Gun in the Village", "Birds of a Feather"]
    jason = person_cls("Jason", 35, books)

    copy = deep_copy(jason)

    assert copy is not jason
    assert (copy.name, copy.age, copy.favorite_books) == ("Jason", 35, books)
    assert copy.favorite_books is not jason.favorite_books


def test_friends_graph_scenario(friends_graph):
    sam, jason, michael = friends_graph

    copy = deep_copy(sam)

    assert (copy.name, copy.age) == ("John", 40)
    assert copy.friends["Jason"].name == "Jason"
    assert copy.friends["Jason"].friends == {}
    assert copy is not sam
    assert copy.friends is not sam.friends
    assert copy.friends["Jason"] is not jason
    assert copy.friends["Michael"] is not michael
    assert copy.friends["Michael"].favorite_books == michael.favorite_books

    copy.add_friend("Newcomer", copy.friends["Jason"])
    assert "Newcomer" not in sam.friends


def test_container_types_are_preserved():
    source = {"ordered": OrderedDict(a=1), "members": {1, 2}, "items": [1]}

    copy = deep_copy(source)

    assert type(copy["ordered"]) is OrderedDict
    assert type(copy["members"]) is set
    assert type(copy["items"]) is list


def test_each_call_uses_a_fresh_context(person_cls):
    """Sequential calls never hand back copies made by an earlier call."""
    source = person_cls()

    first = deep_copy(source)
    second = deep_copy(source)

    assert first is not second
    assert first.friends is not second.friends


def test_deep_graphs_do_not_exhaust_the_stack():
    """Population is driven by a work stack, not recursion."""
    head = Node(0)
    tail = head
    for value in range(1, 20_000):
        tail.next = Node(value)
        tail = tail.next

    copy = deep_copy(head)

    count = 0
    node = copy
    while node is not None:
        assert node.value == count
        count += 1
        node = node.next
    assert count == 20_000


def test_deeply_nested_lists():
    source: list = []
    inner = source
    for _ in range(5_000):
        inner.append([])
        inner = inner[0]

    copy = deep_copy(source)

    depth = 0
    while copy:
        copy = copy[0]
        depth += 1
    assert depth == 5_000


def test_observer_sees_every_node():
    shared = [1]
    stats = CopyStats()

    deep_copy([shared, shared], observer=stats)

    assert stats.copied == {CopyKind.COLLECTION: 2, CopyKind.PASS_THROUGH: 1}
    assert stats.shared == {CopyKind.COLLECTION: 1}
    assert stats.total == 4


def test_configured_immutable_types_are_passed_through():
    copier = DeepCopier(CopySettings(immutable_types=["collections.OrderedDict"]))
    source = OrderedDict(a=[1])

    assert copier.copy(source) is source
    assert deep_copy(source) is not source


def test_copier_registry_does_not_leak_into_global_registry():
    copier = DeepCopier(CopySettings(immutable_types=["collections.OrderedDict"]))

    assert copier.registry.is_immutable_type(OrderedDict)
    assert not get_registry().is_immutable_type(OrderedDict)


def test_copier_extends_given_registry():
    class Token:
        pass

    base = ImmutableRegistry()
    base.register(Token)
    copier = DeepCopier(CopySettings(), registry=base)
    token = Token()

    assert copier.copy(token) is token


def test_unimportable_immutable_type_warns():
    with pytest.warns(UserWarning, match="Ignoring immutable type"):
        DeepCopier(CopySettings(immutable_types=["graphcopy.DoesNotExist"]))


def test_traversal_leaves_no_pending_work():
    traversal = Traversal(CopySettings(), ImmutableRegistry())

    result = traversal.run({"a": [1, {"b": (2, [3])}]})

    assert result == {"a": [1, {"b": (2, [3])}]}
    assert traversal.pending == 0
