"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from graphcopy import CopySettings, ImmutableRegistry
from graphcopy.engine import Traversal

DEFAULT_BOOKS = ["90 days around the world", "Harry potter", "Little Price"]


class Person:
    """Sample entity with scalar, list and name-to-entity map fields."""

    def __init__(self, name: str = "John", age: int = 40, favorite_books: list[str] | None = None):
        self.name = name
        self.age = age
        self.favorite_books = list(favorite_books) if favorite_books is not None else list(DEFAULT_BOOKS)
        self.friends: dict[str, Person] = {}

    def add_friend(self, name: str, friend: "Person") -> None:
        self.friends[name] = friend


@pytest.fixture
def person_cls():
    return Person


@pytest.fixture
def friends_graph():
    """sam (defaults) befriends jason and michael; jason has no friends."""
    sam = Person()
    jason = Person("Jason", 35, ["Nebula Raging", "The Gun in the Village", "Birds of a Feather"])
    michael = Person()
    michael.favorite_books = ["Saturn Firing", "Dirty Sheets", "Built for Pleasure"]
    sam.add_friend("Jason", jason)
    sam.add_friend("Michael", michael)
    return sam, jason, michael


@pytest.fixture
def traversal():
    """Fresh traversal with default settings and an isolated registry."""
    return Traversal(CopySettings(), ImmutableRegistry())
