"""Copy a small social graph and print both versions side by side.

Demonstrates:
- Copying objects that have no per-type copy code
- Lists and name-to-person maps being copied, not shared
- Mutating the copy without touching the original

Run with: python -m examples.friends_graph
"""

from __future__ import annotations

from graphcopy import CopyStats, deep_copy


class Person:
    def __init__(
        self, name: str = "John", age: int = 40, favorite_books: list[str] | None = None
    ) -> None:
        self.name = name
        self.age = age
        self.favorite_books = (
            favorite_books
            if favorite_books is not None
            else ["90 days around the world", "Harry potter", "Little Price"]
        )
        self.friends: dict[str, Person] = {}

    def add_friend(self, name: str, friend: Person) -> None:
        self.friends[name] = friend

    def __repr__(self) -> str:
        friends = "".join(f"[{name} = {friend!r}]" for name, friend in self.friends.items())
        return (
            f"Person{{name='{self.name}', age={self.age}, "
            f"favorite_books={self.favorite_books}, friends={friends}}}"
        )


def build_graph() -> Person:
    """Build sam, who is friends with jason and michael."""
    sam = Person()
    jason = Person("Jason", 35, ["Nebula Raging", "The Gun in the Village", "Birds of a Feather"])
    michael = Person()

    sam.favorite_books = ["90 days, around the world", "Harry potter", "Little Price"]
    michael.favorite_books = ["Saturn Firing", "Dirty Sheets", "Built for Pleasure"]

    sam.add_friend("Jason", jason)
    sam.add_friend("Michael", michael)
    return sam


def main() -> None:
    sam = build_graph()
    stats = CopyStats()

    copy = deep_copy(sam, observer=stats)
    copy.friends["Jason"].favorite_books[0] = "Changed in the copy"

    print(f"Original: {sam!r}")
    print(f"Copy:     {copy!r}")
    print(f"Visited:  {stats.to_dict()}")


if __name__ == "__main__":
    main()
