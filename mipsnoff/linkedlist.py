"""A singly linked list of integers, added to and taken from the front."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional


@dataclass
class _Node:
    item: int
    next: Optional["_Node"] = None


class IntList:
    """Singly linked list of integers with insertion and removal at the head."""

    def __init__(self) -> None:
        self._first: Optional[_Node] = None
        self._size = 0

    def prepend(self, value: int) -> None:
        """Put ``value`` at the front of the list."""
        self._first = _Node(value, self._first)
        self._size += 1

    def remove(self) -> int:
        """Take the first item off the list and return it."""
        if self._first is None:
            raise IndexError("remove from empty list")
        node = self._first
        self._first = node.next
        self._size -= 1
        return node.item

    def is_empty(self) -> bool:
        """Return True when the list holds no items."""
        return self._first is None

    def __iter__(self) -> Iterator[int]:
        node = self._first
        while node is not None:
            yield node.item
            node = node.next

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"IntList({list(self)!r})"