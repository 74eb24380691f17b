"""Last-in-first-out stacks: a bounded array stack and an unbounded list stack."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from mipsnoff.linkedlist import IntList


class StackOverflow(Exception):
    """Raised when pushing onto a full stack."""


class StackUnderflow(IndexError):
    """Raised when popping from an empty stack."""


def _successor(value: Any) -> Any:
    """Return the value after ``value``: next integer or next character."""
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("string values must be single characters")
        return chr(ord(value) + 1)
    return value + 1


class Stack(ABC):
    """Abstract LIFO stack."""

    @abstractmethod
    def push(self, value: Any) -> None:
        """Put ``value`` on top of the stack."""

    @abstractmethod
    def pop(self) -> Any:
        """Remove and return the top value."""

    @abstractmethod
    def is_full(self) -> bool:
        """Return True when no more values fit."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True when the stack holds nothing."""

    def self_test(self, start: Any = 17, count: Optional[int] = None) -> list[str]:
        """Push successive values from ``start``, then pop them all.

        Pushes ``count`` values, or until the stack is full when ``count``
        is None. Returns the log of pushes and pops, in order.
        """
        if count is None and not self.is_full():
            probe_limit_free = not isinstance(self, ArrayStack)
            if probe_limit_free:
                raise ValueError("count is required for a stack that never fills")
        log: list[str] = []
        value = start
        pushed = 0
        while (pushed < count) if count is not None else not self.is_full():
            if self.is_full():
                raise StackOverflow("stack is full")
            log.append(f"pushing {value}")
            self.push(value)
            value = _successor(value)
            pushed += 1
        while not self.is_empty():
            log.append(f"popping {self.pop()}")
        return log


class ArrayStack(Stack):
    """Stack holding at most ``size`` values."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("stack size must be at least 1")
        self._size = size
        self._items: list[Any] = []

    def push(self, value: Any) -> None:
        if self.is_full():
            raise StackOverflow("stack is full")
        self._items.append(value)

    def pop(self) -> Any:
        if self.is_empty():
            raise StackUnderflow("pop from empty stack")
        return self._items.pop()

    def is_full(self) -> bool:
        return len(self._items) == self._size

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class ListStack(Stack):
    """Unbounded stack of integers kept in a linked list."""

    def __init__(self) -> None:
        self._list = IntList()

    def push(self, value: int) -> None:
        self._list.prepend(value)

    def pop(self) -> int:
        if self.is_empty():
            raise StackUnderflow("pop from empty stack")
        return self._list.remove()

    def is_full(self) -> bool:
        return False

    def is_empty(self) -> bool:
        return self._list.is_empty()

    def __len__(self) -> int:
        return len(self._list)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the self tests of both stack kinds and print their logs."""
    runs = [
        ("Testing ArrayStack", ArrayStack(10), 17, 10),
        ("Testing ListStack", ListStack(), 17, 10),
        ("Testing ArrayStack of characters", ArrayStack(10), "a", None),
    ]
    out = sys.stdout
    for title, stack, start, count in runs:
        out.write(title + "\n")
        for line in stack.self_test(start, count):
            out.write(line + "\n")
    return 0