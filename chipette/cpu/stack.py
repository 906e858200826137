"""Bounded call stack for subroutine return addresses."""

from __future__ import annotations

from typing import Iterator, List

from .errors import StackOverflowError, StackUnderflowError

STACK_DEPTH = 16


class CallStack:
    """Fixed-capacity stack of 16-bit return addresses.

    ``push`` and ``pop`` are checked: a failing call raises and leaves the
    stack unchanged.
    """

    def __init__(self, capacity: int = STACK_DEPTH) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def pointer(self) -> int:
        """Index of the next free slot."""

        return len(self._entries)

    def push(self, address: int) -> None:
        if len(self._entries) >= self._capacity:
            raise StackOverflowError(
                f"call stack overflow pushing {address:#06x} (depth {self._capacity})"
            )
        self._entries.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._entries:
            raise StackUnderflowError("return with empty call stack")
        return self._entries.pop()

    def peek(self) -> int | None:
        if not self._entries:
            return None
        return self._entries[-1]

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._entries))
