"""State — a single mutable value cell.

A State never notifies anyone. Change notification is the job of an
Observer wrapped around it (see obstate.observer).
"""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class State(Generic[T]):
    """Holds exactly one value. No history, no change detection."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        """Replace the value unconditionally. Does not notify."""
        self.value = value

    def _write(self, value: T) -> None:
        """Observer write path. Bypasses set() and anything layered on it."""
        self.value = value

    def __repr__(self) -> str:
        return f"State({self.value!r})"
