"""Thread-safe collections of API elements keyed by their integer id."""

from __future__ import annotations

import threading
from typing import Generic, Iterator, Protocol, TypeVar

__all__ = ["ElementCollection"]


class _Identified(Protocol):
    @property
    def id(self) -> int: ...


T = TypeVar("T", bound=_Identified)


class ElementCollection(Generic[T]):
    """A collection of elements, looked up by id and iterated in insertion order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._elements: dict[int, T] = {}

    def add(self, element: T) -> None:
        """Add an element, replacing any element with the same id."""
        with self._lock:
            self._elements[element.id] = element

    def get(self, element_id: int) -> T | None:
        """Return the element with the given id, or None."""
        with self._lock:
            return self._elements.get(element_id)

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = list(self._elements.values())
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        with self._lock:
            return element_id in self._elements

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"