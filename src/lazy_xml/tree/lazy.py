"""Memoizing lazy sequence used for parsed element content.

A :class:`LazySequence` starts empty and asks its feeder for more items only
when a caller indexes or iterates past what has been realized so far. Items
are kept once realized, so the sequence can be iterated any number of times
and compared like a tuple.

Feeders are single-threaded cursors over a single-pass input. Consuming the
same lazy tree from two threads at once is undefined behaviour.
"""

from collections.abc import Sequence
from typing import Any, Iterable, Iterator, List, Optional, Protocol


class Feeder(Protocol):
    """Something that can append at least one item to a pending sequence."""

    def pull(self, sequence: "LazySequence") -> None:
        """Append one item to ``sequence`` or close it."""


class LazySequence(Sequence):
    """Sequence whose items are produced on demand by a feeder."""

    def __init__(self, feeder: Optional[Feeder] = None,
                 items: Iterable[Any] = ()) -> None:
        self._feeder = feeder
        self._items: List[Any] = list(items)
        self._done = feeder is None

    @classmethod
    def of(cls, items: Iterable[Any]) -> "LazySequence":
        """Build an already realized sequence."""
        return cls(None, items)

    # Feeder side
    def _append(self, item: Any) -> None:
        self._items.append(item)

    def _close(self) -> None:
        self._done = True
        self._feeder = None

    # Consumer side
    @property
    def is_realized(self) -> bool:
        """Check if every item has been produced."""
        return self._done

    @property
    def realized_count(self) -> int:
        """Number of items produced so far."""
        return len(self._items)

    def _fill(self, count: Optional[int] = None) -> None:
        while not self._done and (count is None or len(self._items) < count):
            self._feeder.pull(self)

    def realize(self) -> "LazySequence":
        """Force every item and return self."""
        self._fill()
        return self

    def __iter__(self) -> Iterator[Any]:
        index = 0
        while True:
            if index < len(self._items):
                yield self._items[index]
                index += 1
            elif self._done:
                return
            else:
                self._feeder.pull(self)

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            self._fill()
            return tuple(self._items[index])
        if index < 0:
            self._fill()
        else:
            self._fill(index + 1)
        return self._items[index]

    def __len__(self) -> int:
        self._fill()
        return len(self._items)

    def __bool__(self) -> bool:
        self._fill(1)
        return bool(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (str, bytes)) or not isinstance(other, Sequence):
            return NotImplemented
        mine = iter(self)
        theirs = iter(other)
        sentinel = object()
        while True:
            a = next(mine, sentinel)
            b = next(theirs, sentinel)
            if a is sentinel or b is sentinel:
                return a is b
            if a != b:
                return False

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "realized" if self._done else "pending"
        return f"LazySequence({self._items!r}, {state})"
