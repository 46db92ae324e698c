"""Ordered, index-addressed storage for document lines."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar

from edlin_engine.errors import CommandSyntaxError, InvalidArgumentError, LineRangeError

T = TypeVar("T")

RemoveCallback = Callable[[T], None]


class LineStore(Generic[T]):
    """Growable sequence with positional insert, delete, and block moves.

    Indices are always dense ``0..len-1``. ``None`` is never stored. Every
    mutating primitive either completes or leaves the store untouched.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        on_remove: Optional[RemoveCallback[T]] = None,
    ) -> None:
        self._items: List[T] = []
        self._on_remove = on_remove
        for item in items:
            self.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self.get(index)

    def snapshot(self) -> Sequence[T]:
        """Return the current items without exposing internal mutability."""

        return tuple(self._items)

    def get(self, index: int) -> T:
        self._check_index(index)
        return self._items[index]

    def set(self, index: int, item: T) -> None:
        self._check_index(index)
        self._items[index] = self._check_item(item)

    def slice(self, start: int, stop: int) -> Sequence[T]:
        """Return items ``[start, stop)`` clamped to the store bounds."""

        return tuple(self._items[max(start, 0) : max(stop, 0)])

    def append(self, item: T) -> None:
        self._items.append(self._check_item(item))

    def insert(self, pos: int, item: T) -> int:
        """Insert ``item`` before ``pos``; positions past the end append.

        Returns the index the item landed at.
        """

        if pos < 0:
            raise LineRangeError(f"insert position {pos} is negative")
        item = self._check_item(item)
        actual = min(pos, len(self._items))
        self._items.insert(actual, item)
        return actual

    def insert_many(self, pos: int, items: Iterable[T]) -> int:
        """Insert a block before ``pos`` in one splice; returns the count."""

        if pos < 0:
            raise LineRangeError(f"insert position {pos} is negative")
        block = [self._check_item(item) for item in items]
        actual = min(pos, len(self._items))
        self._items[actual:actual] = block
        return len(block)

    def delete(self, start: int, end: int) -> int:
        """Remove the inclusive range ``[start, end]``; ``end`` is clamped.

        Returns the number of removed items. The removal callback runs for
        each removed item after the gap has been closed.
        """

        if start < 0 or start >= len(self._items):
            raise LineRangeError(f"delete start {start} outside 0..{len(self._items) - 1}")
        if end < start:
            raise CommandSyntaxError(f"delete end {end} precedes start {start}")
        actual_end = min(end, len(self._items) - 1)
        removed = self._items[start : actual_end + 1]
        del self._items[start : actual_end + 1]
        if self._on_remove is not None:
            for item in removed:
                self._on_remove(item)
        return len(removed)

    def move(self, start: int, end: int, target: int) -> int:
        """Relocate ``[start, end]`` so that the block begins at ``target``.

        A target that would push the block past the end is clamped so the
        block lands at the true end. Returns the block's final start index.
        """

        size = len(self._items)
        if start < 0 or end < 0 or start >= size or end >= size:
            raise LineRangeError(f"move range {start}..{end} outside 0..{size - 1}")
        if end < start:
            raise CommandSyntaxError(f"move end {end} precedes start {start}")
        if target < 0:
            raise LineRangeError(f"move target {target} is negative")

        length = end - start + 1
        actual = target
        if target + length - 1 >= size:
            actual = size - length
        if actual == start:
            return actual

        block = self._items[start : end + 1]
        remaining = self._items[:start] + self._items[end + 1 :]
        remaining[actual:actual] = block
        self._items = remaining
        return actual

    def clear(self) -> None:
        if self._items:
            self.delete(0, len(self._items) - 1)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._items):
            raise LineRangeError(f"line index {index} outside 0..{len(self._items) - 1}")

    @staticmethod
    def _check_item(item: T) -> T:
        if item is None:
            raise InvalidArgumentError("line store cannot hold None")
        return item


__all__ = ["LineStore", "RemoveCallback"]
