"""Open-addressing hash table with linear probing and backward-shift deletion."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from lockpick.mathutil import ceil_log2

T = TypeVar("T")

# The table grows when more than capacity >> LOAD_FACTOR_MAX_SHIFT entries
# would be stored, and shrinks when fewer than capacity >> LOAD_FACTOR_MIN_SHIFT remain.
LOAD_FACTOR_MAX_SHIFT = 1
LOAD_FACTOR_MIN_SHIFT = 3

_EMPTY: Any = object()


def _optimal_capacity(elements_num: int) -> int:
    return 1 << (ceil_log2(elements_num) + LOAD_FACTOR_MAX_SHIFT)


class HashTable(Generic[T]):
    """A set of entries keyed by user-supplied hash and equality functions."""

    def __init__(
        self,
        capacity: int,
        hash_fn: Callable[[T], int],
        eq_fn: Callable[[T, T], bool],
    ) -> None:
        if not callable(hash_fn):
            raise TypeError("Entry hash function must be callable")
        if not callable(eq_fn):
            raise TypeError("Entry equality predicate must be callable")
        if capacity <= 0 or capacity & (capacity - 1):
            raise ValueError(f"Capacity must be a power of 2, but got: {capacity}")
        self._hash = hash_fn
        self._eq = eq_fn
        self._buckets: list = [_EMPTY] * capacity
        self._size = 0

    @classmethod
    def for_elements(
        cls,
        elements_num: int,
        hash_fn: Callable[[T], int],
        eq_fn: Callable[[T, T], bool],
    ) -> "HashTable[T]":
        """Create a table sized to hold ``elements_num`` entries without growing."""
        if elements_num <= 0:
            raise ValueError("Number of elements in htable must be greater than 0")
        return cls(_optimal_capacity(elements_num), hash_fn, eq_fn)

    @property
    def capacity(self) -> int:
        """Number of buckets."""
        return len(self._buckets)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        return (entry for entry in self._buckets if entry is not _EMPTY)

    def __contains__(self, entry: T) -> bool:
        return self._find_index(entry) is not None

    def _mask(self) -> int:
        return len(self._buckets) - 1

    def _insert(self, entry: T) -> bool:
        mask = self._mask()
        index = self._hash(entry) & mask
        while (slot := self._buckets[index]) is not _EMPTY:
            if self._eq(entry, slot):
                return False
            index = (index + 1) & mask
        self._buckets[index] = entry
        self._size += 1
        return True

    def _rehash(self, new_capacity: int) -> None:
        entries = list(self)
        self._buckets = [_EMPTY] * new_capacity
        self._size = 0
        for entry in entries:
            self._insert(entry)

    def _find_index(self, entry: T) -> Optional[int]:
        mask = self._mask()
        index = self._hash(entry) & mask
        while (slot := self._buckets[index]) is not _EMPTY:
            if self._eq(slot, entry):
                return index
            index = (index + 1) & mask
        return None

    def _remove_at(self, index: int) -> None:
        mask = self._mask()
        prev = index
        current = (index + 1) & mask
        while (slot := self._buckets[current]) is not _EMPTY:
            native = self._hash(slot) & mask
            # Move the entry back if its home bucket does not lie in (prev, current],
            # counting bucket indices cyclically.
            if prev < current:
                movable = native <= prev or native > current
            else:
                movable = current < native <= prev
            if movable:
                self._buckets[prev] = slot
                prev = current
            current = (current + 1) & mask
        self._buckets[prev] = _EMPTY

    def insert(self, entry: T) -> bool:
        """Add ``entry``; return False if an equal entry is already stored."""
        if self._size + 1 > self.capacity >> LOAD_FACTOR_MAX_SHIFT:
            self._rehash(self.capacity << 1)
        return self._insert(entry)

    def find(self, entry: T) -> Optional[T]:
        """Return the stored entry equal to ``entry``, or None."""
        index = self._find_index(entry)
        return None if index is None else self._buckets[index]

    def remove(self, entry: T) -> bool:
        """Remove the entry equal to ``entry``; return whether one was found."""
        if self._size == 0:
            return False
        if self._size - 1 < self.capacity >> LOAD_FACTOR_MIN_SHIFT:
            self._rehash(max(1, self.capacity >> 1))
        index = self._find_index(entry)
        if index is None:
            return False
        self._remove_at(index)
        self._size -= 1
        return True

    def rehash(self, new_size: int) -> None:
        """Resize the table to suit ``new_size`` entries."""
        if new_size <= 0:
            raise ValueError("New size must be greater than 0")
        if new_size < self._size:
            raise ValueError(
                f"New size {new_size} is smaller than the number of stored entries {self._size}"
            )
        self._rehash(_optimal_capacity(new_size))