"""Bounded snapshot chain with a cursor, backed by an index-addressed arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List

from .options import DEFAULT_CAPACITY, MISSING
from .validation import NIL, HistoryInvariantError, ensure_slot


@dataclass(slots=True)
class SnapshotSlot:
    value: Any
    prev: int = NIL
    next: int = NIL


class HistoryBuffer:
    """Doubly-linked history of whole-value snapshots.

    Slots live in ``_slots`` and point at each other by index. Released slots
    go on a free list and are reused by later appends, so eviction and pruning
    never shift live indices. ``size`` is maintained incrementally; pruned
    forward chains are accounted for by the owner through ``shrink`` before
    the pruning append.
    """

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY, initial: Any = MISSING) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots: List[SnapshotSlot] = []
        self._free: List[int] = []
        self._head = NIL
        self._tail = NIL
        self._cursor = NIL
        self._size = 0
        if initial is not MISSING:
            self._seed(initial)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_empty(self) -> bool:
        return self._cursor == NIL

    @property
    def current(self) -> Any:
        """Value under the cursor, ``MISSING`` when nothing is held."""

        if self._cursor == NIL:
            return MISSING
        return self._slots[self._cursor].value

    def has_previous(self) -> bool:
        return self._cursor != NIL and self._slots[self._cursor].prev != NIL

    def has_next(self) -> bool:
        return self._cursor != NIL and self._slots[self._cursor].next != NIL

    def append(self, value: Any) -> None:
        """Record ``value`` after the cursor, dropping any forward branch.

        When the buffer is full the oldest slot is evicted instead of growing.
        """

        if self._cursor == NIL:
            self._seed(value)
            return

        cursor = self._cursor
        forward = self._slots[cursor].next
        if forward != NIL:
            self._slots[cursor].next = NIL
            self._release_chain(forward)

        index = self._allocate(value)
        self._slots[index].prev = cursor
        self._slots[cursor].next = index
        self._cursor = index
        self._tail = index

        head = ensure_slot(self._head, what="head")
        if self._size + 1 > self._capacity and self._slots[head].next != NIL:
            self._evict_head()
        else:
            self._size += 1

    def shrink(self, count: int) -> None:
        """Drop ``count`` entries from ``size`` ahead of a pruning append."""

        if count < 0 or (count and count >= self._size):
            raise HistoryInvariantError(
                f"cannot discount {count} entries from a history of {self._size}",
                slot=self._cursor,
            )
        self._size -= count

    def move_back(self) -> bool:
        if not self.has_previous():
            return False
        self._cursor = self._slots[self._cursor].prev
        return True

    def move_forward(self) -> bool:
        if not self.has_next():
            return False
        self._cursor = self._slots[self._cursor].next
        return True

    def reset(self, value: Any = MISSING) -> None:
        """Replace the whole chain with ``value`` alone, or with nothing."""

        self._slots.clear()
        self._free.clear()
        self._head = self._tail = self._cursor = NIL
        self._size = 0
        if value is not MISSING:
            self._seed(value)

    def traverse(self) -> Iterator[Any]:
        """Yield values from head to tail as they are when iteration runs."""

        index = self._head
        while index != NIL:
            slot = self._slots[index]
            yield slot.value
            index = slot.next

    def _seed(self, value: Any) -> None:
        index = self._allocate(value)
        self._head = self._tail = self._cursor = index
        self._size = 1

    def _allocate(self, value: Any) -> int:
        if self._free:
            index = self._free.pop()
            self._slots[index] = SnapshotSlot(value)
            return index
        self._slots.append(SnapshotSlot(value))
        return len(self._slots) - 1

    def _release(self, index: int) -> None:
        slot = self._slots[index]
        slot.value = MISSING
        slot.prev = slot.next = NIL
        self._free.append(index)

    def _release_chain(self, index: int) -> None:
        while index != NIL:
            following = self._slots[index].next
            self._release(index)
            index = following

    def _evict_head(self) -> None:
        old = self._head
        new_head = ensure_slot(self._slots[old].next, what="successor of head")
        self._slots[new_head].prev = NIL
        self._head = new_head
        self._release(old)


__all__ = ["HistoryBuffer", "SnapshotSlot"]
