"""Two-slot, self-sealing pixel buffer.

Each slot holds one image row. Workers write cells concurrently; each slot
counts its writes and seals itself on the write that brings the count to the
row width. Exactly one writer per fill cycle observes ``sealed=True`` and
becomes responsible for flushing the slot. A sealed slot rejects writes
until it is cleared.

Writes report their outcome as a WriteResult rather than raising, so the
retry guard can inspect the status tag. ``set`` is the raising variant.

Example:
    >>> from pathtracer.core.pingpong import DoubleBuffer
    >>> buf = DoubleBuffer(2)
    >>> buf.set(0, 0, "a")
    False
    >>> buf.set(0, 1, "b")
    True
    >>> buf.get_page(0)
    ['a', 'b']
    >>> buf.clear(0)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pathtracer.core.errors import InvalidSlotError, SealedWriteError

T = TypeVar("T")

# Number of slots; slot 0 holds the upper row of a row-pair
SLOT_COUNT = 2


class WriteStatus(Enum):
    """Outcome tag of a buffer write."""

    OK = "ok"
    INVALID_SLOT = "invalid-slot"
    SEALED = "sealed-write"


@dataclass(frozen=True)
class WriteResult:
    """Result of DoubleBuffer.try_set.

    Attributes:
        status: Whether the write was accepted, and why not if it was rejected.
        slot: The slot the write targeted.
        sealed: True only for the accepted write that filled the slot.
    """

    status: WriteStatus
    slot: int
    sealed: bool = False

    @property
    def ok(self) -> bool:
        return self.status is WriteStatus.OK

    def raise_for_status(self) -> None:
        """Raise the matching BufferWriteError if the write was rejected."""
        if self.status is WriteStatus.INVALID_SLOT:
            raise InvalidSlotError(self.slot)
        if self.status is WriteStatus.SEALED:
            raise SealedWriteError(self.slot)


class DoubleBuffer(Generic[T]):
    """Fixed-capacity pair of row slots with fill tracking.

    Slots are allocated once and cycle through fill, seal, flush and clear
    for the whole render. They are never resized.

    Attributes:
        size: Cells per slot (the image width).
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Slot size must be positive, got {size}")
        self.size = size
        self._pages: list[list[T | None]] = [[None] * size for _ in range(SLOT_COUNT)]
        self._touched = [0] * SLOT_COUNT
        self._seals = [False] * SLOT_COUNT
        self._locks = tuple(threading.Lock() for _ in range(SLOT_COUNT))

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < SLOT_COUNT:
            raise InvalidSlotError(slot)

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self.size:
            raise IndexError(f"column {column} out of range for width {self.size}")

    def try_set(self, slot: int, column: int, value: T) -> WriteResult:
        """Store a cell and report whether this write sealed the slot.

        The cell is stored before the fill counter is incremented, so when
        the count reaches the width every cell of the slot is in place.

        Args:
            slot: 0 or 1.
            column: Cell index in [0, size).
            value: The cell value.

        Returns:
            A WriteResult; status SEALED or INVALID_SLOT if rejected.

        Raises:
            IndexError: If column is out of range.
        """
        if not 0 <= slot < SLOT_COUNT:
            return WriteResult(WriteStatus.INVALID_SLOT, slot)
        self._check_column(column)

        with self._locks[slot]:
            if self._seals[slot]:
                return WriteResult(WriteStatus.SEALED, slot)
            self._pages[slot][column] = value
            self._touched[slot] += 1
            seal = self._touched[slot] == self.size
            if seal:
                self._seals[slot] = True
        return WriteResult(WriteStatus.OK, slot, sealed=seal)

    def set(self, slot: int, column: int, value: T) -> bool:
        """Store a cell, raising if the write is rejected.

        Returns:
            True iff this write sealed the slot.

        Raises:
            InvalidSlotError: If slot is not 0 or 1.
            SealedWriteError: If the slot is sealed.
        """
        result = self.try_set(slot, column, value)
        result.raise_for_status()
        return result.sealed

    def get(self, slot: int, column: int) -> T | None:
        """Read one cell. Only meaningful once the slot is sealed."""
        self._check_slot(slot)
        self._check_column(column)
        return self._pages[slot][column]

    def get_page(self, slot: int) -> list[T | None]:
        """Return a copy of the slot's cells in column order."""
        self._check_slot(slot)
        return list(self._pages[slot])

    def clear(self, slot: int) -> None:
        """Reset the fill counter and seal so the slot accepts the next row."""
        self._check_slot(slot)
        with self._locks[slot]:
            self._touched[slot] = 0
            self._seals[slot] = False

    def is_sealed(self, slot: int) -> bool:
        self._check_slot(slot)
        return self._seals[slot]

    def fill_count(self, slot: int) -> int:
        self._check_slot(slot)
        return self._touched[slot]

    def __repr__(self) -> str:
        return (
            f"DoubleBuffer(size={self.size}, filled={self._touched}, sealed={self._seals})"
        )
