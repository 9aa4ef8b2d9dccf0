"""Exception types raised by the rendering pipeline.

Buffer contract violations (``InvalidSlotError``, ``SealedWriteError``) are
recoverable: the retry guard absorbs them. Only ``RetriesExhaustedError``
escapes a render, and it aborts the whole render.
"""

from __future__ import annotations


class RenderError(RuntimeError):
    """Base class for errors raised while rendering."""


class UsageError(ValueError):
    """Malformed or missing command-line arguments."""


class BufferWriteError(RenderError):
    """A write to the double buffer was rejected."""


class InvalidSlotError(BufferWriteError):
    """The slot index is not 0 or 1."""

    def __init__(self, slot: int) -> None:
        super().__init__(f"invalid slot number: {slot}")
        self.slot = slot


class SealedWriteError(BufferWriteError):
    """The slot is sealed and must be cleared before it accepts writes."""

    def __init__(self, slot: int) -> None:
        super().__init__(f"cannot write to sealed slot {slot}")
        self.slot = slot


class RetriesExhaustedError(RenderError):
    """A guarded write kept failing after the maximum number of attempts.

    Attributes:
        attempts: How many attempts were made.
        last_failure: Description of the final failure.
    """

    def __init__(self, attempts: int, last_failure: str) -> None:
        super().__init__(f"write failed after {attempts} attempts: {last_failure}")
        self.attempts = attempts
        self.last_failure = last_failure
