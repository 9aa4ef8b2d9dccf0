"""Serialization of sealed buffer slots to the ASCII pixel-map stream.

The output is a plain-text PPM (P3): a header, then one line of three
space-separated integers per pixel, rows top-to-bottom, columns
left-to-right.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import TextIO

from pathtracer.core.pingpong import DoubleBuffer
from pathtracer.output.tonemap import PixelColor

# Maximum channel value declared in the header
MAX_COLOR_VALUE = 255

# Receives each flushed row, top row first
RowSink = Callable[[Sequence[PixelColor]], None]


def write_header(channel: TextIO, width: int, height: int) -> None:
    """Write the P3 header and flush the channel."""
    channel.write(f"P3\n{width} {height}\n{MAX_COLOR_VALUE}\n")
    channel.flush()


class Streamer:
    """Writes sealed slots of a DoubleBuffer to an output channel.

    Writes to the channel are serialized by a lock, so concurrent flushes of
    the two slots never interleave bytes.

    Attributes:
        buffer: The buffer whose sealed slots are flushed.
        channel: Text stream receiving pixel lines.
        rows_written: Number of rows flushed so far.
    """

    def __init__(
        self,
        buffer: DoubleBuffer[PixelColor],
        channel: TextIO,
        row_sink: RowSink | None = None,
    ) -> None:
        self.buffer = buffer
        self.channel = channel
        self.rows_written = 0
        self._row_sink = row_sink
        self._lock = threading.Lock()

    def flush(self, slot: int) -> None:
        """Write the sealed slot's cells in column order and flush the channel.

        Must be called once per seal event, before the slot is cleared.
        """
        page = self.buffer.get_page(slot)
        text = "".join(f"{pixel}\n" for pixel in page)
        with self._lock:
            self.channel.write(text)
            self.channel.flush()
            self.rows_written += 1
            if self._row_sink is not None:
                self._row_sink(page)
