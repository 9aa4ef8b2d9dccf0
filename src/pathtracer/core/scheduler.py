"""Row-pair parallel scheduler with ordered streaming output.

The image is processed from the top row down in pairs of rows. For each
pair, one job per pixel of both rows is submitted to a shared thread pool;
the scheduler then waits for every job of the pair before moving on. Each
job samples its pixel, tone-maps it and writes it through the RetryGuard
into the DoubleBuffer slot for its row (slot 0 = upper row, slot 1 = lower
row). The write that seals a slot hands it to the Streamer.

Output order is strict: a sealed slot is flushed only after every
lower-indexed slot of the same pair has been flushed. If slot 1 seals first,
its flush is deferred and performed by whichever job completes slot 0.

Example:
    >>> import sys
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.core.scheduler import RenderSettings, render
    >>> from pathtracer.scene.presets import create_default_scene
    >>>
    >>> scene, camera = create_default_scene(aspect_ratio=2.0)
    >>> settings = RenderSettings(width=40, height=20, samples=4, workers=4, seed=7)
    >>> seed = render(scene, setup_camera(camera), settings, sys.stdout)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TextIO

import numpy as np

from pathtracer.camera.pinhole import CameraState
from pathtracer.core.errors import RenderError
from pathtracer.core.integrator import MAX_DEPTH, pixel_rng, sample_pixel
from pathtracer.core.pingpong import SLOT_COUNT, DoubleBuffer
from pathtracer.core.retry import MAX_RETRIES, RETRY_BACKOFF, RetryGuard
from pathtracer.output.streamer import RowSink, Streamer, write_header
from pathtracer.output.tonemap import PixelColor, quantize
from pathtracer.scene.intersection import Scene

logger = logging.getLogger(__name__)

# Samples per pixel when none are requested
DEFAULT_SAMPLES = 100

# Callback receives (rows_remaining, total_rows)
ProgressCallback = Callable[[int, int], None]

# Same signature as sample_pixel
Sampler = Callable[..., np.ndarray]


@dataclass
class RenderSettings:
    """Parameters of one render.

    Attributes:
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).
        samples: Samples per pixel.
        workers: Number of worker threads.
        max_depth: Maximum bounces per path.
        seed: Non-negative run seed for the per-pixel random streams. None
            draws a fresh seed from OS entropy.
        max_retries: Attempts per buffer write before the render aborts.
        retry_backoff: Seconds between write attempts.
    """

    width: int
    height: int
    samples: int = DEFAULT_SAMPLES
    workers: int = 1
    max_depth: int = MAX_DEPTH
    seed: int | None = None
    max_retries: int = MAX_RETRIES
    retry_backoff: float = RETRY_BACKOFF

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Image must be at least 2x2 pixels, got {self.width}x{self.height}"
            )
        for name in ("samples", "workers", "max_depth", "max_retries"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.retry_backoff < 0.0:
            raise ValueError(f"retry_backoff must be non-negative, got {self.retry_backoff}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class RenderJob:
    """One pixel of a row-pair.

    The linear index runs over both rows of the pair: indices [0, width)
    target slot 0 (the upper row), [width, 2 * width) target slot 1. Every
    (slot, column) of a pair belongs to exactly one job.

    Attributes:
        index: Linear job index within the pair.
        width: Image width.
        top_row: Row index of the pair's upper row (rows count from the bottom).
    """

    index: int
    width: int
    top_row: int

    @property
    def slot(self) -> int:
        return self.index // self.width

    @property
    def column(self) -> int:
        return self.index % self.width

    @property
    def row(self) -> int:
        return self.top_row - self.slot


def row_pairs(height: int) -> list[tuple[int, ...]]:
    """Split rows into pairs from the top of the image down.

    With an odd height the final pair holds only row 0.

    Example:
        >>> row_pairs(5)
        [(4, 3), (2, 1), (0,)]
    """
    return [
        tuple(row for row in (top, top - 1) if row >= 0)
        for top in range(height - 1, -1, -SLOT_COUNT)
    ]


class Scheduler:
    """Drives the row-pair parallel regions of one render.

    Attributes:
        scene: The scene, shared read-only by all workers.
        camera: The camera state, shared read-only by all workers.
        settings: Render parameters.
        buffer: The two-slot row buffer.
        streamer: Receives sealed slots.
        guard: Retry policy for buffer writes.
        seed: The run seed the per-pixel streams derive from.
    """

    def __init__(
        self,
        scene: Scene,
        camera: CameraState,
        settings: RenderSettings,
        buffer: DoubleBuffer[PixelColor],
        streamer: Streamer,
        guard: RetryGuard | None = None,
        sampler: Sampler = sample_pixel,
    ) -> None:
        if buffer.size != settings.width:
            raise ValueError(
                f"Buffer size {buffer.size} does not match image width {settings.width}"
            )
        self.scene = scene
        self.camera = camera
        self.settings = settings
        self.buffer = buffer
        self.streamer = streamer
        self.guard = guard or RetryGuard(settings.max_retries, settings.retry_backoff)
        if settings.seed is not None:
            self.seed = settings.seed
        else:
            self.seed = int(np.random.SeedSequence().entropy)
        self._sampler = sampler

        # Flush hand-off state for the current pair; guarded by _order_lock
        self._order_lock = threading.Lock()
        self._sealed: set[int] = set()
        self._next_flush = 0

    def run(self, progress: ProgressCallback | None = None) -> None:
        """Render every row-pair, top to bottom.

        Raises:
            RetriesExhaustedError: If a job's write could not be completed.
                Rows flushed before the failing pair stay written.
        """
        width, height = self.settings.width, self.settings.height
        logger.info(
            "Rendering %dx%d, %d spp, %d workers, seed %d",
            width,
            height,
            self.settings.samples,
            self.settings.workers,
            self.seed,
        )

        with ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="render"
        ) as pool:
            for rows in row_pairs(height):
                top_row = rows[0]
                if progress is not None:
                    progress(top_row + 1, height)

                self._begin_pair()
                logger.debug("Dispatching rows %s", rows)
                jobs = [RenderJob(i, width, top_row) for i in range(len(rows) * width)]
                futures = [pool.submit(self._run_job, job) for job in jobs]

                # Barrier: the next pair may reuse both slots
                wait(futures)
                for future in futures:
                    future.result()

                if self._next_flush != len(rows):
                    raise RenderError(
                        f"rows {rows} completed but only {self._next_flush} were flushed"
                    )

        if progress is not None:
            progress(0, height)
        logger.info("Render finished: %d rows written", self.streamer.rows_written)

    def _begin_pair(self) -> None:
        with self._order_lock:
            self._sealed.clear()
            self._next_flush = 0

    def _run_job(self, job: RenderJob) -> None:
        s = self.settings
        rng = pixel_rng(self.seed, job.column, job.row)
        raw = self._sampler(
            job.column,
            job.row,
            self.scene,
            self.camera,
            s.width,
            s.height,
            s.samples,
            s.max_depth,
            rng,
        )
        pixel = quantize(raw, s.samples)

        result = self.guard.run(lambda: self.buffer.try_set(job.slot, job.column, pixel))
        if result.sealed:
            self._on_sealed(job.slot)

    def _on_sealed(self, slot: int) -> None:
        # Flush every slot whose predecessors are done, in slot order.
        # _order_lock owns the row order; the Streamer lock only guards
        # channel writes made outside this path.
        with self._order_lock:
            self._sealed.add(slot)
            while self._next_flush in self._sealed:
                ready = self._next_flush
                self.streamer.flush(ready)
                self.buffer.clear(ready)
                self._sealed.discard(ready)
                self._next_flush += 1


def render(
    scene: Scene,
    camera: CameraState,
    settings: RenderSettings,
    channel: TextIO,
    progress: ProgressCallback | None = None,
    row_sink: RowSink | None = None,
) -> int:
    """Render a scene as a P3 pixel map onto channel.

    Args:
        scene: The scene to render.
        camera: The camera state from setup_camera().
        settings: Render parameters.
        channel: Text stream receiving the image.
        progress: Optional callback receiving (rows_remaining, height).
        row_sink: Optional callable receiving each flushed row, top first.

    Returns:
        The run seed, so the render can be reproduced.
    """
    write_header(channel, settings.width, settings.height)
    buffer: DoubleBuffer[PixelColor] = DoubleBuffer(settings.width)
    streamer = Streamer(buffer, channel, row_sink=row_sink)
    scheduler = Scheduler(scene, camera, settings, buffer, streamer)
    scheduler.run(progress)
    return scheduler.seed
