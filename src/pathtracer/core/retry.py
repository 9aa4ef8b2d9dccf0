"""Bounded retry-with-backoff around buffer writes.

A write should never legitimately hit a sealed slot when jobs are
partitioned correctly, so repeated failure means a real fault. The guard
retries a fixed number of times with a fixed pause, then raises
RetriesExhaustedError, which aborts the render.

Example:
    >>> from pathtracer.core.pingpong import DoubleBuffer
    >>> from pathtracer.core.retry import RetryGuard
    >>> buf = DoubleBuffer(4)
    >>> guard = RetryGuard(max_attempts=3, backoff=0.0)
    >>> result = guard.run(lambda: buf.try_set(0, 1, (255, 255, 255)))
    >>> result.ok
    True
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pathtracer.core.errors import BufferWriteError, RetriesExhaustedError
from pathtracer.core.pingpong import WriteResult

logger = logging.getLogger(__name__)

# =============================================================================
# Retry Policy Defaults
# =============================================================================

MAX_RETRIES = 5

# Seconds to wait between attempts
RETRY_BACKOFF = 0.01


class RetryGuard:
    """Run a write until it succeeds or the attempt budget is spent.

    Attributes:
        max_attempts: Total attempts allowed, including the first.
        backoff: Seconds to sleep after each failed attempt.
    """

    def __init__(
        self,
        max_attempts: int = MAX_RETRIES,
        backoff: float = RETRY_BACKOFF,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if backoff < 0.0:
            raise ValueError(f"backoff must be non-negative, got {backoff}")
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._sleep = sleep

    def run(self, write: Callable[[], WriteResult]) -> WriteResult:
        """Call write() until it returns an OK result.

        A rejected WriteResult, a raised BufferWriteError, or an OSError all
        count as a failed attempt. Other exceptions propagate immediately.

        Args:
            write: Zero-argument callable performing one write attempt.

        Returns:
            The first OK WriteResult.

        Raises:
            RetriesExhaustedError: After max_attempts failed attempts.
        """
        last_failure = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = write()
            except (BufferWriteError, OSError) as exc:
                last_failure = str(exc)
            else:
                if result.ok:
                    return result
                last_failure = f"{result.status.value} on slot {result.slot}"

            if attempt < self.max_attempts:
                logger.warning(
                    "Write attempt %d/%d failed (%s); retrying in %.3fs",
                    attempt,
                    self.max_attempts,
                    last_failure,
                    self.backoff,
                )
                self._sleep(self.backoff)

        logger.error("Giving up after %d attempts: %s", self.max_attempts, last_failure)
        raise RetriesExhaustedError(self.max_attempts, last_failure)
