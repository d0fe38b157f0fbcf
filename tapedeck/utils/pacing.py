"""Request pacing for rate-limited catalog calls.

The upstream catalogs enforce per-credential limits without publishing
them, so searches are spaced by a fixed delay. ``FixedDelayPacer`` is a
small object so a token bucket can replace it once the real limit is known.
"""

from __future__ import annotations
import time
from typing import Callable


class FixedDelayPacer:
    """Sleep a fixed delay between consecutive calls.

    The first ``wait()`` after construction (or ``reset()``) returns
    immediately; every later one sleeps ``delay_seconds``.
    """

    def __init__(self, delay_seconds: float = 0.2, sleep: Callable[[float], None] = time.sleep):
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._calls = 0

    def reset(self) -> None:
        self._calls = 0

    def wait(self) -> None:
        if self._calls and self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
        self._calls += 1


__all__ = ["FixedDelayPacer"]
