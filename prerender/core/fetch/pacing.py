# prerender/core/fetch/pacing.py
"""
Pacing policies protecting the rendering backend from bursts.

The orchestrator calls ``before_request()`` right before each backend call and
``after_request()`` right after it has recorded the outcome. Policies decide
where (and how long) to block.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], None]
ClockFn = Callable[[], float]


class Pacer(Protocol):
    def before_request(self) -> None: ...

    def after_request(self) -> None: ...


class FixedDelayPacer:
    """
    Sleep a fixed delay after every request, including the last one of a run.
    """

    def __init__(self, delay_s: float, *, sleep: SleepFn | None = None) -> None:
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        self.delay_s = float(delay_s)
        self._sleep = sleep or time.sleep

    def before_request(self) -> None:
        return None

    def after_request(self) -> None:
        if self.delay_s > 0:
            logger.debug("pacing: sleeping %.2fs", self.delay_s)
            self._sleep(self.delay_s)

    def __repr__(self) -> str:
        return f"FixedDelayPacer(delay_s={self.delay_s})"


class IntervalPacer:
    """
    Gate that keeps successive request starts at least ``interval_s`` apart.

    Only the missing part of the interval is waited, and nothing is waited after
    the last request.
    """

    def __init__(self, interval_s: float, *, sleep: SleepFn | None = None, clock: ClockFn | None = None) -> None:
        if interval_s < 0:
            raise ValueError("interval_s must be >= 0")
        self.interval_s = float(interval_s)
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic
        self._last_start: float | None = None

    def before_request(self) -> None:
        now = self._clock()
        if self._last_start is not None:
            wait = self._last_start + self.interval_s - now
            if wait > 0:
                logger.debug("pacing: waiting %.2fs before next request", wait)
                self._sleep(wait)
                now = self._clock()
        self._last_start = now

    def after_request(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"IntervalPacer(interval_s={self.interval_s})"
