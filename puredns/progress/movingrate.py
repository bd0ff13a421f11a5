"""Rate of sampled elements computed with a moving average."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class MovingRateError(Exception):
    """Base error of MovingRate operations."""


class NotStartedError(MovingRateError):
    """The rate has not been started."""


class AlreadyStartedError(MovingRateError):
    """The rate has already been started."""


class StoppedError(MovingRateError):
    """The rate has been stopped."""


class AlreadyStoppedError(MovingRateError):
    """The rate has already been stopped."""


def _divide(total: float, seconds: float) -> float:
    if seconds <= 0:
        return float("inf") if total else 0.0
    return total / seconds


class MovingRate:
    """Rate of elements per second, averaged over the latest samples.

    ``sampling_rate`` is the minimum number of seconds between two samples of
    the moving average and ``samples`` the number of samples kept.
    ``clock`` returns the current time in seconds.
    """

    def __init__(
        self,
        sampling_rate: float,
        samples: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._sampling_rate = sampling_rate
        self._max_samples = samples
        self._samples: list[float] = []
        self._accum = 0.0
        self._accum_time: Optional[float] = None
        self._start: Optional[float] = None
        self._stop: Optional[float] = None
        self._total = 0.0

    def start(self) -> None:
        """Start measuring."""
        with self._lock:
            if self._start is not None:
                raise AlreadyStartedError("rate is already started")
            self._start = self._clock()

    def stop(self) -> None:
        """Stop measuring; the rate then becomes the global rate."""
        with self._lock:
            if self._start is None:
                raise NotStartedError("rate is not started")
            if self._stop is not None:
                raise AlreadyStoppedError("rate is already stopped")
            self._stop = self._clock()

    def sample(self, count: float) -> None:
        """Record ``count`` new elements.

        Counts arriving faster than the sampling rate are accumulated until
        enough time has passed to compute a rate.
        """
        with self._lock:
            if self._start is None:
                raise NotStartedError("rate is not started")
            if self._stop is not None:
                raise StoppedError("rate has been stopped")

            if self._accum_time is None:
                self._total += count
                self._samples.append(count)
                self._accum_time = self._clock()
                return

            self._accum += count
            self._total += count

            delta = self._clock() - self._accum_time
            if delta < self._sampling_rate:
                return

            self._samples.append(self._accum / delta)
            self._accum = 0.0
            if len(self._samples) > self._max_samples:
                del self._samples[0]
            self._accum_time = self._clock()

    def current(self) -> float:
        """Return the moving average, or the global rate once stopped."""
        with self._lock:
            if self._start is None:
                raise NotStartedError("rate is not started")
            if self._stop is not None:
                return _divide(self._total, self._stop - self._start)
            if not self._samples:
                return _divide(self._total, self._clock() - self._start)
            return sum(self._samples) / len(self._samples)