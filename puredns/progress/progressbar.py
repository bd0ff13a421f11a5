"""Asynchronous progress bar refreshed by polling.

The bar calls a user function at every refresh; that function can update the
bar's counter and variables. The bar is drawn from a template in which
``{{ name }}`` placeholders are replaced by the bar's variables.
"""

from __future__ import annotations

import math
import re
import sys
import threading
import time
from typing import Any, Callable, Mapping, Optional, TextIO

from puredns.progress.movingrate import MovingRate, MovingRateError
from puredns.progress.style import Color, Style, default_style

DEFAULT_TEMPLATE = (
    "[ETA {{ eta }}] {{ bar }} {{ current }}/{{ total }} {{ rate }}/s (time: {{ time }})"
)

_BAR_WIDTH = 40
_VARIABLE = re.compile(r"{{\s*([a-zA-Z0-9\-_.]+)\s*}}")

Update = Callable[["ProgressBar"], None]


def parse_variables(text: str, variables: Mapping[Any, Any]) -> str:
    """Replace ``{{ name }}`` placeholders in ``text`` by their value.

    Placeholders whose name is not among ``variables`` are left untouched.
    """

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return _VARIABLE.sub(substitute, text)


def convert_time(seconds: float) -> tuple[int, int, int]:
    """Split a duration in seconds into hours, minutes and seconds."""
    hours = int(seconds / 3600.0)
    seconds -= hours * 3600
    minutes = int(seconds / 60.0)
    seconds -= minutes * 60
    return hours, minutes, int(seconds)


class ProgressBar:
    """A progress bar redrawn on its own thread at a fixed interval."""

    def __init__(
        self,
        update: Update,
        total: int,
        template: str = DEFAULT_TEMPLATE,
        writer: Optional[TextIO] = None,
        interval: float = 0.2,
        style: Optional[Style] = None,
    ) -> None:
        self._update_cb = update
        self._total = total
        self._template = template
        self._writer = writer
        self._interval = interval
        self._style = style if style is not None else default_style()

        self._vars: dict[Any, Any] = {}
        self._current = 0
        self._rate = MovingRate(1.0, 10)
        self._start_time: Optional[float] = None
        self._finish_time: Optional[float] = None

        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start measuring and drawing the bar."""
        if self._thread is not None:
            raise RuntimeError("progress bar is already started")
        self._rate.start()
        self._start_time = time.monotonic()
        self._done.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Draw the bar one last time and wait for the drawing thread to end."""
        if self._thread is None:
            raise RuntimeError("progress bar is not started")
        self._done.set()
        self._thread.join()

        try:
            self._rate.stop()
        except MovingRateError:
            pass

        if self._finish_time is None:
            self._finish_time = time.monotonic()

    def set(self, key: Any, value: Any) -> None:
        """Set a variable available to the template."""
        self._vars[key] = value

    def get(self, key: Any) -> Any:
        """Return a variable's value, or None when it is not set."""
        return self._vars.get(key)

    def set_current(self, current: int) -> None:
        """Move the counter forward to ``current``; lower values are ignored."""
        diff = current - self._current
        if diff <= 0:
            return
        self.increment(diff)

    def increment(self, value: int) -> None:
        """Advance the counter by ``value``."""
        try:
            self._rate.sample(float(value))
        except MovingRateError:
            pass

        self._current += value
        if self._current == self._total and self._finish_time is None:
            self._finish_time = time.monotonic()

    def current(self) -> int:
        """Return the counter's value."""
        return self._current

    def total(self) -> int:
        """Return the total the counter moves towards."""
        return self._total

    def rate(self) -> float:
        """Return the current rate in elements per second."""
        try:
            return self._rate.current()
        except MovingRateError:
            return 0.0

    def eta(self) -> tuple[int, int, int]:
        """Return the estimated time left as hours, minutes and seconds."""
        current = self._current
        total = self._total
        remaining = total - current

        if total == 0 or remaining <= 0:
            return 0, 0, 0

        rate = self.rate()
        if rate == 0.0:
            return 99, 59, 59

        return convert_time(remaining / rate)

    def time(self) -> tuple[int, int, int]:
        """Return the time elapsed since start, until stop or completion."""
        if self._start_time is None:
            return 0, 0, 0
        end = self._finish_time if self._finish_time is not None else time.monotonic()
        return convert_time(end - self._start_time)

    def render(self) -> str:
        """Return the bar drawn from its template."""
        return parse_variables(self._template, self._vars)

    @property
    def _out(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stderr

    def _loop(self) -> None:
        while True:
            last = self._done.wait(self._interval)
            self._update_cb(self)
            self._update_vars()
            out = self._out
            out.write("\r" + self.render())
            if last:
                out.write("\n")
            out.flush()
            if last:
                return

    def _update_vars(self) -> None:
        th, tm, ts = self.time()
        self.set("time", f"{th:02d}:{tm:02d}:{ts:02d}")

        self.set("rate", f"{self.rate():.0f}")

        eh, em, es = self.eta()
        self.set("eta", f"{eh:02d}:{em:02d}:{es:02d}")

        current = self._current
        total = self._total
        self.set("current", str(current))
        self.set("total", str(total))

        if total:
            percent = current / total * 100.0
        else:
            percent = math.inf if current else math.nan
        self.set("percent", f"{percent:.0f}")

        self.set("bar", self._draw_bar(percent))

    def _draw_bar(self, percent: float) -> str:
        style = self._style
        width = _BAR_WIDTH - 2
        full = sum(1 for i in range(width) if i / width * 100.0 < percent)
        empty = width - full

        parts = [
            str(style.bar_prefix_color),
            style.bar_prefix,
            str(style.bar_full_color),
            style.bar_full * full,
        ]
        if empty:
            parts.append(str(style.bar_empty_color))
            parts.append(style.bar_empty * empty)
        parts.append(str(style.bar_suffix_color))
        parts.append(style.bar_suffix)
        parts.append(str(Color.RESET))
        return "".join(parts)