"""Line reader that throttles the number of lines read per second.

It is handed to massdns as standard input, so that massdns approximately
respects the number of DNS queries per second wanted.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import BinaryIO, Callable, Optional

_CHUNK = 4096
_NEWLINE = b"\n"


class LineReader:
    """Reads from a binary stream while limiting the lines per second.

    A ``rate`` of zero disables the limit. ``clock`` returns the current time
    in seconds.
    """

    def __init__(
        self,
        source: BinaryIO,
        rate: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._rate = float(rate)
        self._clock = clock
        self._pending = b""
        self._eof = False
        self._start: Optional[float] = None
        self._count = 0
        self._lock = threading.Lock()

    def read(self, size: int) -> Optional[bytes]:
        """Return up to ``size`` bytes.

        Returns ``None`` when the rate limit allows no line to be sent yet,
        and ``b""`` once the source is exhausted.
        """
        if size < 1:
            raise ValueError("read size must be at least 1")

        can_send = self._can_send()
        out = bytearray()
        lines = 0

        while len(out) < size and can_send > 0:
            if not self._pending:
                if self._eof:
                    break
                chunk = self._source.read(_CHUNK)
                if not chunk:
                    self._eof = True
                    break
                self._pending = chunk

            room = size - len(out)
            newline = self._pending.find(_NEWLINE, 0, room)
            if newline < 0:
                take = min(room, len(self._pending))
            else:
                take = newline + 1
                lines += 1
                can_send -= 1

            out += self._pending[:take]
            self._pending = self._pending[take:]

        if self._rate > 0:
            time.sleep(0.1)

        with self._lock:
            self._count += lines

        if out:
            return bytes(out)
        if self._eof and not self._pending:
            return b""
        return None

    def count(self) -> int:
        """Return the number of lines read so far."""
        with self._lock:
            return self._count

    def _can_send(self) -> int:
        if self._rate == 0:
            return sys.maxsize
        if self._start is None:
            self._start = self._clock()
        delta = self._clock() - self._start
        with self._lock:
            sent = self._count
        return int(self._rate * (delta + 1)) - sent