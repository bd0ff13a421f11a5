"""A reader that produces its data on demand from a callback."""

from __future__ import annotations

from typing import Callable, Optional

DataCallback = Callable[[int], Optional[bytes]]


class ProcReader:
    """Binary reader whose content is generated by a callback.

    The callback receives a hint of how many bytes are wanted and returns a
    chunk of bytes, or ``None`` once no data is left. Chunks larger than what
    a read asks for are buffered for the following reads.
    """

    def __init__(self, callback: DataCallback) -> None:
        self._callback = callback
        self._remainder = b""
        self._exhausted = False

    def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes; an empty result means end of data."""
        if size < 1:
            raise ValueError("read size must be at least 1")

        chunks: list[bytes] = []
        written = 0

        while written < size:
            if self._remainder:
                data = self._remainder
                self._remainder = b""
            elif self._exhausted:
                break
            else:
                produced = self._callback(size - written)
                if produced is None:
                    self._exhausted = True
                    break
                data = produced

            wanted = size - written
            taken = data[:wanted]
            chunks.append(taken)
            written += len(taken)

            if len(taken) < len(data):
                self._remainder = data[len(taken):]
                break

        return b"".join(chunks)