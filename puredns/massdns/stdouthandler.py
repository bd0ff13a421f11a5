"""Splits the massdns standard output into lines."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Callback(ABC):
    """Receives the lines of the massdns output."""

    @abstractmethod
    def callback(self, line: str) -> None:
        """Handle one line, without its line terminator."""

    @abstractmethod
    def close(self) -> None:
        """Release the resources held by the callback."""


class StdoutHandler:
    """Writable sink that sends each complete line to a callback."""

    def __init__(self, callback: Callback) -> None:
        self._callback = callback
        self._remainder = b""

    def write(self, data: bytes) -> int:
        """Send every line terminated in ``data`` to the callback.

        Empty lines are sent too. An incomplete last line is kept until the
        next write. Errors raised by the callback propagate.
        """
        buffered = self._remainder + bytes(data)
        *lines, self._remainder = buffered.split(b"\n")
        for line in lines:
            self._callback.callback(line.decode("utf-8", errors="replace"))
        return len(data)

    def close(self) -> None:
        """Close the callback."""
        self._callback.close()