"""Saves the valid results found in the massdns output to files."""

from __future__ import annotations

import os
from enum import Enum, auto
from typing import Optional, TextIO

from puredns.massdns.stdouthandler import Callback

_VALID_TYPES = frozenset({"A", "AAAA", "CNAME"})


class _State(Enum):
    NEW_ANSWER_SECTION = auto()
    SAVE_ANSWER = auto()
    SKIP = auto()


def _open(filename: str) -> Optional[TextIO]:
    if not filename:
        return None
    return open(filename, "w", encoding="utf-8")


def _close(handle: Optional[TextIO]) -> None:
    if handle is None or handle.closed:
        return
    handle.flush()
    os.fsync(handle.fileno())
    handle.close()


class DefaultWriteCallback(Callback):
    """Parses ``massdns -o Snl`` output lines and saves the valid results.

    The valid domains found go to ``domain_filename`` and the records that
    made them valid to ``massdns_filename``. An empty file name disables
    saving to that file.
    """

    def __init__(self, massdns_filename: str = "", domain_filename: str = "") -> None:
        self._massdns_file = _open(massdns_filename)
        try:
            self._domain_file = _open(domain_filename)
        except OSError:
            _close(self._massdns_file)
            raise

        self._state = _State.NEW_ANSWER_SECTION
        self._domain = ""
        self._domain_saved = False
        self._found = 0

    def callback(self, line: str) -> None:
        """Parse one line of massdns output and save what is relevant."""
        if self._domain_file is None and self._massdns_file is None:
            return

        # An empty line starts a new answer section
        if line == "":
            self._state = _State.NEW_ANSWER_SECTION
            return

        if self._state is _State.SKIP:
            return

        parts = line.split(" ")
        if len(parts) != 3:
            self._state = _State.SKIP
            return

        if self._state is _State.NEW_ANSWER_SECTION:
            domain = parts[0].removesuffix(".")
            if not domain:
                self._state = _State.SKIP
                return
            self._domain = domain
            self._state = _State.SAVE_ANSWER
            self._domain_saved = False

        rr_type = parts[1]
        answer = parts[2].removesuffix(".")

        if rr_type not in _VALID_TYPES:
            return

        if not self._domain_saved:
            self._write(self._domain_file, self._domain)
            self._domain_saved = True
            self._found += 1

        self._write(self._massdns_file, f"{self._domain} {rr_type} {answer}")

    def found(self) -> int:
        """Return the number of valid domains found."""
        return self._found

    def close(self) -> None:
        """Flush and close the output files."""
        _close(self._massdns_file)
        _close(self._domain_file)

    def __enter__(self) -> DefaultWriteCallback:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @staticmethod
    def _write(handle: Optional[TextIO], text: str) -> None:
        if handle is not None:
            handle.write(text + "\n")