"""Runs the massdns binary."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from typing import IO, Any

_CHUNK = 4096


class Runner(ABC):
    """Runs the commands required to execute massdns."""

    @abstractmethod
    def run(self, reader: Any, output: str, resolvers: str, qps: int) -> None:
        """Resolve the domains read from ``reader`` and save them to ``output``."""


class DefaultRunner(Runner):
    """Starts the massdns program and feeds it the domains to resolve."""

    def __init__(self, bin_path: str) -> None:
        self.bin_path = bin_path

    def run(self, reader: Any, output: str, resolvers: str, qps: int) -> None:
        """Run massdns with ``reader`` as its standard input and wait for it.

        ``reader.read(size)`` must return bytes, ``b""`` at the end of data,
        or ``None`` when no data is available yet. Raises
        ``subprocess.CalledProcessError`` when massdns fails.
        """
        command = [self.bin_path, *self.create_args(output, resolvers, qps)]

        with subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        ) as proc:
            assert proc.stdin is not None
            try:
                self._feed(reader, proc.stdin)
            finally:
                try:
                    proc.stdin.close()
                except BrokenPipeError:
                    pass
            returncode = proc.wait()

        if returncode != 0:
            raise subprocess.CalledProcessError(returncode, command)

    def create_args(self, output: str, resolvers: str, qps: int) -> list[str]:
        """Return the massdns command-line arguments."""
        args = [
            "-q",
            "-r", resolvers,
            "-o", "Snl",
            "-t", "A",
            "--retry", "REFUSED",
            "--retry", "SERVFAIL",
            "-w", output,
        ]
        # Size the hashmap to keep massdns from accumulating queries on start
        if qps > 0:
            args += ["-s", str(qps)]
        return args

    @staticmethod
    def _feed(reader: Any, stdin: IO[bytes]) -> None:
        while True:
            chunk = reader.read(_CHUNK)
            if chunk is None:
                continue
            if not chunk:
                return
            try:
                stdin.write(chunk)
                stdin.flush()
            except BrokenPipeError:
                return