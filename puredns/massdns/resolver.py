"""Resolves batches of domain names with massdns."""

from __future__ import annotations

from typing import BinaryIO, Optional

from puredns.massdns.linereader import LineReader
from puredns.massdns.runner import DefaultRunner, Runner


class Resolver:
    """Uses massdns to resolve a batch of domain names."""

    def __init__(self, bin_path: str = "massdns", runner: Optional[Runner] = None) -> None:
        self._runner = runner if runner is not None else DefaultRunner(bin_path)
        self._reader: Optional[LineReader] = None

    def resolve(self, reader: BinaryIO, output: str, resolvers_file: str, qps: int) -> None:
        """Resolve the domains read from ``reader`` and save the answers to ``output``.

        ``qps`` limits the queries per second; zero means no limit.
        """
        self._reader = LineReader(reader, qps)
        self._runner.run(self._reader, output, resolvers_file, qps)

    def current(self) -> int:
        """Return the number of domains processed so far."""
        if self._reader is None:
            return 0
        return self._reader.count()