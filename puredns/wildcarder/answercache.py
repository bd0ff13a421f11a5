"""Cache associating wildcard DNS answers with their root domains."""

from __future__ import annotations

import threading
from typing import Iterable

from puredns.wildcarder.hashing import AnswerHash, DNSAnswer, hash_answer


class AnswerCache:
    """Thread-safe mapping from DNS answers to the wildcard roots giving them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[AnswerHash, list[str]] = {}

    def add(self, root: str, answers: Iterable[DNSAnswer]) -> None:
        """Associate a root domain with DNS answers."""
        self.add_hashes(root, [hash_answer(answer) for answer in answers])

    def add_hashes(self, root: str, hashes: Iterable[AnswerHash]) -> None:
        """Associate a root domain with DNS answer hashes."""
        with self._lock:
            for answer in hashes:
                roots = self._cache.setdefault(answer, [])
                if root not in roots:
                    roots.append(root)

    def find(self, answers: Iterable[DNSAnswer]) -> list[str]:
        """Return the roots associated with the first known answer."""
        return self.find_hashes([hash_answer(answer) for answer in answers])

    def find_hashes(self, hashes: Iterable[AnswerHash]) -> list[str]:
        """Return the roots associated with the first known answer hash."""
        with self._lock:
            for answer in hashes:
                roots = self._cache.get(answer)
                if roots is not None:
                    return list(roots)
        return []

    def count(self) -> int:
        """Return the number of answer-root associations."""
        with self._lock:
            return sum(len(roots) for roots in self._cache.values())

    def roots(self) -> list[str]:
        """Return every distinct root domain in the cache."""
        with self._lock:
            return list(dict.fromkeys(root for roots in self._cache.values() for root in roots))