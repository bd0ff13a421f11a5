"""Cache of DNS questions and their answers.

Wildcard detection operates on the DNS records of the target domains and can
use a pre-populated cache, built from massdns results, to lower the number of
DNS queries made.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional

from puredns.wildcarder.hashing import AnswerHash, DNSAnswer, hash_answer, hash_question


class DNSCache:
    """Thread-safe cache mapping DNS questions to their unique answers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[int, list[AnswerHash]] = {}

    def add(self, question: str, answers: Iterable[DNSAnswer]) -> None:
        """Add answers to a question, skipping those already known."""
        with self._lock:
            known = self._cache.setdefault(hash_question(question), [])
            for answer in answers:
                answer_hash = hash_answer(answer)
                if answer_hash not in known:
                    known.append(answer_hash)

    def find(self, question: str) -> Optional[list[AnswerHash]]:
        """Return the answers of a question.

        The list is empty when the question is cached without answers, and
        ``None`` is returned when the question is not cached.
        """
        with self._lock:
            answers = self._cache.get(hash_question(question))
            return None if answers is None else list(answers)