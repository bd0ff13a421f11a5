"""Hashing of DNS questions and answers stored in the caches."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from enum import IntEnum

_KEY = secrets.token_bytes(16)


class RRType(IntEnum):
    """DNS resource record types handled by the wildcard detection."""

    A = 1
    CNAME = 5
    AAAA = 28


@dataclass(frozen=True)
class DNSAnswer:
    """A DNS answer without its question."""

    type: RRType
    answer: str


@dataclass(frozen=True)
class AnswerHash:
    """Hashed form of a DNS answer, keeping its record type."""

    type: RRType
    hash: int


def _hash64(text: str) -> int:
    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8, key=_KEY).digest()
    return int.from_bytes(digest, "little")


def hash_question(question: str) -> int:
    """Return the 64-bit hash of a DNS question, seeded per process."""
    return _hash64(question)


def hash_answer(answer: DNSAnswer) -> AnswerHash:
    """Return the hash of a DNS answer."""
    return AnswerHash(type=answer.type, hash=_hash64(answer.answer))