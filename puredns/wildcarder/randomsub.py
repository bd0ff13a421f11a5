"""Random subdomain labels used to probe for wildcards."""

from __future__ import annotations

import random
import string

_LETTERS = string.ascii_lowercase + "1234567890"
_LENGTH = 16

_rng = random.SystemRandom()


def new_random_subdomains(count: int) -> list[str]:
    """Return ``count`` random labels that should not exist in DNS."""
    return ["".join(_rng.choices(_LETTERS, k=_LENGTH)) for _ in range(count)]