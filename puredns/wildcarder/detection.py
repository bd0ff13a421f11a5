"""Detection of wildcard subdomains, one domain at a time."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from puredns.threadpool import Runnable
from puredns.wildcarder.answercache import AnswerCache
from puredns.wildcarder.clientdns import DNSResolver
from puredns.wildcarder.dnscache import DNSCache
from puredns.wildcarder.hashing import AnswerHash


@dataclass
class DetectionContext:
    """State shared between the detection tasks of a filtering run."""

    resolver: DNSResolver
    wildcard_cache: AnswerCache
    precache: DNSCache
    dns_cache: DNSCache
    random_subs: Sequence[str]
    query_count: int
    results: list[str] = field(default_factory=list)
    results_lock: threading.Lock = field(default_factory=threading.Lock)


def get_parent(domain: str) -> str:
    """Return the parent of a subdomain, or "" when the parent is a TLD."""
    if domain.count(".") <= 1:
        return ""
    return domain.split(".", 1)[1]


def answer_match(first: Iterable[AnswerHash], second: Iterable[AnswerHash]) -> bool:
    """Return True when the two sets of answers share at least one answer."""
    return not set(first).isdisjoint(second)


def append_unique(items: Iterable[AnswerHash], *args: AnswerHash) -> list[AnswerHash]:
    """Return ``items`` followed by the answers of ``args`` not already present."""
    result = list(items)
    for answer in args:
        if answer not in result:
            result.append(answer)
    return result


def _or_empty(answers: Optional[list[AnswerHash]]) -> list[AnswerHash]:
    return answers if answers is not None else []


class DetectionTask(Runnable):
    """Decides whether one domain is a wildcard, recording it when it is not."""

    def __init__(self, context: DetectionContext, domain: str) -> None:
        self.context = context
        self.domain = domain

    def run(self) -> None:
        """Detect the wildcard and add the domain to the results if it is valid."""
        ctx = self.context
        domain = self.domain

        # The precache may already tell us the domain is a wildcard
        if self.check_precache(domain):
            return

        root = self.test_wildcard(domain)
        if not root:
            self._add_domain(domain)
            return

        # The wildcard cache is now filled, the precache may suffice
        if self.check_precache(domain):
            return

        if self.check_resolve(domain):
            ctx.wildcard_cache.add_hashes(root, _or_empty(ctx.precache.find(domain)))
            return

        self._add_domain(domain)

    def check_precache(self, domain: str) -> bool:
        """Return True when the precached answers match a known wildcard."""
        answers = _or_empty(self.context.precache.find(domain))
        return self.domain_is_wildcard(domain, answers)

    def test_wildcard(self, domain: str) -> str:
        """Return the wildcard root of the domain's level, or "" without one.

        The wildcard cache is filled with the answers of the root found.
        """
        answers = self.resolve_random_subdomains(domain)
        if not answers:
            return ""

        root, answers = self.find_wildcard_root(domain, answers)
        self.context.wildcard_cache.add_hashes(root, answers)
        return root

    def find_wildcard_root(
        self, domain: str, answers: Sequence[AnswerHash]
    ) -> tuple[str, list[AnswerHash]]:
        """Walk up the parents while they are wildcards, accumulating their answers."""
        answers = list(answers)
        while True:
            parent = get_parent(domain)
            if not parent:
                return domain, answers

            parent_answers = self.resolve_with_cache(parent)
            random_answers = self.resolve_random_subdomains(parent)

            if not answer_match(parent_answers, random_answers):
                return parent, answers

            answers = append_unique(answers, *parent_answers)
            answers = append_unique(answers, *random_answers)
            domain = parent

    def check_resolve(self, domain: str) -> bool:
        """Resolve the domain with trusted resolvers and match it against wildcards."""
        return self.domain_is_wildcard(domain, self.resolve_with_cache(domain))

    def resolve_random_subdomains(self, subdomain: str) -> list[AnswerHash]:
        """Resolve random names at the domain's level and return their answers.

        Several names are resolved to gather the answers of DNS load balancing.
        """
        ctx = self.context
        names = self.make_test_subdomains(subdomain)
        if not names:
            return []

        first_name = names[0]
        cached = ctx.dns_cache.find(first_name)
        if cached is not None:
            return cached

        first = ctx.resolver.resolve(names[:1])
        ctx.dns_cache.add(first_name, first)
        if not first:
            return []

        rest = ctx.resolver.resolve(names[1:])
        ctx.dns_cache.add(first_name, rest)

        return _or_empty(ctx.dns_cache.find(first_name))

    def make_test_subdomains(self, domain: str) -> list[str]:
        """Return names under the domain's parent that should not exist."""
        parent = get_parent(domain)
        if not parent:
            return []
        return [f"{sub}.{parent}" for sub in self.context.random_subs]

    def domain_is_wildcard(self, domain: str, answers: Iterable[AnswerHash]) -> bool:
        """Return True when the answers belong to a wildcard root of the domain."""
        roots = self.context.wildcard_cache.find_hashes(answers)
        return any(domain.endswith(root) for root in roots)

    def resolve_with_cache(self, domain: str) -> list[AnswerHash]:
        """Return the domain's answers, resolving it several times if not cached."""
        ctx = self.context
        cached = ctx.dns_cache.find(domain)
        if cached is not None:
            return cached

        first = ctx.resolver.resolve([domain])
        ctx.dns_cache.add(domain, first)
        if not first:
            return []

        for _ in range(1, ctx.query_count):
            ctx.dns_cache.add(domain, ctx.resolver.resolve([domain]))

        return _or_empty(ctx.dns_cache.find(domain))

    def _add_domain(self, domain: str) -> None:
        with self.context.results_lock:
            self.context.results.append(domain)