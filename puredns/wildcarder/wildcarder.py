"""Filtering of wildcard subdomains out of a list of domains."""

from __future__ import annotations

import threading
from typing import Iterable, Optional

from puredns.threadpool import ThreadPool
from puredns.wildcarder.answercache import AnswerCache
from puredns.wildcarder.clientdns import DEFAULT_RESOLVERS, ClientDNS, DNSResolver
from puredns.wildcarder.detection import DetectionContext, DetectionTask
from puredns.wildcarder.dnscache import DNSCache
from puredns.wildcarder.randomsub import new_random_subdomains

_QUEUE_SIZE = 1000


class Wildcarder:
    """Filters out wildcard subdomains from a list.

    ``precache`` is an untrusted, pre-populated DNS cache, such as one built
    from massdns results, used to lower the number of queries; its answers are
    validated with the trusted ``resolver`` as needed. It can be replaced
    through the ``precache`` attribute.
    """

    def __init__(
        self,
        thread_count: int,
        test_count: int,
        resolver: Optional[DNSResolver] = None,
        precache: Optional[DNSCache] = None,
    ) -> None:
        self.thread_count = thread_count
        self.resolver: DNSResolver = (
            resolver if resolver is not None else ClientDNS(DEFAULT_RESOLVERS, 3, 100, 10)
        )
        self.precache = precache if precache is not None else DNSCache()
        self.random_subdomains = new_random_subdomains(test_count)

        self._answer_cache = AnswerCache()
        self._dns_cache = DNSCache()
        self._pool: Optional[ThreadPool] = None
        self._total_lock = threading.Lock()
        self._total = 0

    def filter(self, stream: Iterable[str]) -> tuple[list[str], list[str]]:
        """Return the domains of ``stream`` that are not wildcards, and the wildcard roots.

        ``stream`` yields one domain per line; blank lines are ignored.
        Raises RuntimeError when a filtering run is already in progress.
        """
        with self._total_lock:
            if self._pool is not None:
                raise RuntimeError(
                    "concurrent executions of filter on the same Wildcarder are not supported"
                )
            pool = ThreadPool(self.thread_count, _QUEUE_SIZE)
            self._pool = pool

        results: list[str] = []
        results_lock = threading.Lock()
        try:
            for line in stream:
                domain = line.strip()
                if not domain:
                    continue
                context = DetectionContext(
                    resolver=self.resolver,
                    wildcard_cache=self._answer_cache,
                    precache=self.precache,
                    dns_cache=self._dns_cache,
                    random_subs=self.random_subdomains,
                    query_count=len(self.random_subdomains),
                    results=results,
                    results_lock=results_lock,
                )
                pool.execute(DetectionTask(context, domain))
            pool.wait()
        finally:
            with self._total_lock:
                self._total += pool.current_count()
                pool.close()
                self._pool = None

        with results_lock:
            domains = list(results)
        return domains, self._answer_cache.roots()

    def query_count(self) -> int:
        """Return the number of DNS queries made so far to detect wildcards."""
        return self.resolver.query_count()

    def current(self) -> int:
        """Return the number of domains processed so far."""
        with self._total_lock:
            if self._pool is None:
                return self._total
            return self._total + self._pool.current_count()