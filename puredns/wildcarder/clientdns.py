"""DNS client used by the wildcard detection."""

from __future__ import annotations

import itertools
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, NamedTuple, Optional, Protocol, Sequence

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.rdatatype

from puredns.wildcarder.hashing import DNSAnswer, RRType

DEFAULT_RESOLVERS = ("8.8.8.8", "8.8.4.4")

_TIMEOUT = 2.0
_RETRY_RCODES = frozenset({dns.rcode.SERVFAIL, dns.rcode.REFUSED})
_KNOWN_TYPES = {int(t) for t in RRType}


class DNSResolver(ABC):
    """Resolves domain names and returns the DNS answers found."""

    @abstractmethod
    def resolve(self, domains: Sequence[str]) -> list[DNSAnswer]:
        """Return the answers of every domain, in order."""

    @abstractmethod
    def query_count(self) -> int:
        """Return the number of DNS queries performed."""


class _Record(NamedTuple):
    question: str
    type: RRType
    answer: str


class _Client(Protocol):
    def resolve(self, domains: Sequence[str], rrtype: RRType) -> Iterable[Any]:
        ...

    def query_count(self) -> int:
        ...


class _RateLimiter:
    """Spaces calls so that at most ``qps`` happen per second."""

    def __init__(self, qps: int) -> None:
        self._interval = 1.0 / qps if qps > 0 else 0.0
        self._next = 0.0
        self._lock = threading.Lock()

    def wait(self) -> None:
        if not self._interval:
            return
        with self._lock:
            now = time.monotonic()
            slot = max(now, self._next)
            self._next = slot + self._interval
        delay = slot - now
        if delay > 0:
            time.sleep(delay)


class _UDPClient:
    """Queries a list of resolvers over UDP with retries and rate limiting."""

    def __init__(self, resolvers: Sequence[str], retry_count: int, qps: int, concurrency: int) -> None:
        if not resolvers:
            raise ValueError("at least one resolver is required")
        self._servers = itertools.cycle(list(resolvers))
        self._servers_lock = threading.Lock()
        self._retry_count = max(retry_count, 0)
        self._limiter = _RateLimiter(qps)
        self._concurrency = max(concurrency, 1)
        self._queries = 0
        self._count_lock = threading.Lock()

    def resolve(self, domains: Sequence[str], rrtype: RRType) -> list[_Record]:
        if not domains:
            return []
        with ThreadPoolExecutor(max_workers=self._concurrency) as executor:
            results = executor.map(lambda d: self._resolve_one(d, rrtype), domains)
            return [record for records in results for record in records]

    def query_count(self) -> int:
        with self._count_lock:
            return self._queries

    def _next_server(self) -> str:
        with self._servers_lock:
            return next(self._servers)

    def _resolve_one(self, domain: str, rrtype: RRType) -> list[_Record]:
        for _ in range(self._retry_count + 1):
            self._limiter.wait()
            with self._count_lock:
                self._queries += 1
            query = dns.message.make_query(domain, dns.rdatatype.RdataType(int(rrtype)))
            try:
                response = dns.query.udp(query, self._next_server(), timeout=_TIMEOUT)
            except (dns.exception.DNSException, OSError):
                continue
            if response.rcode() in _RETRY_RCODES:
                continue
            return list(self._records(domain, response))
        return []

    @staticmethod
    def _records(domain: str, response: dns.message.Message) -> Iterable[_Record]:
        for rrset in response.answer:
            rdtype = int(rrset.rdtype)
            if rdtype not in _KNOWN_TYPES:
                continue
            kind = RRType(rdtype)
            for rdata in rrset:
                if kind is RRType.CNAME:
                    answer = rdata.target.to_text(omit_final_dot=True)
                else:
                    answer = rdata.address
                yield _Record(domain, kind, answer)


class ClientDNS(DNSResolver):
    """DNS client resolving A records with trusted resolvers."""

    def __init__(
        self,
        resolvers: Sequence[str] = DEFAULT_RESOLVERS,
        retry_count: int = 3,
        qps: int = 100,
        concurrency: int = 10,
        client: Optional[_Client] = None,
    ) -> None:
        self._client: _Client = (
            client if client is not None else _UDPClient(resolvers, retry_count, qps, concurrency)
        )

    def resolve(self, domains: Sequence[str]) -> list[DNSAnswer]:
        """Resolve the A records of the domains and return the answers."""
        records = self._client.resolve(list(domains), RRType.A)
        return [DNSAnswer(type=record.type, answer=record.answer) for record in records]

    def query_count(self) -> int:
        """Return the number of DNS queries really performed."""
        return self._client.query_count()