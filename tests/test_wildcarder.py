import io

from puredns.wildcarder.clientdns import DNSResolver
from puredns.wildcarder.dnscache import DNSCache
from puredns.wildcarder.hashing import DNSAnswer, RRType
from puredns.wildcarder.wildcarder import Wildcarder


class FakeResolver(DNSResolver):
    def __init__(self):
        self.records = {}
        self.queries = 0
        self.hook = None

    def add_answer(self, query, answers):
        self.records.setdefault(query, []).extend(answers)

    def resolve(self, domains):
        hook, self.hook = self.hook, None
        if hook is not None:
            hook()
        answers = []
        for domain in domains:
            answers.extend(self.records.get(domain, []))
            self.queries += 1
        return answers

    def query_count(self):
        return self.queries


def a(answer):
    return [DNSAnswer(type=RRType.A, answer=answer)]


def make(resolver, precache=None):
    wc = Wildcarder(1, 1, resolver=resolver, precache=precache)
    wc.random_subdomains[:] = ["random"] * len(wc.random_subdomains)
    return wc


def test_new_generates_random_subdomains():
    wc = Wildcarder(1, 3)
    assert len(wc.random_subdomains) == 3
    assert wc.current() == 0


def test_filter_empty_domain():
    wc = make(FakeResolver())
    domains, roots = wc.filter(io.StringIO("     \n\n"))
    assert domains == []
    assert roots == []


def test_filter_concurrent_raises():
    resolver = FakeResolver()
    wc = make(resolver)
    errors = []

    def reenter():
        try:
            wc.filter(io.StringIO("x.test.com"))
        except RuntimeError as exc:
            errors.append(exc)

    resolver.hook = reenter
    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert len(errors) == 1
    assert domains == ["www.test.com"]
    assert roots == []
    assert wc.current() == 1


def test_current_after_filter():
    wc = make(FakeResolver())
    wc.filter(io.StringIO("test.com"))
    assert wc.current() == 1


def test_current_while_filtering():
    resolver = FakeResolver()
    wc = make(resolver)
    wc.filter(io.StringIO("test.com"))
    seen = []
    resolver.hook = lambda: seen.append(wc.current())
    wc.filter(io.StringIO("www.test.com"))
    assert seen == [1]
    assert wc.current() == 2


def test_set_precache():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("www.test.com", a("192.168.0.5"))
    resolver.add_answer("random.test.com", a("192.168.0.5"))
    precache = DNSCache()
    precache.add("www.test.com", a("192.168.0.5"))

    wc = make(resolver)
    assert wc.precache is not precache
    wc.precache = precache
    assert wc.precache is precache

    wc.filter(io.StringIO("www.test.com"))
    assert wc.query_count() == 2


def test_filter_not_wildcard():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("www.test.com", a("192.168.0.5"))
    resolver.add_answer("random.test.com", [])
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("test.com"))
    assert domains == ["test.com"]
    assert roots == []


def test_filter_simple_wildcard():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("www.test.com", a("192.168.0.5"))
    resolver.add_answer("random.test.com", a("192.168.0.5"))
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]


def test_filter_simple_wildcard_cname():
    cname = [DNSAnswer(type=RRType.CNAME, answer="example.com")]
    resolver = FakeResolver()
    resolver.add_answer("test.com", cname)
    resolver.add_answer("www.test.com", cname)
    resolver.add_answer("random.test.com", cname)
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]


def test_filter_multilevel_wildcard():
    resolver = FakeResolver()
    for name in (
        "test.com",
        "api.test.com",
        "www.api.test.com",
        "random.api.test.com",
        "store.www.api.test.com",
        "random.www.api.test.com",
    ):
        resolver.add_answer(name, a("192.168.0.5"))
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("store.www.api.test.com"))
    assert domains == []
    assert roots == ["api.test.com"]


def test_filter_multilevel_not_wildcard():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("api.test.com", a("192.168.0.5"))
    resolver.add_answer("www.api.test.com", a("192.168.0.5"))
    resolver.add_answer("random.api.test.com", a("192.168.0.5"))
    resolver.add_answer("store.www.api.test.com", a("192.168.0.1"))
    resolver.add_answer("random.www.api.test.com", a("192.168.0.5"))
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("store.www.api.test.com"))
    assert domains == ["store.www.api.test.com"]
    assert roots == ["api.test.com"]


def test_filter_multilevel_multiple_wildcards():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("api.test.com", a("192.168.0.5"))
    resolver.add_answer("www.api.test.com", a("192.168.0.13"))
    resolver.add_answer("random.api.test.com", a("192.168.0.13"))
    resolver.add_answer("store.www.api.test.com", a("192.168.0.14"))
    resolver.add_answer("random.www.api.test.com", a("192.168.0.14"))
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("store.www.api.test.com"))
    assert domains == []
    assert roots == ["api.test.com"]


def test_filter_wildcard_parent_same_wildcard():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("random.test.com", a("192.168.0.5"))
    resolver.add_answer("custom.test.com", a("127.0.0.1"))
    resolver.add_answer("store.custom.test.com", a("192.168.0.5"))
    resolver.add_answer("random.custom.test.com", a("192.168.0.5"))
    wc = make(resolver)
    domains, roots = wc.filter(io.StringIO("store.custom.test.com"))
    assert domains == []
    assert roots == ["custom.test.com"]


def _simple_wildcard_resolver():
    resolver = FakeResolver()
    resolver.add_answer("test.com", a("192.168.0.5"))
    resolver.add_answer("www.test.com", a("192.168.0.5"))
    resolver.add_answer("random.test.com", a("192.168.0.5"))
    return resolver


def test_filter_simple_wildcard_with_precache():
    precache = DNSCache()
    precache.add("www.test.com", a("192.168.0.5"))
    wc = make(_simple_wildcard_resolver(), precache=precache)

    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]
    assert wc.query_count() == len(wc.random_subdomains) * 2

    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]
    assert wc.query_count() == len(wc.random_subdomains) * 2


def test_filter_simple_wildcard_with_bad_precache():
    precache = DNSCache()
    precache.add("www.test.com", a("127.0.1.1"))
    wc = make(_simple_wildcard_resolver(), precache=precache)

    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]
    assert wc.query_count() == len(wc.random_subdomains) * 2 + 1

    domains, roots = wc.filter(io.StringIO("www.test.com"))
    assert domains == []
    assert roots == ["test.com"]
    assert wc.query_count() == len(wc.random_subdomains) * 2 + 1