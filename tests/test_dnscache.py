import pytest

from puredns.wildcarder.dnscache import DNSCache
from puredns.wildcarder.hashing import DNSAnswer, RRType, hash_answer


def _sorted(hashes):
    return sorted(hashes, key=lambda h: (h.type, h.hash))


def test_add():
    answer_a = [DNSAnswer(RRType.A, "127.0.0.1")]
    answer_b = [
        DNSAnswer(RRType.A, "127.0.0.1"),
        DNSAnswer(RRType.AAAA, "::1"),
        DNSAnswer(RRType.CNAME, "test"),
        DNSAnswer(RRType.A, "127.0.0.1"),
    ]

    cache = DNSCache()

    cache.add("question", answer_a)
    assert cache.find("question") == [hash_answer(answer_a[0])]

    cache.add("question", answer_b)
    want = [hash_answer(answer_a[0]), hash_answer(answer_b[1]), hash_answer(answer_b[2])]
    assert _sorted(cache.find("question")) == _sorted(want)


def test_add_different_question():
    answer_a = [DNSAnswer(RRType.A, "127.0.0.1")]
    answer_b = [DNSAnswer(RRType.AAAA, "::1")]

    cache = DNSCache()
    cache.add("question 1", answer_a)
    cache.add("question 2", answer_b)

    assert cache.find("question 1") == [hash_answer(answer_a[0])]
    assert cache.find("question 2") == [hash_answer(answer_b[0])]


_ANSWERS = [
    DNSAnswer(RRType.A, "127.0.0.1"),
    DNSAnswer(RRType.AAAA, "::1"),
    DNSAnswer(RRType.CNAME, "test"),
]


@pytest.mark.parametrize(
    "answers, question, want",
    [
        pytest.param(_ANSWERS, "question", [hash_answer(a) for a in _ANSWERS], id="existing question"),
        pytest.param([], "question", [], id="existing question without answers"),
        pytest.param(_ANSWERS, "invalid", None, id="inexistent question"),
    ],
)
def test_find(answers, question, want):
    cache = DNSCache()
    cache.add("question", answers)

    got = cache.find(question)

    if want is None:
        assert got is None
    else:
        assert _sorted(got) == _sorted(want)


def test_find_returns_copy():
    cache = DNSCache()
    cache.add("question", [DNSAnswer(RRType.A, "127.0.0.1")])

    got = cache.find("question")
    got.clear()

    assert len(cache.find("question")) == 1