from puredns.wildcarder.hashing import (
    AnswerHash,
    DNSAnswer,
    RRType,
    hash_answer,
    hash_question,
)


def test_hash_question_deterministic():
    values = {hash_question("example.com") for _ in range(5)}
    assert len(values) == 1


def test_hash_question_differs():
    assert hash_question("example.com") != hash_question("www.example.com")


def test_hash_question_is_64_bits():
    value = hash_question("example.com")
    assert 0 <= value < 2**64


def test_hash_answer_keeps_type():
    got = hash_answer(DNSAnswer(RRType.CNAME, "example.com"))
    assert got.type is RRType.CNAME


def test_hash_answer_equal_for_equal_answers():
    first = hash_answer(DNSAnswer(RRType.A, "127.0.0.1"))
    second = hash_answer(DNSAnswer(RRType.A, "127.0.0.1"))
    assert first == second
    assert len({first, second}) == 1


def test_hash_answer_type_matters():
    a = hash_answer(DNSAnswer(RRType.A, "127.0.0.1"))
    aaaa = hash_answer(DNSAnswer(RRType.AAAA, "127.0.0.1"))
    assert a.hash == aaaa.hash
    assert a != aaaa


def test_hash_answer_matches_answer_text_hash():
    got = hash_answer(DNSAnswer(RRType.A, "127.0.0.1"))
    assert got == AnswerHash(RRType.A, hash_question("127.0.0.1"))