from typing import Any, List

import pytest

from bplus_parser import (
    Parser, alt, attempt, between, create, eof, exact, failure, fmap, labeled,
    many, many1, maybe, pure, satisfy, separated, separated1, seq, skip,
    success, take
)
from bplus_parser.strings import digit, letter, number, parse

a = exact("a")
b = exact("b")
comma = exact(",")

ident = (
    (letter | exact("_")) + (letter | digit | exact("_")).many()
).fmap(lambda v: v[0] + "".join(v[1]))

ab = a + b

DATA_POSITIVE: List[Any] = [
    (pure("x"), "", "x", ""),
    (eof(), "", None, ""),
    (a, "ab", "a", "b"),
    (exact("abc"), "abcdef", "abc", "def"),
    (seq(a, b), "abc", ("a", "b"), "c"),
    (skip(a, b), "abc", "a", "c"),
    (take(a, b), "abc", "b", "c"),
    (maybe(a), "ab", "a", "b"),
    (maybe(a), "b", None, "b"),
    (maybe(a), "", None, ""),
    (many(a), "aab", ["a", "a"], "b"),
    (many(a), "b", [], "b"),
    (many(a), "", [], ""),
    (many1(a), "aab", ["a", "a"], "b"),
    (many(ab), "ababa", [("a", "b"), ("a", "b")], "a"),
    (alt(a, b), "b", "b", ""),
    (alt(exact("A"), exact("B"), exact("C")), "C", "C", ""),
    (alt(exact("a"), exact("ab")), "ab", "a", "b"),
    (alt(attempt(ab), a), "ac", "a", "c"),
    (alt(ab, exact("ac")), "ac", "ac", ""),
    (alt(ab, a), "ac", "a", "c"),
    (attempt(exact("abc")), "abcdef", "abc", "def"),
    (between(exact("("), exact(")"), a), "(a)", "a", ""),
    (separated(comma, digit), "1,2,3", ["1", "2", "3"], ""),
    (separated(comma, digit), "1,2,", ["1", "2"], ""),
    (separated(comma, digit), "", [], ""),
    (separated(comma, digit), "x", [], "x"),
    (separated1(comma, digit), "1,2,3", ["1", "2", "3"], ""),
    (separated1(comma, digit), "1", ["1"], ""),
    (fmap(digit, int), "7", 7, ""),
    (labeled(a, "letter a"), "a", "a", ""),
    (satisfy(str.isupper), "Ab", "A", "b"),
    (ident, "_a0_b.", "_a0_b", "."),
    (number, "12.3", 12.3, ""),
    (number, "+12.3", 12.3, ""),
    (number, "-12.3", -12.3, ""),
    (number, "42", 42.0, ""),
    (number, "1.", 1.0, ""),
]


@pytest.mark.parametrize("parser, data, value, rest", DATA_POSITIVE)
def test_positive(
        parser: Parser[str, Any], data: str, value: Any, rest: str) -> None:
    r = parse(parser, data)
    assert r.is_success()
    assert r.value.value == value
    assert r.value.remaining.rest == rest


DATA_NEGATIVE: List[Any] = [
    (a, "", "Expected: 'a' (EOF)", 0),
    (a, "b", "Expected: 'a' (exact value not found)", 0),
    (eof(), "a", "Expected: end of input (found 'a')", 0),
    (ab, "ac", "Expected: 'b' (exact value not found)", 1),
    (skip(a, b), "ac", "Expected: 'b' (exact value not found)", 1),
    (take(a, b), "ac", "Expected: 'b' (exact value not found)", 1),
    (many1(a), "b", "Expected: 'a' (exact value not found)", 0),
    (alt(a, b), "c", "Expected: 'a' or 'b'", 0),
    (
        alt(ab, exact("ax")), "ac",
        "Expected: 'a' 'b' or 'ax' <- "
        "Expected: 'b' (exact value not found)", 0
    ),
    (
        attempt(exact("aby")), "abc",
        "Expected: 'aby' (exact value not found)", 0
    ),
    (
        attempt(ab), "ac",
        "Expected: 'a' 'b' <- Expected: 'b' (exact value not found)", 0
    ),
    (between(exact("("), exact(")"), a), "(a", "Expected: ')' (EOF)", 2),
    (separated1(comma, digit), "", "Expected: digit (EOF)", 0),
    (satisfy(str.isupper), "a", "Expected: symbol (found 'a')", 0),
    (
        labeled(digit.many1(), "integer"), "x",
        "Expected: integer <- Expected: digit (found 'x')", 0
    ),
    (number, "x", "Expected: number <- Expected: digit (found 'x')", 0),
    (number, "-", "Expected: number <- Expected: digit (EOF)", 1),
]


@pytest.mark.parametrize("parser, data, error, pos", DATA_NEGATIVE)
def test_negative(
        parser: Parser[str, Any], data: str, error: str, pos: int) -> None:
    r = parse(parser, data)
    assert r.is_failure()
    assert str(r.error) == error
    assert r.error.remaining.pos == pos


def test_attempt_restores_position() -> None:
    r = parse(ab, "ac")
    assert r.error.remaining.rest == "c"
    r = parse(attempt(ab), "ac")
    assert r.error.remaining.rest == "ac"
    assert r.error.cause is not None
    assert r.error.cause.remaining.rest == "c"


def test_attempt_with_label() -> None:
    r = parse(attempt(ab, label="ab"), "ac")
    assert r.error.trace == [
        "Expected: ab", "Expected: 'b' (exact value not found)"
    ]
    assert r.error.remaining.pos == 0


def test_alt_prefers_first() -> None:
    first = a.fmap(lambda _: 1)
    second = a.fmap(lambda _: 2)
    assert parse(first | second, "a").unwrap().value == 1
    assert parse(second | first, "a").unwrap().value == 2


def test_alt_restarts_each_alternative() -> None:
    abc = exact("a") + exact("b") + exact("c")
    r = parse(alt(abc, exact("x")), "abd")
    assert r.error.remaining.pos == 0
    assert r.error.cause is not None
    assert r.error.cause.remaining.pos == 2
    assert parse(alt(abc, ab), "abd").unwrap().value == ("a", "b")


def test_alt_empty() -> None:
    with pytest.raises(ValueError):
        alt()


def test_label_keeps_position() -> None:
    inner = parse(ab, "ac").error
    outer = parse(labeled(ab, "pair"), "ac").error
    assert outer.remaining == inner.remaining
    assert outer.error == "Expected: pair"
    assert outer.cause == inner


def test_label_is_data() -> None:
    assert a.label == "'a'"
    assert exact("a", "letter a").label == "letter a"
    assert ab.label == "'a' 'b'"
    assert maybe(a).label == "['a']"
    assert many(a).label == "{'a'}"
    assert many1(a).label == "'a'"
    assert alt(a, b).label == "'a' or 'b'"
    assert labeled(a, "x").label == "x"
    assert separated(comma, a, label="list").label == "list"


def test_maybe_distinguishes_empty_match() -> None:
    empty_or_none = maybe(a.fmap(lambda _: ""))
    assert parse(empty_or_none, "a").unwrap().value == ""
    assert parse(empty_or_none, "b").unwrap().value is None


def test_parsers_are_reusable() -> None:
    parser = many(digit)
    r1 = parse(parser, "12")
    r2 = parse(parser, "12")
    assert r1.unwrap().value == r2.unwrap().value == ["1", "2"]


def test_create() -> None:
    def two(stream: Any) -> Any:
        taken = stream.try_take(stream.rest[:2])
        if taken is None or len(taken[0]) < 2:
            return failure("pair", "too short", stream)
        return success(taken[0], taken[1])

    parser = create("two symbols", two)
    assert parse(parser, "abc").unwrap().value == "ab"
    assert str(parse(parser, "a").error) == (
        "Expected: two symbols <- Expected: pair (too short)"
    )
    assert str(parse(parser, "").error) == "Expected: two symbols (EOF)"
    assert parser.label == "two symbols"


def test_maybe_with_none_value() -> None:
    assert parse(maybe(eof()), "").unwrap().value is None
    assert parse(maybe(a), "").unwrap().value is None
    present = maybe(eof().fmap(lambda _: True))
    assert parse(present, "").unwrap().value is True
    assert parse(present, "a").unwrap().value is None
