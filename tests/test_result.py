from typing import Any, List

import pytest

from bplus_parser import (
    Failed, Failure, ParseError, Success, failure, is_failure, is_success,
    refail, remaining, success
)
from bplus_parser.core import option, result
from bplus_parser.streams import StringStream

stream = StringStream("")

DATA_OPTION: List[Any] = [
    ("a", True, "some a"),
    ("", True, "some "),
    (0, True, "some 0"),
    (None, False, "none"),
]


@pytest.mark.parametrize("value, some, expected", DATA_OPTION)
def test_option(value: Any, some: bool, expected: str) -> None:
    assert option.is_some(value) is some
    assert option.match(
        value, lambda v: "some {}".format(v), lambda: "none"
    ) == expected


def test_success() -> None:
    r = success("test", stream)
    assert is_success(r) and r.is_success()
    assert not is_failure(r) and not r.is_failure()
    assert result.match(r, lambda s: s.value, lambda f: "fail") == "test"
    assert r.match(lambda s: s.value, lambda f: "fail") == "test"
    assert r.unwrap().remaining is stream


def test_success_with_none() -> None:
    r = success(None, stream)
    assert is_success(r)
    assert result.match(r, lambda s: s.value, lambda f: "fail") is None


def test_failure() -> None:
    r = failure("test", "", stream)
    assert is_failure(r) and r.is_failure()
    assert not is_success(r) and not r.is_success()
    assert result.match(r, lambda s: "fail", lambda f: f.error) == (
        "Expected: test"
    )
    with pytest.raises(ParseError) as err:
        r.unwrap()
    assert err.value.failed is r.error
    assert str(err.value) == "Expected: test"


def test_fmap() -> None:
    assert Success(1).fmap(lambda v: v + 1).value == 2
    f = Failure("error")
    assert f.fmap(lambda v: v + 1) is f


def test_refail() -> None:
    inner = failure("digit", "EOF", stream).error
    outer = refail("number", inner).error
    assert outer.remaining is inner.remaining
    assert outer.cause is inner
    assert outer.trace == ["Expected: number", "Expected: digit (EOF)"]
    assert str(outer) == "Expected: number <- Expected: digit (EOF)"


def test_refail_same_label() -> None:
    inner = failure("digit", "EOF", stream).error
    assert refail("digit", inner).error is inner


def test_remaining() -> None:
    s = StringStream("abc")
    assert remaining(success("a", s)) is s
    assert remaining(failure("a", "", s)) is s


def test_failed_error() -> None:
    assert Failed("a", "", stream).error == "Expected: a"
    assert Failed("a", "EOF", stream).error == "Expected: a (EOF)"
