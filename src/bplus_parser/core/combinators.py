from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .option import match
from .parser import (
    ParseFn, ParseResult, consumed, failure, refail, success
)
from .result import Failure, Success
from .stream import Stream
from .types import Failed, Parsed

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

MergeFn = Callable[[A, B], C]


def leaf(
        label: str,
        fn: Callable[[Stream[T]], ParseResult[T, A]]) -> ParseFn[T, A]:
    def leaf(stream: Stream[T]) -> ParseResult[T, A]:
        if stream.eof():
            return failure(label, "EOF", stream)
        r = fn(stream)
        if type(r) is Failure:
            return refail(label, r.error)
        return r

    return leaf


def pure(x: A) -> ParseFn[object, A]:
    def pure(stream: Stream[object]) -> ParseResult[object, A]:
        return success(x, stream)

    return pure


def eof(label: str) -> ParseFn[object, None]:
    def eof(stream: Stream[object]) -> ParseResult[object, None]:
        if stream.eof():
            return success(None, stream)
        return failure(label, "found {!r}".format(stream.value), stream)

    return eof


def exact(label: str, x: T) -> ParseFn[T, T]:
    def exact(stream: Stream[T]) -> ParseResult[T, T]:
        return match(
            stream.try_take(x),
            lambda taken: success(taken[0], taken[1]),
            lambda: failure(label, "exact value not found", stream)
        )

    return leaf(label, exact)


def satisfy(label: str, test: Callable[[T], bool]) -> ParseFn[T, T]:
    def satisfy(stream: Stream[T]) -> ParseResult[T, T]:
        t = stream.value
        if test(t):
            taken = stream.try_take(t)
            if taken is not None:
                return success(taken[0], taken[1])
        return failure(label, "found {!r}".format(t), stream)

    return leaf(label, satisfy)


def fmap(parse_fn: ParseFn[T, A], fn: Callable[[A], B]) -> ParseFn[T, B]:
    def fmap(stream: Stream[T]) -> ParseResult[T, B]:
        r = parse_fn(stream)
        if type(r) is Success:
            return success(fn(r.value.value), r.value.remaining)
        return r

    return fmap


def _seq(
        parse_fn: ParseFn[T, A], second_fn: ParseFn[T, B],
        merge: MergeFn[A, B, C]) -> ParseFn[T, C]:
    def seq(stream: Stream[T]) -> ParseResult[T, C]:
        ra = parse_fn(stream)
        if type(ra) is Failure:
            return ra
        rb = second_fn(ra.value.remaining)
        if type(rb) is Failure:
            return rb
        return success(
            merge(ra.value.value, rb.value.value), rb.value.remaining
        )

    return seq


def seq(
        parse_fn: ParseFn[T, A],
        second_fn: ParseFn[T, B]) -> ParseFn[T, Tuple[A, B]]:
    return _seq(parse_fn, second_fn, lambda l, r: (l, r))


def skip(parse_fn: ParseFn[T, A], second_fn: ParseFn[T, B]) -> ParseFn[T, A]:
    return _seq(parse_fn, second_fn, lambda l, _: l)


def take(parse_fn: ParseFn[T, A], second_fn: ParseFn[T, B]) -> ParseFn[T, B]:
    return _seq(parse_fn, second_fn, lambda _, r: r)


def maybe(parse_fn: ParseFn[T, A]) -> ParseFn[T, Optional[A]]:
    def maybe(stream: Stream[T]) -> ParseResult[T, Optional[A]]:
        r = parse_fn(stream)
        if type(r) is Success:
            return r
        return success(None, stream)

    return maybe


def _many(
        parse_fn: ParseFn[T, A], stream: Stream[T],
        value: List[A]) -> Parsed[T, List[A]]:
    r = parse_fn(stream)
    while type(r) is Success:
        if not consumed(r.value, stream):
            raise RuntimeError("parser shouldn't accept empty input")
        value.append(r.value.value)
        stream = r.value.remaining
        r = parse_fn(stream)
    return Parsed(value, stream)


def many(parse_fn: ParseFn[T, A]) -> ParseFn[T, List[A]]:
    def many(stream: Stream[T]) -> ParseResult[T, List[A]]:
        return Success(_many(parse_fn, stream, []))

    return many


def many1(label: str, parse_fn: ParseFn[T, A]) -> ParseFn[T, List[A]]:
    def many1(stream: Stream[T]) -> ParseResult[T, List[A]]:
        r = parse_fn(stream)
        if type(r) is Failure:
            return refail(label, r.error)
        if not consumed(r.value, stream):
            raise RuntimeError("parser shouldn't accept empty input")
        return Success(_many(parse_fn, r.value.remaining, [r.value.value]))

    return many1


def attempt(label: str, parse_fn: ParseFn[T, A]) -> ParseFn[T, A]:
    def attempt(stream: Stream[T]) -> ParseResult[T, A]:
        r = parse_fn(stream)
        if type(r) is Success:
            return r
        inner = r.error
        if inner.label == label:
            return failure(label, inner.message, stream, inner.cause)
        return failure(label, "", stream, inner)

    return attempt


def alt(
        label: str,
        parse_fns: Sequence[ParseFn[T, A]]) -> ParseFn[T, A]:
    def alt(stream: Stream[T]) -> ParseResult[T, A]:
        cause: Optional[Failed[T]] = None
        for parse_fn in parse_fns:
            r = parse_fn(stream)
            if type(r) is Success:
                return r
            if cause is None and consumed(r.error, stream):
                cause = r.error
        return failure(label, "", stream, cause)

    return alt


def label(parse_fn: ParseFn[T, A], x: str) -> ParseFn[T, A]:
    def label(stream: Stream[T]) -> ParseResult[T, A]:
        r = parse_fn(stream)
        if type(r) is Failure:
            return refail(x, r.error)
        return r

    return label


def debug(
        parse_fn: ParseFn[T, A],
        on_success: Callable[[A, Stream[T]], object],
        on_failure: Callable[[str, Stream[T]], object]) -> ParseFn[T, A]:
    def debug(stream: Stream[T]) -> ParseResult[T, A]:
        r = parse_fn(stream)
        if type(r) is Success:
            on_success(r.value.value, r.value.remaining)
        else:
            on_failure(r.error.error, r.error.remaining)
        return r

    return debug
