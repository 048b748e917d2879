"""
Parser combinators.
"""

import logging
from dataclasses import dataclass
from typing import (
    Any, Callable, Generic, List, Optional, Tuple, TypeVar, Union
)

from .core import combinators
from .core.parser import ParseFn, ParseResult
from .core.stream import Stream

T = TypeVar("T")
A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)
B = TypeVar("B")
C = TypeVar("C")

log = logging.getLogger("bplus_parser")


class Parser(Generic[T, A_co]):
    """
    Labeled parsing function.

    The label is used only to describe failures. Parsers never change after
    construction, every combinator returns a new parser.
    """

    __slots__ = "label", "parse_fn"

    def __init__(self, label: str, parse_fn: ParseFn[T, A_co]):
        self.label = label
        self.parse_fn = parse_fn

    def __repr__(self) -> str:
        return "<{} {}>".format(type(self).__name__, self.label)

    def parse(self, stream: Stream[T]) -> ParseResult[T, A_co]:
        """
        Parses input.

        >>> from bplus_parser.streams import StringStream

        >>> r = exact("a").parse(StringStream("ab"))
        >>> r.unwrap().value
        'a'
        >>> r.unwrap().remaining.rest
        'b'

        :param stream: Input to parse
        """

        return self.parse_fn(stream)

    def combine(self) -> "Builder[T, A_co]":
        """
        Starts a :class:`Builder` chain with this parser.
        """

        return Builder(self)

    def fmap(self, fn: Callable[[A_co], B]) -> "Parser[T, B]":
        """
        Transforms the result of the parser by applying ``fn`` to it.

        >>> from bplus_parser.strings import digit, parse

        >>> parse(digit.fmap(int), "7").unwrap().value
        7

        :param fn: Function to produce new value from the result of the parser
        """

        return fmap(self, fn)

    def __add__(self, other: "Parser[T, B]") -> "Parser[T, Tuple[A_co, B]]":
        """
        Applies two parsers sequentially and returns a tuple of their results.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a") + exact("b"), "ab").unwrap().value
        ('a', 'b')
        >>> print(parse(exact("a") + exact("b"), "ac").error)
        Expected: 'b' (exact value not found)

        :param other: Second parser
        """

        return seq(self, other)

    def __lshift__(self, other: "Parser[T, B]") -> "Parser[T, A_co]":
        """
        Applies two parsers sequentially and returns the result of the first
        parser.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a") << exact("b"), "ab").unwrap().value
        'a'

        :param other: Second parser
        """

        return skip(self, other)

    def __rshift__(self, other: "Parser[T, B]") -> "Parser[T, B]":
        """
        Applies two parsers sequentially and returns the result of the second
        parser.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a") >> exact("b"), "ab").unwrap().value
        'b'

        :param other: Second parser
        """

        return take(self, other)

    def __or__(self, other: "Parser[T, B]") -> "Parser[T, Union[A_co, B]]":
        """
        Ordered choice, see :func:`alt`.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a") | exact("b"), "b").unwrap().value
        'b'
        >>> print(parse(exact("a") | exact("b"), "c").error)
        Expected: 'a' or 'b'

        :param other: Second parser
        """

        return alt(self, other)

    def maybe(self) -> "Parser[T, Optional[A_co]]":
        """
        Applies the parser and returns ``None`` without consuming input if
        it fails.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a").maybe(), "a").unwrap().value
        'a'
        >>> parse(exact("a").maybe(), "b").unwrap().value
        """

        return maybe(self)

    def many(self) -> "Parser[T, List[A_co]]":
        """
        Applies the parser until it fails and returns the list of parsed
        values. Never fails.

        >>> from bplus_parser.strings import parse

        >>> parse(exact("a").many(), "aab").unwrap().value
        ['a', 'a']
        >>> parse(exact("a").many(), "b").unwrap().value
        []
        """

        return many(self)

    def many1(self) -> "Parser[T, List[A_co]]":
        """
        Like :meth:`many`, but the parser has to succeed at least once.
        """

        return many1(self)

    def attempt(self) -> "Parser[T, A_co]":
        """
        Applies the parser, and pretends that no input was consumed if it
        fails.

        >>> from bplus_parser.strings import parse

        >>> ab = exact("a") + exact("b")

        >>> parse(ab, "ac").error.remaining.rest
        'c'
        >>> parse(ab.attempt(), "ac").error.remaining.rest
        'ac'
        """

        return attempt(self)

    def labeled(self, name: str) -> "Parser[T, A_co]":
        """
        Renames the parser. Failures are reported under the new name.

        >>> from bplus_parser.strings import digit, parse

        >>> print(parse(digit.many1().labeled("integer"), "x").error)
        Expected: integer <- Expected: digit (found 'x')

        :param name: Description of the expected input
        """

        return labeled(self, name)

    def between(
            self, open: "Parser[T, B]",
            close: "Parser[T, C]") -> "Parser[T, A_co]":
        """
        Applies ``open``, then the parser, then ``close``, and returns the
        value parsed by the parser.

        >>> from bplus_parser.strings import digit, parse

        >>> parse(digit.between(exact("("), exact(")")), "(1)").unwrap().value
        '1'

        :param open: 'Opening bracket' parser
        :param close: 'Closing bracket' parser
        """

        return between(open, close, self)

    def separated(self, delimiter: "Parser[T, B]") -> "Parser[T, List[A_co]]":
        """
        Applies the parser zero or more times, each time optionally followed
        by ``delimiter``.

        >>> from bplus_parser.strings import digit, parse

        >>> parse(digit.separated(exact(",")), "1,2,").unwrap().value
        ['1', '2']

        :param delimiter: Delimiters parser
        """

        return separated(delimiter, self)

    def separated1(
            self, delimiter: "Parser[T, B]") -> "Parser[T, List[A_co]]":
        """
        Like :meth:`separated`, but requires at least one item.

        :param delimiter: Delimiters parser
        """

        return separated1(delimiter, self)

    def debug(
            self,
            on_success: Optional[Callable[[A_co, Stream[T]], object]] = None,
            on_failure: Optional[Callable[[str, Stream[T]], object]] = None
    ) -> "Parser[T, A_co]":
        """
        See :func:`debug`.
        """

        return debug(self, on_success, on_failure)


class Delay(Parser[T, A_co]):
    """
    A subclass of :class:`Parser` to use as a forward declaration.

    >>> from bplus_parser.strings import parse

    >>> parser = Delay()
    >>> parser.define((exact("a") + parser).maybe())

    >>> parse(parser, "aaa").unwrap().value
    ('a', ('a', ('a', None)))
    """

    __slots__ = "_fn",

    def __init__(self, label: str = "delay") -> None:
        super().__init__(label, self._forward)
        self._fn: Optional[ParseFn[T, A_co]] = None

    def _forward(self, stream: Stream[T]) -> ParseResult[T, A_co]:
        if self._fn is None:
            raise RuntimeError("Delayed parser was not defined")
        return self._fn(stream)

    def define(self, parser: Parser[T, A_co]) -> None:
        """
        Define the parser.

        >>> from bplus_parser.strings import parse

        >>> parser = Delay()
        >>> parse(parser, "a")
        Traceback (most recent call last):
          ...
        RuntimeError: Delayed parser was not defined

        >>> parser.define(exact("a"))
        >>> parse(parser, "a").unwrap().value
        'a'

        :param parser: Parser definition
        """

        if self._fn is not None:
            raise RuntimeError("Delayed parser was already defined")
        self._fn = parser.parse_fn


@dataclass(frozen=True)
class Builder(Generic[T, A_co]):
    """
    Immutable left-to-right chain of sequencing operations.

    >>> from bplus_parser.strings import digit, parse

    >>> parser = (
    ...     combine(exact("("))
    ...     .take(digit)
    ...     .then(digit)
    ...     .skip(exact(")"))
    ...     .map(lambda v: int(v[0] + v[1]))
    ...     .build("pair")
    ... )

    >>> parse(parser, "(12)").unwrap().value
    12
    >>> print(parse(parser, "(1)").error)
    Expected: pair <- Expected: digit (found ')')
    """

    parser: Parser[T, A_co]

    def then(self, other: Parser[T, B]) -> "Builder[T, Tuple[A_co, B]]":
        """
        Appends ``other`` and pairs both values.

        :param other: Next parser
        """

        return Builder(seq(self.parser, other))

    def take(self, other: Parser[T, B]) -> "Builder[T, B]":
        """
        Appends ``other`` and keeps its value only.

        :param other: Next parser
        """

        return Builder(take(self.parser, other))

    def skip(self, other: Parser[T, B]) -> "Builder[T, A_co]":
        """
        Appends ``other`` and discards its value.

        :param other: Next parser
        """

        return Builder(skip(self.parser, other))

    def map(self, fn: Callable[[A_co], B]) -> "Builder[T, B]":
        """
        Transforms the accumulated value.

        :param fn: Function to apply
        """

        return Builder(fmap(self.parser, fn))

    def build(self, name: Optional[str] = None) -> Parser[T, A_co]:
        """
        Returns the accumulated parser, renamed to ``name`` if it is given.

        :param name: Description of the expected input
        """

        if name is None:
            return self.parser
        return labeled(self.parser, name)


def combine(parser: Parser[T, A]) -> Builder[T, A]:
    """
    :meth:`Parser.combine` as a function.

    :param parser: First parser of the chain
    """

    return Builder(parser)


def create(
        label: str,
        fn: Callable[[Stream[T]], ParseResult[T, A]]) -> Parser[T, A]:
    """
    Makes a parser from a parsing function.

    The function is not called at the end of input, the parser fails with
    ``"EOF"`` instead. Failures of the function are reported under ``label``.

    >>> from bplus_parser.core.parser import failure, success
    >>> from bplus_parser.strings import parse

    >>> vowel = create(
    ...     "vowel",
    ...     lambda s: (
    ...         success(s.value, s.try_take(s.value)[1]) if s.value in "aeiou"
    ...         else failure("letter", "", s)
    ...     )
    ... )
    >>> parse(vowel, "a").unwrap().value
    'a'
    >>> print(parse(vowel, "b").error)
    Expected: vowel <- Expected: letter
    >>> print(parse(vowel, "").error)
    Expected: vowel (EOF)

    :param label: Parser label
    :param fn: Parsing function
    """

    return Parser(label, combinators.leaf(label, fn))


def pure(x: A) -> Parser[Any, A]:
    """
    Parser that always succeeds, consumes no input, and returns ``x``.

    :param x: Value to return
    """

    return Parser(repr(x), combinators.pure(x))


def eof() -> Parser[Any, None]:
    """
    Succeeds only at the end of the input.

    >>> from bplus_parser.strings import parse

    >>> parse(eof(), "").unwrap().value
    >>> print(parse(eof(), "a").error)
    Expected: end of input (found 'a')
    """

    return Parser("end of input", combinators.eof("end of input"))


def exact(x: T, label: Optional[str] = None) -> Parser[T, T]:
    """
    Parses ``x`` and returns the consumed value.

    >>> from bplus_parser.strings import parse

    >>> parse(exact("ab"), "abc").unwrap().value
    'ab'
    >>> print(parse(exact("ab"), "ac").error)
    Expected: 'ab' (exact value not found)

    :param x: Value to parse
    :param label: Label to use instead of ``repr(x)``
    """

    if isinstance(x, str) and not x:
        raise ValueError("Expected a non-empty string")
    label_ = repr(x) if label is None else label
    return Parser(label_, combinators.exact(label_, x))


def satisfy(test: Callable[[T], bool], label: str = "symbol") -> Parser[T, T]:
    """
    Parses the current element if ``test`` returns ``True`` for it.

    >>> from bplus_parser.strings import parse

    >>> parse(satisfy(str.isupper), "Ab").unwrap().value
    'A'
    >>> print(parse(satisfy(str.isupper), "ab").error)
    Expected: symbol (found 'a')

    :param test: Predicate for stream elements
    :param label: Parser label
    """

    return Parser(label, combinators.satisfy(label, test))


def fmap(
        parser: Parser[T, A], fn: Callable[[A], B],
        label: Optional[str] = None) -> Parser[T, B]:
    """
    :meth:`Parser.fmap` as a function.

    :param parser: Parser
    :param fn: Function to produce value from the result of ``parser``
    :param label: Parser label
    """

    return Parser(
        parser.label if label is None else label,
        combinators.fmap(parser.parse_fn, fn)
    )


def seq(
        parser: Parser[T, A], second: Parser[T, B],
        label: Optional[str] = None) -> Parser[T, Tuple[A, B]]:
    """
    :meth:`Parser.__add__` as a function.

    :param parser: First parser
    :param second: Second parser
    :param label: Parser label
    """

    return Parser(
        _join(label, parser, second),
        combinators.seq(parser.parse_fn, second.parse_fn)
    )


def skip(
        parser: Parser[T, A], second: Parser[T, B],
        label: Optional[str] = None) -> Parser[T, A]:
    """
    :meth:`Parser.__lshift__` as a function.

    :param parser: First parser
    :param second: Second parser
    :param label: Parser label
    """

    return Parser(
        _join(label, parser, second),
        combinators.skip(parser.parse_fn, second.parse_fn)
    )


def take(
        parser: Parser[T, A], second: Parser[T, B],
        label: Optional[str] = None) -> Parser[T, B]:
    """
    :meth:`Parser.__rshift__` as a function.

    :param parser: First parser
    :param second: Second parser
    :param label: Parser label
    """

    return Parser(
        _join(label, parser, second),
        combinators.take(parser.parse_fn, second.parse_fn)
    )


def maybe(
        parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, Optional[A]]:
    """
    :meth:`Parser.maybe` as a function.

    ``None`` marks absence, so a parser that itself produces ``None``
    (like :func:`eof`) is indistinguishable from a failed one. Map its
    value to something else first when the difference matters.

    >>> from bplus_parser.strings import parse

    >>> parse(maybe(eof()), "").unwrap().value
    >>> parse(maybe(eof().fmap(lambda _: True)), "").unwrap().value
    True
    >>> parse(maybe(eof().fmap(lambda _: True)), "a").unwrap().value

    :param parser: Parser
    :param label: Parser label
    """

    return Parser(
        "[{}]".format(parser.label) if label is None else label,
        combinators.maybe(parser.parse_fn)
    )


def many(
        parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, List[A]]:
    """
    :meth:`Parser.many` as a function.

    Raises :exc:`RuntimeError` while parsing if ``parser`` succeeds without
    consuming input.

    :param parser: Parser
    :param label: Parser label
    """

    return Parser(
        "{{{}}}".format(parser.label) if label is None else label,
        combinators.many(parser.parse_fn)
    )


def many1(
        parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, List[A]]:
    """
    :meth:`Parser.many1` as a function.

    :param parser: Parser
    :param label: Parser label
    """

    label_ = parser.label if label is None else label
    return Parser(label_, combinators.many1(label_, parser.parse_fn))


def attempt(
        parser: Parser[T, A], label: Optional[str] = None) -> Parser[T, A]:
    """
    :meth:`Parser.attempt` as a function.

    :param parser: Parser
    :param label: Parser label
    """

    label_ = parser.label if label is None else label
    return Parser(label_, combinators.attempt(label_, parser.parse_fn))


def alt(
        *parsers: Parser[T, Any],
        label: Optional[str] = None) -> Parser[T, Any]:
    """
    Ordered choice. Applies the parsers in order to the same input and
    returns the first success.

    Every parser starts from the original input, so a parser that fails
    halfway does not affect the next one. If all of them fail, the failure
    is reported at the original position under the labels of all of them,
    caused by the first failure that got past that position.

    >>> from bplus_parser.strings import parse

    >>> abc = alt(exact("A"), exact("B"), exact("C"))
    >>> parse(abc, "C").unwrap().value
    'C'
    >>> print(parse(abc, "D").error)
    Expected: 'A' or 'B' or 'C'

    >>> pair = alt(exact("a") + exact("b"), exact("ac"))
    >>> parse(pair, "ac").unwrap().value
    'ac'
    >>> print(parse(pair, "ax").error)
    Expected: 'a' 'b' or 'ac' <- Expected: 'b' (exact value not found)

    :param parsers: Alternatives
    :param label: Parser label
    """

    if not parsers:
        raise ValueError("Expected at least one parser")
    label_ = " or ".join(p.label for p in parsers) if label is None else label
    return Parser(
        label_, combinators.alt(label_, [p.parse_fn for p in parsers])
    )


def labeled(parser: Parser[T, A], name: str) -> Parser[T, A]:
    """
    :meth:`Parser.labeled` as a function.

    :param parser: Parser
    :param name: Description of the expected input
    """

    return Parser(name, combinators.label(parser.parse_fn, name))


def between(
        open: Parser[T, B], close: Parser[T, C], parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, A]:
    """
    :meth:`Parser.between` as a function.

    :param open: 'Opening bracket' parser
    :param close: 'Closing bracket' parser
    :param parser: Value parser
    :param label: Parser label
    """

    return Parser(
        _join(label, open, parser, close),
        combinators.take(
            open.parse_fn, combinators.skip(parser.parse_fn, close.parse_fn)
        )
    )


def _item(delimiter: Parser[T, B], parser: Parser[T, A]) -> Parser[T, A]:
    return skip(parser, maybe(delimiter))


def separated(
        delimiter: Parser[T, B], parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, List[A]]:
    """
    :meth:`Parser.separated` as a function.

    :param delimiter: Delimiters parser
    :param parser: Items parser
    :param label: Parser label
    """

    return many(_item(delimiter, parser), label)


def separated1(
        delimiter: Parser[T, B], parser: Parser[T, A],
        label: Optional[str] = None) -> Parser[T, List[A]]:
    """
    :meth:`Parser.separated1` as a function.

    >>> from bplus_parser.strings import digit, parse

    >>> parse(separated1(exact(","), digit), "1,2,3").unwrap().value
    ['1', '2', '3']
    >>> print(parse(separated1(exact(","), digit), "").error)
    Expected: digit (EOF)

    :param delimiter: Delimiters parser
    :param parser: Items parser
    :param label: Parser label
    """

    return many1(
        _item(delimiter, parser), parser.label if label is None else label
    )


def _log_success(name: str) -> Callable[[Any, Stream[Any]], None]:
    def on_success(value: Any, stream: Stream[Any]) -> None:
        log.debug("%s: parsed %r, remaining %r", name, value, stream)

    return on_success


def _log_failure(name: str) -> Callable[[str, Stream[Any]], None]:
    def on_failure(error: str, stream: Stream[Any]) -> None:
        log.debug("%s: %s, at %r", name, error, stream)

    return on_failure


def debug(
        parser: Parser[T, A],
        on_success: Optional[Callable[[A, Stream[T]], object]] = None,
        on_failure: Optional[Callable[[str, Stream[T]], object]] = None
) -> Parser[T, A]:
    """
    Calls ``on_success`` with the parsed value and the remaining stream, or
    ``on_failure`` with the error and the failure position, then returns the
    result of ``parser`` unchanged.

    Callbacks that are not given log at ``DEBUG`` level to the
    ``bplus_parser`` logger.

    :param parser: Parser to observe
    :param on_success: Success callback
    :param on_failure: Failure callback
    """

    return Parser(
        parser.label,
        combinators.debug(
            parser.parse_fn,
            _log_success(parser.label) if on_success is None else on_success,
            _log_failure(parser.label) if on_failure is None else on_failure
        )
    )


def flatten(value: Tuple[Any, Any], count: int) -> Tuple[Any, ...]:
    """
    Flattens left-nested pairs produced by repeated :meth:`Builder.then`.

    >>> flatten(((("a", "b"), "c"), "d"), 4)
    ('a', 'b', 'c', 'd')

    :param value: Nested pairs
    :param count: Number of items
    """

    items = []
    for _ in range(count - 1):
        value, last = value
        items.append(last)
    items.append(value)
    return tuple(reversed(items))


def _join(label: Optional[str], *parsers: Parser[Any, Any]) -> str:
    if label is not None:
        return label
    return " ".join(p.label for p in parsers)
