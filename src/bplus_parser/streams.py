"""
Streams for strings, token sequences, and arbitrary sequences.
"""

import operator
import threading
from copy import copy
from dataclasses import dataclass
from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple,
    TypeVar
)

from .core.option import Option
from .core.stream import Stream

__all__ = (
    "StringOptions", "DEFAULT_OPTIONS", "StringStream", "SequenceStream",
    "TokenStream"
)

T = TypeVar("T")

Equals = Callable[[T, T], bool]


@dataclass(frozen=True)
class StringOptions:
    """
    String comparison settings.

    :param case_insensitive: Compare with ``str.casefold``. Accents are
        still significant.
    """

    case_insensitive: bool = False


DEFAULT_OPTIONS = StringOptions()


def _equals_ci(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


class StringStream(Stream[str]):
    """
    Stream over the characters of a string.

    :meth:`try_take` matches whole substrings.

    >>> from bplus_parser.streams import StringOptions, StringStream

    >>> s = StringStream("Hello")
    >>> s.try_take("He")
    ('He', StringStream(pos=2, rest='llo'))
    >>> s.try_take("he")

    >>> ci = StringStream("Hello", StringOptions(case_insensitive=True))
    >>> ci.try_take("he")
    ('He', StringStream(pos=2, rest='llo'))

    :param text: Input string
    :param options: Comparison settings
    """

    __slots__ = "text", "pos", "options"

    def __init__(
            self, text: str, options: StringOptions = DEFAULT_OPTIONS,
            pos: int = 0):
        self.text = text
        self.pos = pos
        self.options = options

    def __repr__(self) -> str:
        return "StringStream(pos={!r}, rest={!r})".format(self.pos, self.rest)

    def __eq__(self, other: object) -> bool:
        if type(other) is not StringStream:
            return NotImplemented
        return (
            self.pos == other.pos and self.text == other.text and
            self.options == other.options
        )

    def __hash__(self) -> int:
        return hash((self.text, self.pos, self.options))

    @property
    def rest(self) -> str:
        """
        Unconsumed part of the input.
        """

        return self.text[self.pos:]

    @property
    def value(self) -> str:
        return self.text[self.pos:self.pos + 1]

    def eof(self) -> bool:
        return self.pos >= len(self.text)

    def try_take(self, expected: str) -> Option[Tuple[str, "StringStream"]]:
        end = self.pos + len(expected)
        chunk = self.text[self.pos:end]
        if self.options.case_insensitive:
            if len(chunk) != len(expected) or not _equals_ci(chunk, expected):
                return None
        elif chunk != expected:
            return None
        return chunk, StringStream(self.text, self.options, end)


class _Buffer(Generic[T]):
    __slots__ = "_items", "_it", "_lock"

    def __init__(self, items: Iterable[T]):
        self._items: List[T] = []
        self._it: Optional[Iterator[T]] = iter(items)
        self._lock = threading.Lock()

    def has(self, pos: int) -> bool:
        if pos < len(self._items):
            return True
        with self._lock:
            while pos >= len(self._items):
                if self._it is None:
                    return False
                try:
                    self._items.append(next(self._it))
                except StopIteration:
                    self._it = None
                    return False
        return True

    def __getitem__(self, pos: int) -> T:
        return self._items[pos]


class SequenceStream(Stream[T]):
    """
    Stream over an iterable of arbitrary elements.

    Elements are pulled from the iterable on demand and kept, so streams
    derived from each other stay valid even for one-shot iterators. The
    pulling is serialized, so a stream can be shared between threads.

    >>> from bplus_parser.streams import SequenceStream

    >>> s = SequenceStream(iter([1, 0, 1]))
    >>> s.try_take(1)
    (1, SequenceStream(pos=1))
    >>> s.try_take(1)
    (1, SequenceStream(pos=1))
    >>> s.try_take(0)

    :param items: Input elements
    :param equals: Equality used by :meth:`try_take`
    """

    __slots__ = "_buffer", "_equals", "pos"

    def __init__(
            self, items: Iterable[T],
            equals: Equals[T] = operator.eq):
        self._buffer: _Buffer[T] = _Buffer(items)
        self._equals = equals
        self.pos = 0

    def __repr__(self) -> str:
        return "{}(pos={!r})".format(type(self).__name__, self.pos)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SequenceStream):
            return NotImplemented
        return self._buffer is other._buffer and self.pos == other.pos

    def __hash__(self) -> int:
        return hash((id(self._buffer), self.pos))

    def _advance(self) -> "SequenceStream[T]":
        stream = copy(self)
        stream.pos = self.pos + 1
        return stream

    @property
    def value(self) -> Any:
        if self._buffer.has(self.pos):
            return self._buffer[self.pos]
        return None

    def eof(self) -> bool:
        return not self._buffer.has(self.pos)

    def try_take(self, expected: T) -> Option[Tuple[T, "SequenceStream[T]"]]:
        if not self._buffer.has(self.pos):
            return None
        t = self._buffer[self.pos]
        if not self._equals(t, expected):
            return None
        return t, self._advance()


class TokenStream(SequenceStream[str]):
    """
    Stream over pre-tokenized strings. Each token is one element.

    >>> from bplus_parser.streams import StringOptions, TokenStream

    >>> s = TokenStream(["SELECT", "x"], StringOptions(case_insensitive=True))
    >>> s.try_take("select")
    ('SELECT', TokenStream(pos=1))

    :param tokens: Input tokens
    :param options: Comparison settings
    """

    __slots__ = "options",

    def __init__(
            self, tokens: Iterable[str],
            options: StringOptions = DEFAULT_OPTIONS):
        super().__init__(
            tokens, _equals_ci if options.case_insensitive else operator.eq
        )
        self.options = options

