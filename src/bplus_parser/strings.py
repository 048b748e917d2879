"""
Parsers for character and token classes.
"""

import re
from typing import List, Optional, Pattern, Tuple, TypeVar, Union

from .core.parser import ParseResult
from .parser import Parser, alt, combine, exact, many, many1, maybe, satisfy
from .streams import DEFAULT_OPTIONS, StringOptions, StringStream

__all__ = ("char", "space", "letter", "digit", "number", "parse")

A = TypeVar("A")


def char(label: str, pattern: Union[str, Pattern[str]]) -> Parser[str, str]:
    """
    Parses a single symbol that fully matches ``pattern``.

    With :class:`~bplus_parser.streams.StringStream` a symbol is one
    character, with :class:`~bplus_parser.streams.TokenStream` it is one
    token.

    >>> from bplus_parser.strings import char, parse

    >>> parse(char("vowel", "[aeiou]"), "a").unwrap().value
    'a'
    >>> print(parse(char("vowel", "[aeiou]"), "b").error)
    Expected: vowel (found 'b')

    :param label: Parser label
    :param pattern: Regular expression
    """

    regexp = re.compile(pattern)
    return satisfy(lambda s: regexp.fullmatch(s) is not None, label)


space = char("space", r"\s")
letter = char("letter", r"\w")
digit = char("digit", r"\d")


def _to_float(
        v: Tuple[Tuple[Tuple[Optional[str], List[str]], Optional[str]],
                 List[str]]) -> float:
    ((sign, integer), point), fraction = v
    return float(
        (sign or "") + "".join(integer) + (point or "") + "".join(fraction)
    )


number: Parser[str, float] = (
    combine(maybe(alt(exact("+"), exact("-"))))
    .then(many1(digit))
    .then(maybe(exact(".")))
    .then(many(digit))
    .map(_to_float)
    .build("number")
)


def parse(
        parser: Parser[str, A], text: str,
        options: StringOptions = DEFAULT_OPTIONS) -> ParseResult[str, A]:
    """
    Runs ``parser`` on a :class:`~bplus_parser.streams.StringStream` over
    ``text``.

    >>> from bplus_parser import exact
    >>> from bplus_parser.streams import StringOptions
    >>> from bplus_parser.strings import parse

    >>> ci = StringOptions(case_insensitive=True)
    >>> parse(exact("a"), "A", ci).unwrap().value
    'A'

    :param parser: Parser to run
    :param text: String to parse
    :param options: Comparison settings
    """

    return parser.parse(StringStream(text, options))
