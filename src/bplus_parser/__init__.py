"""
Public API.
"""

from . import streams, strings
from .core.option import Option
from .core.parser import (
    ParseFn, ParseResult, failure, refail, remaining, success
)
from .core.result import Failure, Result, Success, is_failure, is_success
from .core.stream import Stream
from .core.types import Failed, ParseError, Parsed
from .parser import (
    Builder, Delay, Parser, alt, attempt, between, combine, create, debug,
    eof, exact, flatten, fmap, labeled, many, many1, maybe, pure, satisfy,
    separated, separated1, seq, skip, take
)

__all__ = (
    "streams", "strings",
    "Option",
    "ParseFn", "ParseResult", "failure", "refail", "remaining", "success",
    "Failure", "Result", "Success", "is_failure", "is_success",
    "Stream",
    "Failed", "ParseError", "Parsed",

    "Builder", "Delay", "Parser", "alt", "attempt", "between", "combine",
    "create", "debug", "eof", "exact", "flatten", "fmap", "labeled", "many",
    "many1", "maybe", "pure", "satisfy", "separated", "separated1", "seq",
    "skip", "take"
)

__version__ = "0.1.0"
