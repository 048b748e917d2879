from typing import Callable, Optional, TypeVar, Union

from .result import Failure, Result, Success
from .stream import Stream
from .types import Failed, Parsed

T = TypeVar("T")
A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)

ParseResult = Result[Parsed[T, A], Failed[T]]
ParseFn = Callable[[Stream[T]], ParseResult[T, A_co]]


def success(value: A, stream: Stream[T]) -> Success[Parsed[T, A]]:
    return Success(Parsed(value, stream))


def failure(
        label: str, message: str, stream: Stream[T],
        cause: Optional[Failed[T]] = None) -> Failure[Failed[T]]:
    return Failure(Failed(label, message, stream, cause))


def refail(label: str, failed: Failed[T]) -> Failure[Failed[T]]:
    if failed.label == label:
        return Failure(failed)
    return Failure(Failed(label, "", failed.remaining, failed))


def remaining(result: ParseResult[T, A]) -> Stream[T]:
    if type(result) is Success:
        return result.value.remaining
    return result.error.remaining


def consumed(
        result: Union[Parsed[T, A], Failed[T]], stream: Stream[T]) -> bool:
    return result.remaining != stream
