from typing import Callable, Generic, NoReturn, TypeVar, Union

from typing_extensions import final

from .types import ParseError

A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)
B = TypeVar("B")
F = TypeVar("F")
F_co = TypeVar("F_co", covariant=True)
U = TypeVar("U")


@final
class Success(Generic[A_co]):
    __slots__ = "value",

    def __init__(self, value: A_co):
        self.value = value

    def __repr__(self) -> str:
        return "Success(value={!r})".format(self.value)

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def match(
            self, on_success: Callable[[A_co], U],
            on_failure: Callable[[object], U]) -> U:
        return on_success(self.value)

    def fmap(self, fn: Callable[[A_co], B]) -> "Success[B]":
        return Success(fn(self.value))

    def unwrap(self) -> A_co:
        return self.value


@final
class Failure(Generic[F_co]):
    __slots__ = "error",

    def __init__(self, error: F_co):
        self.error = error

    def __repr__(self) -> str:
        return "Failure(error={!r})".format(self.error)

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def match(
            self, on_success: Callable[[object], U],
            on_failure: Callable[[F_co], U]) -> U:
        return on_failure(self.error)

    def fmap(self, fn: object) -> "Failure[F_co]":
        return self

    def unwrap(self) -> NoReturn:
        raise ParseError(self.error)


Result = Union[Success[A], Failure[F]]


def is_success(result: Result[A, F]) -> bool:
    return type(result) is Success


def is_failure(result: Result[A, F]) -> bool:
    return type(result) is Failure


def match(
        result: Result[A, F], on_success: Callable[[A], U],
        on_failure: Callable[[F], U]) -> U:
    if type(result) is Success:
        return on_success(result.value)
    return on_failure(result.error)
