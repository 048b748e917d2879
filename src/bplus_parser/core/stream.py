from abc import abstractmethod
from typing import Generic, Tuple, TypeVar

from .option import Option

T = TypeVar("T")


class Stream(Generic[T]):
    """
    Persistent cursor over a sequence of ``T``.

    Consuming never changes a stream, it returns a new one. Two streams
    compare equal when they point at the same position of the same input.
    """

    __slots__ = ()

    @abstractmethod
    def try_take(self, expected: T) -> Option[Tuple[T, "Stream[T]"]]:
        """
        Consumes ``expected`` if the input continues with it.

        :param expected: Value to consume
        :return: Consumed value and the advanced stream, or ``None``
        """

    @abstractmethod
    def eof(self) -> bool:
        """
        Checks whether the end of the input was reached.
        """

    @property
    @abstractmethod
    def value(self) -> T:
        """
        Element at the current position. Meaningless at the end of input.
        """
