from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from .stream import Stream

T = TypeVar("T")
A_co = TypeVar("A_co", covariant=True)


@dataclass(frozen=True)
class Parsed(Generic[T, A_co]):
    value: A_co
    remaining: Stream[T]


@dataclass(frozen=True)
class Failed(Generic[T]):
    """
    Description of a parse failure.

    :param label: Label of the parser that reported the failure
    :param message: Optional details
    :param remaining: Stream at the point where the failure was detected
    :param cause: Failure of a nested parser that was relabeled
    """

    label: str
    message: str
    remaining: Stream[T]
    cause: Optional["Failed[T]"] = None

    @property
    def error(self) -> str:
        if self.message:
            return "Expected: {} ({})".format(self.label, self.message)
        return "Expected: {}".format(self.label)

    @property
    def trace(self) -> List[str]:
        """
        Errors from the outermost parser down to the one that failed first.
        """

        res = []
        failed: Optional[Failed[T]] = self
        while failed is not None:
            res.append(failed.error)
            failed = failed.cause
        return res

    def __str__(self) -> str:
        return " <- ".join(self.trace)


class ParseError(Exception):
    """
    Exception that is raised when a failed result is unwrapped.

    :param failed: Failure description
    """

    def __init__(self, failed: object):
        super().__init__(failed)
        self.failed = failed

    def __str__(self) -> str:
        return str(self.failed)
