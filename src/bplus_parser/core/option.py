from typing import Callable, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

# ``None`` is the absent value, so ``Option[None]`` cannot tell
# presence from absence.
Option = Optional[T]


def is_some(option: Option[T]) -> bool:
    return option is not None


def match(
        option: Option[T], fsome: Callable[[T], U],
        fnone: Callable[[], U]) -> U:
    if option is not None:
        return fsome(option)
    return fnone()
