from typing import Any, Callable, TypeVar

from typing_extensions import Protocol  # typing.Protocol is availalble in Python 3.8+

T = TypeVar("T")

# must be associative: combine(combine(a, b), c) == combine(a, combine(b, c))
CombineFunc = Callable[[T, T], T]


class Orderable(Protocol):
    def __lt__(self, other: Any) -> bool:
        ...

    def __gt__(self, other: Any) -> bool:
        ...

    def __le__(self, other: Any) -> bool:
        ...

    def __ge__(self, other: Any) -> bool:
        ...
