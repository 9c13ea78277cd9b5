"""Associative binary functions which can be used to combine the values of a segment tree.
All of them are pure and total over their domain. `concat`, `first` and `last` are
not commutative, so the order of the operands matters.
"""

import math
from operator import add, mul
from typing import Any, Dict, Sequence, TypeVar

from .typing import CombineFunc, Orderable

T = TypeVar("T")
OrderableT = TypeVar("OrderableT", bound=Orderable)


def min(a: OrderableT, b: OrderableT) -> OrderableT:
    # the builtin also accepts iterables and keyword arguments, this is a strict binary version

    if b < a:
        return b
    else:
        return a


def max(a: OrderableT, b: OrderableT) -> OrderableT:
    if a < b:
        return b
    else:
        return a


def gcd(a: int, b: int) -> int:
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0

    return abs(a * b) // math.gcd(a, b)


def bit_and(x: Any, y: Any) -> Any:
    return x & y


def bit_or(x: Any, y: Any) -> Any:
    return x | y


def bit_xor(x: Any, y: Any) -> Any:
    return x ^ y


def concat(a: Sequence[T], b: Sequence[T]) -> Sequence[T]:
    """Like `operator.concat`, but also works for tuples and other sequences
    which implement `__add__`.
    """

    return a + b  # type: ignore[operator]


def first(a: T, b: T) -> T:
    """Leftmost value of a range."""

    return a


def last(a: T, b: T) -> T:
    """Rightmost value of a range."""

    return b


OPERATIONS: Dict[str, CombineFunc] = {
    "sum": add,
    "product": mul,
    "min": min,
    "max": max,
    "gcd": gcd,
    "lcm": lcm,
    "and": bit_and,
    "or": bit_or,
    "xor": bit_xor,
    "concat": concat,
    "first": first,
    "last": last,
}

__all__ = [
    "add",
    "mul",
    "min",
    "max",
    "gcd",
    "lcm",
    "bit_and",
    "bit_or",
    "bit_xor",
    "concat",
    "first",
    "last",
    "OPERATIONS",
]
