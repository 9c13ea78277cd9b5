from functools import reduce, wraps
from itertools import zip_longest
from typing import Any, Callable, Iterable, Optional, Sequence
from unittest import TestCase

from .exceptions import InvariantViolation
from .typing import CombineFunc


def naive_fold(combine: CombineFunc, seq: Sequence[Any], left: int, right: int) -> Any:
    """Linear left-to-right fold over the closed interval `[left, right]`."""

    return reduce(combine, seq[left : right + 1])


class MyTestCase(TestCase):
    def assertIterEqual(self, first: Iterable, second: Iterable, msg: Optional[str] = None) -> None:
        suffix = f": {msg}" if msg else ""
        for i, (a, b) in enumerate(zip_longest(first, second)):
            self.assertEqual(a, b, msg=f"in iteration index {i}{suffix}")

    def assertValidTree(self, tree: Any, msg: Optional[str] = None) -> None:
        try:
            tree.verify()
        except InvariantViolation as e:
            raise self.failureException(self._formatMessage(msg, str(e))) from e

    def assertAllRanges(self, tree: Any, seq: Sequence[Any], msg: Optional[str] = None) -> None:
        """Compares every closed interval of `tree` to a linear fold over `seq`."""

        suffix = f": {msg}" if msg else ""
        self.assertEqual(len(seq), len(tree), msg)
        for left in range(len(seq)):
            for right in range(left, len(seq)):
                truth = naive_fold(tree.combine, seq, left, right)
                self.assertEqual(truth, tree.query(left, right), msg=f"interval [{left}, {right}]{suffix}")


def random_arguments(n: int, *funcs: Callable[[], Any]) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for i in range(n):
                with self.subTest(str(i)):
                    if func(self, *(f() for f in funcs)) is not None:
                        raise AssertionError

        return inner

    return decorator


# also called: parameterize
def parametrize(*args_list: tuple) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for args in args_list:
                with self.subTest(str(args)[:1000]):
                    if func(self, *args) is not None:
                        raise AssertionError

        return inner

    return decorator


def repeat(number: int) -> Callable[[Callable], Callable]:
    def decorator(func):
        @wraps(func)
        def inner(self):
            for i in range(number):
                if func(self) is not None:  # no self.subTest(str(i))
                    raise AssertionError

        return inner

    return decorator
