import logging
from operator import index as _index
from typing import Any, Generic, Iterable, Iterator, List, Optional, TypeVar, Union

from .exceptions import EmptyInputError, InvariantViolation, RangeError
from .typing import CombineFunc

T = TypeVar("T")

logger = logging.getLogger(__name__)

_empty: Any = object()


class Leaf(Generic[T]):

    """Node which covers the single index `left == right`. Holds the source element."""

    __slots__ = ("left", "value")

    def __init__(self, index: int, value: T) -> None:
        self.left = index
        self.value = value

    @property
    def right(self) -> int:
        return self.left

    def __repr__(self) -> str:
        return f"Leaf({self.left}, {self.value!r})"


class Internal(Generic[T]):

    """Node which covers the interval `[left, right]` with `left < right`.
    Holds the combined value of its two children, which cover `[left, middle]`
    and `[middle + 1, right]`.
    """

    __slots__ = ("left", "right", "value", "left_child", "right_child")

    def __init__(self, left: int, right: int, value: T, left_child: "Node[T]", right_child: "Node[T]") -> None:
        self.left = left
        self.right = right
        self.value = value
        self.left_child = left_child
        self.right_child = right_child

    def __repr__(self) -> str:
        return f"Internal({self.left}, {self.right}, {self.value!r})"


Node = Union[Leaf[T], Internal[T]]
_node_types = (Leaf, Internal)


def _funcname(func: CombineFunc) -> str:
    return getattr(func, "__name__", repr(func))


def _build(values: List[T], left: int, right: int, combine: CombineFunc) -> "Node[T]":
    if left == right:
        return Leaf(left, values[left])

    middle = (left + right) // 2
    left_child = _build(values, left, middle, combine)
    right_child = _build(values, middle + 1, right, combine)
    return Internal(left, right, combine(left_child.value, right_child.value), left_child, right_child)


def _query(node: "Node[T]", left: int, right: int, combine: CombineFunc) -> T:
    if left == node.left and right == node.right:
        return node.value

    # a leaf always matches exactly, so only internal nodes get here
    if not isinstance(node, Internal):
        raise InvariantViolation(f"Leaf {node!r} does not match interval [{left}, {right}]", node)

    mid = node.left_child.right
    if left > mid:
        return _query(node.right_child, left, right, combine)
    elif right <= mid:
        return _query(node.left_child, left, right, combine)
    else:
        return combine(
            _query(node.left_child, left, mid, combine),
            _query(node.right_child, mid + 1, right, combine),
        )


def _update(node: "Node[T]", index: int, value: T, combine: CombineFunc) -> None:
    if isinstance(node, Leaf):
        node.value = value
        return

    if index <= node.left_child.right:
        _update(node.left_child, index, value, combine)
    else:
        _update(node.right_child, index, value, combine)

    node.value = combine(node.left_child.value, node.right_child.value)


class _SegmentTreeBase(Generic[T]):

    """Fixed-size sequence protocol shared by the segment tree implementations.
    Subclasses implement `query`, `update` and `__iter__`.
    """

    n: int
    combine: CombineFunc

    def _init(self, sequence: Iterable[T], combine: CombineFunc) -> List[T]:
        if not callable(combine):
            raise TypeError(f"combine must be callable, not {type(combine).__name__}")

        values = list(sequence)
        if not values:
            raise EmptyInputError(f"Cannot build a {type(self).__name__} from an empty sequence")

        self.n = len(values)
        self.combine = combine
        return values

    def _check_interval(self, left: int, right: int) -> None:
        if left > right or not 0 <= left or not right < self.n:
            raise RangeError(f"Interval [{left}, {right}] out of range [0, {self.n - 1}]", left, right)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.n:
            raise RangeError(f"Index {index} out of range [0, {self.n - 1}]", index, index)

    def _normalize(self, index: int) -> int:
        """Supports negative indices like lists do."""

        index = _index(index)
        if index < 0:
            if index + self.n < 0:
                raise RangeError(f"Index {index} out of range for length {self.n}", index, index)
            return index + self.n
        return index

    def query(self, left: int, right: int) -> T:
        raise NotImplementedError

    def update(self, index: int, value: T) -> None:
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        raise NotImplementedError

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, index: int) -> T:
        index = self._normalize(index)
        return self.query(index, index)

    def __setitem__(self, index: int, value: T) -> None:
        self.update(self._normalize(index), value)

    def reduce(self) -> T:
        """Returns the fold over the whole sequence."""

        return self.query(0, self.n - 1)

    def tolist(self) -> List[T]:
        return list(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()!r}, {_funcname(self.combine)})"


class SegmentTree(_SegmentTreeBase[T]):

    """Segment tree of linked `Leaf` and `Internal` nodes.

    The `combine` function must be associative, but doesn't need to be commutative.
    Values are always combined in ascending index order.
    Both `query()` and `update()` run in O(log n), construction in O(n).

    Example:
            tree = SegmentTree([1, 2, 3, 4], operator.add)
            tree.query(1, 2)  # 5
            tree.update(2, 10)
            tree.query(0, 3)  # 17
    """

    root: "Node[T]"

    def __init__(self, sequence: Iterable[T], combine: CombineFunc) -> None:
        values = self._init(sequence, combine)
        self.root = _build(values, 0, self.n - 1, combine)
        logger.debug(
            "Built segment tree with %d nodes over %d elements using %s", 2 * self.n - 1, self.n, _funcname(combine)
        )

    def query(self, left: int, right: int) -> T:
        """Returns the fold of `combine` over the elements in the closed interval `[left, right]`.
        Raises `RangeError` if the interval is reversed or not within `[0, n-1]`.
        """

        left = _index(left)
        right = _index(right)
        self._check_interval(left, right)
        return _query(self.root, left, right, self.combine)

    def update(self, index: int, value: T) -> None:
        """Replaces the element at `index` with `value` and recomputes all cached values above it.
        Raises `RangeError` if `index` is not within `[0, n-1]`.
        """

        index = _index(index)
        self._check_index(index)
        _update(self.root, index, value, self.combine)

    def reduce(self) -> T:
        return self.root.value

    def leaf(self, index: int) -> Leaf[T]:
        index = _index(index)
        self._check_index(index)

        node = self.root
        while isinstance(node, Internal):
            if index <= node.left_child.right:
                node = node.left_child
            else:
                node = node.right_child
        return node

    def __getitem__(self, index: int) -> T:
        return self.leaf(self._normalize(index)).value

    def leaves(self) -> Iterator[Leaf[T]]:
        """Yields the leaves in index order."""

        stack: List[Node[T]] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, Internal):
                stack.append(node.right_child)
                stack.append(node.left_child)
            else:
                yield node

    def __iter__(self) -> Iterator[T]:
        return (leaf.value for leaf in self.leaves())

    def verify(self) -> None:
        """Checks the structure and all cached values of the tree.
        Raises `InvariantViolation` on the first inconsistency.
        """

        root = self.root
        if not isinstance(root, _node_types):
            raise InvariantViolation(f"Unknown node type {type(root).__name__}", root)
        if root.left != 0 or root.right != self.n - 1:
            raise InvariantViolation(f"Root covers [{root.left}, {root.right}] instead of [0, {self.n - 1}]", root)

        stack: List[Node[T]] = [root]
        while stack:
            node = stack.pop()
            if isinstance(node, Leaf):
                continue

            lchild = node.left_child
            rchild = node.right_child
            if not (isinstance(lchild, _node_types) and isinstance(rchild, _node_types)):
                raise InvariantViolation(f"Internal node [{node.left}, {node.right}] must have two children", node)

            middle = (node.left + node.right) // 2
            if (lchild.left, lchild.right, rchild.left, rchild.right) != (node.left, middle, middle + 1, node.right):
                raise InvariantViolation(
                    f"Children of node [{node.left}, {node.right}] do not split it at {middle}", node
                )

            if node.value != self.combine(lchild.value, rchild.value):
                raise InvariantViolation(
                    f"Cached value {node.value!r} of node [{node.left}, {node.right}] is stale", node
                )

            stack.append(rchild)
            stack.append(lchild)


class FlatSegmentTree(_SegmentTreeBase[T]):

    """Segment tree which stores all values in a single list.
    Children of slot `i` are `2i` and `2i+1`, the leaves are stored in `n..2n-1`.
    Uses separate left and right accumulators, so non-commutative functions are supported
    and no identity element is needed.
    """

    # ported from https://codeforces.com/blog/entry/18051

    t: List[Optional[T]]

    def __init__(self, sequence: Iterable[T], combine: CombineFunc) -> None:
        values = self._init(sequence, combine)
        self.t = [None] * self.n + values
        self.build()

    def build(self) -> None:
        i = self.n - 1
        while i > 0:
            self.t[i] = self.combine(self.t[i << 1], self.t[i << 1 | 1])
            i -= 1

    def query(self, left: int, right: int) -> T:
        left = _index(left)
        right = _index(right)
        self._check_interval(left, right)

        resl = resr = _empty
        left += self.n
        right += self.n + 1

        while left < right:
            if left & 1:
                resl = self.t[left] if resl is _empty else self.combine(resl, self.t[left])
                left += 1
            if right & 1:
                right -= 1
                resr = self.t[right] if resr is _empty else self.combine(self.t[right], resr)

            left >>= 1
            right >>= 1

        if resl is _empty:
            return resr
        elif resr is _empty:
            return resl
        else:
            return self.combine(resl, resr)

    def update(self, index: int, value: T) -> None:
        index = _index(index)
        self._check_index(index)

        p = index + self.n
        self.t[p] = value

        while p > 1:
            self.t[p >> 1] = self.combine(self.t[p & ~1], self.t[p | 1])
            p >>= 1

    def __iter__(self) -> Iterator[T]:
        return iter(self.t[self.n :])


def build(sequence: Iterable[T], combine: CombineFunc) -> SegmentTree[T]:
    return SegmentTree(sequence, combine)


def query(tree: _SegmentTreeBase[T], left: int, right: int) -> T:
    return tree.query(left, right)


def update(tree: _SegmentTreeBase[T], index: int, value: T) -> None:
    tree.update(index, value)


if __name__ == "__main__":

    from argparse import ArgumentParser

    from rangefold.ops import OPERATIONS

    parser = ArgumentParser(description="Answer range queries over a list of integers")
    parser.add_argument("values", metavar="N", type=int, nargs="+", help="Input sequence")
    parser.add_argument(
        "--op", choices=sorted(k for k in OPERATIONS if k != "concat"), default="sum", help="Combining function"
    )
    parser.add_argument(
        "--query", metavar=("LEFT", "RIGHT"), type=int, nargs=2, action="append", default=[], help="Closed interval"
    )
    parser.add_argument(
        "--update",
        metavar=("INDEX", "VALUE"),
        type=int,
        nargs=2,
        action="append",
        default=[],
        help="Applied before queries",
    )
    parser.add_argument("--flat", action="store_true", help="Use the array backed tree")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    cls = FlatSegmentTree if args.flat else SegmentTree
    tree = cls(args.values, OPERATIONS[args.op])

    try:
        for i, value in args.update:
            tree.update(i, value)

        if not args.query:
            print(f"{args.op}: {tree.reduce()}")

        for left, right in args.query:
            print(f"{args.op}[{left}, {right}]: {tree.query(left, right)}")
    except RangeError as e:
        parser.error(str(e))
