from typing import Any, Optional


# values, input errors


class EmptyInputError(ValueError):
    """Raised when a sequence is passed which doesn't contain any values,
    and thus no interval can be formed.
    """


class RangeError(IndexError):
    """Raised when a query interval or update index lies outside the bounds
    of the tree, or when the interval is reversed.
    Bounds are never clamped.
    """

    def __init__(self, msg: str, left: Optional[int] = None, right: Optional[int] = None) -> None:
        IndexError.__init__(self, msg)
        self.left = left
        self.right = right


# runtime, possible coding errors


class InvariantViolation(RuntimeError):
    """Raised when the structure of a tree or its cached values are inconsistent.
    This is an internal fault and not caused by invalid user input.
    """

    def __init__(self, msg: str, node: Any = None) -> None:
        RuntimeError.__init__(self, msg)
        self.node = node
