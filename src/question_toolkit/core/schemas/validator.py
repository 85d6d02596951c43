"""
Validation Errors

Errors raised while turning item data into trees.

Only topology is validated: a Shape and the Item it describes must be
structurally congruent. Leaf payload contents are not checked beyond what
is needed to construct the payload objects.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple, Union

PathStep = Union[int, str]


def format_path(path: Sequence[PathStep]) -> str:
    """
    Render a tree path for messages.

    Example:
        >>> format_path(("hints", 2))
        '$.hints[2]'
    """
    parts = ["$"]
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        else:
            parts.append(f".{step}")
    return "".join(parts)


class ValidationError(Exception):
    """Raised when item data is malformed."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class ShapeMismatchError(ValidationError):
    """
    Raised when an item's topology disagrees with its shape.

    Attributes:
        tree_path: Offending position as a tuple of steps
        expected: Shape kind expected at that position
        actual: Python type name found in the item
    """

    def __init__(self, tree_path: Sequence[PathStep], expected: str, actual: Any):
        self.tree_path: Tuple[PathStep, ...] = tuple(tree_path)
        self.expected = expected
        self.actual = actual if isinstance(actual, str) else type(actual).__name__
        super().__init__(
            f"Shape mismatch at {format_path(self.tree_path)}: "
            f"expected {expected}, got {self.actual}",
            path=format_path(self.tree_path),
        )
