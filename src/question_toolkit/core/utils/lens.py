"""
Path/Lens Accessor

Reads and writes values inside plain nested structures (dicts and lists)
using the same path addressing the tree mapper produces: an `int` step
descends into a list index, a `str` step into a dict key.

Serialized-state blobs may be partial or stale relative to the current
shape, so reads never fail on missing structure; they return ABSENT.
Writes never mutate their input.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..schemas.validator import PathStep


class _Absent:
    """Sentinel for 'no value at this path'."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


def get_in(structure: Any, path: Sequence[PathStep], default: Any = ABSENT) -> Any:
    """
    Get the value at `path`.

    Args:
        structure: Nested dicts/lists
        path: Steps from the root
        default: Returned when any step cannot be followed

    Returns:
        The value, or `default`

    Example:
        >>> get_in({"hints": [None, {"value": "x"}]}, ("hints", 1, "value"))
        'x'
        >>> get_in({"hints": []}, ("hints", 3)) is ABSENT
        True
    """
    current = structure
    for step in path:
        if isinstance(step, int) and not isinstance(step, bool):
            if not isinstance(current, (list, tuple)) or not 0 <= step < len(current):
                return default
            current = current[step]
        elif isinstance(step, str):
            if not isinstance(current, Mapping) or step not in current:
                return default
            current = current[step]
        else:
            return default
    return current


def set_in(structure: Any, path: Sequence[PathStep], value: Any) -> Any:
    """
    Return a copy of `structure` with `value` stored at `path`.

    Containers along the path are copied; missing ones are created (a dict
    for a `str` step, a list padded with None for an `int` step). Anything
    in the way that is not a container is replaced.

    Args:
        structure: Nested dicts/lists (not modified)
        path: Steps from the root
        value: Value to store

    Returns:
        New structure
    """
    if not path:
        return value

    step, rest = path[0], path[1:]
    if isinstance(step, int) and not isinstance(step, bool):
        if step < 0:
            raise IndexError(f"Negative path index: {step}")
        items = list(structure) if isinstance(structure, (list, tuple)) else []
        if len(items) <= step:
            items.extend([None] * (step + 1 - len(items)))
        items[step] = set_in(items[step], rest, value)
        return items
    if isinstance(step, str):
        mapping = dict(structure) if isinstance(structure, Mapping) else {}
        mapping[step] = set_in(mapping.get(step), rest, value)
        return mapping
    raise TypeError(f"Invalid path step: {step!r}")
