"""
Module: trees

Purpose:
    Provides the Tree sum type - the generic parametric container that
    mirrors a Shape but carries payload values. A node is one of:

        Content(value) | Hint(value) | Tags(value) | Array(children) | Object(children)

    Trees are frozen. Transformations (see core.trees.mapper) always build
    a new tree; the topology of a tree always matches the Shape it was
    built or mapped with.

Key Functions:
    - tree_to_plain(): Convert a tree to nested lists/dicts of leaf values
    - iter_leaves(): Pre-order (path, leaf) iteration

Dependencies:
    - dataclasses (std)

Used By:
    - core.trees.builder
    - core.trees.mapper
    - engine.multi_renderer
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Tuple, Union

from ..schemas.validator import PathStep

Path = Tuple[PathStep, ...]


@dataclass(frozen=True, slots=True)
class Content:
    """Content leaf."""
    value: Any


@dataclass(frozen=True, slots=True)
class Hint:
    """Hint leaf."""
    value: Any


@dataclass(frozen=True, slots=True)
class Tags:
    """Tags leaf."""
    value: Any


@dataclass(frozen=True, slots=True)
class Array:
    """
    Ordered children sharing one element shape.

    Behaves as a read-only sequence of its children. `annotations` holds
    extra capabilities attached by an array mapper (e.g. "first_n" on an
    array of hint renderers); they are views over the children, never
    additional leaves.
    """

    children: Tuple[Tree, ...] = ()
    annotations: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "annotations", MappingProxyType(dict(self.annotations)))

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[Tree]:
        return iter(self.children)

    def __getitem__(self, index: int) -> Tree:
        return self.children[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self.children == other.children

    def __hash__(self) -> int:
        return hash(self.children)

    def annotate(self, **annotations: Any) -> Array:
        """Return a copy with extra annotations attached."""
        return replace(self, annotations={**self.annotations, **annotations})


@dataclass(frozen=True, slots=True)
class Object:
    """Named children. Behaves as a read-only mapping."""

    children: Mapping[str, Tree] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)

    def __getitem__(self, key: str) -> Tree:
        return self.children[key]

    def keys(self):
        return self.children.keys()

    def items(self):
        return self.children.items()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return dict(self.children) == dict(other.children)

    def __hash__(self) -> int:
        return hash(tuple(self.children.items()))


Tree = Union[Content, Hint, Tags, Array, Object]
LEAF_TYPES = (Content, Hint, Tags)


# ─────────────────────────────────────────────────────────────────────────────
# Traversal
# ─────────────────────────────────────────────────────────────────────────────

def tree_to_plain(tree: Tree) -> Any:
    """
    Convert a tree into nested lists/dicts holding the leaf values.

    This is the form handed to callers for score, guess and serialized
    state trees, and the form navigated by core.utils.lens.
    """
    if isinstance(tree, LEAF_TYPES):
        return tree.value
    if isinstance(tree, Array):
        return [tree_to_plain(child) for child in tree.children]
    if isinstance(tree, Object):
        return {key: tree_to_plain(child) for key, child in tree.children.items()}
    raise TypeError(f"Not a tree node: {tree!r}")


def iter_leaves(tree: Tree, path: Path = ()) -> Iterator[tuple[Path, Tree]]:
    """
    Iterate over (path, leaf) pairs in pre-order.

    Yields:
        Every Content/Hint/Tags node with its path, top-to-bottom,
        left-to-right
    """
    if isinstance(tree, LEAF_TYPES):
        yield path, tree
    elif isinstance(tree, Array):
        for index, child in enumerate(tree.children):
            yield from iter_leaves(child, path + (index,))
    elif isinstance(tree, Object):
        for key, child in tree.children.items():
            yield from iter_leaves(child, path + (key,))
    else:
        raise TypeError(f"Not a tree node: {tree!r}")
