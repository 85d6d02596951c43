"""
Module: core.trees.mapper

Purpose:
    Provides TreeMapper - a configurable tree transformer. Given per-variant
    transform functions it turns a Tree<C, H, T> into a Tree<C', H', T'>,
    preserving structure and paths exactly.

    Traversal is a fixed pre-order (top-to-bottom, left-to-right) and is
    fully synchronous. Transform functions may have external side effects
    (e.g. constructing a renderer element); the source tree is never
    touched.

Key Functions:
    - build_mapper(): Empty (identity) mapper
    - TreeMapper.set_content_mapper() / set_hint_mapper() / set_tags_mapper()
    - TreeMapper.set_array_mapper(): Post-process each mapped array
    - TreeMapper.map_tree(): Apply the mapper

Dependencies:
    - core.models: shapes, trees
    - core.schemas.validator.ShapeMismatchError

Used By:
    - engine.multi_renderer: Builds renderer cells, extracts scores/state
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from ..models.shapes import (
    ArrayShape,
    ContentShape,
    HintShape,
    ObjectShape,
    Shape,
    TagsShape,
)
from ..models.trees import Array, Content, Hint, Object, Path, Tags, Tree
from ..schemas.validator import ShapeMismatchError

# fn(value, shape, path) -> new value
LeafMapper = Callable[[Any, Shape, Path], Any]
# fn(mapped, original, shape, path) -> Array
ArrayMapper = Callable[[Array, Array, ArrayShape, Path], Array]


def _identity(value: Any, shape: Shape, path: Path) -> Any:
    return value


@dataclass(frozen=True)
class TreeMapper:
    """
    Immutable mapper configuration.

    Every `set_*` method returns a new mapper, so a partially configured
    mapper can be shared and specialised.

    Attributes:
        content_mapper: Applied to Content leaf values
        hint_mapper: Applied to Hint leaf values
        tags_mapper: Applied to Tags leaf values
        array_mapper: Optional post-processing of each mapped array

    Example:
        >>> lengths = build_mapper().set_content_mapper(lambda c, s, p: len(c.content))
        >>> tree_to_plain(lengths.map_tree(tree, shape))
        {'question': 12, 'hints': [...]}
    """

    content_mapper: LeafMapper = _identity
    hint_mapper: LeafMapper = _identity
    tags_mapper: LeafMapper = _identity
    array_mapper: Optional[ArrayMapper] = None

    def set_content_mapper(self, fn: LeafMapper) -> TreeMapper:
        return replace(self, content_mapper=fn)

    def set_hint_mapper(self, fn: LeafMapper) -> TreeMapper:
        return replace(self, hint_mapper=fn)

    def set_tags_mapper(self, fn: LeafMapper) -> TreeMapper:
        return replace(self, tags_mapper=fn)

    def set_array_mapper(self, fn: ArrayMapper) -> TreeMapper:
        return replace(self, array_mapper=fn)

    def map_tree(self, tree: Tree, shape: Shape, path: Path = ()) -> Tree:
        """
        Map a tree in lock-step with its shape.

        Args:
            tree: Source tree (never modified)
            shape: Shape the tree was built with
            path: Path of `tree` within the root (for nested calls)

        Returns:
            New tree with the same topology

        Raises:
            ShapeMismatchError: If the tree's variant disagrees with the shape
        """
        if isinstance(shape, ContentShape):
            _expect(tree, Content, "content", path)
            return Content(self.content_mapper(tree.value, shape, path))
        if isinstance(shape, HintShape):
            _expect(tree, Hint, "hint", path)
            return Hint(self.hint_mapper(tree.value, shape, path))
        if isinstance(shape, TagsShape):
            _expect(tree, Tags, "tags", path)
            return Tags(self.tags_mapper(tree.value, shape, path))
        if isinstance(shape, ArrayShape):
            _expect(tree, Array, "array", path)
            mapped = Array(tuple(
                self.map_tree(child, shape.element_shape, path + (index,))
                for index, child in enumerate(tree.children)
            ))
            if self.array_mapper is not None:
                mapped = self.array_mapper(mapped, tree, shape, path)
            return mapped
        if isinstance(shape, ObjectShape):
            _expect(tree, Object, "object", path)
            children = {}
            for name, field_shape in shape.fields.items():
                if name not in tree.children:
                    raise ShapeMismatchError(path + (name,), field_shape.type_name, "missing")
                children[name] = self.map_tree(tree.children[name], field_shape, path + (name,))
            return Object(children)
        raise TypeError(f"Unknown shape: {shape!r}")


def _expect(tree: Tree, node_type: type, expected: str, path: Path) -> None:
    if not isinstance(tree, node_type):
        raise ShapeMismatchError(path, expected, tree)


def build_mapper() -> TreeMapper:
    """Return an identity mapper, ready to be configured."""
    return TreeMapper()
