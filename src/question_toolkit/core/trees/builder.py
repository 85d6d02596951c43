"""
Module: core.trees.builder

Purpose:
    Builds an immutable payload Tree from an Item according to its Shape.
    Raw JSON leaves are converted into ContentNode / HintNode / TagsNode
    payloads on the way.

Key Functions:
    - build_tree(): Build a Tree from an item root and a shape
    - item_to_tree(): Build a Tree from an Item snapshot

Dependencies:
    - core.models: shapes, items, trees
    - core.schemas.validator.ShapeMismatchError

Used By:
    - engine.multi_renderer: Rebuilds the cached renderer tree
"""

from __future__ import annotations

from typing import Any, Mapping

from ..models.items import ContentNode, HintNode, Item, TagsNode
from ..models.shapes import (
    ArrayShape,
    ContentShape,
    HintShape,
    ObjectShape,
    Shape,
    TagsShape,
)
from ..models.trees import Array, Content, Hint, Object, Path, Tags, Tree
from ..schemas.validator import ShapeMismatchError, ValidationError


def item_to_tree(item: Item, shape: Shape) -> Tree:
    """
    Build the payload tree of an Item.

    Args:
        item: Item snapshot
        shape: Shape describing the item's `_multi` root

    Returns:
        Tree with ContentNode/HintNode/TagsNode values at its leaves

    Raises:
        ShapeMismatchError: If the item topology disagrees with the shape
    """
    return build_tree(item.multi, shape)


def build_tree(node: Any, shape: Shape, path: Path = ()) -> Tree:
    """
    Build a Tree from item data, walking the data and shape in lock-step.

    Args:
        node: Item data at this position
        shape: Shape expected at this position
        path: Position of `node` (used in error reports)

    Returns:
        Tree mirroring `shape`

    Raises:
        ShapeMismatchError: At the first position where the data disagrees
            with the shape

    Example:
        >>> tree = build_tree([{"__type": "hint", "content": "x"}], array_of(hint))
        >>> tree[0].value.content
        'x'
    """
    if isinstance(shape, ContentShape):
        return Content(_leaf(node, ContentNode, "content", path))
    if isinstance(shape, HintShape):
        return Hint(_leaf(node, HintNode, "hint", path))
    if isinstance(shape, TagsShape):
        return Tags(_tags(node, path))
    if isinstance(shape, ArrayShape):
        if not isinstance(node, (list, tuple)):
            raise ShapeMismatchError(path, "array", node)
        return Array(tuple(
            build_tree(child, shape.element_shape, path + (index,))
            for index, child in enumerate(node)
        ))
    if isinstance(shape, ObjectShape):
        if not isinstance(node, Mapping) or "__type" in node:
            raise ShapeMismatchError(path, "object", node)
        children = {}
        for name, field_shape in shape.fields.items():
            if name not in node:
                raise ShapeMismatchError(path + (name,), field_shape.type_name, "missing")
            children[name] = build_tree(node[name], field_shape, path + (name,))
        return Object(children)
    raise TypeError(f"Unknown shape: {shape!r}")


def _leaf(node: Any, node_type: type, expected: str, path: Path):
    if isinstance(node, node_type):
        return node
    if not isinstance(node, Mapping) or node.get("__type") != expected:
        raise ShapeMismatchError(path, expected, node)
    try:
        return node_type.from_dict(node)
    except ValidationError as exc:
        raise ShapeMismatchError(path, expected, str(exc)) from exc


def _tags(node: Any, path: Path) -> TagsNode:
    if isinstance(node, TagsNode):
        return node
    if isinstance(node, (list, tuple)) or (
        isinstance(node, Mapping) and node.get("__type") == "tags"
    ):
        try:
            return TagsNode.from_value(node)
        except ValidationError as exc:
            raise ShapeMismatchError(path, "tags", str(exc)) from exc
    raise ShapeMismatchError(path, "tags", node)
