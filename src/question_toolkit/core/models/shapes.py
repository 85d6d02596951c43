"""
Module: shapes

Purpose:
    Provides the Shape sum type - a declarative, immutable description of
    a multi-item's topology. At every position a Shape says whether the
    item holds a content leaf, a hint leaf, a tags leaf, an array of a
    sub-shape, or an object of named sub-shapes.

Key Functions:
    - content / hint / tags: Singleton leaf shapes
    - array_of(shape): Array of a sub-shape
    - shape(fields): Object of named sub-shapes
    - Shape.to_dict() / shape_from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - types (std)

Used By:
    - core.trees.builder
    - core.trees.mapper
    - engine.multi_renderer
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True)
class ContentShape:
    """Position holding a ContentNode."""

    type_name = "content"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name}


@dataclass(frozen=True, slots=True)
class HintShape:
    """Position holding a HintNode."""

    type_name = "hint"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name}


@dataclass(frozen=True, slots=True)
class TagsShape:
    """Position holding a TagsNode (metadata, never rendered)."""

    type_name = "tags"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name}


@dataclass(frozen=True, slots=True)
class ArrayShape:
    """
    Position holding a sequence of items that all share one shape.

    Attributes:
        element_shape: Shape of every element of the sequence
    """

    element_shape: Shape

    type_name = "array"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type_name, "elementShape": self.element_shape.to_dict()}


@dataclass(frozen=True, slots=True)
class ObjectShape:
    """
    Position holding a mapping of named sub-items.

    Attributes:
        fields: Field name -> shape, in declaration order (read-only)
    """

    fields: Mapping[str, Shape] = field(default_factory=dict)

    type_name = "object"

    def __post_init__(self) -> None:
        """Freeze the field mapping."""
        for name in self.fields:
            if not isinstance(name, str):
                raise TypeError(f"Object shape field names must be strings: {name!r}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(tuple(self.fields.items()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectShape):
            return NotImplemented
        return dict(self.fields) == dict(other.fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type_name,
            "shape": {name: sub.to_dict() for name, sub in self.fields.items()},
        }


Shape = Union[ContentShape, HintShape, TagsShape, ArrayShape, ObjectShape]


# ─────────────────────────────────────────────────────────────────────────────
# Constructors
# ─────────────────────────────────────────────────────────────────────────────

content = ContentShape()
hint = HintShape()
tags = TagsShape()


def array_of(element_shape: Shape) -> ArrayShape:
    """Shape of a sequence whose elements all have `element_shape`."""
    return ArrayShape(element_shape)


def shape(fields: Mapping[str, Shape]) -> ObjectShape:
    """
    Shape of an object with the given named fields.

    Example:
        >>> s = shape({"question": content, "hints": array_of(hint)})
        >>> s.fields["hints"].element_shape is hint
        True
    """
    return ObjectShape(fields)


# ─────────────────────────────────────────────────────────────────────────────
# Serialization
# ─────────────────────────────────────────────────────────────────────────────

def shape_from_dict(data: Mapping[str, Any]) -> Shape:
    """
    Deserialize a Shape from its dictionary form.

    Args:
        data: Dict like {"type": "array", "elementShape": {"type": "hint"}}

    Returns:
        Shape instance

    Raises:
        ValueError: If the type marker is missing or unknown
    """
    type_name = data.get("type")
    if type_name == "content":
        return content
    if type_name == "hint":
        return hint
    if type_name == "tags":
        return tags
    if type_name == "array":
        return ArrayShape(shape_from_dict(data["elementShape"]))
    if type_name == "object":
        return ObjectShape({
            name: shape_from_dict(sub) for name, sub in data.get("shape", {}).items()
        })
    raise ValueError(f"Unknown shape type: {type_name!r}")
