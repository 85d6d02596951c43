"""
Module: items

Purpose:
    Provides the leaf payloads of a multi-item (ContentNode, HintNode,
    TagsNode) and the Item snapshot that wraps the item's `_multi` root.

    Items arrive as JSON. Leaf positions carry a `__type` marker:

        {"_multi": {
            "question": {"__type": "content", "content": "...", "widgets": {...}},
            "hints": [{"__type": "hint", "content": "..."}],
            "tags": ["algebra", "linear"],
        }}

    The Item keeps the raw root; leaves are converted into payload objects
    by core.trees.builder, which is guided by the item's Shape.

Key Functions:
    - ContentNode.from_dict() / to_dict()
    - HintNode.from_dict() / to_dict()
    - TagsNode.from_value() / to_dict()
    - Item.from_dict() / to_dict()

Dependencies:
    - dataclasses (std)
    - core.schemas.validator.ValidationError

Used By:
    - core.trees.builder
    - engine.multi_renderer
    - gui.renderers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Tuple

from ..schemas.validator import ValidationError


CONTENT_TYPE = "content"
HINT_TYPE = "hint"
TAGS_TYPE = "tags"


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


def _check_type_marker(data: Mapping[str, Any], expected: str) -> None:
    marker = data.get("__type", expected)
    if marker != expected:
        raise ValidationError(
            f"Expected a {expected!r} node, got __type={marker!r}",
            path="__type",
        )


@dataclass(frozen=True, slots=True, eq=False)
class ContentNode:
    """
    Renderable question content.

    Attributes:
        content: Markup text; widgets are referenced inline as
            "[[☃ text-input 1]]"
        images: Image URL -> metadata
        widgets: Widget id -> widget info ({"type", "options", "graded"})
    """

    content: str = ""
    images: Mapping[str, Any] = field(default_factory=dict)
    widgets: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", _frozen(self.images))
        object.__setattr__(self, "widgets", _frozen(self.widgets))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContentNode:
        _check_type_marker(data, CONTENT_TYPE)
        return cls(
            content=data.get("content", ""),
            images=data.get("images", {}),
            widgets=data.get("widgets", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "__type": CONTENT_TYPE,
            "content": self.content,
            "images": dict(self.images),
            "widgets": dict(self.widgets),
        }

    def __repr__(self) -> str:
        return f"ContentNode({self.content[:30]!r}, widgets={len(self.widgets)})"


@dataclass(frozen=True, slots=True, eq=False)
class HintNode:
    """
    A single hint.

    Attributes:
        content: Markup text of the hint
        images: Image URL -> metadata
        widgets: Widget id -> widget info (displayed, never graded)
        replace: Whether this hint replaces the previous one when shown
    """

    content: str = ""
    images: Mapping[str, Any] = field(default_factory=dict)
    widgets: Mapping[str, Any] = field(default_factory=dict)
    replace: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", _frozen(self.images))
        object.__setattr__(self, "widgets", _frozen(self.widgets))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HintNode:
        _check_type_marker(data, HINT_TYPE)
        return cls(
            content=data.get("content", ""),
            images=data.get("images", {}),
            widgets=data.get("widgets", {}),
            replace=bool(data.get("replace", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        d = {
            "__type": HINT_TYPE,
            "content": self.content,
            "images": dict(self.images),
            "widgets": dict(self.widgets),
        }
        if self.replace:
            d["replace"] = True
        return d

    def __repr__(self) -> str:
        return f"HintNode({self.content[:30]!r})"


@dataclass(frozen=True, slots=True)
class TagsNode:
    """Item metadata tags (never rendered)."""

    tags: Tuple[str, ...] = ()

    @classmethod
    def from_value(cls, value: Sequence[str] | Mapping[str, Any]) -> TagsNode:
        """Accept either a bare list of tag strings or a `__type: tags` dict."""
        if isinstance(value, Mapping):
            _check_type_marker(value, TAGS_TYPE)
            value = value.get("tags", [])
        bad = [t for t in value if not isinstance(t, str)]
        if bad:
            raise ValidationError(
                f"Tags must be strings: {bad!r}",
                errors=[f"Invalid tag: {t!r}" for t in bad],
            )
        return cls(tuple(value))

    def to_dict(self) -> list[str]:
        return list(self.tags)


@dataclass(frozen=True, slots=True, eq=False)
class Item:
    """
    Immutable snapshot of a multi-item.

    Engines compare items by identity, not equality: the surrounding
    application creates a new Item whenever the underlying data changes.
    Equality is therefore left as identity (eq=False).

    Attributes:
        multi: Root of the item tree (dicts, lists and leaf payloads)
    """

    multi: Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Item:
        """
        Build an Item from its JSON form.

        Raises:
            ValidationError: If the `_multi` root is missing
        """
        if "_multi" not in data:
            raise ValidationError("Missing required field: '_multi'", path="_multi")
        return cls(data["_multi"])

    def to_dict(self) -> dict[str, Any]:
        return {"_multi": _to_json(self.multi)}


def _to_json(value: Any) -> Any:
    if isinstance(value, (ContentNode, HintNode, TagsNode)):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: _to_json(sub) for key, sub in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(sub) for sub in value]
    return value
