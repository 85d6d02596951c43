"""
Serialization Utilities

JSON helpers for items, shapes and serialized-state trees.

- Items and shapes keep their JSON form in `to_dict()` / `from_dict()`;
  these helpers add file I/O.
- Serialized-state trees are plain nested dicts/lists already; they are
  written as-is and read back unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.items import Item
from ..models.shapes import Shape, shape_from_dict


# ─────────────────────────────────────────────────────────────────────────────
# Item Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_item(item: Item) -> dict[str, Any]:
    """Serialize an Item to a JSON-compatible dict."""
    return item.to_dict()


def deserialize_item(data: dict[str, Any]) -> Item:
    """
    Deserialize an Item.

    Raises:
        ValidationError: If the `_multi` root is missing
    """
    return Item.from_dict(data)


def load_item(path: Path) -> Item:
    """Load an Item from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return deserialize_item(json.load(f))


def save_item(item: Item, path: Path) -> None:
    """Save an Item to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_item(item), f, indent=2)


# ─────────────────────────────────────────────────────────────────────────────
# Shape Serialization
# ─────────────────────────────────────────────────────────────────────────────

def load_shape(path: Path) -> Shape:
    """Load a Shape from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return shape_from_dict(json.load(f))


def save_shape(shape: Shape, path: Path) -> None:
    """Save a Shape to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(shape.to_dict(), f, indent=2)


# ─────────────────────────────────────────────────────────────────────────────
# Serialized State
# ─────────────────────────────────────────────────────────────────────────────

def dumps_state(state_tree: Any) -> str:
    """Encode a serialized-state tree as JSON text."""
    return json.dumps(state_tree, sort_keys=True)


def loads_state(text: str) -> Any:
    """Decode a serialized-state tree from JSON text."""
    return json.loads(text)
