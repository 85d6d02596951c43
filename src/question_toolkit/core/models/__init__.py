"""
Core Models Package

Immutable data models shared by the tree builder, the mapper and the
composition engine.

| Model | Role |
|-------|------|
| `Shape` | Topology descriptor (content / hint / tags / array / object) |
| `Item` | Immutable snapshot of a multi-item's source data |
| `Tree` | Payload tree mirroring a Shape |
| `Score` | Grading result with an associative combine |
"""

from .items import ContentNode, HintNode, TagsNode, Item
from .scores import Score, GradedResult, combine_scores
from .shapes import (
    Shape,
    ContentShape,
    HintShape,
    TagsShape,
    ArrayShape,
    ObjectShape,
    content,
    hint,
    tags,
    array_of,
    shape,
    shape_from_dict,
)
from .trees import Tree, Content, Hint, Tags, Array, Object, Path, tree_to_plain, iter_leaves

__all__ = [
    "ContentNode",
    "HintNode",
    "TagsNode",
    "Item",
    "Score",
    "GradedResult",
    "combine_scores",
    "Shape",
    "ContentShape",
    "HintShape",
    "TagsShape",
    "ArrayShape",
    "ObjectShape",
    "content",
    "hint",
    "tags",
    "array_of",
    "shape",
    "shape_from_dict",
    "Tree",
    "Content",
    "Hint",
    "Tags",
    "Array",
    "Object",
    "Path",
    "tree_to_plain",
    "iter_leaves",
]
