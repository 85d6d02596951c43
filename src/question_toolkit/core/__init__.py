"""
Question Toolkit Core Package

Shared data models and tree machinery for the multi-item composition
engine.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Shapes, items, payload leaves and trees are frozen dataclasses
   - Transformations always produce new trees

2. **Closed Variants**
   - Shapes and trees are closed unions (content / hint / tags / array / object)
   - Every traversal handles each case and raises on anything else

3. **Topology-only Validation**
   - ShapeMismatchError is raised when item and shape disagree
   - Leaf payload contents are never validated here
"""

from .models import Item, Score, Shape, Tree
from .schemas import ShapeMismatchError, ValidationError
from .trees import build_mapper, build_tree, item_to_tree

__all__ = [
    "Item",
    "Score",
    "Shape",
    "Tree",
    "ShapeMismatchError",
    "ValidationError",
    "build_mapper",
    "build_tree",
    "item_to_tree",
]
