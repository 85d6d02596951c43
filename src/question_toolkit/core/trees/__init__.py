"""Tree building and mapping."""

from .builder import build_tree, item_to_tree
from .mapper import TreeMapper, build_mapper

__all__ = ["build_tree", "item_to_tree", "TreeMapper", "build_mapper"]
