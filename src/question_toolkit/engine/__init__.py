"""
Multi-item composition engine.

Builds a cached tree of renderer cells from an Item and its Shape, and
aggregates scores and serialized state across the mounted leaves.
"""

from .cells import LeafElement, LeafInstance, RendererCell
from .config import MultiRendererConfig
from .multi_renderer import MultiRenderer
from .restore import RestoreBatch

__all__ = [
    "LeafElement",
    "LeafInstance",
    "RendererCell",
    "MultiRendererConfig",
    "MultiRenderer",
    "RestoreBatch",
]
