"""Leaf renderers mounted by the composition engine."""

from .content_renderer import ContentRenderer
from .hints_renderer import HintsRenderer

__all__ = ["ContentRenderer", "HintsRenderer"]
