"""PySide6 view layer: leaf renderers, widgets, the engine host widget and the demo app."""

from .multi_renderer_widget import MultiRendererWidget, content_element, hints_element, stack_compose

__all__ = ["MultiRendererWidget", "content_element", "hints_element", "stack_compose"]
