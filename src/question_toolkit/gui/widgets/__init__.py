"""
Interactive widgets that can be embedded in content.

Content references a widget inline as "[[☃ text-input 1]]"; the widget id
("text-input 1") keys into the content's `widgets` mapping, whose entry
gives the widget type and options.
"""

from .text_input import TextInputWidget
from .text_input_editor import TextInputEditor

WIDGET_TYPES = {
    TextInputWidget.widget_type: TextInputWidget,
}

EDITOR_TYPES = {
    TextInputWidget.widget_type: TextInputEditor,
}

__all__ = ["TextInputWidget", "TextInputEditor", "WIDGET_TYPES", "EDITOR_TYPES"]
