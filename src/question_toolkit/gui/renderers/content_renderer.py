"""
Content renderer.

Renders one ContentNode: markup text with interactive widgets embedded
inline as "[[☃ text-input 1]]". This is the content leaf the composition
engine mounts; it implements the leaf capability contract (widget lookup,
grading, serialized state).
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from question_toolkit.core.models.items import ContentNode
from question_toolkit.core.models.scores import Score
from question_toolkit.gui.styles.theme import get_colors
from question_toolkit.gui.widgets import WIDGET_TYPES

logger = logging.getLogger(__name__)

WIDGET_PATTERN = re.compile(r"\[\[☃ ([a-z-]+ [0-9]+)\]\]")


def split_content(text: str) -> List[tuple[str, str]]:
    """
    Split markup into ("text", chunk) and ("widget", widget_id) segments.

    Example:
        >>> split_content("x = [[☃ text-input 1]] cm")
        [('text', 'x = '), ('widget', 'text-input 1'), ('text', ' cm')]
    """
    segments = []
    position = 0
    for match in WIDGET_PATTERN.finditer(text):
        if match.start() > position:
            segments.append(("text", text[position:match.start()]))
        segments.append(("widget", match.group(1)))
        position = match.end()
    if position < len(text):
        segments.append(("text", text[position:]))
    return segments


class ContentRenderer(QWidget):
    """Renders content and hosts its widgets."""

    def __init__(
        self,
        content: ContentNode,
        find_external_widgets: Optional[Callable[[Any], list]] = None,
        read_only: bool = False,
        parent=None,
        **props,
    ):
        super().__init__(parent)
        self.content = content
        self._find_external_widgets = find_external_widgets
        self.read_only = read_only
        self.props = props

        self._widgets: Dict[str, QWidget] = {}

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        for paragraph in content.content.split("\n\n"):
            self.layout.addWidget(self._render_paragraph(paragraph))

    def _render_paragraph(self, paragraph: str) -> QWidget:
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        for kind, value in split_content(paragraph):
            if kind == "text":
                label = QLabel(value)
                label.setWordWrap(True)
                row_layout.addWidget(label)
            else:
                row_layout.addWidget(self._make_widget(value))
        row_layout.addStretch()
        return row

    def _make_widget(self, widget_id: str) -> QWidget:
        info = self.content.widgets.get(widget_id, {})
        widget_type = info.get("type", widget_id.rsplit(" ", 1)[0])
        widget_class = WIDGET_TYPES.get(widget_type)
        if widget_class is None:
            logger.warning("Unsupported widget type %r in content", widget_type)
            placeholder = QLabel(f"[Unsupported widget: {widget_type}]")
            placeholder.setStyleSheet(f"color: {get_colors().WARNING};")
            return placeholder

        widget = widget_class(rubric=info.get("options", {}))
        widget.setReadOnly(self.read_only)
        self._widgets[widget_id] = widget
        return widget

    # ─────────────────────────────────────────────────────────────────────────
    # Widget Lookup
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def widget_ids(self) -> List[str]:
        return list(self._widgets)

    def get_widget(self, widget_id: str) -> Optional[QWidget]:
        return self._widgets.get(widget_id)

    def find_internal_widgets(self, criterion: Any) -> list:
        """
        Widgets in this content matching `criterion`: a widget id, or a
        callable (widget_id, widget_info, widget) -> bool.
        """
        if callable(criterion):
            return [
                widget for widget_id, widget in self._widgets.items()
                if criterion(widget_id, self.content.widgets.get(widget_id, {}), widget)
            ]
        return [widget for widget_id, widget in self._widgets.items() if widget_id == criterion]

    def find_external_widgets(self, criterion: Any) -> list:
        if self._find_external_widgets is None:
            return []
        return self._find_external_widgets(criterion)

    def find_widgets(self, criterion: Any) -> list:
        """Matching widgets here first, then in every other mounted leaf."""
        return self.find_internal_widgets(criterion) + self.find_external_widgets(criterion)

    def focus(self) -> bool:
        for widget in self._widgets.values():
            if widget.focus():
                return True
        return False

    # ─────────────────────────────────────────────────────────────────────────
    # Grading
    # ─────────────────────────────────────────────────────────────────────────

    def _graded_widgets(self) -> List[tuple[str, QWidget]]:
        return [
            (widget_id, widget) for widget_id, widget in self._widgets.items()
            if self.content.widgets.get(widget_id, {}).get("graded", True)
        ]

    def guess_and_score(self) -> tuple[list, Score]:
        guesses = []
        scores = []
        for widget_id, widget in self._graded_widgets():
            rubric = self.content.widgets.get(widget_id, {}).get("options", {})
            guesses.append(widget.get_user_input())
            scores.append(widget.simple_validate(rubric))
        return guesses, sum(scores, Score.identity())

    def score(self) -> Score:
        return self.guess_and_score()[1]

    def get_user_input(self) -> list:
        return [widget.get_user_input() for _, widget in self._graded_widgets()]

    # ─────────────────────────────────────────────────────────────────────────
    # Serialized State
    # ─────────────────────────────────────────────────────────────────────────

    def get_serialized_state(self) -> dict[str, Any]:
        return {
            widget_id: widget.get_serialized_state()
            for widget_id, widget in self._widgets.items()
        }

    def restore_serialized_state(self, state: dict[str, Any], on_complete: Callable[[], None]) -> None:
        """Restore widget states; completes on the next event-loop turn."""
        for widget_id, widget_state in state.items():
            widget = self._widgets.get(widget_id)
            if widget is None:
                logger.debug("Skipping state for unknown widget %r", widget_id)
                continue
            widget.restore_serialized_state(widget_state)
        QTimer.singleShot(0, on_complete)
