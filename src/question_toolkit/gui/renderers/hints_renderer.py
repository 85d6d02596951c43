"""
Hints renderer.

Shows the first N of a list of hints. A hint marked `replace` hides the
hint before it.
"""
from __future__ import annotations

from typing import Sequence

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from question_toolkit.core.models.items import HintNode
from question_toolkit.gui.renderers.content_renderer import WIDGET_PATTERN
from question_toolkit.gui.styles.theme import get_colors


def visible_hints(hints: Sequence[HintNode], hints_visible: int) -> list[tuple[int, HintNode]]:
    """
    Return (number, hint) pairs that should be on screen.

    Args:
        hints: All hints, in order
        hints_visible: How many hints have been revealed (-1 = all)
    """
    shown = hints if hints_visible < 0 else hints[:hints_visible]
    result: list[tuple[int, HintNode]] = []
    for number, hint in enumerate(shown, start=1):
        if hint.replace and result:
            result.pop()
        result.append((number, hint))
    return result


class HintsRenderer(QWidget):
    """Read-only list of revealed hints."""

    def __init__(self, hints: Sequence[HintNode], hints_visible: int = -1, parent=None, **props):
        super().__init__(parent)
        self.hints = tuple(hints)
        self.hints_visible = hints_visible
        self.props = props

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self._labels: list[QLabel] = []
        self._refresh()

    def set_hints_visible(self, hints_visible: int):
        self.hints_visible = hints_visible
        self._refresh()

    def _refresh(self):
        for label in self._labels:
            self.layout.removeWidget(label)
            label.deleteLater()
        self._labels = []

        C = get_colors()
        total = len(self.hints)
        for number, hint in visible_hints(self.hints, self.hints_visible):
            text = WIDGET_PATTERN.sub("", hint.content).strip()
            label = QLabel(f"Hint {number} of {total}: {text}")
            label.setWordWrap(True)
            label.setStyleSheet(f"color: {C.TEXT_SECONDARY};")
            self.layout.addWidget(label)
            self._labels.append(label)

    @property
    def shown_count(self) -> int:
        return len(self._labels)
