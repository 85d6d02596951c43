"""
Editor for the text-input widget.

Only the question writer sees this. It edits the rubric the widget is
graded against.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFormLayout, QLineEdit, QSpinBox, QWidget


class TextInputEditor(QWidget):
    """Form for the correct answer, letter tolerance and alternate regex."""

    changed = Signal(dict)

    def __init__(self, rubric: Optional[Mapping[str, Any]] = None, parent=None):
        super().__init__(parent)
        rubric = rubric or {}

        self.layout = QFormLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.answer_input = QLineEdit(rubric.get("answer", ""))
        self.layout.addRow("Correct answer:", self.answer_input)

        self.edit_distance_input = QSpinBox()
        self.edit_distance_input.setRange(0, 99)
        self.edit_distance_input.setSuffix(" letter tolerance")
        self.edit_distance_input.setValue(int(rubric.get("editDistance", 0)))
        self.layout.addRow("With:", self.edit_distance_input)

        self.regex_input = QLineEdit(rubric.get("gradingRegex", ""))
        self.regex_input.setPlaceholderText("/regex/")
        self.layout.addRow("Alternate grading regex:", self.regex_input)

        self.answer_input.textChanged.connect(self._emit_changed)
        self.edit_distance_input.valueChanged.connect(self._emit_changed)
        self.regex_input.textChanged.connect(self._emit_changed)

    def _emit_changed(self, *_):
        self.changed.emit(self.serialize())

    def serialize(self) -> dict[str, Any]:
        return {
            "answer": self.answer_input.text(),
            "editDistance": self.edit_distance_input.value(),
            "gradingRegex": self.regex_input.text(),
        }

