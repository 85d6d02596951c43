"""
Text Input Widget

A simple free-text answer widget. It is less capable than a numeric input,
but its structure is representative of every interactive widget: it
reports user input, grades itself against a rubric, and saves/restores its
state.

Rubric (produced by TextInputEditor.serialize()):
    answer: Expected answer
    editDistance: Letter tolerance (optimal string alignment distance:
        Damerau-Levenshtein where a swapped pair is not edited again)
    gradingRegex: Alternate grading regex, searched when the answer misses
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLineEdit
from rapidfuzz.distance import OSA

from question_toolkit.core.models.scores import Score

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "It looks like you haven't answered all of the question yet."


class TextInputWidget(QLineEdit):
    """Free-text answer widget."""

    widget_type = "text-input"
    valueChanged = Signal(str)

    def __init__(self, value: str = "", rubric: Optional[Mapping[str, Any]] = None, parent=None):
        super().__init__(parent)
        self.rubric = dict(rubric or {})
        self.setText(value or "")
        self.textChanged.connect(self.valueChanged.emit)

    def get_user_input(self) -> str:
        return self.text()

    def focus(self) -> bool:
        """Focus the input. Returns True since text inputs are focusable."""
        self.setFocus()
        return True

    def simple_validate(self, rubric: Optional[Mapping[str, Any]] = None) -> Score:
        return self.validate(self.get_user_input(), rubric if rubric is not None else self.rubric)

    def get_serialized_state(self) -> dict[str, Any]:
        return {"value": self.text()}

    def restore_serialized_state(self, state: Mapping[str, Any]) -> None:
        self.setText(state.get("value", "") or "")

    @staticmethod
    def validate(value: Optional[str], rubric: Mapping[str, Any]) -> Score:
        """
        Grade a value against a rubric.

        Returns:
            invalid when nothing was entered, otherwise 1/1 or 0/1
        """
        if value is None or value == "":
            return Score.invalid(EMPTY_MESSAGE)

        answer = rubric.get("answer", "")
        distance = OSA.distance(answer, value)
        correct = distance <= int(rubric.get("editDistance", 0))

        grading_regex = rubric.get("gradingRegex")
        if not correct and grading_regex:
            correct = _regex_matches(grading_regex, value)

        if correct:
            return Score.points(1, 1)
        return Score.points(0, 1)


def _regex_matches(grading_regex: str, value: str) -> bool:
    # An invalid pattern never matches
    try:
        pattern = re.compile(grading_regex)
    except re.error as e:
        logger.warning(f"Ignoring invalid grading regex {grading_regex!r}: {e}")
        return False
    return pattern.search(value) is not None
