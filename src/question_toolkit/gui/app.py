"""
Entry point for the PySide6 demo application.

Shows a sample multi-item (a question with a text-input widget, a
follow-up question and a list of hints) next to an editor for the first
answer's rubric. Editing the rubric produces a new item; the learner's
answers are carried over through the serialized-state round trip.
"""
from __future__ import annotations

import logging
import queue
import sys
from typing import Any, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QApplication,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from question_toolkit import __version__
from question_toolkit.core.models import Item, array_of, content, hint, shape, tags
from question_toolkit.core.models.trees import Tree
from question_toolkit.gui.multi_renderer_widget import MultiRendererWidget
from question_toolkit.gui.renderers import HintsRenderer
from question_toolkit.gui.styles.theme import get_colors
from question_toolkit.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_log_queue
from question_toolkit.gui.widgets import EDITOR_TYPES
from question_toolkit.gui.widgets.console_widget import ConsoleWidget

logger = logging.getLogger(__name__)

SAMPLE_SHAPE = shape({
    "question": content,
    "followUp": content,
    "hints": array_of(hint),
    "tags": tags,
})


def sample_item_data(rubric: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """JSON form of the demo item."""
    rubric = rubric or {"answer": "photosynthesis", "editDistance": 2, "gradingRegex": ""}
    return {"_multi": {
        "question": {
            "__type": "content",
            "content": "Plants make glucose by [[☃ text-input 1]]",
            "widgets": {"text-input 1": {"type": "text-input", "options": rubric}},
        },
        "followUp": {
            "__type": "content",
            "content": "Which gas is released? [[☃ text-input 1]]",
            "widgets": {"text-input 1": {"type": "text-input", "options": {
                "answer": "oxygen", "editDistance": 1, "gradingRegex": "^[Oo]2$",
            }}},
        },
        "hints": [
            {"__type": "hint", "content": "It happens in the chloroplasts."},
            {"__type": "hint", "content": "The word starts with 'photo'."},
        ],
        "tags": ["biology", "plants"],
    }}


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"Question Toolkit {__version__}")
        self._hints_renderer: Optional[HintsRenderer] = None
        self._hints_shown = 0

        # Engine logs are shown in the console pane
        self.console = ConsoleWidget()
        self.log_queue: queue.Queue = queue.Queue()
        self._log_handler = attach_queue_handler(self.log_queue)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        central = QWidget()
        outer = QVBoxLayout(central)
        layout = QHBoxLayout()
        outer.addLayout(layout, 3)
        outer.addWidget(self.console, 1)

        # Left: learner view
        learner = QVBoxLayout()
        self.view = MultiRendererWidget(
            Item.from_dict(sample_item_data()), SAMPLE_SHAPE, self._compose
        )
        learner.addWidget(self.view)

        buttons = QHBoxLayout()
        self.check_button = QPushButton("Check answers")
        self.check_button.clicked.connect(self._check)
        buttons.addWidget(self.check_button)
        self.hint_button = QPushButton("Show hint")
        self.hint_button.clicked.connect(self._next_hint)
        buttons.addWidget(self.hint_button)
        learner.addLayout(buttons)

        self.result_label = QLabel("")
        learner.addWidget(self.result_label)
        layout.addLayout(learner, 2)

        # Right: rubric editor
        editor_box = QGroupBox("Answer rubric")
        editor_layout = QVBoxLayout(editor_box)
        rubric = sample_item_data()["_multi"]["question"]["widgets"]["text-input 1"]["options"]
        self.editor = EDITOR_TYPES["text-input"](rubric)
        self.editor.changed.connect(self._rubric_changed)
        editor_layout.addWidget(self.editor)
        editor_layout.addStretch()
        layout.addWidget(editor_box, 1)

        self.setCentralWidget(central)
        self.view.focus()

    def _compose(self, renderers: Tree) -> QWidget:
        box = QWidget()
        layout = QVBoxLayout(box)
        layout.addWidget(renderers["question"].value.mount())
        layout.addWidget(renderers["followUp"].value.mount())
        self._hints_renderer = renderers["hints"].annotations["first_n"](self._hints_shown).mount()
        layout.addWidget(self._hints_renderer)
        return box

    def _check(self):
        result = self.view.score()
        C = get_colors()
        if result.empty:
            self.result_label.setText(result.message or "Please answer every part.")
            self.result_label.setStyleSheet(f"color: {C.WARNING};")
            return
        score = result.score
        color = C.SUCCESS if result.correct else C.ERROR
        self.result_label.setText(f"{score.earned} / {score.total} correct")
        self.result_label.setStyleSheet(f"color: {color};")

    def _next_hint(self):
        self._hints_shown += 1
        if self._hints_renderer is not None:
            self._hints_renderer.set_hints_visible(self._hints_shown)

    def _rubric_changed(self, rubric: dict):
        state = self.view.get_serialized_state()
        if self.view.set_item(Item.from_dict(sample_item_data(rubric))):
            self.view.restore_serialized_state(
                state, lambda: logger.info("Restored answers after rubric change")
            )

    def _drain_log_queue(self):
        drain_log_queue(self.log_queue, self.console.append_log)

    def closeEvent(self, event):
        self.log_timer.stop()
        detach_queue_handler(self._log_handler)
        super().closeEvent(event)


def run():
    logging.getLogger("question_toolkit").setLevel(logging.INFO)
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow()
    window.resize(900, 480)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
