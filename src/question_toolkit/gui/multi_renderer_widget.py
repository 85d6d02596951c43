"""
Qt host for the multi-item composition engine.

MultiRendererWidget owns a MultiRenderer and presents it: the element tree
is handed to a `compose` function that mounts the leaves it wants and
returns the widget to show. When the item cannot be built, a red error
label is shown in place of the content.

Example:
    def compose(renderers):
        box = QWidget()
        layout = QVBoxLayout(box)
        layout.addWidget(renderers["question"].value.mount())
        layout.addWidget(renderers["hints"].annotations["first_n"](1).mount())
        return box

    view = MultiRendererWidget(item, item_shape, compose)
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from question_toolkit.core.models.items import ContentNode, HintNode, Item
from question_toolkit.core.models.scores import GradedResult
from question_toolkit.core.models.shapes import Shape
from question_toolkit.core.models.trees import Array, Content, Hint, Object, Tree, iter_leaves
from question_toolkit.engine import LeafElement, MultiRenderer, MultiRendererConfig
from question_toolkit.gui.renderers import ContentRenderer, HintsRenderer
from question_toolkit.gui.styles.theme import get_colors

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Element Factories
# ─────────────────────────────────────────────────────────────────────────────

def content_element(content: ContentNode, *, ref, find_external_widgets, props) -> LeafElement:
    """Deferred ContentRenderer for one content leaf."""
    return LeafElement(
        ContentRenderer,
        (content,),
        {"find_external_widgets": find_external_widgets, **props},
        ref=ref,
    )


def hints_element(hints: Sequence[HintNode], *, hints_visible: int, props) -> LeafElement:
    """Deferred HintsRenderer for one or more hints."""
    return LeafElement(
        HintsRenderer,
        (tuple(hints),),
        {"hints_visible": hints_visible, **props},
    )


def stack_compose(renderers: Tree) -> QWidget:
    """
    Default layout: every leaf stacked vertically in tree order, each hint
    array shown as a single hints renderer.
    """
    container = QWidget()
    layout = QVBoxLayout(container)
    layout.setContentsMargins(0, 0, 0, 0)

    def add(node: Tree) -> None:
        if isinstance(node, (Content, Hint)):
            layout.addWidget(node.value.mount())
        elif isinstance(node, Array):
            first_n = node.annotations.get("first_n")
            if first_n is not None:
                layout.addWidget(first_n(-1).mount())
            else:
                for child in node:
                    add(child)
        elif isinstance(node, Object):
            for child in node.children.values():
                add(child)
        # Tags are never rendered

    add(renderers)
    layout.addStretch()
    return container


# ─────────────────────────────────────────────────────────────────────────────
# Widget
# ─────────────────────────────────────────────────────────────────────────────

class MultiRendererWidget(QWidget):
    """Presents a multi-item through a compose function."""

    rebuilt = Signal()
    stateRestored = Signal()

    def __init__(
        self,
        item: Item,
        shape: Shape,
        compose: Callable[[Tree], QWidget] = stack_compose,
        config: Optional[MultiRendererConfig] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._compose = compose
        self.engine = MultiRenderer(
            item,
            shape,
            content_factory=content_element,
            hints_factory=hints_element,
            config=config,
        )

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self._body: Optional[QWidget] = None
        self._render()

    def set_item(self, item: Item, shape: Optional[Shape] = None) -> bool:
        """
        Show a new item. Re-renders only when the item identity changed.

        Returns:
            True if the view was rebuilt
        """
        if not self.engine.rebuild(item, shape):
            return False
        self._render()
        self.rebuilt.emit()
        return True

    def _render(self):
        if self._body is not None:
            self.layout.removeWidget(self._body)
            self._body.deleteLater()
        self._body = self.engine.render(self._compose, on_error=self._make_error_label)
        self.layout.addWidget(self._body)

    def _make_error_label(self, message: str) -> QLabel:
        C = get_colors()
        label = QLabel(message)
        label.setObjectName("multiRendererError")
        label.setWordWrap(True)
        label.setStyleSheet(f"color: {C.ERROR};")
        return label

    def focus(self) -> bool:
        """
        Focus the first focusable widget of the mounted content leaves.

        Returns:
            False if no mounted leaf took focus (or the item is errored)
        """
        if self.engine.data_tree is None:
            return False
        for _, leaf in iter_leaves(self.engine.data_tree):
            if isinstance(leaf, Content) and leaf.value.ref is not None and leaf.value.ref.focus():
                return True
        return False

    @property
    def body(self) -> Optional[QWidget]:
        return self._body

    @property
    def error(self) -> Optional[Exception]:
        return self.engine.error

    # ─────────────────────────────────────────────────────────────────────────
    # Engine Surface
    # ─────────────────────────────────────────────────────────────────────────

    def score(self) -> GradedResult:
        return self.engine.score()

    def get_scores(self) -> Any:
        return self.engine.get_scores()

    def get_serialized_state(self) -> Any:
        return self.engine.get_serialized_state()

    def restore_serialized_state(self, state: Any, callback: Optional[Callable[[], None]] = None) -> int:
        """Restore state; `stateRestored` is emitted once every leaf has finished."""

        def done():
            self.stateRestored.emit()
            if callback is not None:
                callback()

        return self.engine.restore_serialized_state(state, done)
