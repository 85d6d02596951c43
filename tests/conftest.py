import os
import sys
from pathlib import Path

import pytest

# Qt widgets are created without a display during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import question_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from question_toolkit.core.models import Item, Score, array_of, content, hint, shape, tags
from question_toolkit.engine import LeafElement, MultiRenderer


class FakeLeaf:
    """
    Minimal content leaf implementing the capability contract.

    Widgets are named after the content's widget ids, prefixed with the
    content text so tests can tell which leaf contributed a result.
    """

    def __init__(self, content_node, find_external_widgets=None, sync=True, **props):
        self.content = content_node
        self.find_external_widgets = find_external_widgets
        self.sync = sync
        self.props = props
        self.next_score = Score.points(1, 1)
        self.user_input = content_node.content + "-guess"
        self.state = {"value": content_node.content}
        self.restored = []
        self.pending = []

    def find_internal_widgets(self, criterion):
        return [
            f"{self.content.content}:{widget_id}"
            for widget_id in self.content.widgets
            if criterion is None or criterion == widget_id
        ]

    def guess_and_score(self):
        return self.user_input, self.next_score

    def score(self):
        return self.next_score

    def get_user_input(self):
        return self.user_input

    def get_serialized_state(self):
        return dict(self.state)

    def restore_serialized_state(self, state, on_complete):
        self.restored.append(state)
        self.state = dict(state)
        if self.sync:
            on_complete()
        else:
            self.pending.append(on_complete)


def fake_content_element(content_node, *, ref, find_external_widgets, props):
    return LeafElement(
        FakeLeaf,
        (content_node,),
        {"find_external_widgets": find_external_widgets, **props},
        ref=ref,
    )


def fake_hints_element(hints, *, hints_visible, props):
    return LeafElement(tuple, (tuple(hints),), {}, ref=None)


def content_data(text, widgets=("w1",)):
    return {
        "__type": "content",
        "content": text,
        "widgets": {widget_id: {"type": "text-input"} for widget_id in widgets},
    }


def hint_data(text):
    return {"__type": "hint", "content": text}


SAMPLE_SHAPE = shape({
    "left": content,
    "right": array_of(content),
    "hints": array_of(hint),
    "tags": tags,
})


def sample_data():
    return {"_multi": {
        "left": content_data("left"),
        "right": [content_data("r0"), content_data("r1", widgets=("w1", "w2"))],
        "hints": [hint_data("h0"), hint_data("h1"), hint_data("h2")],
        "tags": ["algebra"],
    }}


@pytest.fixture
def sample_shape():
    return SAMPLE_SHAPE


@pytest.fixture
def sample_item():
    return Item.from_dict(sample_data())


@pytest.fixture
def make_engine():
    """Build a MultiRenderer wired to FakeLeaf elements."""

    def _make(item=None, item_shape=SAMPLE_SHAPE, **kwargs):
        return MultiRenderer(
            item if item is not None else Item.from_dict(sample_data()),
            item_shape,
            content_factory=fake_content_element,
            hints_factory=fake_hints_element,
            **kwargs,
        )

    return _make


def content_cells(engine):
    """Content cells of an engine's data tree, in pre-order."""
    from question_toolkit.core.models.trees import Content, iter_leaves
    return [leaf.value for _, leaf in iter_leaves(engine.data_tree) if isinstance(leaf, Content)]


def mount_all(engine, **extra):
    """Mount every content leaf; returns the leaves in pre-order."""
    return [cell.element.mount(**extra) for cell in content_cells(engine)]
