"""
Integration Tests for MultiRendererWidget

Drives the real Qt leaves through the composition engine: widget
discovery across branches, composite scoring, the error label and state
carried across a rebuild.
"""

from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from question_toolkit.core.models import Item, array_of, content, hint, shape, tags
from question_toolkit.engine import MultiRendererConfig
from question_toolkit.gui import MultiRendererWidget
from question_toolkit.gui.renderers import ContentRenderer, HintsRenderer
from question_toolkit.gui.styles.theme import get_colors

ITEM_SHAPE = shape({
    "question": content,
    "parts": array_of(content),
    "hints": array_of(hint),
    "tags": tags,
})


def text_input(answer):
    return {"type": "text-input", "options": {"answer": answer, "editDistance": 0}}


def make_item(answer="plants"):
    return Item.from_dict({"_multi": {
        "question": {
            "__type": "content",
            "content": "Who photosynthesises? [[☃ text-input 1]]",
            "widgets": {"text-input 1": text_input(answer)},
        },
        "parts": [
            {
                "__type": "content",
                "content": "Which gas? [[☃ text-input 1]]",
                "widgets": {"text-input 1": text_input("oxygen")},
            },
        ],
        "hints": [
            {"__type": "hint", "content": "Think green."},
            {"__type": "hint", "content": "Not animals."},
        ],
        "tags": ["biology"],
    }})


def make_view(qtbot, item=None, **kwargs):
    view = MultiRendererWidget(item or make_item(), ITEM_SHAPE, **kwargs)
    qtbot.addWidget(view)
    return view


def content_renderers(view):
    return [cell_leaf.value.ref for cell_leaf in (
        view.engine.data_tree["question"], view.engine.data_tree["parts"][0]
    )]


class TestRendering:
    """Tests for presenting an item."""

    def test_init_when_default_compose_then_every_leaf_mounted(self, qtbot):
        """The default layout mounts every content leaf and one hints list."""
        view = make_view(qtbot)
        question, part = content_renderers(view)
        assert isinstance(question, ContentRenderer)
        assert isinstance(part, ContentRenderer)
        hints = view.body.findChildren(HintsRenderer)
        assert len(hints) == 1
        assert hints[0].shown_count == 2

    def test_init_when_custom_compose_then_used(self, qtbot):
        """A compose function decides which leaves are mounted."""

        def compose(renderers):
            box = QWidget()
            layout = QVBoxLayout(box)
            layout.addWidget(renderers["question"].value.mount())
            layout.addWidget(renderers["hints"].annotations["first_n"](1).mount())
            return box

        view = make_view(qtbot, compose=compose)
        question, part = content_renderers(view)
        assert question is not None
        assert part is None
        assert view.body.findChildren(HintsRenderer)[0].shown_count == 1

    def test_init_when_item_mismatches_shape_then_error_label(self, qtbot):
        """A malformed item shows a red error instead of content."""
        bad = Item.from_dict({"_multi": {"question": []}})
        view = make_view(qtbot, bad)
        assert view.error is not None
        label = view.findChild(QLabel, "multiRendererError")
        assert label is view.body
        assert label.text().startswith("Error rendering: Shape mismatch at $.question")
        assert get_colors().ERROR in label.styleSheet()

    def test_focus_when_content_mounted_then_first_widget_focused(self, qtbot):
        assert make_view(qtbot).focus() is True

    def test_focus_when_only_hints_mounted_then_false(self, qtbot):
        """Unmounted content leaves have no widget to focus."""

        def compose(renderers):
            return renderers["hints"].annotations["first_n"](1).mount()

        assert make_view(qtbot, compose=compose).focus() is False

    def test_focus_when_errored_then_false(self, qtbot):
        view = make_view(qtbot, Item.from_dict({"_multi": {"question": []}}))
        assert view.focus() is False

    def test_init_when_config_read_only_then_delegated(self, qtbot):
        view = make_view(qtbot, config=MultiRendererConfig(renderer_props={"read_only": True}))
        question, _ = content_renderers(view)
        assert question.get_widget("text-input 1").isReadOnly()


class TestEngineSurface:
    """Tests for scoring and widget discovery through the real leaves."""

    def test_find_widgets_when_called_from_leaf_then_sees_other_branches(self, qtbot):
        view = make_view(qtbot)
        question, part = content_renderers(view)
        found = question.find_widgets("text-input 1")
        assert found == [question.get_widget("text-input 1"), part.get_widget("text-input 1")]

    def test_score_when_all_answered_then_combined(self, qtbot):
        view = make_view(qtbot)
        question, part = content_renderers(view)
        question.get_widget("text-input 1").setText("plants")
        part.get_widget("text-input 1").setText("nitrogen")

        result = view.score()
        assert (result.score.earned, result.score.total) == (1, 2)
        assert result.guess["question"] == ["plants"]
        assert result.guess["parts"] == [["nitrogen"]]
        assert result.guess["hints"] == [None, None]

    def test_score_when_part_unanswered_then_empty(self, qtbot):
        view = make_view(qtbot)
        question, _ = content_renderers(view)
        question.get_widget("text-input 1").setText("plants")
        assert view.score().empty

    def test_get_scores_when_answered_then_per_leaf(self, qtbot):
        view = make_view(qtbot)
        question, part = content_renderers(view)
        question.get_widget("text-input 1").setText("plants")
        part.get_widget("text-input 1").setText("oxygen")
        scores = view.get_scores()
        assert scores["question"].correct
        assert scores["parts"][0].correct
        assert scores["tags"] is None


class TestItemChanges:
    """Tests for set_item and state restoration."""

    def test_set_item_when_same_item_then_not_rebuilt(self, qtbot):
        item = make_item()
        view = make_view(qtbot, item)
        body = view.body
        assert view.set_item(item) is False
        assert view.body is body

    def test_set_item_when_new_item_then_rebuilt_signal(self, qtbot):
        view = make_view(qtbot)
        with qtbot.waitSignal(view.rebuilt):
            assert view.set_item(make_item("algae")) is True

    def test_restore_when_item_rebuilt_then_answers_carried_over(self, qtbot):
        """Answers survive a rubric change via the serialized state."""
        view = make_view(qtbot)
        question, part = content_renderers(view)
        question.get_widget("text-input 1").setText("algae")
        part.get_widget("text-input 1").setText("oxygen")
        state = view.get_serialized_state()
        assert state["question"] == {"text-input 1": {"value": "algae"}}

        view.set_item(make_item("algae"))
        done = []
        with qtbot.waitSignal(view.stateRestored):
            assert view.restore_serialized_state(state, lambda: done.append(1)) == 2
        assert done == [1]
        question, part = content_renderers(view)
        assert question.get_widget("text-input 1").text() == "algae"
        assert view.score().correct

    def test_restore_when_errored_then_signal_immediately(self, qtbot):
        view = make_view(qtbot, Item.from_dict({"_multi": {"question": []}}))
        with qtbot.waitSignal(view.stateRestored, timeout=100):
            assert view.restore_serialized_state({"question": {}}) == 0
