"""
Unit Tests for TreeMapper

Tests for per-variant transforms, array post-processing, path reporting
and topology preservation.
"""

import pytest

from question_toolkit.core.models import array_of, content, hint, shape, tags
from question_toolkit.core.models.shapes import ArrayShape, ContentShape, HintShape, ObjectShape, TagsShape
from question_toolkit.core.models.trees import Array, Content, Hint, Object, Tags
from question_toolkit.core.schemas.validator import ShapeMismatchError
from question_toolkit.core.trees.builder import build_tree
from question_toolkit.core.trees.mapper import build_mapper


ITEM_SHAPE = shape({
    "q": content,
    "parts": array_of(shape({"body": content, "hints": array_of(hint)})),
    "t": tags,
})


def _item():
    return {
        "q": {"__type": "content", "content": "q"},
        "parts": [
            {"body": {"__type": "content", "content": "p0"},
             "hints": [{"__type": "hint", "content": "p0h0"}]},
            {"body": {"__type": "content", "content": "p1"}, "hints": []},
        ],
        "t": ["x"],
    }


def _topology(tree, s):
    """Shape reconstructed from a tree's variants (element shapes from `s`)."""
    if isinstance(tree, Content):
        return ContentShape()
    if isinstance(tree, Hint):
        return HintShape()
    if isinstance(tree, Tags):
        return TagsShape()
    if isinstance(tree, Array):
        for child in tree:
            assert _topology(child, s.element_shape) == s.element_shape
        return s
    if isinstance(tree, Object):
        return ObjectShape({k: _topology(v, s.fields[k]) for k, v in tree.items()})
    raise AssertionError(tree)


class TestTreeMapper:
    """Tests for TreeMapper."""

    def test_map_tree_when_identity_then_topology_preserved(self):
        """Identity mapping yields a tree with the input shape's topology."""
        tree = build_tree(_item(), ITEM_SHAPE)
        mapped = build_mapper().map_tree(tree, ITEM_SHAPE)
        assert _topology(mapped, ITEM_SHAPE) == ITEM_SHAPE
        assert mapped == tree

    def test_map_tree_when_leaf_mappers_set_then_applied_per_variant(self):
        """Each variant uses its own transform."""
        tree = build_tree(_item(), ITEM_SHAPE)
        mapped = (
            build_mapper()
            .set_content_mapper(lambda c, s, p: "C:" + c.content)
            .set_hint_mapper(lambda h, s, p: "H:" + h.content)
            .set_tags_mapper(lambda t, s, p: len(t.tags))
            .map_tree(tree, ITEM_SHAPE)
        )
        assert mapped["q"].value == "C:q"
        assert mapped["parts"][0]["hints"][0].value == "H:p0h0"
        assert mapped["t"].value == 1

    def test_map_tree_when_called_then_visits_in_pre_order_with_paths(self):
        """Leaves are visited top-to-bottom, left-to-right."""
        tree = build_tree(_item(), ITEM_SHAPE)
        visited = []

        def record(value, s, path):
            visited.append(path)
            return value

        build_mapper().set_content_mapper(record).set_hint_mapper(record).map_tree(tree, ITEM_SHAPE)
        assert visited == [
            ("q",),
            ("parts", 0, "body"),
            ("parts", 0, "hints", 0),
            ("parts", 1, "body"),
        ]

    def test_map_tree_when_array_mapper_set_then_receives_mapped_and_original(self):
        """The array mapper post-processes each mapped array."""
        tree = build_tree(_item(), ITEM_SHAPE)
        calls = []

        def on_array(mapped, original, s, path):
            calls.append((path, len(mapped), s.element_shape))
            assert len(mapped) == len(original)
            return mapped.annotate(size=len(mapped))

        mapped = build_mapper().set_array_mapper(on_array).map_tree(tree, ITEM_SHAPE)
        assert mapped["parts"].annotations["size"] == 2
        assert mapped["parts"][0]["hints"].annotations["size"] == 1
        # Inner arrays are finished before their parent
        assert [c[0] for c in calls] == [("parts", 0, "hints"), ("parts", 1, "hints"), ("parts",)]

    def test_set_methods_when_called_then_return_new_mapper(self):
        """Mappers are immutable builders."""
        base = build_mapper()
        configured = base.set_content_mapper(lambda c, s, p: 1)
        assert configured is not base
        assert base.map_tree(Content("x"), content).value == "x"

    def test_map_tree_when_source_mapped_then_source_unchanged(self):
        """Mapping never touches the source tree."""
        tree = build_tree(_item(), ITEM_SHAPE)
        build_mapper().set_content_mapper(lambda c, s, p: None).map_tree(tree, ITEM_SHAPE)
        assert tree["q"].value.content == "q"

    def test_map_tree_when_tree_disagrees_with_shape_then_raises(self):
        """A tree variant that disagrees with the shape raises a mismatch."""
        with pytest.raises(ShapeMismatchError) as exc_info:
            build_mapper().map_tree(Array((Content(1),)), array_of(hint))
        assert exc_info.value.tree_path == (0,)
