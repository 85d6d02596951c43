"""
Unit Tests for the Path/Lens Accessor

Tests for get_in / set_in on partial and stale structures.
"""

import pytest

from question_toolkit.core.utils.lens import ABSENT, get_in, set_in


class TestGetIn:
    """Tests for get_in."""

    def test_get_in_when_path_exists_then_returns_value(self):
        """Mixed dict/list paths are followed."""
        data = {"parts": [{"body": 1}, {"body": 2}]}
        assert get_in(data, ("parts", 1, "body")) == 2

    def test_get_in_when_empty_path_then_returns_root(self):
        """The empty path addresses the root."""
        assert get_in([1], ()) == [1]

    @pytest.mark.parametrize("path", [
        ("missing",),
        ("parts", 5),
        ("parts", 0, "body", "deeper"),
        ("parts", "0"),
        (0,),
        ("parts", -1),
    ])
    def test_get_in_when_path_cannot_be_followed_then_absent(self, path):
        """Missing or incompatible intermediates return ABSENT."""
        assert get_in({"parts": [{"body": 1}]}, path) is ABSENT

    def test_get_in_when_structure_none_then_absent(self):
        """A missing state blob is tolerated."""
        assert get_in(None, ("a",)) is ABSENT

    def test_get_in_when_default_given_then_returns_default(self):
        """A caller default replaces ABSENT."""
        assert get_in({}, ("a",), default=0) == 0

    def test_absent_when_tested_then_falsy(self):
        """ABSENT is falsy and a singleton."""
        assert not ABSENT
        assert repr(ABSENT) == "ABSENT"


class TestSetIn:
    """Tests for set_in."""

    def test_set_in_when_path_exists_then_copies_and_sets(self):
        """Setting returns a new structure and leaves the input alone."""
        data = {"parts": [{"body": 1}]}
        result = set_in(data, ("parts", 0, "body"), 9)
        assert result == {"parts": [{"body": 9}]}
        assert data == {"parts": [{"body": 1}]}

    def test_set_in_when_intermediates_missing_then_creates_them(self):
        """Missing dicts and lists are created, lists padded with None."""
        assert set_in(None, ("parts", 2, "body"), "x") == {"parts": [None, None, {"body": "x"}]}

    def test_set_in_then_get_in_returns_value(self):
        """A value written with set_in is read back by get_in."""
        path = ("hints", 1, "state")
        assert get_in(set_in({}, path, {"v": 1}), path) == {"v": 1}

    def test_set_in_when_negative_index_then_raises(self):
        """Negative indices are rejected."""
        with pytest.raises(IndexError):
            set_in([], (-1,), 0)
