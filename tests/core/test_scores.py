"""
Unit Tests for Score Model

Tests for Score validation, combine_scores and GradedResult.
"""

from functools import reduce

import pytest

from question_toolkit.core.models.scores import GradedResult, Score, combine_scores


class TestScore:
    """Tests for Score construction."""

    def test_init_when_negative_then_raises(self):
        """Scores cannot be negative."""
        with pytest.raises(ValueError, match="cannot be negative"):
            Score.points(-1, 1)

    def test_init_when_invalid_with_points_then_raises(self):
        """Invalid scores carry no points."""
        with pytest.raises(ValueError, match="cannot carry points"):
            Score(kind="invalid", earned=1, total=1)

    def test_init_when_unknown_kind_then_raises(self):
        """Only points and invalid kinds exist."""
        with pytest.raises(ValueError, match="Invalid score kind"):
            Score(kind="partial")

    def test_is_correct_when_full_marks_then_true(self):
        """Full marks are correct."""
        assert Score.points(2, 2).is_correct
        assert not Score.points(1, 2).is_correct
        assert not Score.invalid().is_correct


class TestCombineScores:
    """Tests for combine_scores."""

    def test_combine_when_both_points_then_sums(self):
        """(1,1) + (0,1) = (1,2)."""
        combined = combine_scores(Score.points(1, 1), Score.points(0, 1))
        assert (combined.kind, combined.earned, combined.total) == ("points", 1, 2)

    def test_combine_when_one_invalid_then_invalid(self):
        """Any invalid side makes the result invalid."""
        invalid = Score.invalid("answer everything")
        assert combine_scores(Score.points(1, 1), invalid) == invalid
        assert combine_scores(invalid, Score.points(1, 1)) == invalid

    def test_combine_when_messages_conflict_then_dropped(self):
        """Conflicting messages cancel out."""
        combined = combine_scores(Score.invalid("a"), Score.invalid("b"))
        assert combined.is_invalid
        assert combined.message is None

    def test_combine_when_one_message_then_kept(self):
        """A single message survives."""
        assert combine_scores(Score.points(1, 1, "nice"), Score.points(0, 1)).message == "nice"

    def test_identity_when_combined_then_neutral(self):
        """The identity score is neutral on both sides."""
        s = Score.points(3, 4)
        assert combine_scores(Score.identity(), s) == s
        assert combine_scores(s, Score.identity()) == s

    def test_combine_when_grouped_differently_then_same_points(self):
        """Folding order does not change earned/total."""
        scores = [Score.points(1, 1), Score.points(0, 2), Score.points(2, 3)]
        left = reduce(combine_scores, scores)
        right = combine_scores(scores[0], combine_scores(scores[1], scores[2]))
        assert (left.earned, left.total) == (right.earned, right.total) == (3, 6)

    def test_add_when_scores_then_combines(self):
        """+ is combine_scores."""
        assert Score.points(1, 1) + Score.points(1, 1) == Score.points(2, 2)


class TestGradedResult:
    """Tests for GradedResult."""

    def test_from_score_when_invalid_then_empty(self):
        """Invalid scores are reported as empty."""
        result = GradedResult.from_score(Score.invalid("x"), guess="")
        assert result.empty
        assert not result.correct
        assert result.message == "x"

    def test_to_dict_when_correct_then_flags_set(self):
        """to_dict exposes the graded flags and the guess."""
        assert GradedResult.from_score(Score.points(1, 1), guess="a").to_dict() == {
            "empty": False, "correct": True, "message": None, "guess": "a",
        }
