"""
Module: scores

Purpose:
    Provides the Score dataclass - the concrete score representation shared
    by leaves and the composition engine - and the associative
    `combine_scores` operator used to fold many leaf scores into one.

    A score is either:
        - "points": earned out of total (e.g. 1/1, 0/1)
        - "invalid": the learner has not answered enough to be graded

Key Functions:
    - Score.points(earned, total): Points score
    - Score.invalid(message): Invalid score
    - combine_scores(a, b): Associative combination
    - GradedResult.from_score(score, guess): Graded view for callers

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - engine.multi_renderer
    - gui.widgets.text_input
    - gui.renderers.content_renderer
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

ScoreKind = Literal["points", "invalid"]


@dataclass(frozen=True, slots=True)
class Score:
    """
    Result of grading one or more widgets.

    Attributes:
        kind: "points" or "invalid"
        earned: Points earned (0 for invalid)
        total: Points available (0 for invalid)
        message: Optional feedback for the learner

    Invariants:
        - earned >= 0 and total >= 0
        - invalid scores carry no points

    Example:
        >>> combine_scores(Score.points(1, 1), Score.points(0, 1))
        Score(points, 1/2)
    """

    kind: ScoreKind
    earned: int = 0
    total: int = 0
    message: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate score on construction."""
        if self.kind not in ("points", "invalid"):
            raise ValueError(f"Invalid score kind: {self.kind}")
        if self.earned < 0 or self.total < 0:
            raise ValueError(f"Score cannot be negative: {self.earned}/{self.total}")
        if self.kind == "invalid" and (self.earned or self.total):
            raise ValueError("Invalid scores cannot carry points")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def points(cls, earned: int, total: int, message: Optional[str] = None) -> Score:
        return cls(kind="points", earned=earned, total=total, message=message)

    @classmethod
    def invalid(cls, message: Optional[str] = None) -> Score:
        return cls(kind="invalid", message=message)

    @classmethod
    def identity(cls) -> Score:
        """Neutral element of combine_scores: no points out of none."""
        return cls.points(0, 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_invalid(self) -> bool:
        return self.kind == "invalid"

    @property
    def is_correct(self) -> bool:
        return self.kind == "points" and self.earned >= self.total

    def __add__(self, other: Score) -> Score:
        if not isinstance(other, Score):
            return NotImplemented
        return combine_scores(self, other)

    def __repr__(self) -> str:
        if self.is_invalid:
            return f"Score(invalid, message={self.message!r})"
        return f"Score(points, {self.earned}/{self.total})"


def _combine_messages(a: Optional[str], b: Optional[str]) -> Optional[str]:
    # Conflicting messages cancel out
    if a and b and a != b:
        return None
    return a or b


def combine_scores(a: Score, b: Score) -> Score:
    """
    Combine two scores.

    - points + points: earned and total are summed
    - any invalid: the result is invalid
    - messages survive when only one side has one or both agree

    Kind, earned and total combine associatively and Score.identity() is
    neutral, so a sequence of scores can be left-folded from the identity.
    """
    if a.kind == "points" and b.kind == "points":
        return Score.points(
            a.earned + b.earned,
            a.total + b.total,
            _combine_messages(a.message, b.message),
        )
    if a.kind == "points":
        return b
    if b.kind == "points":
        return a
    return Score.invalid(_combine_messages(a.message, b.message))


@dataclass(frozen=True, slots=True)
class GradedResult:
    """
    Caller-facing view of a score together with the guess that produced it.

    Attributes:
        score: Underlying score
        guess: User input (a single guess or a tree of guesses)
    """

    score: Score
    guess: Any = None

    @classmethod
    def from_score(cls, score: Score, guess: Any = None) -> GradedResult:
        return cls(score=score, guess=guess)

    @property
    def empty(self) -> bool:
        """True when the learner has not answered enough to be graded."""
        return self.score.is_invalid

    @property
    def correct(self) -> bool:
        return self.score.is_correct

    @property
    def message(self) -> Optional[str]:
        return self.score.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "empty": self.empty,
            "correct": self.correct,
            "message": self.message,
            "guess": self.guess,
        }
