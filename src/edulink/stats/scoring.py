"""Points from activity counts."""

from __future__ import annotations

from edulink.errors import InvalidInput
from edulink.stats.schemas import ActivityCounts, ScoreBreakdown

POINTS_PER_QUESTION = 10
POINTS_PER_ANSWER = 5
POINTS_PER_UPVOTE = 2


def validate_counts(counts: ActivityCounts) -> None:
    """Raise InvalidInput if any activity count is negative."""
    for field in ("questions_asked", "answers_given", "upvotes_received"):
        value = getattr(counts, field)
        if value < 0:
            msg = f"{field} must be non-negative, got {value}"
            raise InvalidInput(msg)


def compute_score(counts: ActivityCounts) -> ScoreBreakdown:
    """Compute points: 10 per question asked, 5 per answer given, 2 per upvote received."""
    validate_counts(counts)

    question_points = counts.questions_asked * POINTS_PER_QUESTION
    answer_points = counts.answers_given * POINTS_PER_ANSWER
    upvote_points = counts.upvotes_received * POINTS_PER_UPVOTE

    return ScoreBreakdown(
        points=question_points + answer_points + upvote_points,
        question_points=question_points,
        answer_points=answer_points,
        upvote_points=upvote_points,
    )
