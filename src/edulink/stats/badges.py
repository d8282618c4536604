"""Badge catalogue and evaluation.

Badges are never stored; they are recomputed from the current counts,
points and level on every read. The list order is the display order.
"""

from __future__ import annotations

from edulink.errors import InvalidInput
from edulink.stats.schemas import ActivityCounts
from edulink.stats.scoring import validate_counts

BADGE_RULES: list[dict] = [
    {
        "slug": "first_question",
        "name": "First Question",
        "description": "Ask your first question",
        "metric": "questions_asked",
        "threshold": 1,
    },
    {
        "slug": "helpful_answer",
        "name": "Helpful Answer",
        "description": "Give 4 answers",
        "metric": "answers_given",
        "threshold": 4,
    },
    {
        "slug": "top_contributor",
        "name": "Top Contributor",
        "description": "Give 10 answers",
        "metric": "answers_given",
        "threshold": 10,
    },
    {
        "slug": "curious_mind",
        "name": "Curious Mind",
        "description": "Ask 5 questions",
        "metric": "questions_asked",
        "threshold": 5,
    },
    {
        "slug": "peer_club",
        "name": "Peer Club",
        "description": "Reach 400 points",
        "metric": "points",
        "threshold": 400,
    },
    {
        "slug": "peer_tutor",
        "name": "Peer Tutor",
        "description": "Reach 200 points",
        "metric": "points",
        "threshold": 200,
    },
    {
        "slug": "level_master",
        "name": "Level Master",
        "description": "Reach level 5",
        "metric": "level",
        "threshold": 5,
    },
]


def compute_badges(counts: ActivityCounts, points: int, level: int) -> list[str]:
    """Return the names of every badge the inputs qualify for, in display order."""
    validate_counts(counts)
    if points < 0:
        msg = f"points must be non-negative, got {points}"
        raise InvalidInput(msg)
    if level < 1:
        msg = f"level must be at least 1, got {level}"
        raise InvalidInput(msg)

    metrics = {
        "questions_asked": counts.questions_asked,
        "answers_given": counts.answers_given,
        "points": points,
        "level": level,
    }
    return [rule["name"] for rule in BADGE_RULES if metrics[rule["metric"]] >= rule["threshold"]]
