"""Value types produced and consumed by the stats engine.

All of these are immutable snapshots. Range checks live in the compute
functions so that contract violations surface as ``InvalidInput`` rather
than as pydantic validation errors.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ActivityCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions_asked: int = 0
    answers_given: int = 0
    upvotes_received: int = 0


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: int
    question_points: int
    answer_points: int
    upvote_points: int


class LevelState(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int
    current_level_progress: int
    next_level_threshold: int
    level_size: int
    progress_ratio: float


class CohortMember(BaseModel):
    """One user of a grade cohort, as returned by the repository."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    display_name: str
    points: int
    profile_image_ref: str | None = None


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    user_id: str
    display_name: str
    points: int
    is_self: bool
    marker: str = ""
    profile_image_ref: str | None = None


class LeaderboardResult(BaseModel):
    """Truncated display list plus the caller's rank over the full cohort.

    ``self_rank`` is 0 when the caller is not part of the cohort.
    """

    model_config = ConfigDict(frozen=True)

    entries: list[LeaderboardEntry]
    self_rank: int
    total: int


class StatsSnapshot(BaseModel):
    """Everything derived for one user from one read of their raw data."""

    model_config = ConfigDict(frozen=True)

    counts: ActivityCounts
    score: ScoreBreakdown
    points: int
    level: LevelState
    badges: list[str]
    promote_to_tutor: bool
