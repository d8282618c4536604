"""StatsEngine: the configured entry point to the pure stats functions."""

from __future__ import annotations

from collections.abc import Iterable

from edulink.config import Settings
from edulink.errors import InvalidInput
from edulink.stats.badges import compute_badges
from edulink.stats.levels import LEVEL_SIZE, compute_level
from edulink.stats.ranking import DEFAULT_LEADERBOARD_SIZE, rank_leaderboard
from edulink.stats.roles import TUTOR_PROMOTION_POINTS, should_promote_to_tutor
from edulink.stats.schemas import (
    ActivityCounts,
    CohortMember,
    LeaderboardResult,
    LevelState,
    ScoreBreakdown,
    StatsSnapshot,
)
from edulink.stats.scoring import compute_score


class StatsEngine:
    """Binds level size, leaderboard size and the promotion threshold.

    Holds no mutable state; one instance can serve every request.
    """

    def __init__(
        self,
        level_size: int = LEVEL_SIZE,
        leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE,
        promotion_points: int = TUTOR_PROMOTION_POINTS,
    ) -> None:
        # Validates level_size up front
        compute_level(0, level_size)
        if leaderboard_size < 1:
            msg = f"leaderboard_size must be at least 1, got {leaderboard_size}"
            raise InvalidInput(msg)
        if promotion_points < 1:
            msg = f"promotion_points must be at least 1, got {promotion_points}"
            raise InvalidInput(msg)
        self.level_size = level_size
        self.leaderboard_size = leaderboard_size
        self.promotion_points = promotion_points

    @classmethod
    def from_settings(cls, settings: Settings) -> StatsEngine:
        return cls(
            level_size=settings.level_size,
            leaderboard_size=settings.leaderboard_size,
            promotion_points=settings.tutor_promotion_points,
        )

    def score(self, counts: ActivityCounts) -> ScoreBreakdown:
        return compute_score(counts)

    def level(self, points: int) -> LevelState:
        return compute_level(points, self.level_size)

    def badges(self, counts: ActivityCounts, points: int, level: int) -> list[str]:
        return compute_badges(counts, points, level)

    def should_promote_to_tutor(self, points: int, role: str) -> bool:
        return should_promote_to_tutor(points, role, self.promotion_points)

    def rank(self, members: Iterable[CohortMember], self_id: str | None) -> LeaderboardResult:
        return rank_leaderboard(members, self_id, self.leaderboard_size)

    def snapshot(self, counts: ActivityCounts, points: int, role: str) -> StatsSnapshot:
        """Derive score, level, badges and promotion eligibility in one pass.

        ``points`` is the stored points value, which drives level, badges
        and promotion. The score breakdown is computed from ``counts``.
        """
        level = self.level(points)
        return StatsSnapshot(
            counts=counts,
            score=self.score(counts),
            points=points,
            level=level,
            badges=self.badges(counts, points, level.level),
            promote_to_tutor=self.should_promote_to_tutor(points, role),
        )
