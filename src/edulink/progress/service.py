"""Progress screen assembly.

Reads raw data through the repository, substitutes zeroed defaults when the
store is unavailable, runs the stats engine and triggers tutor promotion.
"""

from __future__ import annotations

import structlog

from edulink.errors import Unavailable
from edulink.progress.schemas import BadgeCatalogueResponse, BadgeStatus, ProgressView
from edulink.repository.base import Repository, UserRecord
from edulink.stats.badges import BADGE_RULES
from edulink.stats.engine import StatsEngine
from edulink.stats.roles import Role, milestone_pills
from edulink.stats.schemas import ActivityCounts, LeaderboardResult, StatsSnapshot
from edulink.users.service import fetch_counts_or_zero, load_user

logger = structlog.get_logger()

_EMPTY_LEADERBOARD = LeaderboardResult(entries=[], self_rank=0, total=0)


async def _user_snapshot(
    repo: Repository, engine: StatsEngine, user: UserRecord,
) -> StatsSnapshot:
    # Parents have no personal stats
    if user.role == Role.PARENT:
        return engine.snapshot(ActivityCounts(), 0, user.role)
    counts = await fetch_counts_or_zero(repo, user.user_id)
    return engine.snapshot(counts, user.points, user.role)


async def promote_to_tutor(repo: Repository, user: UserRecord) -> None:
    """Persist the student -> tutor promotion. Failures are logged, never raised."""
    try:
        await repo.persist_role_promotion(user.user_id, Role.TUTOR.value)
    except Exception:
        logger.warning("role_promotion_failed", user_id=user.user_id, exc_info=True)
        return
    logger.info(
        "role_promoted",
        user_id=user.user_id,
        display_name=user.shown_name,
        new_role=Role.TUTOR.value,
        points=user.points,
    )


async def get_leaderboard(
    repo: Repository,
    engine: StatsEngine,
    grade: str,
    self_id: str | None = None,
) -> LeaderboardResult:
    """Rank a grade cohort. An unavailable store yields an empty leaderboard."""
    try:
        members = await repo.fetch_cohort(grade)
    except Unavailable:
        logger.warning("cohort_unavailable", grade=grade, exc_info=True)
        return _EMPTY_LEADERBOARD
    return engine.rank(members, self_id)


async def get_progress(
    repo: Repository,
    engine: StatsEngine,
    user_id: str,
) -> ProgressView:
    """Build the progress screen for a user.

    1. Load the user (UserNotFound if missing)
    2. Counts from the repository, zeros on failure
    3. Level, badges and promotion from stored points
    4. Persist promotion if eligible
    5. Rank the user's grade cohort
    """
    user = await load_user(repo, user_id)
    snapshot = await _user_snapshot(repo, engine, user)

    role = user.role
    promoted = False
    if snapshot.promote_to_tutor:
        await promote_to_tutor(repo, user)
        role = Role.TUTOR.value
        promoted = True

    if user.grade:
        board = await get_leaderboard(repo, engine, user.grade, user.user_id)
    else:
        board = _EMPTY_LEADERBOARD

    return ProgressView(
        user_id=user.user_id,
        display_name=user.shown_name,
        role=role,
        promoted=promoted,
        grade=user.grade,
        points=snapshot.points,
        rank=board.self_rank,
        level=snapshot.level,
        score=snapshot.score,
        counts=snapshot.counts,
        badges=snapshot.badges,
        milestones=milestone_pills(snapshot.points, role, engine.promotion_points),
        leaderboard=board.entries,
        cohort_size=board.total,
    )


async def get_badge_catalogue(
    repo: Repository,
    engine: StatsEngine,
    user_id: str | None = None,
) -> BadgeCatalogueResponse:
    """Every badge in display order, flagged with whether ``user_id`` holds it."""
    earned: set[str] = set()
    if user_id is not None:
        user = await load_user(repo, user_id)
        snapshot = await _user_snapshot(repo, engine, user)
        earned = set(snapshot.badges)

    badges = [
        BadgeStatus(
            slug=rule["slug"],
            name=rule["name"],
            description=rule["description"],
            earned=rule["name"] in earned,
        )
        for rule in BADGE_RULES
    ]
    return BadgeCatalogueResponse(
        badges=badges,
        total_available=len(badges),
        total_earned=sum(1 for b in badges if b.earned),
    )
