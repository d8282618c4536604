"""Progress, leaderboard and badge endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from edulink.dependencies import get_repository, get_stats_engine
from edulink.progress.schemas import BadgeCatalogueResponse, LeaderboardResponse, ProgressView
from edulink.progress.service import get_badge_catalogue, get_leaderboard, get_progress
from edulink.repository.base import Repository
from edulink.stats.engine import StatsEngine

router = APIRouter(prefix="/api/v1", tags=["Progress"])


@router.get("/users/{user_id}/progress", response_model=ProgressView)
async def progress_endpoint(
    user_id: str,
    repo: Repository = Depends(get_repository),
    engine: StatsEngine = Depends(get_stats_engine),
) -> ProgressView:
    """Points, level, badges and class leaderboard for one user."""
    return await get_progress(repo, engine, user_id)


@router.get("/leaderboard/{grade}", response_model=LeaderboardResponse)
async def leaderboard_endpoint(
    grade: str,
    self_id: str | None = Query(None),
    repo: Repository = Depends(get_repository),
    engine: StatsEngine = Depends(get_stats_engine),
) -> LeaderboardResponse:
    """Top of a grade cohort plus the caller's own rank."""
    result = await get_leaderboard(repo, engine, grade, self_id)
    return LeaderboardResponse(
        grade=grade,
        entries=result.entries,
        self_rank=result.self_rank,
        total=result.total,
    )


@router.get("/badges", response_model=BadgeCatalogueResponse)
async def badges_endpoint(
    user_id: str | None = Query(None),
    repo: Repository = Depends(get_repository),
    engine: StatsEngine = Depends(get_stats_engine),
) -> BadgeCatalogueResponse:
    """All badges in display order, with earned flags when user_id is given."""
    return await get_badge_catalogue(repo, engine, user_id)
