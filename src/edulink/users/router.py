"""Profile endpoints: /api/v1/users/{user_id}/profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from edulink.dependencies import get_repository, get_stats_engine
from edulink.repository.base import Repository
from edulink.stats.engine import StatsEngine
from edulink.users.schemas import ProfileUpdateRequest, ProfileView
from edulink.users.service import get_profile, update_profile

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("/{user_id}/profile", response_model=ProfileView)
async def get_profile_endpoint(
    user_id: str,
    repo: Repository = Depends(get_repository),
    engine: StatsEngine = Depends(get_stats_engine),
) -> ProfileView:
    """Role-aware profile: own stats for learners, child summary for parents."""
    return await get_profile(repo, engine, user_id)


@router.patch("/{user_id}/profile", response_model=ProfileView)
async def update_profile_endpoint(
    user_id: str,
    body: ProfileUpdateRequest,
    repo: Repository = Depends(get_repository),
    engine: StatsEngine = Depends(get_stats_engine),
) -> ProfileView:
    """Update the role-specific profile fields, then return the fresh profile."""
    await update_profile(repo, user_id, body)
    return await get_profile(repo, engine, user_id)
