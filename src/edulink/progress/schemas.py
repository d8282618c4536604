"""Pydantic response models for progress and leaderboard endpoints."""

from __future__ import annotations

from pydantic import BaseModel

from edulink.stats.schemas import (
    ActivityCounts,
    LeaderboardEntry,
    LevelState,
    ScoreBreakdown,
)


class ProgressView(BaseModel):
    user_id: str
    display_name: str
    role: str
    promoted: bool = False
    grade: str | None = None
    points: int
    rank: int
    level: LevelState
    score: ScoreBreakdown
    counts: ActivityCounts
    badges: list[str]
    milestones: list[str]
    leaderboard: list[LeaderboardEntry]
    cohort_size: int


class LeaderboardResponse(BaseModel):
    grade: str
    entries: list[LeaderboardEntry]
    self_rank: int
    total: int


class BadgeStatus(BaseModel):
    slug: str
    name: str
    description: str
    earned: bool


class BadgeCatalogueResponse(BaseModel):
    badges: list[BadgeStatus]
    total_available: int
    total_earned: int
