"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edulink.config import get_settings
from edulink.database import get_session
from edulink.repository.base import Repository
from edulink.repository.sql import SqlRepository
from edulink.stats.engine import StatsEngine


async def get_repository(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> AsyncGenerator[Repository, None]:
    """Yield a request-scoped repository bound to the request's DB session."""
    yield SqlRepository(db)


@lru_cache
def get_stats_engine() -> StatsEngine:
    """Stats engine configured from settings, shared across requests."""
    return StatsEngine.from_settings(get_settings())
