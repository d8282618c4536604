"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from edulink.dependencies import get_repository, get_stats_engine
from edulink.errors import Unavailable
from edulink.main import create_app
from edulink.repository.base import Repository, UserRecord
from edulink.stats.engine import StatsEngine
from edulink.stats.schemas import ActivityCounts, CohortMember


class InMemoryRepository(Repository):
    """Dict-backed repository. Set ``fail_*`` flags to simulate an outage."""

    def __init__(self) -> None:
        self.users: dict[str, UserRecord] = {}
        self.counts: dict[str, ActivityCounts] = {}
        self.promotions: list[tuple[str, str]] = []
        self.profile_writes: list[tuple[str, dict[str, Any]]] = []
        self.fail_counts = False
        self.fail_cohort = False
        self.fail_promotion = False
        self.fail_child_lookup = False

    def add_user(self, user_id: str, counts: ActivityCounts | None = None, **fields: Any) -> UserRecord:
        fields.setdefault("email", f"{user_id}@example.com")
        user = UserRecord(user_id=user_id, **fields)
        self.users[user_id] = user
        if counts is not None:
            self.counts[user_id] = counts
        return user

    async def fetch_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    async def fetch_activity_counts(self, user_id: str) -> ActivityCounts:
        if self.fail_counts:
            raise Unavailable("counts offline")
        return self.counts.get(user_id, ActivityCounts())

    async def fetch_cohort(self, grade: str) -> list[CohortMember]:
        if self.fail_cohort:
            raise Unavailable("cohort offline")
        return [
            CohortMember(
                user_id=u.user_id,
                display_name=u.shown_name,
                points=u.points,
                profile_image_ref=u.profile_image_ref,
            )
            for u in self.users.values()
            if u.grade == grade
        ]

    async def find_child(self, student_email: str) -> UserRecord | None:
        if self.fail_child_lookup:
            raise Unavailable("lookup offline")
        email = student_email.strip().lower()
        for u in self.users.values():
            if u.email == email and u.role in ("student", "tutor"):
                return u
        return None

    async def persist_role_promotion(self, user_id: str, new_role: str) -> None:
        if self.fail_promotion:
            raise Unavailable("write failed")
        self.promotions.append((user_id, new_role))
        self.users[user_id] = self.users[user_id].model_copy(update={"role": new_role})

    async def persist_profile_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        self.profile_writes.append((user_id, fields))
        self.users[user_id] = self.users[user_id].model_copy(update=fields)


@pytest.fixture
def engine() -> StatsEngine:
    return StatsEngine()


@pytest.fixture
def repo() -> InMemoryRepository:
    """A grade-8 class, a teacher, and a parent linked to one of the students."""
    r = InMemoryRepository()
    r.add_user(
        "alice", display_name="Alice", role="student", grade="8", points=150,
        counts=ActivityCounts(questions_asked=5, answers_given=10, upvotes_received=3),
    )
    r.add_user("bob", display_name="Bob", role="tutor", grade="8", points=420)
    r.add_user("carol", name="Carol", role="student", grade="8", points=150)
    r.add_user("dan", display_name="Dan", role="student", grade="9", points=30)
    r.add_user("tess", display_name="Ms Tess", role="teacher", subject="Science", points=0)
    r.add_user(
        "pat", display_name="Pat", role="parent", student_email="alice@example.com", points=999,
    )
    return r


@pytest_asyncio.fixture
async def client(repo: InMemoryRepository) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the in-memory repository wired in."""
    app = create_app()

    async def _repo_override() -> AsyncGenerator[InMemoryRepository, None]:
        yield repo

    app.dependency_overrides[get_repository] = _repo_override
    app.dependency_overrides[get_stats_engine] = lambda: StatsEngine()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
