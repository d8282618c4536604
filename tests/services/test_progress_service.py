"""Progress service: degradation, promotion and leaderboard assembly."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from edulink.errors import Unavailable, UserNotFound
from edulink.progress.service import (
    get_badge_catalogue,
    get_leaderboard,
    get_progress,
    promote_to_tutor,
)
from edulink.stats.schemas import ActivityCounts

pytestmark = pytest.mark.asyncio


class TestGetProgress:
    async def test_student_progress(self, repo, engine):
        view = await get_progress(repo, engine, "alice")
        assert view.points == 150
        assert view.level.level == 1
        assert view.level.current_level_progress == 150
        assert view.level.next_level_threshold == 200
        assert view.score.points == 106
        assert view.counts.answers_given == 10
        assert view.badges == ["First Question", "Helpful Answer", "Top Contributor", "Curious Mind"]
        assert view.milestones == ["Century Club"]
        assert view.role == "student"
        assert view.promoted is False

    async def test_leaderboard_and_rank(self, repo, engine):
        view = await get_progress(repo, engine, "alice")
        # bob 420, alice 150, carol 150 (tie keeps insertion order)
        assert [e.user_id for e in view.leaderboard] == ["bob", "alice", "carol"]
        assert view.rank == 2
        assert view.cohort_size == 3
        assert [e.is_self for e in view.leaderboard] == [False, True, False]

    async def test_unknown_user(self, repo, engine):
        with pytest.raises(UserNotFound):
            await get_progress(repo, engine, "nobody")

    async def test_counts_unavailable_degrades_to_zero(self, repo, engine):
        repo.fail_counts = True
        view = await get_progress(repo, engine, "alice")
        assert view.counts == ActivityCounts()
        assert view.score.points == 0
        assert view.badges == []
        # Stored points still drive the level
        assert view.points == 150

    async def test_cohort_unavailable_degrades_to_empty(self, repo, engine):
        repo.fail_cohort = True
        view = await get_progress(repo, engine, "alice")
        assert view.leaderboard == []
        assert view.rank == 0
        assert view.cohort_size == 0

    async def test_no_grade_no_leaderboard(self, repo, engine):
        view = await get_progress(repo, engine, "tess")
        assert view.leaderboard == []
        assert view.rank == 0

    async def test_parent_has_zero_stats(self, repo, engine):
        view = await get_progress(repo, engine, "pat")
        assert view.points == 0
        assert view.level.level == 1
        assert view.badges == []
        assert view.promoted is False


class TestPromotion:
    async def test_student_at_threshold_is_promoted(self, repo, engine):
        repo.add_user("eve", role="student", grade="8", points=200)
        view = await get_progress(repo, engine, "eve")
        assert view.promoted is True
        assert view.role == "tutor"
        assert view.milestones == ["Peer Tutor"]
        assert repo.promotions == [("eve", "tutor")]

    async def test_promotion_happens_once(self, repo, engine):
        repo.add_user("eve", role="student", grade="8", points=260)
        await get_progress(repo, engine, "eve")
        view = await get_progress(repo, engine, "eve")
        assert view.promoted is False
        assert view.role == "tutor"
        assert repo.promotions == [("eve", "tutor")]

    async def test_tutor_not_promoted(self, repo, engine):
        await get_progress(repo, engine, "bob")
        assert repo.promotions == []

    async def test_promotion_failure_is_not_escalated(self, repo, engine):
        repo.fail_promotion = True
        repo.add_user("eve", role="student", grade="8", points=200)
        view = await get_progress(repo, engine, "eve")
        assert view.role == "tutor"
        assert view.promoted is True
        assert repo.users["eve"].role == "student"

    async def test_promote_swallows_unexpected_errors(self, repo):
        user = repo.add_user("eve", role="student", points=200)
        repo.persist_role_promotion = AsyncMock(side_effect=RuntimeError("boom"))
        await promote_to_tutor(repo, user)
        repo.persist_role_promotion.assert_awaited_once_with("eve", "tutor")


class TestGetLeaderboard:
    async def test_ranks_grade(self, repo, engine):
        result = await get_leaderboard(repo, engine, "8", self_id="carol")
        assert result.self_rank == 3
        assert result.total == 3

    async def test_unknown_grade_is_empty(self, repo, engine):
        result = await get_leaderboard(repo, engine, "12")
        assert result.entries == []

    async def test_unavailable(self, engine):
        repo = AsyncMock()
        repo.fetch_cohort.side_effect = Unavailable("down")
        result = await get_leaderboard(repo, engine, "8")
        assert result.entries == []
        assert result.self_rank == 0


class TestBadgeCatalogue:
    async def test_catalogue_without_user(self, repo, engine):
        catalogue = await get_badge_catalogue(repo, engine)
        assert catalogue.total_available == 7
        assert catalogue.total_earned == 0
        assert catalogue.badges[0].slug == "first_question"

    async def test_catalogue_for_user(self, repo, engine):
        catalogue = await get_badge_catalogue(repo, engine, "alice")
        earned = [b.name for b in catalogue.badges if b.earned]
        assert earned == ["First Question", "Helpful Answer", "Top Contributor", "Curious Mind"]
        assert catalogue.total_earned == 4
