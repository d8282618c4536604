"""SQLAlchemy-backed repository.

Activity counts use aggregate queries per user rather than scanning every
question, so a profile view costs three indexed lookups.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from edulink.db.models import Answer, Question, User
from edulink.errors import InvalidInput, Unavailable
from edulink.repository.base import EDITABLE_PROFILE_FIELDS, Repository, UserRecord
from edulink.stats.roles import Role
from edulink.stats.schemas import ActivityCounts, CohortMember

logger = logging.getLogger(__name__)


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        user_id=user.id,
        email=user.email,
        display_name=user.display_name,
        name=user.name,
        role=user.role or Role.STUDENT.value,
        grade=user.grade,
        subject=user.subject,
        student_email=user.student_email,
        points=user.points or 0,
        profile_image_ref=user.profile_image,
    )


class SqlRepository(Repository):
    """Repository over a single AsyncSession (one per request)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def fetch_user(self, user_id: str) -> UserRecord | None:
        try:
            result = await self.db.execute(select(User).where(User.id == user_id))
        except SQLAlchemyError as exc:
            raise Unavailable(f"Failed to load user {user_id}") from exc
        user = result.scalar_one_or_none()
        return _to_record(user) if user is not None else None

    async def fetch_activity_counts(self, user_id: str) -> ActivityCounts:
        try:
            questions = await self.db.execute(
                select(func.count(Question.id)).where(Question.asked_by == user_id)
            )
            questions_asked = questions.scalar_one()

            answers = await self.db.execute(
                select(
                    func.count(Answer.id),
                    func.coalesce(func.sum(Answer.upvotes), 0),
                ).where(Answer.answered_by == user_id)
            )
            answers_given, upvotes_received = answers.one()
        except SQLAlchemyError as exc:
            raise Unavailable(f"Failed to count activity for user {user_id}") from exc

        return ActivityCounts(
            questions_asked=int(questions_asked or 0),
            answers_given=int(answers_given or 0),
            upvotes_received=int(upvotes_received or 0),
        )

    async def fetch_cohort(self, grade: str) -> list[CohortMember]:
        try:
            result = await self.db.execute(
                select(User).where(User.grade == grade).order_by(User.created_at.asc(), User.id.asc())
            )
        except SQLAlchemyError as exc:
            raise Unavailable(f"Failed to load cohort for grade {grade}") from exc

        return [
            CohortMember(
                user_id=u.id,
                display_name=u.display_name or u.name or "Anonymous",
                points=u.points or 0,
                profile_image_ref=u.profile_image,
            )
            for u in result.scalars()
        ]

    async def find_child(self, student_email: str) -> UserRecord | None:
        email = student_email.strip().lower()
        try:
            result = await self.db.execute(
                select(User)
                .where(
                    func.lower(User.email) == email,
                    User.role.in_([Role.STUDENT.value, Role.TUTOR.value]),
                )
                .limit(1)
            )
        except SQLAlchemyError as exc:
            raise Unavailable("Failed to look up child account") from exc
        user = result.scalar_one_or_none()
        return _to_record(user) if user is not None else None

    async def persist_role_promotion(self, user_id: str, new_role: str) -> None:
        await self._update(user_id, {"role": new_role})
        logger.info("Role updated for user %s -> %s", user_id, new_role)

    async def persist_profile_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        unknown = set(fields) - EDITABLE_PROFILE_FIELDS
        if unknown:
            msg = f"Fields not editable: {', '.join(sorted(unknown))}"
            raise InvalidInput(msg)
        if not fields:
            return
        await self._update(user_id, fields)

    async def _update(self, user_id: str, values: dict[str, Any]) -> None:
        try:
            await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(**values, updated_at=datetime.now(timezone.utc))
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise Unavailable(f"Failed to update user {user_id}") from exc
