"""Profile business logic: role-aware profile reads and validated edits."""

from __future__ import annotations

from typing import Any

import structlog

from edulink.errors import ProfileValidationError, Unavailable, UserNotFound
from edulink.repository.base import Repository, UserRecord
from edulink.stats.engine import StatsEngine
from edulink.stats.roles import Role, role_label
from edulink.stats.schemas import ActivityCounts
from edulink.users.schemas import (
    ChildSummary,
    LearnerProfile,
    ParentProfile,
    ProfileUpdateRequest,
)
from edulink.users.validation import validate_profile_fields

logger = structlog.get_logger()


async def load_user(repo: Repository, user_id: str) -> UserRecord:
    """Fetch a user or raise UserNotFound."""
    user = await repo.fetch_user(user_id)
    if user is None:
        raise UserNotFound(user_id)
    return user


async def fetch_counts_or_zero(repo: Repository, user_id: str) -> ActivityCounts:
    """Activity counts for a user, or all zeros when the store is unavailable."""
    try:
        return await repo.fetch_activity_counts(user_id)
    except Unavailable:
        logger.warning("activity_counts_unavailable", user_id=user_id, exc_info=True)
        return ActivityCounts()


async def get_profile(
    repo: Repository,
    engine: StatsEngine,
    user_id: str,
) -> LearnerProfile | ParentProfile:
    """Build the profile view for a user, shaped by their role."""
    user = await load_user(repo, user_id)

    if user.role == Role.PARENT:
        return ParentProfile(
            user_id=user.user_id,
            display_name=user.shown_name,
            email=user.email,
            student_email=user.student_email,
            profile_image_ref=user.profile_image_ref,
            child=await _child_summary(repo, engine, user),
        )

    counts = await fetch_counts_or_zero(repo, user.user_id)
    return LearnerProfile(
        user_id=user.user_id,
        display_name=user.shown_name,
        email=user.email,
        role=user.role,
        role_label=role_label(user.role, user.points, engine.promotion_points),
        grade=user.grade,
        subject=user.subject,
        profile_image_ref=user.profile_image_ref,
        points=user.points,
        questions_count=counts.questions_asked,
        answers_count=counts.answers_given,
        level=engine.level(user.points).level,
    )


async def _child_summary(
    repo: Repository, engine: StatsEngine, parent: UserRecord,
) -> ChildSummary | None:
    if not parent.student_email:
        return None
    try:
        child = await repo.find_child(parent.student_email)
    except Unavailable:
        logger.warning("child_lookup_unavailable", user_id=parent.user_id, exc_info=True)
        return None
    if child is None:
        return None
    return ChildSummary(
        user_id=child.user_id,
        display_name=child.display_name or child.name or "Not set",
        email=child.email,
        grade=child.grade,
        points=child.points,
        level=engine.level(child.points).level,
    )


async def update_profile(
    repo: Repository,
    user_id: str,
    body: ProfileUpdateRequest,
) -> dict[str, Any]:
    """Validate and persist a profile edit.

    Only the fields that belong to the user's role are written.

    Raises:
        ProfileValidationError: If any field fails role-aware validation.
    """
    user = await load_user(repo, user_id)

    errors = validate_profile_fields(
        user.role,
        name=body.name,
        grade=body.grade,
        subject=body.subject,
        student_email=body.student_email,
    )
    if errors:
        raise ProfileValidationError(errors)

    fields: dict[str, Any] = {"display_name": body.name.strip()}
    if user.role in (Role.STUDENT, Role.TUTOR):
        fields["grade"] = str(body.grade)
    elif user.role == Role.TEACHER:
        fields["subject"] = (body.subject or "").strip()
    elif user.role == Role.PARENT:
        fields["student_email"] = (body.student_email or "").strip().lower()

    await repo.persist_profile_fields(user.user_id, fields)
    logger.info("profile_updated", user_id=user.user_id, fields=sorted(fields))
    return fields
