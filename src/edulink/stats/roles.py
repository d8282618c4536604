"""User roles and the role-dependent rules: tutor promotion and display labels."""

from __future__ import annotations

from enum import Enum

from edulink.errors import InvalidInput

TUTOR_PROMOTION_POINTS = 200
CENTURY_CLUB_POINTS = 100


class Role(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"
    TEACHER = "teacher"
    PARENT = "parent"


def should_promote_to_tutor(
    points: int, role: str, threshold: int = TUTOR_PROMOTION_POINTS,
) -> bool:
    """True when a student has reached the tutor threshold.

    Once the role is persisted as tutor this is False again, so repeated
    evaluation never promotes twice.
    """
    if points < 0:
        msg = f"points must be non-negative, got {points}"
        raise InvalidInput(msg)
    return role == Role.STUDENT and points >= threshold


def role_label(role: str | None, points: int, threshold: int = TUTOR_PROMOTION_POINTS) -> str:
    """Upper-case label for the profile header.

    A student at the threshold is shown as TUTOR even before the promotion
    write has landed.
    """
    if role == Role.PARENT:
        return "PARENT"
    if role == Role.STUDENT and points >= threshold:
        return "TUTOR"
    return (role or "user").upper()


def milestone_pills(points: int, role: str | None, threshold: int = TUTOR_PROMOTION_POINTS) -> list[str]:
    """Milestone pills shown beside the level bar."""
    pills = []
    if CENTURY_CLUB_POINTS <= points < threshold:
        pills.append("Century Club")
    if points >= threshold and role == Role.TUTOR:
        pills.append("Peer Tutor")
    return pills
