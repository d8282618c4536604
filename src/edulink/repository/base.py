"""Repository interface: everything the services need from the backing store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict

from edulink.stats.schemas import ActivityCounts, CohortMember

# Profile columns a caller may write through persist_profile_fields
EDITABLE_PROFILE_FIELDS = frozenset({
    "name",
    "display_name",
    "grade",
    "subject",
    "student_email",
    "profile_image",
})


class UserRecord(BaseModel):
    """A stored user as the services see it."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    display_name: str | None = None
    name: str | None = None
    role: str = "student"
    grade: str | None = None
    subject: str | None = None
    student_email: str | None = None
    points: int = 0
    profile_image_ref: str | None = None

    @property
    def shown_name(self) -> str:
        return self.display_name or self.name or "Anonymous"


class Repository(ABC):
    """Abstract data access for profile and progress reads and writes.

    Read methods raise ``Unavailable`` when the store cannot be reached.
    """

    @abstractmethod
    async def fetch_user(self, user_id: str) -> UserRecord | None:
        """Load a user, or None if the id is unknown."""
        ...

    @abstractmethod
    async def fetch_activity_counts(self, user_id: str) -> ActivityCounts:
        """Count questions asked, answers given and upvotes received by a user."""
        ...

    @abstractmethod
    async def fetch_cohort(self, grade: str) -> list[CohortMember]:
        """All users in a grade, in stable store order."""
        ...

    @abstractmethod
    async def find_child(self, student_email: str) -> UserRecord | None:
        """Find the student or tutor with the given email (used for parent accounts)."""
        ...

    @abstractmethod
    async def persist_role_promotion(self, user_id: str, new_role: str) -> None:
        ...

    @abstractmethod
    async def persist_profile_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        ...
