"""Pydantic models for profile endpoints.

Profiles are a tagged union on ``kind``: learners (students, tutors,
teachers) carry their own stats, parents carry a summary of their child.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class LearnerProfile(BaseModel):
    kind: Literal["learner"] = "learner"
    user_id: str
    display_name: str
    email: str
    role: str
    role_label: str
    grade: str | None = None
    subject: str | None = None
    profile_image_ref: str | None = None
    points: int
    questions_count: int
    answers_count: int
    level: int


class ChildSummary(BaseModel):
    user_id: str
    display_name: str
    email: str
    grade: str | None = None
    points: int
    level: int


class ParentProfile(BaseModel):
    kind: Literal["parent"] = "parent"
    user_id: str
    display_name: str
    email: str
    role: str = "parent"
    role_label: str = "PARENT"
    student_email: str | None = None
    profile_image_ref: str | None = None
    points: int = 0
    questions_count: int = 0
    answers_count: int = 0
    child: ChildSummary | None = None


ProfileView = Annotated[LearnerProfile | ParentProfile, Field(discriminator="kind")]


class ProfileUpdateRequest(BaseModel):
    name: str = Field(..., max_length=64)
    grade: str | None = None
    subject: str | None = Field(None, max_length=64)
    student_email: str | None = Field(None, max_length=320)
