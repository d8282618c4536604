"""Role-aware validation of profile edits."""

from __future__ import annotations

from pydantic import EmailStr, TypeAdapter, ValidationError

from edulink.stats.roles import Role

GRADES: tuple[str, ...] = ("6", "7", "8", "9", "10", "11", "12", "13")

SUBJECTS: tuple[str, ...] = (
    "Sinhala",
    "Tamil",
    "English",
    "Pali",
    "Sanskrit",
    "Second National Language",
    "Mathematics",
    "Science",
    "History",
    "Geography",
    "Civics",
    "Health and Physical Education",
    "Information and Communication Technology",
    "Religion and Value Education",
    "Art",
    "Music",
    "Dance",
    "Drama and Theatre",
    "Entrepreneurship and Financial Literacy",
    "Accounting",
    "Business Studies",
    "Economics",
    "Business Statistics",
    "Political Science",
    "Logic and Scientific Method",
    "Mass Media and Communication Studies",
    "Home Economics",
    "Biology",
    "Chemistry",
    "Physics",
    "Combined Mathematics",
)

NAME_MIN_LENGTH = 3

_email_adapter = TypeAdapter(EmailStr)


def _is_valid_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_profile_fields(
    role: str,
    name: str | None = None,
    grade: str | None = None,
    subject: str | None = None,
    student_email: str | None = None,
) -> dict[str, str]:
    """Validate the fields a user of ``role`` may edit.

    Returns a field -> message map; empty when everything is valid.
    Students and tutors edit their grade, teachers their subject,
    parents their child's email.
    """
    errors: dict[str, str] = {}

    if not name or len(name.strip()) < NAME_MIN_LENGTH:
        errors["name"] = f"Full name must be at least {NAME_MIN_LENGTH} characters."

    if role in (Role.STUDENT, Role.TUTOR):
        if not grade:
            errors["grade"] = "Please select your grade."
        elif str(grade) not in GRADES:
            errors["grade"] = "Invalid grade selected."

    elif role == Role.TEACHER:
        sub = (subject or "").strip()
        if not sub:
            errors["subject"] = "Please select your teaching subject."
        elif sub not in SUBJECTS:
            errors["subject"] = "Select a subject from the list."

    elif role == Role.PARENT:
        email = (student_email or "").strip()
        if not email:
            errors["student_email"] = "Please enter your child's email."
        elif not _is_valid_email(email):
            errors["student_email"] = "Please enter a valid email address."

    return errors
