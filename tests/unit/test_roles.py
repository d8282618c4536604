"""Tutor promotion, role labels and milestone pills."""

import pytest

from edulink.errors import InvalidInput
from edulink.stats.roles import Role, milestone_pills, role_label, should_promote_to_tutor


class TestShouldPromoteToTutor:
    def test_student_below_threshold(self):
        assert should_promote_to_tutor(199, "student") is False

    def test_student_at_threshold(self):
        assert should_promote_to_tutor(200, "student") is True

    def test_already_tutor_is_noop(self):
        assert should_promote_to_tutor(200, "tutor") is False

    @pytest.mark.parametrize("role", ["teacher", "parent", "tutor"])
    def test_non_students_never_promoted(self, role):
        assert should_promote_to_tutor(10_000, role) is False

    def test_accepts_enum_role(self):
        assert should_promote_to_tutor(500, Role.STUDENT) is True

    def test_promote_then_reevaluate_is_idempotent(self):
        role = "student"
        if should_promote_to_tutor(300, role):
            role = Role.TUTOR.value
        assert should_promote_to_tutor(300, role) is False

    def test_custom_threshold(self):
        assert should_promote_to_tutor(150, "student", threshold=100) is True

    def test_negative_points_rejected(self):
        with pytest.raises(InvalidInput):
            should_promote_to_tutor(-1, "student")


class TestRoleLabel:
    def test_parent(self):
        assert role_label("parent", 999) == "PARENT"

    def test_student_at_threshold_shown_as_tutor(self):
        assert role_label("student", 200) == "TUTOR"

    def test_student_below_threshold(self):
        assert role_label("student", 50) == "STUDENT"

    def test_teacher(self):
        assert role_label("teacher", 0) == "TEACHER"

    def test_missing_role(self):
        assert role_label(None, 0) == "USER"


class TestMilestonePills:
    def test_nothing_below_100(self):
        assert milestone_pills(99, "student") == []

    def test_century_club(self):
        assert milestone_pills(100, "student") == ["Century Club"]
        assert milestone_pills(199, "student") == ["Century Club"]

    def test_peer_tutor_only_once_role_is_tutor(self):
        assert milestone_pills(200, "student") == []
        assert milestone_pills(200, "tutor") == ["Peer Tutor"]
