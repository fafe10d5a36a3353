"""Tests for validation helpers and role projections."""

import pytest

from solar_explorer.core.errors import ValidationError
from solar_explorer.core.models import ROLES, Question
from solar_explorer.core.visibility import project_question, project_questions
from solar_explorer.utils.validators import (
    require_text,
    validate_correct_index,
    validate_email,
    validate_options,
    validate_password,
    validate_role,
)


class TestValidateQuestionFields:
    """Tests for option and correct index validation."""

    def test_valid_options(self):
        assert validate_options([" Mars ", "Venus"]) == ["Mars", "Venus"]

    @pytest.mark.parametrize("options", [None, "ab", [], ["only one"], ["a", " "]])
    def test_invalid_options(self, options):
        """Fewer than two or blank options are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_options(options)
        assert exc_info.value.field == "options"

    @pytest.mark.parametrize("index,expected", [(0, 0), (2, 2), ("1", 1), (1.0, 1)])
    def test_valid_correct_index(self, index, expected):
        assert validate_correct_index(index, ["a", "b", "c"]) == expected

    @pytest.mark.parametrize("index", [-1, 3, None, True, "x", 1.5])
    def test_invalid_correct_index(self, index):
        """Index must be an integer inside the option list."""
        with pytest.raises(ValidationError) as exc_info:
            validate_correct_index(index, ["a", "b", "c"])
        assert exc_info.value.field == "correctIndex"


class TestValidateUserFields:
    """Tests for email, role and text helpers."""

    def test_email(self):
        assert validate_email("ana@example.com")
        assert not validate_email("not-an-email")
        assert not validate_email("")

    def test_role_defaults_to_student(self):
        assert validate_role(None) == "student"
        assert validate_role("teacher") == "teacher"

    def test_unknown_role(self):
        """Only student and teacher are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            validate_role("guru")
        assert exc_info.value.field == "role"

    def test_require_text(self):
        assert require_text("  Mars  ", "title") == "Mars"
        with pytest.raises(ValidationError, match="title is required"):
            require_text("   ", "title")

    def test_roles(self):
        assert ROLES == ("student", "teacher")

    def test_password_within_bcrypt_limit(self):
        assert validate_password("p" * 72) == "p" * 72

    @pytest.mark.parametrize("password", ["p" * 73, "\u00e9" * 37, "", None])
    def test_invalid_password(self, password):
        """Empty, or longer than 72 UTF-8 bytes (multibyte characters count per byte)."""
        with pytest.raises(ValidationError) as exc_info:
            validate_password(password)
        assert exc_info.value.field == "password"


class TestProjectQuestion:
    """Tests for role-based question redaction."""

    @pytest.fixture
    def question(self) -> Question:
        return Question(
            id="q1",
            planet_id="mars",
            prompt="Which planet is red?",
            options=["Mars", "Venus"],
            correct_index=0,
            explanation="Iron oxide dust.",
        )

    def test_student_does_not_see_answer_key(self, question):
        """correctIndex removed for students."""
        data = project_question(question, "student")

        assert "correctIndex" not in data
        assert data["options"] == ["Mars", "Venus"]

    def test_teacher_sees_answer_key(self, question):
        assert project_question(question, "teacher")["correctIndex"] == 0

    def test_anonymous_does_not_see_answer_key(self, question):
        assert "correctIndex" not in project_question(question, None)

    def test_projection_does_not_mutate_question(self, question):
        project_questions([question], "student")
        assert question.correct_index == 0
