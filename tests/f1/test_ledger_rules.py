"""Tests for the in-memory progress update rules."""

import pytest

from solar_explorer.core.errors import ValidationError
from solar_explorer.core.ledger import apply_quiz_result, apply_visit
from solar_explorer.core.models import Progress


@pytest.fixture
def progress() -> Progress:
    return Progress(user_id="u1", updated_at="2026-01-01T00:00:00+00:00")


class TestApplyVisit:
    """Tests for apply_visit()."""

    def test_first_visit_awards_bonus(self, progress):
        """First visit adds the planet and the bonus."""
        added = apply_visit(progress, "earth", visit_bonus=5)

        assert added == 5
        assert progress.points == 5
        assert progress.visited_planets == {"earth"}

    def test_repeat_visit_is_idempotent(self, progress):
        """Second visit adds nothing but advances updated_at."""
        apply_visit(progress, "earth", visit_bonus=5)
        first_update = progress.updated_at

        added = apply_visit(progress, "earth", visit_bonus=5)

        assert added == 0
        assert progress.points == 5
        assert progress.visited_count == 1
        assert progress.updated_at >= first_update

    def test_updated_at_advances(self, progress):
        """Timestamp moves forward from the stored value."""
        apply_visit(progress, "earth", visit_bonus=5)
        assert progress.updated_at > "2026-01-01T00:00:00+00:00"

    def test_custom_bonus(self, progress):
        """The bonus is a parameter."""
        assert apply_visit(progress, "mars", visit_bonus=7) == 7


class TestApplyQuizResult:
    """Tests for apply_quiz_result()."""

    def test_awards_points_per_correct_answer(self, progress):
        """2 correct x 10 = 20 points."""
        added = apply_quiz_result(progress, "mars", score=2, per_correct_answer=10)

        assert added == 20
        assert progress.points == 20

    def test_marks_planet_visited_without_bonus(self, progress):
        """Quiz marks the planet visited; no visit bonus."""
        apply_quiz_result(progress, "mars", score=0, per_correct_answer=10)

        assert progress.visited_planets == {"mars"}
        assert progress.points == 0

    def test_later_visit_gets_no_bonus(self, progress):
        """A planet marked by a quiz is already visited."""
        apply_quiz_result(progress, "mars", score=1, per_correct_answer=10)
        added = apply_visit(progress, "mars", visit_bonus=5)

        assert added == 0
        assert progress.points == 10

    def test_each_attempt_awards_independently(self, progress):
        """Repeated attempts are not idempotent."""
        apply_quiz_result(progress, "mars", score=2, per_correct_answer=10)
        apply_quiz_result(progress, "mars", score=1, per_correct_answer=10)

        assert progress.points == 30
        assert progress.visited_count == 1

    def test_points_never_decrease(self, progress):
        """Zero score keeps points unchanged."""
        progress.points = 42
        apply_quiz_result(progress, "venus", score=0, per_correct_answer=10)
        assert progress.points == 42

    def test_negative_score_rejected(self, progress):
        """A negative score is invalid input."""
        with pytest.raises(ValidationError):
            apply_quiz_result(progress, "venus", score=-1, per_correct_answer=10)
        assert progress.points == 0


class TestProgressProjection:
    """Tests for Progress.to_dict()."""

    def test_visited_planets_serialized_as_sorted_list(self):
        """The set becomes a list at the boundary."""
        progress = Progress("u1", {"mars", "earth"}, 10, "2026-01-01T00:00:00+00:00")

        data = progress.to_dict()

        assert data == {
            "userId": "u1",
            "visitedPlanets": ["earth", "mars"],
            "points": 10,
            "updatedAt": "2026-01-01T00:00:00+00:00",
            "visitedCount": 2,
        }
