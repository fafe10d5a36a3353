"""Quiz submission (F2).

Ties grading, attempt persistence and the progress ledger together:
- Students: attempt persisted together with the points it awards and
  the visited planet (one transaction)
- Teachers: graded as a preview, nothing persisted
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Iterable, Literal

import structlog

from solar_explorer.core.errors import InvalidPlanet, ValidationError
from solar_explorer.core.grader import GradeOutcome, SubmittedAnswer, grade_submission
from solar_explorer.core.ledger import ProgressLedger, get_ledger
from solar_explorer.core.models import QuizAttempt, User, now_iso
from solar_explorer.db import planets_repository, questions_repository

logger = structlog.get_logger(__name__)

SubmissionMode = Literal["student", "teacher_preview"]


@dataclass
class SubmissionResult:
    """Outcome of one quiz submission."""

    planet_id: str
    outcome: GradeOutcome
    mode: SubmissionMode
    points_added: int = 0
    attempt: QuizAttempt | None = None
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the submit endpoint response shape."""
        if self.attempt is not None:
            attempt = self.attempt.summary_dict()
        else:
            attempt = {
                "id": None,
                "planetId": self.planet_id,
                "score": self.outcome.score,
                "total": self.outcome.total,
                "createdAt": self.created_at,
            }
        return {
            "attempt": attempt,
            "results": [r.to_dict() for r in self.outcome.results],
            "pointsAdded": self.points_added,
            "mode": self.mode,
        }


async def submit_quiz(
    user: User,
    planet_id: str,
    answers: Iterable[SubmittedAnswer],
    ledger: ProgressLedger | None = None,
) -> SubmissionResult:
    """Grade a submission and, for students, record it.

    Args:
        user: Authenticated submitter
        planet_id: Planet whose questions are graded
        answers: Submitted answers
        ledger: Progress ledger (defaults to the global one)

    Returns:
        SubmissionResult

    Raises:
        ValidationError: If planet_id is empty
        InvalidPlanet: If the planet does not exist
        NoQuestionsAvailable: If the planet has no questions
    """
    if not planet_id:
        raise ValidationError("planetId is required", field="planetId")
    if not await asyncio.to_thread(planets_repository.planet_exists, planet_id):
        raise InvalidPlanet(planet_id)

    questions = await asyncio.to_thread(questions_repository.list_questions, planet_id)
    outcome = grade_submission(planet_id, questions, list(answers))

    if user.is_teacher:
        logger.info(
            "quiz.previewed",
            user_id=user.id,
            planet_id=planet_id,
            score=outcome.score,
            total=outcome.total,
        )
        return SubmissionResult(
            planet_id=planet_id,
            outcome=outcome,
            mode="teacher_preview",
            created_at=now_iso(),
        )

    ledger = ledger or get_ledger()
    _, points_added, attempt = await ledger.record_quiz_result(
        user.id, planet_id, outcome.score, outcome.total, outcome.results
    )

    logger.info(
        "quiz.submitted",
        user_id=user.id,
        planet_id=planet_id,
        attempt_id=attempt.id,
        score=outcome.score,
        total=outcome.total,
        points_added=points_added,
    )

    return SubmissionResult(
        planet_id=planet_id,
        outcome=outcome,
        mode="student",
        points_added=points_added,
        attempt=attempt,
        created_at=attempt.created_at,
    )
