"""Quiz endpoints (F3)."""

from typing import Any

from fastapi import APIRouter, Depends

from solar_explorer.core.errors import ForbiddenError
from solar_explorer.core.grader import SubmittedAnswer
from solar_explorer.core.models import User
from solar_explorer.core.quiz import submit_quiz
from solar_explorer.core.reports import score_history
from solar_explorer.db import attempts_repository
from solar_explorer.web.deps import get_current_user
from solar_explorer.web.schemas import AnswerIn, QuizSubmitRequest

router = APIRouter(prefix="/api/quiz", tags=["quiz"])


def _parse_answers(raw_answers: list[Any]) -> list[AnswerIn]:
    """Keep the object entries of a submitted answer list."""
    return [AnswerIn.model_validate(raw) for raw in raw_answers if isinstance(raw, dict)]


@router.post("/submit")
async def submit(
    request: QuizSubmitRequest,
    user: User = Depends(get_current_user),
) -> dict:
    """Grade quiz answers for a planet.

    Students get a stored attempt and points; teachers get an unsaved
    preview.
    """
    answers = [
        SubmittedAnswer(
            question_id=str(a.question_id) if a.question_id is not None else "",
            selected_index=a.selected_index,
        )
        for a in _parse_answers(request.answers)
    ]
    result = await submit_quiz(user, request.planet_id, answers)
    return result.to_dict()


@router.get("/my-scores")
async def my_scores(user: User = Depends(get_current_user)) -> dict:
    """The caller's own attempts, newest first."""
    attempts = attempts_repository.list_attempts_by_user(user.id)
    return {"attempts": [a.to_dict() for a in attempts]}


@router.get("/scores")
async def scores(
    planetId: str | None = None,
    userId: str | None = None,
    user: User = Depends(get_current_user),
) -> dict:
    """Student attempt history with student and planet identity.

    Teachers see everyone; a student may only ask for their own userId.
    """
    if not user.is_teacher and userId != user.id:
        raise ForbiddenError("Forbidden: teacher role required")
    return {"attempts": score_history(planet_id=planetId, user_id=userId)}
