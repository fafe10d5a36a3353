"""Question endpoints (F3).

Any authenticated user can read questions; the correct option is only
included for teachers. Writing requires the teacher role.
"""

from dataclasses import replace

from fastapi import APIRouter, Depends, status

from solar_explorer.core.errors import NotFoundError, ValidationError
from solar_explorer.core.models import User
from solar_explorer.core.visibility import project_question, project_questions
from solar_explorer.db import planets_repository, questions_repository
from solar_explorer.utils.validators import (
    require_text,
    validate_correct_index,
    validate_options,
)
from solar_explorer.web.deps import get_current_user, require_teacher
from solar_explorer.web.schemas import OkResponse, QuestionCreate, QuestionUpdate

router = APIRouter(prefix="/api/questions", tags=["questions"])


def _not_found(question_id: str) -> NotFoundError:
    return NotFoundError(f"Question '{question_id}' not found")


def _require_planet(planet_id: str) -> None:
    if not planets_repository.planet_exists(planet_id):
        raise ValidationError("planetId is invalid", field="planetId")


@router.get("")
async def list_questions(
    planetId: str | None = None,
    user: User = Depends(get_current_user),
) -> dict:
    """List questions, newest first."""
    items = questions_repository.list_questions(planet_id=planetId, newest_first=True)
    return {"questions": project_questions(items, user.role)}


@router.get("/{question_id}")
async def get_question(
    question_id: str,
    user: User = Depends(get_current_user),
) -> dict:
    """Get a specific question by ID."""
    question = questions_repository.get_question_by_id(question_id)
    if question is None:
        raise _not_found(question_id)
    return {"question": project_question(question, user.role)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    request: QuestionCreate,
    user: User = Depends(require_teacher),
) -> dict:
    """Create a multiple-choice question."""
    prompt = require_text(request.prompt, "prompt")
    options = validate_options(request.options)
    correct_index = validate_correct_index(request.correct_index, options)
    _require_planet(request.planet_id)

    question = questions_repository.insert_question(
        planet_id=request.planet_id,
        prompt=prompt,
        options=options,
        correct_index=correct_index,
        explanation=(request.explanation or "").strip(),
        created_by=user.id,
    )
    return {"question": question.to_dict()}


@router.put("/{question_id}")
async def update_question(
    question_id: str,
    request: QuestionUpdate,
    user: User = Depends(require_teacher),
) -> dict:
    """Partially update a question.

    The correct index is re-checked against the resulting option list.
    """
    question = questions_repository.get_question_by_id(question_id)
    if question is None:
        raise _not_found(question_id)

    changes: dict = {}
    if request.planet_id is not None:
        _require_planet(request.planet_id)
        changes["planet_id"] = request.planet_id
    if request.prompt is not None:
        changes["prompt"] = require_text(request.prompt, "prompt")
    if request.options is not None:
        changes["options"] = validate_options(request.options)
    if request.explanation is not None:
        changes["explanation"] = request.explanation.strip()

    options = changes.get("options", question.options)
    if request.correct_index is not None:
        changes["correct_index"] = validate_correct_index(request.correct_index, options)
    elif question.correct_index >= len(options):
        raise ValidationError("correctIndex is invalid", field="correctIndex")

    updated = replace(question, **changes)
    if not questions_repository.update_question(updated):
        raise _not_found(question_id)
    return {"question": updated.to_dict()}


@router.delete("/{question_id}", response_model=OkResponse)
async def delete_question(
    question_id: str,
    user: User = Depends(require_teacher),
) -> OkResponse:
    """Delete a question by ID."""
    if not questions_repository.delete_question(question_id):
        raise _not_found(question_id)
    return OkResponse()
