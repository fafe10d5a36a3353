"""Grading module.

Responsibilities (F1):
- Grade a learner's multiple-choice answers against a planet's questions
- Produce a per-question verdict and an aggregate score

Grading is a pure function over its inputs: it never touches the store.
Answers for questions that are not in the set are ignored; questions with
no answer are graded as unanswered (``selected_index = None``), which is
never correct.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import structlog

from solar_explorer.core.errors import NoQuestionsAvailable
from solar_explorer.core.models import Question, QuestionResult

logger = structlog.get_logger(__name__)

# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class SubmittedAnswer:
    """A single answer as submitted by the learner."""

    question_id: str
    selected_index: Any = None


@dataclass(frozen=True)
class GradeOutcome:
    """Result of grading one submission."""

    score: int
    total: int
    results: tuple[QuestionResult, ...]

    @property
    def correct_ratio(self) -> float:
        return self.score / self.total if self.total > 0 else 0.0


# =============================================================================
# GRADING FUNCTIONS
# =============================================================================


def normalize_selected_index(response: Any) -> int | None:
    """Normalize a submitted option index to int or None if invalid/empty.

    Args:
        response: Raw value from the request (int, numeric str, or None)

    Returns:
        Integer index or None if response is empty/invalid
    """
    if response is None or isinstance(response, bool):
        return None
    if isinstance(response, int):
        return response
    if isinstance(response, float):
        return int(response) if response.is_integer() else None
    if isinstance(response, str):
        stripped = response.strip().lower()
        if stripped == "" or stripped in ("null", "none"):
            return None
        try:
            return int(stripped)
        except ValueError:
            return None
    return None


def build_answer_map(answers: Iterable[SubmittedAnswer]) -> dict[str, int | None]:
    """Map question id to the normalized selected index.

    Later answers for the same question override earlier ones. Answers
    without a question id are skipped.
    """
    answer_map: dict[str, int | None] = {}
    for answer in answers:
        if not answer.question_id:
            continue
        answer_map[str(answer.question_id)] = normalize_selected_index(answer.selected_index)
    return answer_map


def grade(
    questions: Sequence[Question],
    answers: Iterable[SubmittedAnswer],
) -> GradeOutcome:
    """Grade answers against a question set.

    Args:
        questions: Questions of one planet, in store order
        answers: Learner answers (any order, possibly partial)

    Returns:
        GradeOutcome with score, total and one result per question,
        in the same order as ``questions``
    """
    answer_map = build_answer_map(answers)

    results: list[QuestionResult] = []
    for question in questions:
        selected = answer_map.get(question.id)
        is_correct = selected is not None and selected == question.correct_index
        results.append(
            QuestionResult(
                question_id=question.id,
                selected_index=selected,
                correct_index=question.correct_index,
                is_correct=is_correct,
                explanation=question.explanation or "",
            )
        )

    score = sum(1 for r in results if r.is_correct)

    ignored = len(set(answer_map) - {q.id for q in questions})
    if ignored:
        logger.debug("grader.unmatched_answers_ignored", count=ignored)

    return GradeOutcome(score=score, total=len(questions), results=tuple(results))


def grade_submission(
    planet_id: str,
    questions: Sequence[Question],
    answers: Iterable[SubmittedAnswer],
) -> GradeOutcome:
    """Boundary check + grade.

    Raises:
        NoQuestionsAvailable: If the planet has no questions to grade against
    """
    if not questions:
        raise NoQuestionsAvailable(planet_id)
    return grade(questions, answers)
