"""Role-based projections.

Which fields a caller may see is decided here, once, instead of in each
route. Only teachers see a question's correct option before grading.
"""

from __future__ import annotations

from typing import Any, Iterable

from solar_explorer.core.models import Question

# Fields hidden from callers without the answer-key capability
ANSWER_KEY_FIELDS = ("correctIndex",)


def can_see_answer_key(role: str | None) -> bool:
    return role == "teacher"


def project_question(question: Question, role: str | None) -> dict[str, Any]:
    """Serialize a question for a caller with the given role."""
    data = question.to_dict()
    if not can_see_answer_key(role):
        for key in ANSWER_KEY_FIELDS:
            data.pop(key, None)
    return data


def project_questions(questions: Iterable[Question], role: str | None) -> list[dict[str, Any]]:
    return [project_question(q, role) for q in questions]
