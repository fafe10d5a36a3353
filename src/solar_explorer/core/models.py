"""Domain records.

Plain dataclasses shared by the repositories, the core logic and the web
layer. ``to_dict`` produces the camelCase shape used on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, get_args

Role = Literal["student", "teacher"]

ROLES: tuple[str, ...] = get_args(Role)


def now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# REFERENCE CONTENT
# =============================================================================


@dataclass
class User:
    """A registered account."""

    id: str
    name: str
    email: str
    role: Role
    password_hash: str = ""
    created_at: str = ""

    @property
    def is_teacher(self) -> bool:
        return self.role == "teacher"

    def to_dict(self) -> dict[str, Any]:
        """Public projection (never includes the password hash)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "createdAt": self.created_at,
        }


@dataclass
class Planet:
    """Static reference planet (seed data)."""

    id: str
    name: str
    order: int
    radius: float
    distance_au: float
    color: str
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "order": self.order,
            "radius": self.radius,
            "distanceAU": self.distance_au,
            "color": self.color,
            "summary": self.summary,
        }


@dataclass
class Material:
    """Teacher-authored reading passage attached to a planet."""

    id: str
    planet_id: str
    title: str
    content: str
    created_by: str | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "planetId": self.planet_id,
            "title": self.title,
            "content": self.content,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Question:
    """Multiple-choice item attached to a planet."""

    id: str
    planet_id: str
    prompt: str
    options: list[str]
    correct_index: int
    explanation: str = ""
    created_by: str | None = None
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "planetId": self.planet_id,
            "prompt": self.prompt,
            "options": list(self.options),
            "correctIndex": self.correct_index,
            "explanation": self.explanation,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
        }


# =============================================================================
# QUIZ ATTEMPTS
# =============================================================================


@dataclass(frozen=True)
class QuestionResult:
    """Verdict for a single question of a graded submission."""

    question_id: str
    selected_index: int | None
    correct_index: int
    is_correct: bool
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "questionId": self.question_id,
            "selectedIndex": self.selected_index,
            "correctIndex": self.correct_index,
            "isCorrect": self.is_correct,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class QuizAttempt:
    """One graded, persisted submission. Immutable once created."""

    id: str
    user_id: str
    planet_id: str
    score: int
    total: int
    results: tuple[QuestionResult, ...]
    created_at: str

    def summary_dict(self) -> dict[str, Any]:
        """Short form returned by the submit endpoint."""
        return {
            "id": self.id,
            "planetId": self.planet_id,
            "score": self.score,
            "total": self.total,
            "createdAt": self.created_at,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "planetId": self.planet_id,
            "score": self.score,
            "total": self.total,
            "results": [r.to_dict() for r in self.results],
            "createdAt": self.created_at,
        }


# =============================================================================
# PROGRESS
# =============================================================================


@dataclass
class Progress:
    """Per-user ledger of visited planets and accumulated points."""

    user_id: str
    visited_planets: set[str] = field(default_factory=set)
    points: int = 0
    updated_at: str = ""

    @property
    def visited_count(self) -> int:
        return len(self.visited_planets)

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "visitedPlanets": sorted(self.visited_planets),
            "points": self.points,
            "updatedAt": self.updated_at,
            "visitedCount": self.visited_count,
        }
