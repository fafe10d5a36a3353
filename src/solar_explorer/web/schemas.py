"""Pydantic schemas for Web API (F3).

Request bodies use the camelCase keys of the public contract through
field aliases; snake_case names are accepted too.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model accepting both alias and field names."""

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# AUTH SCHEMAS
# =============================================================================


class RegisterRequest(CamelModel):
    """Request body for registering an account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    password: str = Field(..., min_length=1, max_length=200)
    role: str | None = None


class LoginRequest(CamelModel):
    """Request body for logging in."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of a user."""

    id: str
    name: str
    email: str
    role: str
    createdAt: str = ""


class TokenResponse(BaseModel):
    """Response for register and login."""

    token: str
    user: UserResponse


# =============================================================================
# CONTENT SCHEMAS
# =============================================================================


class MaterialCreate(CamelModel):
    """Request body for creating a material."""

    planet_id: str = Field(..., min_length=1, alias="planetId")
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class MaterialUpdate(CamelModel):
    """Request body for updating a material (partial)."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)


class QuestionCreate(CamelModel):
    """Request body for creating a question."""

    planet_id: str = Field(..., min_length=1, alias="planetId")
    prompt: str = Field(..., min_length=1)
    options: list[Any]
    correct_index: Any = Field(..., alias="correctIndex")
    explanation: str | None = None


class QuestionUpdate(CamelModel):
    """Request body for updating a question (partial)."""

    planet_id: str | None = Field(default=None, min_length=1, alias="planetId")
    prompt: str | None = Field(default=None, min_length=1)
    options: list[Any] | None = None
    correct_index: Any = Field(default=None, alias="correctIndex")
    explanation: str | None = None


# =============================================================================
# QUIZ & PROGRESS SCHEMAS
# =============================================================================


class AnswerIn(CamelModel):
    """One submitted answer; a non-integer index counts as unanswered."""

    question_id: Any = Field(default=None, alias="questionId")
    selected_index: Any = Field(default=None, alias="selectedIndex")


class QuizSubmitRequest(CamelModel):
    """Request body for submitting quiz answers."""

    planet_id: str = Field(..., min_length=1, alias="planetId")
    # entries that are not objects are skipped, not rejected
    answers: list[Any]


class VisitRequest(CamelModel):
    """Request body for marking a planet visited."""

    planet_id: str = Field(..., min_length=1, alias="planetId")


class OkResponse(BaseModel):
    ok: bool = True


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
