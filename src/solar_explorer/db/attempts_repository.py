"""Repository functions for quiz_attempts table.

Attempts are append-only: there is no update or delete. A student's
attempt is stored in the same transaction as the progress it awards.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from typing import Sequence

import structlog

from solar_explorer.core.models import Progress, QuestionResult, QuizAttempt, now_iso
from solar_explorer.db import progress_repository
from solar_explorer.db.database import get_db

logger = structlog.get_logger(__name__)


def new_attempt(
    user_id: str,
    planet_id: str,
    score: int,
    total: int,
    results: Sequence[QuestionResult],
) -> QuizAttempt:
    """Build an attempt record with a fresh id and timestamp (not stored)."""
    return QuizAttempt(
        id=str(uuid.uuid4()),
        user_id=user_id,
        planet_id=planet_id,
        score=score,
        total=total,
        results=tuple(results),
        created_at=now_iso(),
    )


def write_attempt(conn: sqlite3.Connection, attempt: QuizAttempt) -> None:
    """Insert an attempt row on an open connection."""
    conn.execute(
        """
        INSERT INTO quiz_attempts (id, user_id, planet_id, score, total, results, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            attempt.id,
            attempt.user_id,
            attempt.planet_id,
            attempt.score,
            attempt.total,
            json.dumps([r.to_dict() for r in attempt.results], ensure_ascii=False),
            attempt.created_at,
        ),
    )


def insert_attempt(
    user_id: str,
    planet_id: str,
    score: int,
    total: int,
    results: Sequence[QuestionResult],
) -> QuizAttempt:
    """Persist a graded attempt on its own.

    Returns:
        The created QuizAttempt
    """
    attempt = new_attempt(user_id, planet_id, score, total, results)

    with get_db() as conn:
        write_attempt(conn, attempt)

    logger.debug("attempts.inserted", attempt_id=attempt.id, user_id=user_id)
    return attempt


def save_attempt_with_progress(attempt: QuizAttempt, progress: Progress) -> None:
    """Store an attempt and the progress it produced in one transaction.

    Either both rows are written or neither is.
    """
    with get_db() as conn:
        write_attempt(conn, attempt)
        progress_repository.write_progress(conn, progress)

    logger.debug(
        "attempts.inserted",
        attempt_id=attempt.id,
        user_id=attempt.user_id,
        points=progress.points,
    )


def list_attempts(
    user_id: str | None = None,
    planet_id: str | None = None,
) -> list[QuizAttempt]:
    """List attempts, newest first, with optional filters."""
    clauses: list[str] = []
    params: list[str] = []
    if user_id:
        clauses.append("user_id = ?")
        params.append(user_id)
    if planet_id:
        clauses.append("planet_id = ?")
        params.append(planet_id)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

    with get_db() as conn:
        rows = conn.execute(
            f"SELECT * FROM quiz_attempts {where} ORDER BY created_at DESC, rowid DESC",
            params,
        ).fetchall()

    return [_row_to_attempt(row) for row in rows]


def list_attempts_by_user(user_id: str) -> list[QuizAttempt]:
    """All attempts of one user, newest first."""
    return list_attempts(user_id=user_id)


def _row_to_attempt(row) -> QuizAttempt:
    """Convert database row to QuizAttempt."""
    raw_results = json.loads(row["results"]) if row["results"] else []
    results = tuple(
        QuestionResult(
            question_id=r["questionId"],
            selected_index=r.get("selectedIndex"),
            correct_index=r["correctIndex"],
            is_correct=bool(r.get("isCorrect")),
            explanation=r.get("explanation", ""),
        )
        for r in raw_results
    )
    return QuizAttempt(
        id=row["id"],
        user_id=row["user_id"],
        planet_id=row["planet_id"],
        score=row["score"],
        total=row["total"],
        results=results,
        created_at=row["created_at"],
    )
