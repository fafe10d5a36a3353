"""Repository functions for questions table.

Options are stored as a JSON array. Field validation (option count,
correct index range) happens before these functions are called.
"""

from __future__ import annotations

import json
import uuid

import structlog

from solar_explorer.core.models import Question, now_iso
from solar_explorer.db.database import get_db

logger = structlog.get_logger(__name__)


def insert_question(
    planet_id: str,
    prompt: str,
    options: list[str],
    correct_index: int,
    explanation: str = "",
    created_by: str | None = None,
) -> Question:
    """Insert a new question.

    Returns:
        The created Question
    """
    question = Question(
        id=str(uuid.uuid4()),
        planet_id=planet_id,
        prompt=prompt,
        options=list(options),
        correct_index=correct_index,
        explanation=explanation,
        created_by=created_by,
        created_at=now_iso(),
    )

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO questions (
                id, planet_id, prompt, options, correct_index,
                explanation, created_by, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                question.id,
                question.planet_id,
                question.prompt,
                json.dumps(question.options, ensure_ascii=False),
                question.correct_index,
                question.explanation,
                question.created_by,
                question.created_at,
            ),
        )

    logger.debug("questions.inserted", question_id=question.id, planet_id=planet_id)
    return question


def get_question_by_id(question_id: str) -> Question | None:
    """Get question by ID."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM questions WHERE id = ?", (question_id,)).fetchone()

    if row is None:
        return None

    return _row_to_question(row)


def list_questions(planet_id: str | None = None, newest_first: bool = False) -> list[Question]:
    """List questions, optionally for one planet.

    Args:
        planet_id: Restrict to this planet
        newest_first: Order by creation time descending instead of the
            store order (oldest first) used for grading

    Returns:
        List of Question instances
    """
    direction = "DESC" if newest_first else "ASC"
    order_by = f"ORDER BY created_at {direction}, rowid {direction}"

    with get_db() as conn:
        if planet_id:
            rows = conn.execute(
                f"SELECT * FROM questions WHERE planet_id = ? {order_by}", (planet_id,)
            ).fetchall()
        else:
            rows = conn.execute(f"SELECT * FROM questions {order_by}").fetchall()

    return [_row_to_question(row) for row in rows]


def update_question(question: Question) -> bool:
    """Overwrite the editable fields of an existing question.

    Returns:
        True if updated, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE questions SET
                planet_id = ?,
                prompt = ?,
                options = ?,
                correct_index = ?,
                explanation = ?
            WHERE id = ?
            """,
            (
                question.planet_id,
                question.prompt,
                json.dumps(question.options, ensure_ascii=False),
                question.correct_index,
                question.explanation,
                question.id,
            ),
        )

    updated = cursor.rowcount > 0
    if updated:
        logger.debug("questions.updated", question_id=question.id)
    return updated


def delete_question(question_id: str) -> bool:
    """Delete question by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("questions.deleted", question_id=question_id)

    return deleted


def _row_to_question(row) -> Question:
    """Convert database row to Question."""
    return Question(
        id=row["id"],
        planet_id=row["planet_id"],
        prompt=row["prompt"],
        options=json.loads(row["options"]) if row["options"] else [],
        correct_index=row["correct_index"],
        explanation=row["explanation"] or "",
        created_by=row["created_by"],
        created_at=row["created_at"],
    )
