"""Read-side reports for learners and teachers (F2).

- own progress with quiz statistics
- cohort ranking of all students
- quiz score history enriched with student and planet identity
"""

from __future__ import annotations

from typing import Any

import structlog

from solar_explorer.core.ledger import ProgressLedger, get_ledger
from solar_explorer.core.stats import (
    StudentStanding,
    compute_user_stats,
    rank_students,
    stats_by_user,
)
from solar_explorer.db import (
    attempts_repository,
    planets_repository,
    progress_repository,
    users_repository,
)

logger = structlog.get_logger(__name__)


async def my_progress(user_id: str, ledger: ProgressLedger | None = None) -> dict[str, Any]:
    """Progress projection of one user including quiz stats.

    The progress record is created on first access.
    """
    ledger = ledger or get_ledger()
    progress = await ledger.get_or_create(user_id)
    stats = compute_user_stats(attempts_repository.list_attempts_by_user(user_id))

    result = progress.to_dict()
    result["stats"] = stats.to_dict()
    return result


def cohort_ranking(user_id: str | None = None) -> list[StudentStanding]:
    """Rank every student (or just ``user_id``) for the teacher view.

    Students without a progress record get one, so older accounts show up
    with zero points instead of being left out.
    """
    students = users_repository.list_users(role="student")
    if user_id:
        students = [s for s in students if s.id == user_id]

    student_ids = [s.id for s in students]
    records = {p.user_id: p for p in progress_repository.list_progress(student_ids)}

    missing = [sid for sid in student_ids if sid not in records]
    for sid in missing:
        records[sid] = progress_repository.ensure_progress(sid)
    if missing:
        logger.info("progress.backfilled", count=len(missing))

    attempts = [
        a for a in attempts_repository.list_attempts() if a.user_id in records
    ]

    return rank_students(
        records.values(),
        stats_by_user(attempts),
        students={s.id: s for s in students},
    )


def score_history(
    planet_id: str | None = None,
    user_id: str | None = None,
) -> list[dict[str, Any]]:
    """Student quiz attempts, newest first, with student and planet identity."""
    students = {u.id: u for u in users_repository.list_users(role="student")}
    planets = {p.id: p for p in planets_repository.list_planets()}

    rows: list[dict[str, Any]] = []
    for attempt in attempts_repository.list_attempts(user_id=user_id, planet_id=planet_id):
        student = students.get(attempt.user_id)
        if student is None:
            # only student attempts
            continue

        planet = planets.get(attempt.planet_id)
        row = attempt.to_dict()
        row["student"] = {"id": student.id, "name": student.name, "email": student.email}
        row["planet"] = (
            {"id": planet.id, "name": planet.name}
            if planet
            else {"id": attempt.planet_id, "name": attempt.planet_id}
        )
        rows.append(row)

    return rows
