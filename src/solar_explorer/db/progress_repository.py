"""Repository functions for progress and progress_visits tables.

The visited set lives in its own table keyed by (user_id, planet_id), so a
planet can only ever be recorded once per user. Saving never removes
visits and never lowers points.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable

import structlog

from solar_explorer.core.models import Progress, now_iso
from solar_explorer.db.database import get_db

logger = structlog.get_logger(__name__)


def get_progress(user_id: str) -> Progress | None:
    """Get the progress record of a user, or None if never created."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM progress WHERE user_id = ?", (user_id,)).fetchone()
        if row is None:
            return None
        visits = _load_visits(conn, [user_id])

    return _row_to_progress(row, visits.get(user_id, set()))


def ensure_progress(user_id: str) -> Progress:
    """Fetch-or-create the progress record of a user.

    A new record starts with no visits and zero points.
    """
    now = now_iso()
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO progress (user_id, points, created_at, updated_at)
            VALUES (?, 0, ?, ?)
            """,
            (user_id, now, now),
        )
        if cursor.rowcount:
            logger.debug("progress.created", user_id=user_id)
        row = conn.execute("SELECT * FROM progress WHERE user_id = ?", (user_id,)).fetchone()
        visits = _load_visits(conn, [user_id])

    return _row_to_progress(row, visits.get(user_id, set()))


def write_progress(conn: sqlite3.Connection, progress: Progress) -> None:
    """Upsert a progress record on an open connection.

    Visits are merged into the stored set and points can only move up,
    so a stale record can never undo a concurrent update.
    """
    conn.execute(
        """
        INSERT INTO progress (user_id, points, created_at, updated_at)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(user_id) DO UPDATE SET
            points = MAX(progress.points, excluded.points),
            updated_at = excluded.updated_at
        """,
        (progress.user_id, progress.points, progress.updated_at, progress.updated_at),
    )
    conn.executemany(
        """
        INSERT OR IGNORE INTO progress_visits (user_id, planet_id, visited_at)
        VALUES (?, ?, ?)
        """,
        [(progress.user_id, planet_id, progress.updated_at) for planet_id in progress.visited_planets],
    )


def save_progress(progress: Progress) -> None:
    """Persist a progress record in one transaction."""
    with get_db() as conn:
        write_progress(conn, progress)

    logger.debug(
        "progress.saved",
        user_id=progress.user_id,
        points=progress.points,
        visited_count=progress.visited_count,
    )


def list_progress(user_ids: Iterable[str] | None = None) -> list[Progress]:
    """List progress records, optionally restricted to some users."""
    with get_db() as conn:
        if user_ids is None:
            rows = conn.execute("SELECT * FROM progress").fetchall()
        else:
            ids = list(user_ids)
            if not ids:
                return []
            placeholders = ", ".join("?" for _ in ids)
            rows = conn.execute(
                f"SELECT * FROM progress WHERE user_id IN ({placeholders})", ids
            ).fetchall()
        visits = _load_visits(conn, [row["user_id"] for row in rows])

    return [_row_to_progress(row, visits.get(row["user_id"], set())) for row in rows]


def _load_visits(conn: sqlite3.Connection, user_ids: list[str]) -> dict[str, set[str]]:
    """Load visited planet sets for the given users."""
    if not user_ids:
        return {}
    placeholders = ", ".join("?" for _ in user_ids)
    rows = conn.execute(
        f"SELECT user_id, planet_id FROM progress_visits WHERE user_id IN ({placeholders})",
        user_ids,
    ).fetchall()

    visits: dict[str, set[str]] = {}
    for row in rows:
        visits.setdefault(row["user_id"], set()).add(row["planet_id"])
    return visits


def _row_to_progress(row, visited: set[str]) -> Progress:
    """Convert database row plus visit set to Progress."""
    return Progress(
        user_id=row["user_id"],
        visited_planets=set(visited),
        points=row["points"],
        updated_at=row["updated_at"],
    )
