"""Repository functions for planets table (read-only seed data)."""

from __future__ import annotations

from solar_explorer.core.models import Planet
from solar_explorer.db.database import get_db


def list_planets() -> list[Planet]:
    """Get all planets ordered by their position from the Sun."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM planets ORDER BY position").fetchall()

    return [_row_to_planet(row) for row in rows]


def get_planet_by_id(planet_id: str) -> Planet | None:
    """Get planet by ID, or None if not found."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM planets WHERE id = ?", (planet_id,)).fetchone()

    if row is None:
        return None

    return _row_to_planet(row)


def planet_exists(planet_id: str) -> bool:
    """Check whether a planet id is known."""
    with get_db() as conn:
        row = conn.execute("SELECT 1 FROM planets WHERE id = ?", (planet_id,)).fetchone()
    return row is not None


def _row_to_planet(row) -> Planet:
    return Planet(
        id=row["id"],
        name=row["name"],
        order=row["position"],
        radius=row["radius"],
        distance_au=row["distance_au"],
        color=row["color"],
        summary=row["summary"],
    )
