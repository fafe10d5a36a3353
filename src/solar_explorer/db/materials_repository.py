"""Repository functions for materials table.

Provides CRUD operations for teacher-authored reading passages.
"""

from __future__ import annotations

import uuid

import structlog

from solar_explorer.core.models import Material, now_iso
from solar_explorer.db.database import get_db

logger = structlog.get_logger(__name__)


def insert_material(
    planet_id: str,
    title: str,
    content: str,
    created_by: str | None = None,
) -> Material:
    """Insert a new material.

    Args:
        planet_id: Owning planet (must exist)
        title: Material title
        content: Body text
        created_by: Author user id

    Returns:
        The created Material
    """
    now = now_iso()
    material = Material(
        id=str(uuid.uuid4()),
        planet_id=planet_id,
        title=title,
        content=content,
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO materials (id, planet_id, title, content, created_by, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                material.id,
                material.planet_id,
                material.title,
                material.content,
                material.created_by,
                material.created_at,
                material.updated_at,
            ),
        )

    logger.debug("materials.inserted", material_id=material.id, planet_id=planet_id)
    return material


def get_material_by_id(material_id: str) -> Material | None:
    """Get material by ID."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM materials WHERE id = ?", (material_id,)).fetchone()

    if row is None:
        return None

    return _row_to_material(row)


def list_materials(planet_id: str | None = None) -> list[Material]:
    """List materials, most recently updated first."""
    with get_db() as conn:
        if planet_id:
            rows = conn.execute(
                "SELECT * FROM materials WHERE planet_id = ? ORDER BY updated_at DESC",
                (planet_id,),
            ).fetchall()
        else:
            rows = conn.execute("SELECT * FROM materials ORDER BY updated_at DESC").fetchall()

    return [_row_to_material(row) for row in rows]


def update_material(
    material_id: str,
    title: str | None = None,
    content: str | None = None,
) -> Material | None:
    """Update title and/or content of a material.

    Fields left as None keep their value; ``updated_at`` always advances.

    Returns:
        The updated Material, or None if not found
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            UPDATE materials SET
                title = COALESCE(?, title),
                content = COALESCE(?, content),
                updated_at = ?
            WHERE id = ?
            """,
            (title, content, now_iso(), material_id),
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM materials WHERE id = ?", (material_id,)).fetchone()

    logger.debug("materials.updated", material_id=material_id)
    return _row_to_material(row)


def delete_material(material_id: str) -> bool:
    """Delete material by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute("DELETE FROM materials WHERE id = ?", (material_id,))

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("materials.deleted", material_id=material_id)

    return deleted


def _row_to_material(row) -> Material:
    """Convert database row to Material."""
    return Material(
        id=row["id"],
        planet_id=row["planet_id"],
        title=row["title"],
        content=row["content"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
