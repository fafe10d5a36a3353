"""Repository functions for users table.

Emails are stored trimmed and lower-cased; the UNIQUE constraint on the
column is what enforces one account per address.
"""

from __future__ import annotations

import sqlite3
import uuid

import structlog

from solar_explorer.core.errors import ConflictError
from solar_explorer.core.models import User, now_iso
from solar_explorer.db.database import get_db

logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address."""
    return str(email or "").strip().lower()


def insert_user(name: str, email: str, password_hash: str, role: str) -> User:
    """Insert a new user together with an empty progress record.

    Args:
        name: Display name
        email: Email address (normalized before insert)
        password_hash: bcrypt hash of the password
        role: 'student' or 'teacher'

    Returns:
        The created User

    Raises:
        ConflictError: If the email is already registered
    """
    user = User(
        id=str(uuid.uuid4()),
        name=name,
        email=normalize_email(email),
        role=role,
        password_hash=password_hash,
        created_at=now_iso(),
    )

    try:
        with get_db() as conn:
            conn.execute(
                """
                INSERT INTO users (id, name, email, password_hash, role, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (user.id, user.name, user.email, user.password_hash, user.role, user.created_at),
            )
            conn.execute(
                "INSERT INTO progress (user_id, points, created_at, updated_at) VALUES (?, 0, ?, ?)",
                (user.id, user.created_at, user.created_at),
            )
    except sqlite3.IntegrityError as e:
        raise ConflictError("Email is already registered") from e

    logger.debug("users.inserted", user_id=user.id, role=role)
    return user


def get_user_by_id(user_id: str) -> User | None:
    """Get user by ID."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()

    if row is None:
        return None

    return _row_to_user(row)


def get_user_by_email(email: str) -> User | None:
    """Get user by email (case-insensitive)."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE email = ?", (normalize_email(email),)
        ).fetchone()

    if row is None:
        return None

    return _row_to_user(row)


def list_users(role: str | None = None) -> list[User]:
    """List users, optionally filtered by role, oldest first."""
    with get_db() as conn:
        if role is None:
            rows = conn.execute("SELECT * FROM users ORDER BY created_at").fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM users WHERE role = ? ORDER BY created_at", (role,)
            ).fetchall()

    return [_row_to_user(row) for row in rows]


def _row_to_user(row) -> User:
    """Convert database row to User."""
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        role=row["role"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )
