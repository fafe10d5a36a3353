"""SQLite database connection and schema management.

Provides connection management, schema initialization and planet seeding
for Solar Explorer.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

from solar_explorer.core.errors import StoreError
from solar_explorer.db.seed import PLANETS

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/solar.db")

# Current database file (module-level, set by init_db)
_db_path: Path | None = None


def init_db(db_path: Path | None = None) -> Path:
    """Initialize database with schema and seed data.

    Creates the database file and all required tables if they don't exist,
    then inserts any missing seed planets.

    Args:
        db_path: Path to database file. Defaults to the configured path
            or db/solar.db

    Returns:
        Path of the initialized database
    """
    global _db_path
    _db_path = Path(db_path) if db_path else (_db_path or DEFAULT_DB_PATH)

    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)
        _seed_planets(conn)

    logger.info("database.initialized", path=str(_db_path))
    return _db_path


def get_db_path() -> Path:
    """Path of the database currently in use."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Commits on success and rolls back on error. Integrity violations are
    re-raised as-is so repositories can map them to domain conflicts; any
    other sqlite failure becomes a StoreError.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM planets").fetchall()
    """
    db_path = get_db_path()

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path, timeout=5.0)
    except (sqlite3.Error, OSError) as e:
        logger.error("store.connect_failed", path=str(db_path), error=str(e))
        raise StoreError("connect", str(e)) from e

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except sqlite3.IntegrityError:
        conn.rollback()
        raise
    except sqlite3.Error as e:
        conn.rollback()
        logger.error("store.error", path=str(db_path), error=str(e))
        raise StoreError("query", str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL CHECK(role IN ('student', 'teacher')),
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS planets (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            position INTEGER NOT NULL,
            radius REAL NOT NULL,
            distance_au REAL NOT NULL,
            color TEXT NOT NULL,
            summary TEXT NOT NULL DEFAULT ''
        );

        CREATE TABLE IF NOT EXISTS materials (
            id TEXT PRIMARY KEY,
            planet_id TEXT NOT NULL REFERENCES planets(id),
            title TEXT NOT NULL,
            content TEXT NOT NULL,
            created_by TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        -- options: JSON array of strings; correct_index checked in code
        CREATE TABLE IF NOT EXISTS questions (
            id TEXT PRIMARY KEY,
            planet_id TEXT NOT NULL REFERENCES planets(id),
            prompt TEXT NOT NULL,
            options TEXT NOT NULL,
            correct_index INTEGER NOT NULL CHECK(correct_index >= 0),
            explanation TEXT NOT NULL DEFAULT '',
            created_by TEXT,
            created_at TEXT NOT NULL
        );

        -- results: JSON array of per-question verdicts (immutable)
        CREATE TABLE IF NOT EXISTS quiz_attempts (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(id),
            planet_id TEXT NOT NULL,
            score INTEGER NOT NULL CHECK(score >= 0),
            total INTEGER NOT NULL CHECK(total >= 0),
            results TEXT NOT NULL DEFAULT '[]',
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS progress (
            user_id TEXT PRIMARY KEY REFERENCES users(id),
            points INTEGER NOT NULL DEFAULT 0 CHECK(points >= 0),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );

        -- Visited set: the primary key makes membership unique
        CREATE TABLE IF NOT EXISTS progress_visits (
            user_id TEXT NOT NULL REFERENCES progress(user_id),
            planet_id TEXT NOT NULL REFERENCES planets(id),
            visited_at TEXT NOT NULL,
            PRIMARY KEY (user_id, planet_id)
        );

        CREATE INDEX IF NOT EXISTS idx_materials_planet ON materials(planet_id);
        CREATE INDEX IF NOT EXISTS idx_questions_planet ON questions(planet_id);
        CREATE INDEX IF NOT EXISTS idx_attempts_user ON quiz_attempts(user_id);
        CREATE INDEX IF NOT EXISTS idx_attempts_planet ON quiz_attempts(planet_id);
        """
    )


def _seed_planets(conn: sqlite3.Connection) -> None:
    """Insert seed planets that are not present yet."""
    cursor = conn.executemany(
        """
        INSERT OR IGNORE INTO planets (id, name, position, radius, distance_au, color, summary)
        VALUES (:id, :name, :position, :radius, :distance_au, :color, :summary)
        """,
        PLANETS,
    )
    if cursor.rowcount:
        logger.debug("planets.seeded", inserted=cursor.rowcount)
