"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization and planet seeding
- Repository functions per aggregate (users, planets, materials,
  questions, quiz attempts, progress)
"""

from solar_explorer.db.database import get_db, get_db_path, init_db

__all__ = ["get_db", "get_db_path", "init_db"]
