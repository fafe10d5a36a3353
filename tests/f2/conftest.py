"""Fixtures for persistence and ledger tests (F2)."""

import pytest

from solar_explorer.core.ledger import ProgressLedger
from solar_explorer.config.app_config import PointsConfig
from solar_explorer.db import progress_repository, questions_repository, users_repository


@pytest.fixture
def student(isolated_db):
    """A registered student."""
    return users_repository.insert_user("Ana", "ana@example.com", "hash", "student")


@pytest.fixture
def other_student(isolated_db):
    """A second registered student."""
    return users_repository.insert_user("Budi", "budi@example.com", "hash", "student")


@pytest.fixture
def teacher(isolated_db):
    """A registered teacher."""
    return users_repository.insert_user("Citra", "citra@example.com", "hash", "teacher")


@pytest.fixture
def ledger(isolated_db):
    """Ledger with the default point awards."""
    return ProgressLedger(points=PointsConfig(visit_bonus=5, per_correct_answer=10))


@pytest.fixture
def mars_questions(isolated_db, teacher):
    """Two questions on Mars, created in order."""
    q1 = questions_repository.insert_question(
        planet_id="mars",
        prompt="Which planet is called the Red Planet?",
        options=["Mars", "Venus", "Jupiter"],
        correct_index=0,
        explanation="Iron oxide gives Mars its colour.",
        created_by=teacher.id,
    )
    q2 = questions_repository.insert_question(
        planet_id="mars",
        prompt="How many moons does Mars have?",
        options=["None", "Two", "Four"],
        correct_index=1,
        explanation="Phobos and Deimos.",
        created_by=teacher.id,
    )
    return [q1, q2]


@pytest.fixture
def broken_progress_write(monkeypatch):
    """Make the progress upsert fail with a real sqlite error."""

    def write_progress(conn, progress):
        conn.execute("INSERT INTO missing_table VALUES (1)")

    monkeypatch.setattr(progress_repository, "write_progress", write_progress)
