"""Fixtures for Web API tests (F3)."""

import pytest
from fastapi.testclient import TestClient

from solar_explorer.web.api import create_app


@pytest.fixture
def client(isolated_db):
    """Test client bound to the isolated database."""
    return TestClient(create_app(db_path=isolated_db))


def _register(client, name: str, email: str, role: str | None = None, password: str = "secret123"):
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Register an account through the API; returns the response JSON."""

    def register(name, email, role=None, password="secret123"):
        return _register(client, name, email, role=role, password=password)

    return register


@pytest.fixture
def auth_header():
    """Build a bearer Authorization header."""
    return _auth_header


@pytest.fixture
def student_auth(client):
    """(user, headers) for a registered student."""
    data = _register(client, "Ana", "ana@example.com")
    return data["user"], _auth_header(data["token"])


@pytest.fixture
def teacher_auth(client):
    """(user, headers) for a registered teacher."""
    data = _register(client, "Citra", "citra@example.com", role="teacher")
    return data["user"], _auth_header(data["token"])


@pytest.fixture
def mars_questions(client, teacher_auth):
    """Two Mars questions created through the API, oldest first."""
    _, headers = teacher_auth
    created = []
    for prompt, options, correct in [
        ("Which planet is called the Red Planet?", ["Mars", "Venus", "Jupiter"], 0),
        ("How many moons does Mars have?", ["None", "Two", "Four"], 1),
    ]:
        response = client.post(
            "/api/questions",
            json={
                "planetId": "mars",
                "prompt": prompt,
                "options": options,
                "correctIndex": correct,
                "explanation": f"About: {prompt}",
            },
            headers=headers,
        )
        assert response.status_code == 201, response.text
        created.append(response.json()["question"])
    return created
