"""Tests for health and auth endpoints (F3)."""

from datetime import datetime, timedelta, timezone

import jwt

from solar_explorer import __version__

TEST_SECRET = "test-secret-for-solar-explorer-suite"


class TestHealth:
    """Tests for /health."""

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_defaults_to_student(self, register_user):
        data = register_user("Ana", "Ana@Example.com")

        assert data["token"]
        assert data["user"]["role"] == "student"
        assert data["user"]["email"] == "ana@example.com"
        assert "passwordHash" not in data["user"]

    def test_register_teacher(self, register_user):
        assert register_user("Citra", "citra@example.com", role="teacher")["user"]["role"] == "teacher"

    def test_duplicate_email(self, client, register_user):
        register_user("Ana", "ana@example.com")

        response = client.post(
            "/api/auth/register",
            json={"name": "Ana 2", "email": "ANA@example.com", "password": "x"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Email is already registered"}

    def test_invalid_role(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "x", "role": "admin"},
        )
        assert response.status_code == 400
        assert "role" in response.json()["error"]

    def test_invalid_email(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "not-an-email", "password": "x"},
        )
        assert response.status_code == 400

    def test_missing_field_names_it(self, client):
        """Body validation errors are 400 and name the field."""
        response = client.post("/api/auth/register", json={"name": "Ana", "password": "x"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("email")

    def test_password_over_bcrypt_limit(self, client):
        """An 80 character password is a 400 naming the field, not a 500."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "p" * 80},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("password")

    def test_password_at_bcrypt_limit(self, register_user):
        assert register_user("Ana", "ana@example.com", password="p" * 72)["token"]


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_returns_token(self, client, register_user):
        register_user("Ana", "ana@example.com", password="pw-ana")

        response = client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "pw-ana"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ana"

    def test_wrong_password(self, client, register_user):
        register_user("Ana", "ana@example.com", password="pw-ana")

        response = client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_overlong_password_rejected(self, client, register_user):
        register_user("Ana", "ana@example.com", password="p" * 72)

        response = client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "p" * 80}
        )

        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "x"}
        )
        assert response.status_code == 401


class TestMe:
    """Tests for GET /api/auth/me."""

    def test_me(self, client, student_auth):
        user, headers = student_auth

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_garbage_token(self, client, auth_header):
        response = client.get("/api/auth/me", headers=auth_header("not.a.token"))
        assert response.status_code == 401

    def test_expired_token(self, client, student_auth, auth_header):
        user, _ = student_auth
        past = datetime.now(timezone.utc) - timedelta(days=8)
        token = jwt.encode(
            {"sub": user["id"], "role": "student", "iat": past, "exp": past + timedelta(days=7)},
            TEST_SECRET,
            algorithm="HS256",
        )

        response = client.get("/api/auth/me", headers=auth_header(token))

        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}

    def test_token_for_deleted_user(self, client, auth_header):
        token = jwt.encode(
            {"sub": "ghost", "role": "student", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        response = client.get("/api/auth/me", headers=auth_header(token))
        assert response.status_code == 401
