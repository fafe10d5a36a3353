"""Tests for application config loading (F4)."""

from pathlib import Path

import pytest

from solar_explorer.config.app_config import (
    DEV_JWT_SECRET,
    AuthConfig,
    clear_config_cache,
    get_auth_config,
    get_points_config,
    load_app_config,
)
from solar_explorer.core.auth import create_token, decode_token, hash_password, verify_password
from solar_explorer.core.errors import AuthError


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Run from an empty temp dir with a clean config cache."""
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield tmp_path
    clear_config_cache()


def _write_config(root: Path, text: str) -> None:
    path = root / "data" / "config" / "app_config_v1.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(text, encoding="utf-8")


class TestLoadAppConfig:
    """Tests for load_app_config()."""

    def test_defaults_without_file(self, config_dir):
        config = load_app_config()

        assert config.points.visit_bonus == 5
        assert config.points.per_correct_answer == 10
        assert config.auth.token_ttl_days == 7
        assert config.db_path == Path("db/solar.db")

    def test_values_from_file(self, config_dir):
        _write_config(
            config_dir,
            "points:\n  visit_bonus: 7\n  per_correct_answer: 3\npaths:\n  db_path: other/x.db\n",
        )

        config = load_app_config(force_reload=True)

        assert config.points.visit_bonus == 7
        assert config.points.per_correct_answer == 3
        assert config.db_path == Path("other/x.db")
        # missing sections fall back to defaults
        assert config.auth.algorithm == "HS256"
        assert config.paths["data_dir"] == "data"

    def test_empty_file(self, config_dir):
        _write_config(config_dir, "")
        assert load_app_config(force_reload=True).points.visit_bonus == 5

    def test_cached_until_cleared(self, config_dir):
        first = load_app_config()
        assert load_app_config() is first

        clear_config_cache()
        assert load_app_config() is not first

    def test_accessors(self, config_dir):
        assert get_points_config().visit_bonus == 5
        assert get_auth_config().secret_env == "SOLAR_JWT_SECRET"


class TestAuthConfig:
    """Tests for the signing secret."""

    def test_secret_from_env(self, monkeypatch):
        monkeypatch.setenv("SOLAR_JWT_SECRET", "from-env")
        assert AuthConfig().get_secret() == "from-env"

    def test_dev_secret_fallback(self, monkeypatch):
        monkeypatch.delenv("SOLAR_JWT_SECRET", raising=False)
        assert AuthConfig().get_secret() == DEV_JWT_SECRET


class TestTokensAndPasswords:
    """Tests for core.auth helpers."""

    def test_token_claims(self, monkeypatch):
        monkeypatch.setenv("SOLAR_JWT_SECRET", "s3cret")
        config = AuthConfig()

        claims = decode_token(create_token("u1", "teacher", config), config)

        assert claims["sub"] == "u1"
        assert claims["role"] == "teacher"
        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_wrong_secret_rejected(self, monkeypatch):
        monkeypatch.setenv("SOLAR_JWT_SECRET", "one")
        token = create_token("u1", "student", AuthConfig())
        monkeypatch.setenv("SOLAR_JWT_SECRET", "two")

        with pytest.raises(AuthError, match="Invalid token"):
            decode_token(token, AuthConfig())

    def test_empty_token(self):
        with pytest.raises(AuthError, match="Unauthorized"):
            decode_token("", AuthConfig())

    def test_password_hashing(self):
        hashed = hash_password("correct horse")

        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong", hashed)
        assert not verify_password("x", "not-a-bcrypt-hash")
