"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml
with fallback to built-in defaults.

Usage:
    from solar_explorer.config.app_config import load_app_config, get_points_config

    config = load_app_config()
    points = get_points_config()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

DEV_JWT_SECRET = "dev_secret_change_me"


@dataclass
class PointsConfig:
    """Point awards applied by the progress ledger."""

    visit_bonus: int = 5
    per_correct_answer: int = 10


@dataclass
class AuthConfig:
    """Token signing configuration."""

    secret_env: str = "SOLAR_JWT_SECRET"
    algorithm: str = "HS256"
    token_ttl_days: int = 7

    def get_secret(self) -> str:
        """Get signing secret from environment variable."""
        secret = os.environ.get(self.secret_env)
        if secret:
            return secret
        logger.warning("auth.dev_secret_in_use", secret_env=self.secret_env)
        return DEV_JWT_SECRET


@dataclass
class AppConfig:
    """Application-wide configuration."""

    points: PointsConfig = field(default_factory=PointsConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    paths: dict[str, str] = field(default_factory=dict)

    @property
    def db_path(self) -> Path:
        return Path(self.paths.get("db_path", "db/solar.db"))


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "points": {
            "visit_bonus": 5,
            "per_correct_answer": 10,
        },
        "auth": {
            "secret_env": "SOLAR_JWT_SECRET",
            "algorithm": "HS256",
            "token_ttl_days": 7,
        },
        "paths": {
            "db_path": "db/solar.db",
            "data_dir": "data",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    points_data = data.get("points") or {}
    points = PointsConfig(
        visit_bonus=int(points_data.get("visit_bonus", 5)),
        per_correct_answer=int(points_data.get("per_correct_answer", 10)),
    )

    auth_data = data.get("auth") or {}
    auth = AuthConfig(
        secret_env=auth_data.get("secret_env", "SOLAR_JWT_SECRET"),
        algorithm=auth_data.get("algorithm", "HS256"),
        token_ttl_days=int(auth_data.get("token_ttl_days", 7)),
    )

    paths = {**_get_defaults()["paths"], **(data.get("paths") or {})}

    return AppConfig(points=points, auth=auth, paths=paths)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def get_points_config() -> PointsConfig:
    """Get the point award settings."""
    return load_app_config().points


def get_auth_config() -> AuthConfig:
    """Get the token signing settings."""
    return load_app_config().auth


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
