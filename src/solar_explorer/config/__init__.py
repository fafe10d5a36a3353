"""Configuration package for Solar Explorer."""

from solar_explorer.config.app_config import (
    AppConfig,
    AuthConfig,
    PointsConfig,
    clear_config_cache,
    get_auth_config,
    get_points_config,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "PointsConfig",
    "clear_config_cache",
    "get_auth_config",
    "get_points_config",
    "load_app_config",
]
