"""Authentication helpers.

Password hashing with bcrypt and HS256 bearer tokens with PyJWT. Token
claims: ``sub`` (user id), ``role``, ``iat`` and ``exp``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
import structlog

from solar_explorer.config.app_config import AuthConfig, get_auth_config
from solar_explorer.core.errors import AuthError
from solar_explorer.utils.validators import validate_password

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt.

    Raises:
        ValidationError: If the password is empty or longer than bcrypt accepts
    """
    password = validate_password(password)
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or password over the bcrypt limit
        return False


def create_token(user_id: str, role: str, config: AuthConfig | None = None) -> str:
    """Issue a signed bearer token for a user."""
    config = config or get_auth_config()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=config.token_ttl_days),
    }
    return jwt.encode(payload, config.get_secret(), algorithm=config.algorithm)


def decode_token(token: str, config: AuthConfig | None = None) -> dict[str, Any]:
    """Verify a bearer token and return its claims.

    Raises:
        AuthError: If the token is missing, malformed, tampered or expired
    """
    if not token:
        raise AuthError("Unauthorized")

    config = config or get_auth_config()
    try:
        payload = jwt.decode(token, config.get_secret(), algorithms=[config.algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token expired") from e
    except jwt.InvalidTokenError as e:
        logger.debug("auth.invalid_token", error=str(e))
        raise AuthError("Invalid token") from e

    if not payload.get("sub"):
        raise AuthError("Invalid token")
    return payload
