"""Data validation helpers.

Every helper raises ValidationError naming the offending field, so callers
can validate a whole payload before any write happens.

Functions:
- validate_email(email) -> bool
- require_text(value, field) -> str
- validate_role(role) -> str
- validate_password(password) -> str
- validate_options(options) -> list[str]
- validate_correct_index(correct_index, options) -> int
"""

from __future__ import annotations

import re
from typing import Any

from solar_explorer.core.errors import ValidationError
from solar_explorer.core.models import ROLES, Role

# Email validation pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

MIN_OPTIONS = 2

# bcrypt only accepts this many bytes of input
MAX_PASSWORD_BYTES = 72


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email, False otherwise
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def require_text(value: Any, field: str) -> str:
    """Return ``value`` as a stripped string, or fail if it is empty."""
    if value is None:
        raise ValidationError(f"{field} is required", field=field)
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required", field=field)
    return text


def validate_role(role: str | None) -> Role:
    """Resolve the registration role (``student`` when omitted)."""
    if role is None or role == "":
        return "student"
    if role not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}", field="role")
    return role


def validate_password(password: Any) -> str:
    """Validate a password before hashing (non-empty, at most 72 UTF-8 bytes)."""
    if not isinstance(password, str) or not password:
        raise ValidationError("password is required", field="password")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
        )
    return password


def validate_options(options: Any) -> list[str]:
    """Validate a question's option list (at least two non-empty strings)."""
    if not isinstance(options, list) or len(options) < MIN_OPTIONS:
        raise ValidationError(
            f"options must be a list with at least {MIN_OPTIONS} entries", field="options"
        )
    cleaned = [str(o).strip() for o in options]
    if any(not o for o in cleaned):
        raise ValidationError("options must not contain empty entries", field="options")
    return cleaned


def validate_correct_index(correct_index: Any, options: list[str]) -> int:
    """Validate that ``correct_index`` points into ``options``."""
    if isinstance(correct_index, bool) or correct_index is None:
        raise ValidationError("correctIndex is invalid", field="correctIndex")
    try:
        index = int(correct_index)
    except (TypeError, ValueError) as e:
        raise ValidationError("correctIndex is invalid", field="correctIndex") from e
    if isinstance(correct_index, float) and not correct_index.is_integer():
        raise ValidationError("correctIndex is invalid", field="correctIndex")
    if index < 0 or index >= len(options):
        raise ValidationError("correctIndex is invalid", field="correctIndex")
    return index
