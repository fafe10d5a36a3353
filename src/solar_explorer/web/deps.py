"""Request dependencies: bearer authentication and role checks (F3)."""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from solar_explorer.core.auth import decode_token
from solar_explorer.core.errors import AuthError, ForbiddenError
from solar_explorer.core.models import User
from solar_explorer.db.users_repository import get_user_by_id

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Resolve the authenticated user from the ``Authorization`` header.

    Raises:
        AuthError: Missing/invalid/expired token, or unknown user
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Unauthorized")

    payload = decode_token(credentials.credentials)
    user = get_user_by_id(str(payload["sub"]))
    if user is None:
        raise AuthError("Unauthorized")
    return user


def require_role(role: str) -> Callable[..., Awaitable[User]]:
    """Build a dependency that only lets users with ``role`` through."""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise ForbiddenError(f"Forbidden: {role} role required")
        return user

    return dependency


require_teacher = require_role("teacher")
