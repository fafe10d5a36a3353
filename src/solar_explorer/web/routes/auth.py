"""Authentication endpoints (F3)."""

import structlog
from fastapi import APIRouter, Depends, status

from solar_explorer.core.auth import create_token, hash_password, verify_password
from solar_explorer.core.errors import AuthError, ConflictError, ValidationError
from solar_explorer.core.models import User
from solar_explorer.db import users_repository
from solar_explorer.utils.validators import (
    require_text,
    validate_email,
    validate_password,
    validate_role,
)
from solar_explorer.web.deps import get_current_user
from solar_explorer.web.schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        createdAt=user.created_at,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest) -> TokenResponse:
    """Register a student or teacher account."""
    name = require_text(request.name, "name")
    email = users_repository.normalize_email(request.email)
    if not validate_email(email):
        raise ValidationError("email has an invalid format", field="email")
    role = validate_role(request.role)
    validate_password(request.password)

    if users_repository.get_user_by_email(email) is not None:
        raise ConflictError("Email is already registered")

    user = users_repository.insert_user(
        name=name,
        email=email,
        password_hash=hash_password(request.password),
        role=role,
    )
    logger.info("auth.registered", user_id=user.id, role=role)

    return TokenResponse(token=create_token(user.id, user.role), user=_user_response(user))


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = users_repository.get_user_by_email(request.email)
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info("auth.login_failed", email=users_repository.normalize_email(request.email))
        raise AuthError("Invalid email or password")

    logger.info("auth.logged_in", user_id=user.id)
    return TokenResponse(token=create_token(user.id, user.role), user=_user_response(user))


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return _user_response(user)
