"""Domain errors.

Every error carries the HTTP status the web layer answers with, so route
handlers can simply raise and let the app-level handlers render
``{"error": message}``.
"""

from __future__ import annotations


class SolarError(Exception):
    """Base class for all Solar Explorer errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(SolarError):
    """Missing or malformed input field."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NoQuestionsAvailable(ValidationError):
    """Raised when a quiz is submitted for a planet without questions."""

    def __init__(self, planet_id: str):
        self.planet_id = planet_id
        super().__init__(f"No questions available for planet '{planet_id}'", field="planetId")


class AuthError(SolarError):
    """Missing, invalid or expired credential."""

    status_code = 401


class ForbiddenError(SolarError):
    """Authenticated, but the role does not allow the operation."""

    status_code = 403


class NotFoundError(SolarError):
    """Referenced entity does not exist."""

    status_code = 404


class InvalidPlanet(NotFoundError):
    """Raised when a planet id does not match any planet."""

    def __init__(self, planet_id: str):
        self.planet_id = planet_id
        super().__init__(f"Planet '{planet_id}' not found")


class ConflictError(SolarError):
    """Uniqueness violation (e.g. duplicate registration email)."""

    status_code = 409


class StoreError(SolarError):
    """Underlying persistence I/O failure."""

    status_code = 500

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__("Internal server error")
