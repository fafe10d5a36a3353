"""FastAPI application factory (F3).

Main entry point for the Solar Explorer Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from solar_explorer import __version__
from solar_explorer.config.app_config import load_app_config
from solar_explorer.core.errors import SolarError, StoreError
from solar_explorer.db.database import init_db
from solar_explorer.db.planets_repository import list_planets
from solar_explorer.web.routes import (
    auth_router,
    health_router,
    materials_router,
    planets_router,
    progress_router,
    questions_router,
    quiz_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    config = load_app_config()
    db_path = init_db(app.state.db_path or config.db_path)
    logger.info(
        "api_startup",
        db_path=str(db_path.absolute()),
        planets=len(list_planets()),
        visit_bonus=config.points.visit_bonus,
        per_correct_answer=config.points.per_correct_answer,
    )
    yield
    # Shutdown (nothing to do for now)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def solar_error_handler(request: Request, exc: SolarError) -> JSONResponse:
    """Render domain errors as ``{"error": message}``."""
    if isinstance(exc, StoreError):
        logger.error(
            "request.store_error",
            path=request.url.path,
            operation=exc.operation,
            detail=exc.detail,
        )
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body validation failures as 400 naming the offending field."""
    errors = exc.errors()
    if not errors:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request")

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "body"
    return _error(status.HTTP_400_BAD_REQUEST, f"{field}: {first.get('msg', 'invalid value')}")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unexpected_error", path=request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# =============================================================================
# APP FACTORY
# =============================================================================


def create_app(db_path=None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Database file to use instead of the configured one

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Solar Explorer API",
        description="Planets, learning materials, quizzes and progress",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    # CORS middleware for the single-page frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SolarError, solar_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(planets_router)
    app.include_router(materials_router)
    app.include_router(questions_router)
    app.include_router(quiz_router)
    app.include_router(progress_router)

    return app


# Default app instance for uvicorn
app = create_app()
