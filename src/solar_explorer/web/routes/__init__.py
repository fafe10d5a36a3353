"""Route handlers for Web API (F3)."""

from solar_explorer.web.routes.auth import router as auth_router
from solar_explorer.web.routes.health import router as health_router
from solar_explorer.web.routes.materials import router as materials_router
from solar_explorer.web.routes.planets import router as planets_router
from solar_explorer.web.routes.progress import router as progress_router
from solar_explorer.web.routes.questions import router as questions_router
from solar_explorer.web.routes.quiz import router as quiz_router

__all__ = [
    "auth_router",
    "health_router",
    "materials_router",
    "planets_router",
    "progress_router",
    "questions_router",
    "quiz_router",
]
