"""Planet endpoints (F3). Public, read-only."""

from fastapi import APIRouter

from solar_explorer.core.errors import NotFoundError
from solar_explorer.db import planets_repository

router = APIRouter(prefix="/api/planets", tags=["planets"])


@router.get("")
async def list_planets() -> dict:
    """List planets ordered by distance from the Sun."""
    return {"planets": [p.to_dict() for p in planets_repository.list_planets()]}


@router.get("/{planet_id}")
async def get_planet(planet_id: str) -> dict:
    """Get a specific planet by ID."""
    planet = planets_repository.get_planet_by_id(planet_id)
    if planet is None:
        raise NotFoundError(f"Planet '{planet_id}' not found")
    return {"planet": planet.to_dict()}
