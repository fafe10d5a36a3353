"""Material endpoints (F3).

Reading is public; writing requires the teacher role.
"""

from fastapi import APIRouter, Depends, status

from solar_explorer.core.errors import NotFoundError, ValidationError
from solar_explorer.core.models import User
from solar_explorer.db import materials_repository, planets_repository
from solar_explorer.utils.validators import require_text
from solar_explorer.web.deps import require_teacher
from solar_explorer.web.schemas import MaterialCreate, MaterialUpdate, OkResponse

router = APIRouter(prefix="/api/materials", tags=["materials"])


def _not_found(material_id: str) -> NotFoundError:
    return NotFoundError(f"Material '{material_id}' not found")


@router.get("")
async def list_materials(planetId: str | None = None) -> dict:
    """List materials, optionally for one planet, most recently updated first."""
    items = materials_repository.list_materials(planet_id=planetId)
    return {"materials": [m.to_dict() for m in items]}


@router.get("/{material_id}")
async def get_material(material_id: str) -> dict:
    """Get a specific material by ID."""
    material = materials_repository.get_material_by_id(material_id)
    if material is None:
        raise _not_found(material_id)
    return {"material": material.to_dict()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_material(
    request: MaterialCreate,
    user: User = Depends(require_teacher),
) -> dict:
    """Create a material for a planet."""
    title = require_text(request.title, "title")
    content = require_text(request.content, "content")
    if not planets_repository.planet_exists(request.planet_id):
        raise ValidationError("planetId is invalid", field="planetId")

    material = materials_repository.insert_material(
        planet_id=request.planet_id,
        title=title,
        content=content,
        created_by=user.id,
    )
    return {"material": material.to_dict()}


@router.put("/{material_id}")
async def update_material(
    material_id: str,
    request: MaterialUpdate,
    user: User = Depends(require_teacher),
) -> dict:
    """Update title and/or content of a material."""
    title = require_text(request.title, "title") if request.title is not None else None
    content = require_text(request.content, "content") if request.content is not None else None

    material = materials_repository.update_material(material_id, title=title, content=content)
    if material is None:
        raise _not_found(material_id)
    return {"material": material.to_dict()}


@router.delete("/{material_id}", response_model=OkResponse)
async def delete_material(
    material_id: str,
    user: User = Depends(require_teacher),
) -> OkResponse:
    """Delete a material by ID."""
    if not materials_repository.delete_material(material_id):
        raise _not_found(material_id)
    return OkResponse()
