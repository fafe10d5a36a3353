"""Progress endpoints (F3)."""

from fastapi import APIRouter, Depends

from solar_explorer.core.ledger import get_ledger
from solar_explorer.core.models import User
from solar_explorer.core.reports import cohort_ranking, my_progress
from solar_explorer.web.deps import get_current_user, require_teacher
from solar_explorer.web.schemas import VisitRequest

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.post("/visit")
async def visit(
    request: VisitRequest,
    user: User = Depends(get_current_user),
) -> dict:
    """Mark a planet visited (visit bonus on first visit only)."""
    progress = await get_ledger().record_visit(user.id, request.planet_id)
    return {"progress": progress.to_dict()}


@router.get("/my")
async def my(user: User = Depends(get_current_user)) -> dict:
    """The caller's progress with quiz statistics."""
    return {"progress": await my_progress(user.id)}


@router.get("/all")
async def all_students(
    userId: str | None = None,
    user: User = Depends(require_teacher),
) -> dict:
    """Every student's progress, ranked by points, visits and recency."""
    return {"progress": [row.to_dict() for row in cohort_ranking(user_id=userId)]}
