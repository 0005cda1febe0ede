"""
Dashboard Routes

GET /dashboard - Role-aggregated application counts, recent activity, events
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.services.dashboard_service import build_dashboard
from placement_portal.schemas.schemas import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse, response_model_exclude_none=True)
async def get_dashboard(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    return build_dashboard(db, actor)
