"""
Application Routes

GET /applications - List applications visible to the caller
POST /applications - Apply to a job offer (student only)
GET /applications/{id} - Get one application
PATCH /applications/{id} - Update status (admin or owning organization)
DELETE /applications/{id} - Delete (admin, owning organization, or the applicant)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.models import ApplicationStatus
from placement_portal.services import application_service
from placement_portal.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse,
    ApplicationEnvelope, ApplicationListResponse, MessageResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    job_offer_id: Optional[int] = Query(None, alias="jobOfferId"),
    status: Optional[ApplicationStatus] = Query(None),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """List applications scoped by the caller's role."""
    applications = application_service.list_applications(db, actor, job_offer_id=job_offer_id, status=status)
    return ApplicationListResponse(
        message="Applications retrieved successfully",
        applications=[ApplicationResponse.model_validate(a) for a in applications],
        total=len(applications),
    )


@router.post("", response_model=ApplicationEnvelope, status_code=201)
async def create_application(
    data: ApplicationCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Apply to a job offer. Students only. Cannot apply twice to the same offer."""
    application = application_service.create_application(
        db, actor, data.job_offer_id, resume_url=data.resume_url, cover_letter=data.cover_letter
    )
    return ApplicationEnvelope(
        message="Application submitted successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.get("/{application_id}", response_model=ApplicationEnvelope)
async def get_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    application = application_service.get_application(db, actor, application_id)
    return ApplicationEnvelope(
        message="Application retrieved successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.patch("/{application_id}", response_model=ApplicationEnvelope)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Update status of an application."""
    application = application_service.update_application_status(db, actor, application_id, update.status)
    return ApplicationEnvelope(
        message="Application status updated successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.delete("/{application_id}", response_model=MessageResponse)
async def delete_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    application_service.delete_application(db, actor, application_id)
    return MessageResponse(message="Application deleted successfully")
