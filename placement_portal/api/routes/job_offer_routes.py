"""
Job Offer Routes

GET /job-offers - Public search (query, location, type)
POST /job-offers - Create job offer (organization only)
GET /job-offers/{id} - Public job offer details
PUT /job-offers/{id} - Update job offer (owning organization only)
DELETE /job-offers/{id} - Delete job offer (owning organization only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.services import job_offer_service
from placement_portal.schemas.schemas import (
    JobOfferWrite, JobOfferResponse, JobOfferEnvelope, JobOfferListResponse, MessageResponse
)

router = APIRouter(prefix="/job-offers", tags=["Job Offers"])


@router.get("", response_model=JobOfferListResponse)
async def list_job_offers(
    query: Optional[str] = Query(None, description="Search in title and description"),
    location: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="Exact job type, e.g. Full-time"),
    organization_id: Optional[int] = Query(None, alias="organizationId"),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List job offers with filters. No authentication required."""
    job_offers = job_offer_service.search_job_offers(
        db, query=query, location=location, job_type=type,
        organization_id=organization_id, status=status,
    )
    return JobOfferListResponse(
        message="Job offers retrieved successfully",
        job_offers=[JobOfferResponse.model_validate(j) for j in job_offers],
        total=len(job_offers),
    )


@router.post("", response_model=JobOfferEnvelope, status_code=201)
async def create_job_offer(
    data: JobOfferWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Create a new job offer for the caller's organization."""
    job_offer = job_offer_service.create_job_offer(db, actor, data)
    return JobOfferEnvelope(
        message="Job offer created successfully",
        job_offer=JobOfferResponse.model_validate(job_offer),
    )


@router.get("/{job_offer_id}", response_model=JobOfferEnvelope)
async def get_job_offer(job_offer_id: int, db: Session = Depends(get_db)):
    """Get details of a specific job offer."""
    job_offer = job_offer_service.get_job_offer(db, job_offer_id)
    return JobOfferEnvelope(
        message="Job offer retrieved successfully",
        job_offer=JobOfferResponse.model_validate(job_offer),
    )


@router.put("/{job_offer_id}", response_model=JobOfferEnvelope)
async def update_job_offer(
    job_offer_id: int,
    data: JobOfferWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Update a job offer. Only the owning organization can update."""
    job_offer = job_offer_service.update_job_offer(db, actor, job_offer_id, data)
    return JobOfferEnvelope(
        message="Job offer updated successfully",
        job_offer=JobOfferResponse.model_validate(job_offer),
    )


@router.delete("/{job_offer_id}", response_model=MessageResponse)
async def delete_job_offer(
    job_offer_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Delete a job offer. Cascades to applications."""
    job_offer_service.delete_job_offer(db, actor, job_offer_id)
    return MessageResponse(message="Job offer deleted successfully")
