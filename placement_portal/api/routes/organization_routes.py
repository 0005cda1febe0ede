"""
Organization Routes

GET /organization - Get caller's organization
PUT /organization - Update caller's organization
GET /organizations/{id} - Get organization (admin or the organization itself)
PUT /organizations/{id} - Update organization (admin or the organization itself)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.services import organization_service
from placement_portal.schemas.schemas import OrganizationUpdate, OrganizationResponse, OrganizationEnvelope

router = APIRouter(tags=["Organizations"])


@router.get("/organization", response_model=OrganizationEnvelope)
async def get_own_organization(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    organization = organization_service.get_own_organization(db, actor)
    return OrganizationEnvelope(
        message="Organization retrieved successfully",
        organization=OrganizationResponse.model_validate(organization),
    )


@router.put("/organization", response_model=OrganizationEnvelope)
async def update_own_organization(
    data: OrganizationUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    organization = organization_service.get_own_organization(db, actor)
    organization = organization_service.update_organization(db, actor, organization.id, data)
    return OrganizationEnvelope(
        message="Organization updated successfully",
        organization=OrganizationResponse.model_validate(organization),
    )


@router.get("/organizations/{organization_id}", response_model=OrganizationEnvelope)
async def get_organization(
    organization_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    organization = organization_service.get_organization(db, actor, organization_id)
    return OrganizationEnvelope(
        message="Organization retrieved successfully",
        organization=OrganizationResponse.model_validate(organization),
    )


@router.put("/organizations/{organization_id}", response_model=OrganizationEnvelope)
async def update_organization(
    organization_id: int,
    data: OrganizationUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    organization = organization_service.update_organization(db, actor, organization_id, data)
    return OrganizationEnvelope(
        message="Organization updated successfully",
        organization=OrganizationResponse.model_validate(organization),
    )
